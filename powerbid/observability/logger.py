"""
Logging setup for powerbid.

Everything under the ``powerbid`` logger goes to stderr, as JSON lines by
default (python-json-logger) or as plain text when LOG_FORMAT=text. Stdout is
left to the CLI's own output.
"""
import logging
import os
import sys
import time

from pythonjsonlogger import jsonlogger

DEFAULT_LOGGER_NAME = "powerbid"

JSON_FIELDS = "%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s"
TEXT_FIELDS = "%(asctime)s %(levelname)-8s %(name)s [%(module)s.%(funcName)s] %(message)s"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with fixed keys for level, origin and time."""

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = log_record.get("timestamp") or self.formatTime(record, self.datefmt)
        log_record["level"] = (log_record.get("level") or record.levelname).upper()
        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    # getLevelName returns "Level X" for unknown names
    return resolved if isinstance(resolved, int) else logging.INFO


def _make_formatter(format_type: str) -> logging.Formatter:
    if format_type == "text":
        return logging.Formatter(TEXT_FIELDS, datefmt="%Y-%m-%d %H:%M:%S")
    return CustomJsonFormatter(JSON_FIELDS, datefmt="%Y-%m-%dT%H:%M:%S")


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Attach a single stderr handler to the named logger.

    Calling it again replaces the handler, so repeated setup never duplicates
    lines.

    Args:
        name: Logger name
        level: Level name; falls back to LOG_LEVEL, then INFO
        format_type: "json" or "text"; falls back to LOG_FORMAT, then json

    Returns:
        The configured logger
    """
    log_level = _resolve_level(level)
    format_type = (format_type or os.getenv("LOG_FORMAT") or "json").lower()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(_make_formatter(format_type))

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Return a logger under the package root, setting the root up on first use.

    Module loggers such as ``powerbid.batch.pipeline`` inherit the root's
    handler.
    """
    if not logging.getLogger(DEFAULT_LOGGER_NAME).handlers:
        setup_logger(DEFAULT_LOGGER_NAME)
    return logging.getLogger(name)


class log_operation:
    """
    Time a block and log its start and outcome.

    ``duration`` holds the elapsed seconds once the block exits. Exceptions
    are logged and re-raised.

    Usage:
        with log_operation("summary bids.json", logger=logger, command="summary") as op:
            ...
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.start_time: float | None = None
        self.duration: float | None = None

    def _emit(self, level: int, prefix: str, **fields) -> None:
        self.logger.log(
            level,
            f"{prefix}: {self.operation_name}",
            extra={"operation": self.operation_name, **fields, **self.extra_fields},
        )

    def __enter__(self):
        self.start_time = time.perf_counter()
        self._emit(logging.INFO, "Starting")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time
        elapsed = round(self.duration, 3)

        if exc_type is None:
            self._emit(logging.INFO, "Completed", duration_seconds=elapsed, status="success")
        else:
            self._emit(
                logging.ERROR,
                "Failed",
                duration_seconds=elapsed,
                status="error",
                error_type=exc_type.__name__,
                error_message=str(exc_val),
            )
        return False
