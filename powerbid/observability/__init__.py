"""
Logging, metrics and collaborator events.
"""

from .events import LoadEvent, LoadEventBus
from .logger import get_logger, log_operation, setup_logger

__all__ = [
    "LoadEvent",
    "LoadEventBus",
    "get_logger",
    "log_operation",
    "setup_logger",
]
