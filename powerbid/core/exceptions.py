"""
Exception hierarchy for the bid data pipeline.

Record-level failures (ValidationError and subclasses) are collected by the
dataset validator; everything else is fatal to the operation that raised it.
"""

from typing import Any


class PowerBidError(Exception):
    """Base class for all pipeline errors."""


# =======================
# RECORD VALIDATION
# =======================

class ValidationError(PowerBidError):
    """Raised when a validation rule fails for a single record."""

    def __init__(self, rule_name: str, field_name: str, message: str):
        self.rule_name = rule_name
        self.field_name = field_name
        self.message = message
        super().__init__(f"[{rule_name}] {field_name}: {message}")


class InvalidRecordError(ValidationError):
    """Record is not a mapping at all."""

    def __init__(self, message: str = "Record must be an object"):
        super().__init__(rule_name="record", field_name="<record>", message=message)


class MissingFieldError(ValidationError):
    """A required key is absent from the record."""

    def __init__(self, field_name: str):
        super().__init__(
            rule_name="required_field",
            field_name=field_name,
            message="Field is missing from record",
        )


class InvalidStringError(ValidationError):
    """Value is not a string or is blank after trimming."""

    def __init__(self, field_name: str):
        super().__init__(
            rule_name="string",
            field_name=field_name,
            message="Field must be a non-empty string",
        )


class InvalidNumberError(ValidationError):
    """Value does not parse to a finite number."""

    def __init__(self, field_name: str):
        super().__init__(
            rule_name="number",
            field_name=field_name,
            message="Field must be a finite number",
        )


class InvalidDateError(ValidationError):
    """Value is not an ISO-8601 date string."""

    def __init__(self, field_name: str):
        super().__init__(
            rule_name="date",
            field_name=field_name,
            message="Field must be a valid ISO-8601 date",
        )


class OutOfRangeError(ValidationError):
    """Value parsed fine but falls outside the accepted domain range."""

    def __init__(self, field_name: str, value: Any, minimum: Any, maximum: Any):
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            rule_name="range",
            field_name=field_name,
            message=f"Value {value} is outside the accepted range ({minimum} - {maximum})",
        )


# =======================
# DATASET VALIDATION
# =======================

class DatasetError(PowerBidError):
    """Dataset-level failure; the whole load is rejected."""


class MalformedDatasetError(DatasetError):
    """Decoded payload is neither a list nor a {"data": [...]} envelope."""

    def __init__(self, message: str = "Expected a list of records or an object with a 'data' list"):
        super().__init__(message)


class EmptyDatasetError(DatasetError):
    """Payload is null or holds no records."""

    def __init__(self, message: str = "Dataset is empty"):
        super().__init__(message)


class DataQualityError(DatasetError):
    """Too large a share of the records failed validation."""

    def __init__(self, rejected_count: int, total_count: int):
        self.rejected_count = rejected_count
        self.total_count = total_count
        super().__init__(
            f"Data quality too low: {rejected_count}/{total_count} records are invalid"
        )


class NoValidRecordsError(DatasetError):
    """Validation left nothing to process."""

    def __init__(self, message: str = "No valid records in dataset"):
        super().__init__(message)


# =======================
# PROCESSING / LOADING / EXPORT
# =======================

class ProcessingError(PowerBidError):
    """Derivation of processed fields failed; always chained to the cause."""


class LoadError(PowerBidError):
    """Failure in the load orchestrator."""


class ConcurrentLoadError(LoadError):
    """A load is already in flight on this pipeline instance."""

    def __init__(self, source_id: str):
        self.source_id = source_id
        super().__init__(f"A data load is already in progress; rejected load of '{source_id}'")


class RetrievalError(LoadError):
    """Transport-level failure fetching the raw bytes."""

    def __init__(
        self,
        source_id: str,
        reason: str,
        status: int | None = None,
    ):
        self.source_id = source_id
        self.reason = reason
        self.status = status
        detail = f"{status} {reason}" if status is not None else reason
        super().__init__(f"Failed to retrieve '{source_id}': {detail}")


class UnsupportedFormatError(PowerBidError):
    """Requested export format is not known."""

    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(f"Unsupported export format: {fmt}")
