"""
Input validation utilities for caller-supplied arguments.

Guards for source ids and record counts passed to the pipeline and the
analytics functions.
"""


class ArgumentValidationError(ValueError):
    """Raised when a caller-supplied argument is invalid."""
    pass


def validate_source_id(source_id: str, field_name: str = "source_id") -> str:
    """
    Validate a source id (file path or URL).

    Args:
        source_id: The source id to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated source id (stripped of whitespace)

    Raises:
        ArgumentValidationError: If validation fails

    Examples:
        >>> validate_source_id(" data/bids.json ")
        'data/bids.json'
        >>> validate_source_id("https://example.com/bids.json")
        'https://example.com/bids.json'
    """
    if not source_id or not isinstance(source_id, str):
        raise ArgumentValidationError(f"{field_name} must be a non-empty string")

    source_id = source_id.strip()

    if not source_id:
        raise ArgumentValidationError(f"{field_name} cannot be empty or whitespace-only")

    if "\x00" in source_id:
        raise ArgumentValidationError(f"{field_name} contains null bytes")

    if len(source_id) > 4096:
        raise ArgumentValidationError(f"{field_name} exceeds maximum length of 4096 characters")

    return source_id


def validate_count(count: int, field_name: str = "count") -> int:
    """
    Validate a record count (e.g. how many latest records to return).

    Zero is allowed and means "none".

    Examples:
        >>> validate_count(10)
        10
        >>> validate_count(-1)  # doctest: +SKIP
        ArgumentValidationError: count must be a non-negative integer, got -1
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise ArgumentValidationError(f"{field_name} must be an integer, got {type(count).__name__}")

    if count < 0:
        raise ArgumentValidationError(f"{field_name} must be a non-negative integer, got {count}")

    return count
