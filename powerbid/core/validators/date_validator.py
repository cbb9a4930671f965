"""
DateValidator - parses ISO-8601 dates and checks they fall in a plausible window.
"""

from datetime import date, datetime, timezone
from typing import Any

from powerbid.core.exceptions import InvalidDateError, OutOfRangeError

from .base_validator import BaseValidator

DEFAULT_MIN_DATE = "2020-01-01"


def parse_bid_date(value: Any) -> datetime:
    """
    Parse an ISO-8601 date or datetime string into an aware datetime.

    Naive values are read as UTC; values carrying an offset keep it, so
    calendar fields derived later reflect the wall-clock date of the bid.

    Raises:
        ValueError: If value is not a string or not ISO-8601
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value.strip())
    else:
        raise ValueError(f"Expected ISO-8601 string, got {type(value).__name__}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _as_bound(value: Any) -> datetime:
    if isinstance(value, date) and not isinstance(value, datetime):
        value = value.isoformat()
    return parse_bid_date(value)


class DateValidator(BaseValidator):
    """
    Validates that a field holds a parseable date inside [min_date, max_date].

    Parameters:
    - min_date: Earliest accepted date (default: 2020-01-01)
    - max_date: Latest accepted date (default: the reference time ``now``)

    Returns the parsed datetime; the caller keeps the original string.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.min_label = str(self.parameters.get("min_date", DEFAULT_MIN_DATE))
        self.min_date = _as_bound(self.parameters.get("min_date", DEFAULT_MIN_DATE))
        max_date = self.parameters.get("max_date")
        self.max_date = _as_bound(max_date) if max_date is not None else None

    def validate(self, value: Any, record: dict[str, Any], now: datetime | None = None) -> datetime:
        """
        Parse and range-check the date.

        Raises:
            InvalidDateError: If the value cannot be parsed
            OutOfRangeError: If the date is before min_date or after max_date/now
        """
        if not isinstance(value, str):
            raise InvalidDateError(self.field_name)
        try:
            parsed = parse_bid_date(value)
        except ValueError:
            raise InvalidDateError(self.field_name)

        upper = self.max_date or now or datetime.now(timezone.utc)
        if parsed < self.min_date or parsed > upper:
            raise OutOfRangeError(self.field_name, value, self.min_label, upper.isoformat())

        return parsed

    @property
    def rule_type(self) -> str:
        return "date"
