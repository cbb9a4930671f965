"""
RangeValidator - validates numeric values are within a specified range.
"""

from datetime import datetime
from typing import Any

from powerbid.core.exceptions import InvalidNumberError, OutOfRangeError

from .base_validator import BaseValidator


class RangeValidator(BaseValidator):
    """
    Validates that a numeric field is within a specified range.

    Parameters:
    - min: Minimum value (inclusive)
    - max: Maximum value (inclusive)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.min_value = self.parameters.get("min")
        self.max_value = self.parameters.get("max")

        if self.min_value is None and self.max_value is None:
            raise ValueError("RangeValidator requires at least one of: min, max")

    def validate(self, value: Any, record: dict[str, Any], now: datetime | None = None) -> Any:
        """
        Validate that the value is within the specified range.

        Args:
            value: The field value to validate (already coerced by a number rule)
            record: The entire record

        Raises:
            InvalidNumberError: If value is not numeric
            OutOfRangeError: If value is outside the range
        """
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise InvalidNumberError(self.field_name)

        too_low = self.min_value is not None and value < self.min_value
        too_high = self.max_value is not None and value > self.max_value
        if too_low or too_high:
            raise OutOfRangeError(self.field_name, value, self.min_value, self.max_value)

        return value

    @property
    def rule_type(self) -> str:
        return "range"
