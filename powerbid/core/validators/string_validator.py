"""
StringValidator - requires a non-blank string and trims it.
"""

from datetime import datetime
from typing import Any

from powerbid.core.exceptions import InvalidStringError

from .base_validator import BaseValidator


class StringValidator(BaseValidator):
    """
    Validates that a field holds a non-empty string.

    Parameters:
    - strip: Whether to return the value with surrounding whitespace removed
             (default: True)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.strip = self.parameters.get("strip", True)

    def validate(self, value: Any, record: dict[str, Any], now: datetime | None = None) -> str:
        """
        Validate the value is a string with visible content.

        Returns:
            The (trimmed) string

        Raises:
            InvalidStringError: If value is not a str or is blank
        """
        if not isinstance(value, str) or value.strip() == "":
            raise InvalidStringError(self.field_name)

        return value.strip() if self.strip else value

    @property
    def rule_type(self) -> str:
        return "string"
