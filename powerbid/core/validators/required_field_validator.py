"""
RequiredFieldValidator - ensures a field key is present in the record.
"""

from datetime import datetime
from typing import Any

from powerbid.core.exceptions import MissingFieldError

from .base_validator import BaseValidator


class RequiredFieldValidator(BaseValidator):
    """
    Validates that a required field is present in the record.

    Only the presence of the key is checked here. A present key holding null
    or an empty string is left to the type rules that follow, so the rejection
    names the actual problem ("must be a non-empty string") rather than
    "missing".
    """

    def validate(self, value: Any, record: dict[str, Any], now: datetime | None = None) -> Any:
        """
        Validate that the field key exists.

        Raises:
            MissingFieldError: If the key is absent
        """
        if self.field_name not in record:
            raise MissingFieldError(self.field_name)
        return value

    @property
    def rule_type(self) -> str:
        return "required_field"
