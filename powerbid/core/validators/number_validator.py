"""
NumberValidator - coerces a field to a finite float.
"""

import math
import re
from datetime import datetime
from typing import Any

from powerbid.core.exceptions import InvalidNumberError

from .base_validator import BaseValidator

# Leading numeric prefix of a string: "0.45", " 1e-1", "0.5 CNY", "Infinity"
_NUMERIC_PREFIX = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))"
)


def parse_number(value: Any) -> float:
    """
    Permissively parse a value into a float.

    Numbers are taken as-is. Strings are read up to the end of their leading
    numeric prefix, so trailing units or garbage are ignored. Anything else,
    booleans included, yields NaN.

    Args:
        value: Raw field value

    Returns:
        Parsed float; NaN when nothing numeric could be read

    Examples:
        >>> parse_number("0.45")
        0.45
        >>> parse_number("0.5 CNY/kWh")
        0.5
        >>> math.isnan(parse_number("abc"))
        True
    """
    if isinstance(value, bool):
        return math.nan

    if isinstance(value, int | float):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf

    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if not match:
            return math.nan
        token = match.group(1)
        if token.lstrip("+-") == "Infinity":
            return -math.inf if token.startswith("-") else math.inf
        return float(token)

    return math.nan


class NumberValidator(BaseValidator):
    """
    Validates that a field can be read as a finite number.

    The coerced float is handed on to the next rule (typically a range check).
    """

    def validate(self, value: Any, record: dict[str, Any], now: datetime | None = None) -> float:
        """
        Coerce and check the value.

        Returns:
            The parsed float

        Raises:
            InvalidNumberError: If the parse result is NaN or infinite
        """
        number = parse_number(value)
        if not math.isfinite(number):
            raise InvalidNumberError(self.field_name)
        return number

    @property
    def rule_type(self) -> str:
        return "number"
