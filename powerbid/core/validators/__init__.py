"""
Validation rule implementations.

Provides validators for required fields, strings, numbers, numeric ranges
and dates.
"""

from .base_validator import BaseValidator, ValidationError
from .date_validator import DateValidator, parse_bid_date
from .number_validator import NumberValidator, parse_number
from .range_validator import RangeValidator
from .required_field_validator import RequiredFieldValidator
from .string_validator import StringValidator

__all__ = [
    "BaseValidator",
    "ValidationError",
    "RequiredFieldValidator",
    "StringValidator",
    "NumberValidator",
    "RangeValidator",
    "DateValidator",
    "parse_bid_date",
    "parse_number",
]
