"""
Unit tests for validation rules.

Includes property-based testing with hypothesis for validators.
"""

import math
from datetime import datetime, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from powerbid.core.exceptions import (
    InvalidDateError,
    InvalidNumberError,
    InvalidStringError,
    MissingFieldError,
    OutOfRangeError,
)
from powerbid.core.validators import (
    DateValidator,
    NumberValidator,
    RangeValidator,
    RequiredFieldValidator,
    StringValidator,
    ValidationError,
    parse_bid_date,
    parse_number,
)

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestRequiredFieldValidator:
    """Tests for RequiredFieldValidator"""

    def test_present_field_passes(self):
        """Test validation passes for present field"""
        validator = RequiredFieldValidator("user_name")
        record = {"user_name": "Jiangsu Steel Works"}
        assert validator.validate(record["user_name"], record) == "Jiangsu Steel Works"

    def test_missing_field_raises_error(self):
        """Test validation fails for missing key"""
        validator = RequiredFieldValidator("user_name")
        record = {"bid_price": 0.5}

        with pytest.raises(MissingFieldError) as exc_info:
            validator.validate(None, record)

        assert "missing" in str(exc_info.value).lower()
        assert exc_info.value.field_name == "user_name"
        assert exc_info.value.rule_name == "required_field"

    def test_null_value_is_left_to_type_rules(self):
        """Test a present key holding null passes the presence check"""
        validator = RequiredFieldValidator("user_name")
        record = {"user_name": None}
        assert validator.validate(None, record) is None


class TestStringValidator:
    """Tests for StringValidator"""

    def test_value_is_trimmed(self):
        validator = StringValidator("user_name")
        assert validator.validate("  East Grid  ", {}) == "East Grid"

    def test_strip_disabled(self):
        validator = StringValidator("user_name", {"strip": False})
        assert validator.validate("  East Grid  ", {}) == "  East Grid  "

    @pytest.mark.parametrize("value", ["", "   ", "\t\n", None, 42, 0.5, ["a"]])
    def test_invalid_values_raise(self, value):
        """Test non-strings and blank strings are rejected"""
        validator = StringValidator("power_company")

        with pytest.raises(InvalidStringError) as exc_info:
            validator.validate(value, {})

        assert exc_info.value.field_name == "power_company"
        assert exc_info.value.rule_name == "string"

    @given(st.text(min_size=1).filter(lambda s: s.strip() != ""))
    def test_property_any_nonblank_string_passes(self, value):
        """Property test: any string with visible content passes"""
        validator = StringValidator("user_name")
        assert validator.validate(value, {}) == value.strip()


class TestParseNumber:
    """Tests for permissive number parsing"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.45, 0.45),
            (1, 1.0),
            ("0.45", 0.45),
            (" 1.5", 1.5),
            ("0.5 CNY/kWh", 0.5),
            ("1e-1", 0.1),
            (".75", 0.75),
            ("-0.2", -0.2),
        ],
    )
    def test_numeric_prefix(self, value, expected):
        assert parse_number(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["abc", "", "CNY 0.5", None, True, False, {}, []])
    def test_non_numeric_is_nan(self, value):
        assert math.isnan(parse_number(value))

    def test_infinity_literal(self):
        assert parse_number("Infinity") == math.inf
        assert parse_number("-Infinity") == -math.inf

    def test_huge_integer_overflows_to_infinity(self):
        assert parse_number(10 ** 400) == math.inf

    @pytest.mark.parametrize("value", ["٠.٥", "０.５", "१२"])
    def test_non_ascii_digits_are_nan(self, value):
        """Test digits outside 0-9 are not read as numbers"""
        assert math.isnan(parse_number(value))


class TestNumberValidator:
    """Tests for NumberValidator"""

    def test_returns_float(self):
        validator = NumberValidator("bid_price")
        assert validator.validate("0.45", {}) == pytest.approx(0.45)

    @pytest.mark.parametrize("value", ["abc", None, True, "Infinity", float("nan"), float("inf"), 10 ** 400])
    def test_non_finite_raises(self, value):
        validator = NumberValidator("bid_price")

        with pytest.raises(InvalidNumberError) as exc_info:
            validator.validate(value, {})

        assert exc_info.value.field_name == "bid_price"

    @given(st.floats(allow_nan=False, allow_infinity=False))
    def test_property_finite_floats_pass_through(self, value):
        """Property test: any finite float comes back unchanged"""
        validator = NumberValidator("bid_price")
        assert validator.validate(value, {}) == value


class TestRangeValidator:
    """Tests for RangeValidator"""

    def test_requires_a_bound(self):
        with pytest.raises(ValueError):
            RangeValidator("bid_price", {})

    @pytest.mark.parametrize("value", [0.1, 0.5, 2.0])
    def test_bounds_are_inclusive(self, value):
        validator = RangeValidator("bid_price", {"min": 0.1, "max": 2.0})
        assert validator.validate(value, {}) == value

    @pytest.mark.parametrize("value", [0.0999, 2.001, 0.0, -1.0])
    def test_out_of_range_raises(self, value):
        validator = RangeValidator("bid_price", {"min": 0.1, "max": 2.0})

        with pytest.raises(OutOfRangeError) as exc_info:
            validator.validate(value, {})

        assert exc_info.value.rule_name == "range"
        assert exc_info.value.value == value

    def test_only_min(self):
        validator = RangeValidator("bid_price", {"min": 0.1})
        assert validator.validate(1000.0, {}) == 1000.0

    @pytest.mark.parametrize("value", ["0.5", None, True])
    def test_non_numeric_raises(self, value):
        validator = RangeValidator("bid_price", {"min": 0.1, "max": 2.0})

        with pytest.raises(InvalidNumberError):
            validator.validate(value, {})

    @given(st.floats(min_value=0.1, max_value=2.0, allow_nan=False, allow_infinity=False))
    def test_property_values_in_range_pass(self, value):
        """Property test: values in [0.1, 2.0] pass"""
        validator = RangeValidator("bid_price", {"min": 0.1, "max": 2.0})
        validator.validate(value, {})  # Should not raise

    @given(
        st.one_of(
            st.floats(max_value=0.0999, allow_nan=False, allow_infinity=False),
            st.floats(min_value=2.001, allow_nan=False, allow_infinity=False),
        )
    )
    def test_property_values_outside_range_fail(self, value):
        """Property test: values outside [0.1, 2.0] fail"""
        validator = RangeValidator("bid_price", {"min": 0.1, "max": 2.0})

        with pytest.raises(ValidationError):
            validator.validate(value, {})


class TestParseBidDate:
    """Tests for ISO-8601 date parsing"""

    def test_naive_date_is_utc(self):
        parsed = parse_bid_date("2024-03-15")
        assert parsed == datetime(2024, 3, 15, tzinfo=timezone.utc)

    def test_zulu_suffix(self):
        parsed = parse_bid_date("2024-03-15T10:30:00Z")
        assert parsed == datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)

    def test_offset_is_kept(self):
        parsed = parse_bid_date("2024-03-31T23:30:00+08:00")
        assert parsed.day == 31
        assert parsed.utcoffset().total_seconds() == 8 * 3600

    @pytest.mark.parametrize("value", ["not-a-date", "2024-13-01", "", 20240101, None])
    def test_invalid_raises_value_error(self, value):
        with pytest.raises(ValueError):
            parse_bid_date(value)


class TestDateValidator:
    """Tests for DateValidator"""

    def test_returns_parsed_datetime(self):
        validator = DateValidator("bid_date")
        parsed = validator.validate("2024-03-15", {}, now=NOW)
        assert parsed == datetime(2024, 3, 15, tzinfo=timezone.utc)

    def test_min_date_is_inclusive(self):
        validator = DateValidator("bid_date", {"min_date": "2020-01-01"})
        validator.validate("2020-01-01", {}, now=NOW)  # Should not raise

    def test_before_min_date_raises(self):
        validator = DateValidator("bid_date", {"min_date": "2020-01-01"})

        with pytest.raises(OutOfRangeError) as exc_info:
            validator.validate("2019-12-31", {}, now=NOW)

        assert exc_info.value.field_name == "bid_date"

    def test_future_date_raises(self):
        validator = DateValidator("bid_date")

        with pytest.raises(OutOfRangeError):
            validator.validate("2025-01-02", {}, now=NOW)

    def test_explicit_max_date(self):
        validator = DateValidator("bid_date", {"max_date": "2023-12-31"})

        with pytest.raises(OutOfRangeError):
            validator.validate("2024-01-01", {}, now=NOW)

    @pytest.mark.parametrize("value", ["not-a-date", "", None, 20240101, 1.5])
    def test_unparseable_raises(self, value):
        validator = DateValidator("bid_date")

        with pytest.raises(InvalidDateError) as exc_info:
            validator.validate(value, {}, now=NOW)

        assert exc_info.value.rule_name == "date"

    @given(st.dates(min_value=datetime(2020, 1, 1).date(), max_value=datetime(2024, 12, 31).date()))
    def test_property_dates_in_window_pass(self, value):
        """Property test: any date between 2020-01-01 and now passes"""
        validator = DateValidator("bid_date")
        validator.validate(value.isoformat(), {}, now=NOW)  # Should not raise

    @given(st.dates(max_value=datetime(2019, 12, 31).date()))
    def test_property_dates_before_2020_fail(self, value):
        """Property test: any date before 2020 fails"""
        validator = DateValidator("bid_date")

        with pytest.raises(ValidationError):
            validator.validate(value.isoformat(), {}, now=NOW)
