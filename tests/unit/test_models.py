"""
Unit tests for Pydantic data models.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from powerbid.core.models import (
    BidFilter,
    CacheInfo,
    DatasetShape,
    DatasetValidationResult,
    ProcessedRecord,
    RecordRejection,
    ValidatedRecord,
)

PARSED = datetime(2024, 3, 15, tzinfo=timezone.utc)


def validated(**overrides):
    fields = {
        "user_name": "Jiangsu Steel Works",
        "power_company": "East Grid Retail Co.",
        "bid_date": "2024-03-15",
        "bid_date_parsed": PARSED,
        "bid_price": 0.452,
    }
    fields.update(overrides)
    return ValidatedRecord(**fields)


class TestValidatedRecord:
    """Tests for ValidatedRecord"""

    def test_parsed_date_not_serialized(self):
        dumped = validated().model_dump()

        assert "bid_date_parsed" not in dumped
        assert dumped["bid_date"] == "2024-03-15"

    def test_frozen(self):
        record = validated()

        with pytest.raises(ValidationError):
            record.bid_price = 1.0

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            validated(user_name="")


class TestProcessedRecord:
    """Tests for ProcessedRecord"""

    def make(self, **overrides):
        fields = {
            "user_name": "Jiangsu Steel Works",
            "power_company": "East Grid Retail Co.",
            "bid_date": "2024-03-15",
            "bid_date_parsed": PARSED,
            "bid_price": 0.452,
            "id": 1,
            "bid_date_formatted": "2024/03/15",
            "bid_price_formatted": "0.452 元/kWh",
            "quarter": "Q1",
            "month": 3,
            "year": 2024,
        }
        fields.update(overrides)
        return ProcessedRecord(**fields)

    def test_valid(self):
        record = self.make()
        assert isinstance(record, ValidatedRecord)
        assert record.quarter == "Q1"

    @pytest.mark.parametrize(
        "overrides",
        [{"quarter": "Q5"}, {"month": 13}, {"month": 0}, {"id": 0}],
    )
    def test_invalid_derived_fields(self, overrides):
        with pytest.raises(ValidationError):
            self.make(**overrides)


class TestRecordRejection:
    """Tests for RecordRejection"""

    def test_describe_numbers_from_one(self):
        rejection = RecordRejection(
            index=0,
            field_name="bid_price",
            rule_name="number",
            message="Field must be a finite number",
            raw_payload={"bid_price": "abc"},
        )
        assert rejection.describe() == "record 1: bid_price: Field must be a finite number"

    def test_result_ratio(self):
        rejection = RecordRejection(index=1, field_name="x", rule_name="string", message="m")
        result = DatasetValidationResult(
            shape=DatasetShape.BARE_ARRAY,
            records=[validated()],
            rejections=[rejection],
            total_records=2,
        )

        assert result.rejected_count == 1
        assert result.rejection_ratio == 0.5
        assert result.warnings == ["record 2: x: m"]


class TestBidFilter:
    """Tests for BidFilter"""

    def test_all_optional(self):
        bid_filter = BidFilter()
        assert bid_filter.min_price is None
        assert bid_filter.start_date is None

    def test_date_strings_parsed_as_utc(self):
        bid_filter = BidFilter(start_date="2024-01-01", end_date="2024-12-31T23:59:59+08:00")

        assert bid_filter.start_date == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert bid_filter.end_date.utcoffset().total_seconds() == 8 * 3600

    def test_invalid_date(self):
        with pytest.raises(ValidationError):
            BidFilter(start_date="yesterday")


def test_cache_info_defaults():
    info = CacheInfo(size=0)
    assert info.keys == []
