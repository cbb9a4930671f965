"""
Core data models for the bid data pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .analytics import AnalyticsSummary, BidFilter, CacheInfo, DateRange, PriceStats, TrendLine
from .bid_record import ProcessedRecord, ValidatedRecord
from .validation_result import DatasetShape, DatasetValidationResult, RecordRejection

__all__ = [
    "ValidatedRecord",
    "ProcessedRecord",
    "RecordRejection",
    "DatasetShape",
    "DatasetValidationResult",
    "AnalyticsSummary",
    "PriceStats",
    "DateRange",
    "TrendLine",
    "BidFilter",
    "CacheInfo",
]
