"""
Analytics result models and the filter predicate set.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from powerbid.core.validators.date_validator import parse_bid_date


class PriceStats(BaseModel):
    """Price distribution of a dataset."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    average: float
    median: float


class DateRange(BaseModel):
    """Earliest and latest bid dates of a dataset."""

    model_config = ConfigDict(frozen=True)

    earliest: datetime
    latest: datetime


class AnalyticsSummary(BaseModel):
    """
    Read-only snapshot of summary statistics, recomputed on demand.

    Attributes:
        total_records: Number of records summarized
        price_stats: min / max / average / median price
        date_range: earliest / latest bid date
        unique_users: Distinct user_name values (exact match)
        unique_companies: Distinct power_company values (exact match)
    """

    model_config = ConfigDict(frozen=True)

    total_records: int = Field(..., ge=1)
    price_stats: PriceStats
    date_range: DateRange
    unique_users: int = Field(..., ge=1)
    unique_companies: int = Field(..., ge=1)


class TrendLine(BaseModel):
    """
    Two-point least-squares trend segment.

    start_date / end_date are the bid_date strings of the first and last
    records; start_value / end_value are the fitted prices at x=0 and x=n-1.
    """

    model_config = ConfigDict(frozen=True)

    start_date: str
    end_date: str
    start_value: float
    end_value: float
    slope: float
    intercept: float


class BidFilter(BaseModel):
    """
    Conjunction of optional predicates over processed records.

    A predicate left as None is not applied. Date bounds accept ISO strings
    and are compared by value; both bounds are inclusive.
    """

    model_config = ConfigDict(frozen=True)

    start_date: datetime | None = None
    end_date: datetime | None = None
    min_price: float | None = None
    max_price: float | None = None
    user_name: str | None = None
    power_company: str | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_date_bound(cls, v: Any) -> datetime | None:
        """Read date bounds the same way bid dates are read."""
        if v is None:
            return None
        return parse_bid_date(v)


class CacheInfo(BaseModel):
    """Observability snapshot of the dataset cache."""

    model_config = ConfigDict(frozen=True)

    size: int = Field(..., ge=0)
    keys: list[str] = Field(default_factory=list)
