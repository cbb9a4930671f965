"""
Bid record models: validated input and its processed (enriched) form.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ValidatedRecord(BaseModel):
    """
    A bid record that passed field-level type and range checks.

    Attributes:
        user_name: Bidding user, trimmed and non-empty
        power_company: Retail power company, trimmed and non-empty
        bid_date: Original date string, kept verbatim
        bid_date_parsed: Parsed, timezone-aware date (never serialized)
        bid_price: Finite price per kWh within the accepted range
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "user_name": "Jiangsu Steel Works",
                "power_company": "East Grid Retail Co.",
                "bid_date": "2024-03-15",
                "bid_price": 0.452,
            }
        },
    )

    user_name: str = Field(..., min_length=1)
    power_company: str = Field(..., min_length=1)
    bid_date: str
    bid_date_parsed: datetime = Field(..., exclude=True)
    bid_price: float


class ProcessedRecord(ValidatedRecord):
    """
    ValidatedRecord plus derived display/grouping fields.

    Every derived field is a pure function of bid_date_parsed / bid_price and
    is recomputed on each processing pass.

    Attributes:
        id: 1-based position after sorting by date
        bid_date_formatted: YYYY/MM/DD
        bid_price_formatted: Price with 3 decimals and unit label
        quarter: Q1..Q4
        month: 1-12
        year: Calendar year
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "user_name": "Jiangsu Steel Works",
                "power_company": "East Grid Retail Co.",
                "bid_date": "2024-03-15",
                "bid_price": 0.452,
                "id": 1,
                "bid_date_formatted": "2024/03/15",
                "bid_price_formatted": "0.452 元/kWh",
                "quarter": "Q1",
                "month": 3,
                "year": 2024,
            }
        },
    )

    id: int = Field(..., ge=1)
    bid_date_formatted: str
    bid_price_formatted: str
    quarter: Literal["Q1", "Q2", "Q3", "Q4"]
    month: int = Field(..., ge=1, le=12)
    year: int
