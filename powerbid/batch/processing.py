"""
Processing of validated records: sort, clean, enrich.

Flow: sort by date -> normalize names and round prices -> derive display and
grouping fields. Every step returns new records; inputs are never mutated.
"""

import math
import re
from collections.abc import Sequence

from powerbid.core.exceptions import ProcessingError
from powerbid.core.models import ProcessedRecord, ValidatedRecord
from powerbid.core.rules.rule_config import DEFAULT_PRICE_UNIT
from powerbid.observability.logger import get_logger

logger = get_logger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def sort_by_date(records: Sequence[ValidatedRecord], ascending: bool = True) -> list[ValidatedRecord]:
    """
    Sort records by parsed bid date.

    The sort is stable in both directions: records sharing a date keep their
    relative input order.
    """
    return sorted(records, key=lambda r: r.bid_date_parsed, reverse=not ascending)


def clean_string(value: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return _WHITESPACE_RUN.sub(" ", value).strip()


def round_price(price: float) -> float:
    """
    Round half-up to 3 decimal places.

    Examples:
        >>> round_price(0.45678)
        0.457
        >>> round_price(0.1234)
        0.123
    """
    return math.floor(price * 1000 + 0.5) / 1000


def quarter_of(month: int) -> str:
    """Calendar quarter label for a month number."""
    return f"Q{math.ceil(month / 3)}"


def clean_records(records: Sequence[ValidatedRecord]) -> list[ValidatedRecord]:
    """Normalize names and round prices."""
    return [
        record.model_copy(
            update={
                "user_name": clean_string(record.user_name),
                "power_company": clean_string(record.power_company),
                "bid_price": round_price(record.bid_price),
            }
        )
        for record in records
    ]


def enrich_records(records: Sequence[ValidatedRecord], unit_label: str = DEFAULT_PRICE_UNIT) -> list[ProcessedRecord]:
    """
    Attach derived fields.

    id is the 1-based position in the given order; calendar fields come from
    the parsed date in its own UTC offset.
    """
    enriched = []
    for position, record in enumerate(records, start=1):
        parsed = record.bid_date_parsed
        enriched.append(
            ProcessedRecord(
                user_name=record.user_name,
                power_company=record.power_company,
                bid_date=record.bid_date,
                bid_date_parsed=parsed,
                bid_price=record.bid_price,
                id=position,
                bid_date_formatted=f"{parsed.year:04d}/{parsed.month:02d}/{parsed.day:02d}",
                bid_price_formatted=f"{record.bid_price:.3f} {unit_label}",
                quarter=quarter_of(parsed.month),
                month=parsed.month,
                year=parsed.year,
            )
        )
    return enriched


def process(validated: Sequence[ValidatedRecord], unit_label: str = DEFAULT_PRICE_UNIT) -> list[ProcessedRecord]:
    """
    Turn validated records into a sorted, cleaned and enriched dataset.

    Re-running on an already processed dataset yields identical derived fields.

    Args:
        validated: Records from the dataset validator (or a processed dataset)
        unit_label: Unit appended to formatted prices

    Returns:
        New list of ProcessedRecord sorted ascending by date

    Raises:
        ProcessingError: If deriving any field fails
    """
    try:
        sorted_records = sort_by_date(validated)
        cleaned = clean_records(sorted_records)
        return enrich_records(cleaned, unit_label)
    except Exception as e:
        logger.error(f"Data processing failed: {e}", extra={"record_count": len(validated)})
        raise ProcessingError(f"Data processing failed: {e}") from e
