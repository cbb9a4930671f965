"""
Record selection: latest-N and predicate filtering.
"""

from collections.abc import Sequence

from powerbid.batch.processing import sort_by_date
from powerbid.core.models import BidFilter, ProcessedRecord
from powerbid.utils.validation import validate_count

DEFAULT_LATEST_COUNT = 10


def latest(dataset: Sequence[ProcessedRecord], n: int = DEFAULT_LATEST_COUNT) -> list[ProcessedRecord]:
    """
    Most recent n records, newest first.

    Records sharing a date keep their dataset order. The dataset itself is
    left untouched.

    Args:
        dataset: Processed records
        n: How many to return (fewer if the dataset is shorter)
    """
    n = validate_count(n, "n")
    if not dataset:
        return []
    return sort_by_date(dataset, ascending=False)[:n]


def matches(record: ProcessedRecord, bid_filter: BidFilter) -> bool:
    """True when record satisfies every supplied predicate of bid_filter."""
    if bid_filter.start_date is not None and record.bid_date_parsed < bid_filter.start_date:
        return False
    if bid_filter.end_date is not None and record.bid_date_parsed > bid_filter.end_date:
        return False

    if bid_filter.min_price is not None and record.bid_price < bid_filter.min_price:
        return False
    if bid_filter.max_price is not None and record.bid_price > bid_filter.max_price:
        return False

    if bid_filter.user_name is not None and bid_filter.user_name not in record.user_name:
        return False
    if bid_filter.power_company is not None and bid_filter.power_company not in record.power_company:
        return False

    return True


def filter_records(bid_filter: BidFilter | None, dataset: Sequence[ProcessedRecord]) -> list[ProcessedRecord]:
    """
    Records matching all supplied predicates, in dataset order.

    An empty or None filter keeps everything. Never returns None.
    """
    if not dataset:
        return []
    if bid_filter is None:
        return list(dataset)
    return [record for record in dataset if matches(record, bid_filter)]
