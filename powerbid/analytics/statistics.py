"""
Summary statistics over a processed dataset.
"""

from collections.abc import Sequence

from powerbid.core.models import AnalyticsSummary, DateRange, PriceStats, ProcessedRecord


def calculate_median(values: Sequence[float]) -> float:
    """
    Median of values; mean of the two central values for even counts.

    Raises:
        ValueError: If values is empty
    """
    if not values:
        raise ValueError("median of empty sequence")

    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return ordered[middle]


def summarize(dataset: Sequence[ProcessedRecord]) -> AnalyticsSummary | None:
    """
    Price, date and cardinality statistics.

    Returns:
        AnalyticsSummary, or None for an empty dataset
    """
    if not dataset:
        return None

    prices = [record.bid_price for record in dataset]
    dates = [record.bid_date_parsed for record in dataset]

    return AnalyticsSummary(
        total_records=len(dataset),
        price_stats=PriceStats(
            min=min(prices),
            max=max(prices),
            average=sum(prices) / len(prices),
            median=calculate_median(prices),
        ),
        date_range=DateRange(earliest=min(dates), latest=max(dates)),
        unique_users=len({record.user_name for record in dataset}),
        unique_companies=len({record.power_company for record in dataset}),
    )
