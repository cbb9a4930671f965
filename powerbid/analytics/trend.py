"""
Linear trend line and time-ordinal color positions for the price chart.

Both work on ordinal positions (0-based index after an ascending date sort),
not on the actual time gaps between bids.
"""

from collections.abc import Sequence

from powerbid.batch.processing import sort_by_date
from powerbid.core.models import ProcessedRecord, TrendLine


def least_squares(ys: Sequence[float]) -> tuple[float, float]:
    """
    Ordinary least-squares fit of ys against x = 0..n-1.

    A single point gives a flat line through it.

    Returns:
        (slope, intercept)

    Raises:
        ValueError: If ys is empty
    """
    n = len(ys)
    if n == 0:
        raise ValueError("cannot fit a line to zero points")
    if n == 1:
        return 0.0, float(ys[0])

    sum_x = n * (n - 1) / 2
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in enumerate(ys))
    sum_xx = sum(x * x for x in range(n))

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def trend(dataset: Sequence[ProcessedRecord]) -> TrendLine | None:
    """
    Two-point trend segment spanning the first and last bid dates.

    Returns:
        TrendLine, or None for an empty dataset
    """
    if not dataset:
        return None

    ordered = sort_by_date(dataset)
    slope, intercept = least_squares([record.bid_price for record in ordered])
    last_x = len(ordered) - 1

    return TrendLine(
        start_date=ordered[0].bid_date,
        end_date=ordered[-1].bid_date,
        start_value=intercept,
        end_value=slope * last_x + intercept,
        slope=slope,
        intercept=intercept,
    )


def color_positions(dataset: Sequence[ProcessedRecord]) -> list[float]:
    """
    Normalized temporal rank in [0, 1] for each record, earliest first.

    Position i of L records maps to i / (L - 1); a lone record maps to 0.0.
    """
    length = len(dataset)
    if length == 0:
        return []
    if length == 1:
        return [0.0]
    return [i / (length - 1) for i in range(length)]
