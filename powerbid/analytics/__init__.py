"""
Stateless analytics over processed datasets.
"""

from .selection import DEFAULT_LATEST_COUNT, filter_records, latest, matches
from .statistics import calculate_median, summarize
from .trend import color_positions, least_squares, trend

__all__ = [
    "DEFAULT_LATEST_COUNT",
    "calculate_median",
    "color_positions",
    "filter_records",
    "latest",
    "least_squares",
    "matches",
    "summarize",
    "trend",
]
