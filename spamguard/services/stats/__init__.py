"""Classification statistics for the dashboard chart."""

from .analytics import calculate_totals, calculate_trend, default_series, fill_window, summarize
from .repository import ClassificationStatsRepository, get_stats_repository

__all__ = [
    "calculate_totals",
    "calculate_trend",
    "default_series",
    "fill_window",
    "summarize",
    "ClassificationStatsRepository",
    "get_stats_repository",
]
