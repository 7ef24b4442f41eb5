"""Pure functions deriving dashboard figures from daily classification counts."""

from datetime import date, timedelta
from typing import List, Sequence

from ...models.stats import ClassificationTotals, DailyClassificationStats, StatsSummary


def window_dates(days: int, end: date) -> List[date]:
    """The ``days`` calendar days ending ``end``, oldest first."""
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def default_series(days: int, today: date) -> List[DailyClassificationStats]:
    """All-zero records for the ``days`` calendar days ending ``today``."""
    return fill_window([], days, today)


def fill_window(
    series: Sequence[DailyClassificationStats],
    days: int,
    end: date,
) -> List[DailyClassificationStats]:
    """One record per day of the window; days without a row count as zero.

    Rows outside the window are dropped.
    """
    by_date = {day.date: day for day in series}
    return [
        by_date.get(day, DailyClassificationStats(date=day))
        for day in window_dates(days, end)
    ]


def calculate_trend(series: Sequence[DailyClassificationStats]) -> float:
    """Percentage change of legitimate messages between the two latest days."""
    if len(series) < 2:
        return 0.0

    previous = series[-2].legitimate
    current = series[-1].legitimate

    if previous == 0:
        return 100.0 if current > 0 else 0.0

    return round((current - previous) / previous * 100, 1)


def calculate_totals(series: Sequence[DailyClassificationStats]) -> ClassificationTotals:
    """Field-wise sum across the window."""
    return ClassificationTotals(
        legitimate=sum(day.legitimate for day in series),
        spam=sum(day.spam for day in series),
        phishing=sum(day.phishing for day in series),
    )


def summarize(series: Sequence[DailyClassificationStats]) -> StatsSummary:
    ordered = sorted(series, key=lambda day: day.date)
    return StatsSummary(
        days=len(ordered),
        series=ordered,
        trend=calculate_trend(ordered),
        totals=calculate_totals(ordered),
    )
