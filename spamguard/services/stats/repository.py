"""Reads pre-aggregated daily classification counts from Supabase."""

from datetime import date
from functools import lru_cache
from typing import Any, Callable, List, Optional

from ...logging_config import get_logger
from ...models.stats import DailyClassificationStats, StatsSummary
from ..supabase_client import DAILY_STATS_TABLE, get_supabase_client
from .analytics import fill_window, summarize, window_dates

logger = get_logger(__name__)


class ClassificationStatsRepository:
    """Daily stats rows are written by an external aggregation job."""

    def __init__(self, client: Optional[Any] = None, today: Callable[[], date] = date.today):
        self.client = client if client is not None else get_supabase_client()
        self.today = today

    def fetch_recent(self, user_id: str, days: int, end: date) -> List[DailyClassificationStats]:
        """Return a user's stored rows for the ``days`` ending ``end``, oldest first."""

        if not self.client:
            logger.warning("Cannot get stats: Supabase client not available")
            return []

        result = (
            self.client
            .table(DAILY_STATS_TABLE)
            .select('date, legitimate, spam, phishing')
            .eq('user_id', user_id)
            .gte('date', window_dates(days, end)[0].isoformat())
            .lte('date', end.isoformat())
            .order('date', desc=True)
            .limit(days)
            .execute()
        )

        rows = [DailyClassificationStats.model_validate(row) for row in result.data]
        rows.reverse()
        logger.debug(f"Retrieved {len(rows)} daily stats rows for user {user_id}")
        return rows

    def get_summary(
        self,
        user_id: Optional[str],
        days: int,
        today: Optional[date] = None,
    ) -> StatsSummary:
        """Summary for a user; anonymous callers get a zero series ending today."""

        today = today or self.today()
        series: List[DailyClassificationStats] = []
        if user_id:
            try:
                series = self.fetch_recent(user_id, days, today)
            except Exception as e:
                logger.error(f"Failed to load stats for user {user_id}: {e}")

        return summarize(fill_window(series, days, today))


@lru_cache(maxsize=1)
def get_stats_repository() -> ClassificationStatsRepository:
    """Get the global stats repository instance."""
    return ClassificationStatsRepository()
