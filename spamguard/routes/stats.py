"""Classification statistics routes."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import Settings, get_settings
from ..logging_config import get_logger
from ..models.stats import StatsSummary
from ..services.auth import AuthenticatedUser, get_optional_user
from ..services.stats import ClassificationStatsRepository, get_stats_repository

logger = get_logger(__name__)

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsSummary)
async def get_classification_stats(
    days: Optional[int] = Query(default=None, ge=1, le=31),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    repo: ClassificationStatsRepository = Depends(get_stats_repository),
    settings: Settings = Depends(get_settings),
) -> StatsSummary:
    """Daily classification counts with trend and totals for the dashboard chart."""

    window = days or settings.stats_window_days
    try:
        return repo.get_summary(user.id if user else None, window)

    except Exception as e:
        logger.error(f"Error building stats summary: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


__all__ = ["router"]
