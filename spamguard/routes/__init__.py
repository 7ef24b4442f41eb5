"""API routes for SpamGuard Chat."""

from fastapi import APIRouter

from .chat import router as chat_router
from .stats import router as stats_router

api_router = APIRouter(prefix="/api")

api_router.include_router(chat_router)
api_router.include_router(stats_router)

__all__ = ["api_router"]
