"""Classification statistics models."""

import datetime as dt
from typing import List

from pydantic import BaseModel, Field


class DailyClassificationStats(BaseModel):
    """Classification counts for one calendar day."""
    date: dt.date
    legitimate: int = Field(default=0, ge=0)
    spam: int = Field(default=0, ge=0)
    phishing: int = Field(default=0, ge=0)


class ClassificationTotals(BaseModel):
    legitimate: int = 0
    spam: int = 0
    phishing: int = 0


class StatsSummary(BaseModel):
    """Daily series plus the figures derived from it for the dashboard chart."""
    days: int
    series: List[DailyClassificationStats]
    trend: float
    totals: ClassificationTotals
