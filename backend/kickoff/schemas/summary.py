"""
Pydantic schemas for the daily summary.
"""
from datetime import date as dt_date
from kickoff.schemas.settlement import CamelModel


class DailyStats(CamelModel):
    """Spending figures for one day."""
    spent: float
    per_person: float
    traveler_count: int
    expense_count: int


class DailySummaryResponse(CamelModel):
    """Schema for the shareable daily summary."""
    date: dt_date
    day_number: int
    summary: str
    stats: DailyStats
