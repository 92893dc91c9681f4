"""
Daily summary service for the shareable end-of-day text.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session
from datetime import date
from decimal import Decimal
from typing import Iterable
from kickoff.core.config import settings
from kickoff.models.expense import Expense
from kickoff.models.traveler import Traveler
from kickoff.schemas.summary import DailyStats, DailySummaryResponse
from kickoff.services.balance_engine import daily_spend


def day_number(on_date: date, trip_start: date) -> int:
    """1-based day of the trip (0 or negative before it starts)."""
    return (on_date - trip_start).days + 1


def format_money(amount: Decimal, symbol: str = "$") -> str:
    return f"{symbol}{amount:,.2f}"


def compose_daily_summary(
    on_date: date,
    expenses: Iterable,
    traveler_count: int,
    trip_name: str,
    trip_start: date,
    currency_symbol: str = "$"
) -> DailySummaryResponse:
    """Build the summary text and stats for one day of the trip."""
    spend = daily_spend(expenses, on_date, traveler_count)
    number = day_number(on_date, trip_start)

    lines = [f"\U0001F3F4 {trip_name.upper()} - Day {number} ({on_date:%B} {on_date.day})", ""]
    if spend.spent > 0:
        line = f"\U0001F4B0 Spent today: {format_money(spend.spent, currency_symbol)}"
        if spend.traveler_count > 1:
            line += f" ({format_money(spend.per_person, currency_symbol)} per person)"
        lines.append(line)

    return DailySummaryResponse(
        date=on_date,
        day_number=number,
        summary="\n".join(lines).rstrip(),
        stats=DailyStats(
            spent=float(spend.spent),
            per_person=float(spend.per_person),
            traveler_count=spend.traveler_count,
            expense_count=spend.expense_count
        )
    )


def get_daily_summary(on_date: date, db: Session) -> DailySummaryResponse:
    """Load the day's expenses and compose its summary."""
    expenses = db.query(Expense).filter(Expense.date == on_date).all()
    traveler_count = db.query(func.count(Traveler.id)).scalar() or 0

    return compose_daily_summary(
        on_date,
        expenses,
        traveler_count,
        trip_name=settings.TRIP_NAME,
        trip_start=settings.TRIP_START_DATE,
        currency_symbol=settings.CURRENCY_SYMBOL
    )
