"""
Daily summary routes.
"""
import logging
import re
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from kickoff.core.utils import format_error
from kickoff.db.session import get_db
from kickoff.schemas.summary import DailySummaryResponse
from kickoff.services.summary_service import get_daily_summary

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

router = APIRouter(prefix="/daily-summary", tags=["summary"])


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a strict YYYY-MM-DD string, or return None."""
    if not value or not DATE_PATTERN.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


@router.get("", response_model=DailySummaryResponse)
async def daily_summary(
    date_param: Optional[str] = Query(default=None, alias="date"),
    db: Session = Depends(get_db)
):
    """Shareable text summary and spending stats for one day."""
    on_date = parse_date(date_param)
    if on_date is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=format_error("date query param required (YYYY-MM-DD)")
        )

    try:
        return get_daily_summary(on_date, db)
    except Exception as e:
        logger.error(f"GET /api/daily-summary failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=format_error("Failed to generate daily summary")
        )
