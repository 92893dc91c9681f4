"""
Settlement routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from kickoff.core.utils import format_error
from kickoff.db.session import get_db
from kickoff.schemas.settlement import SettlementResponse, SettleRequest, SettleResponse
from kickoff.services.settlement_service import (
    TravelerNotFoundError, calculate_settlement, settle_transfer
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.get("", response_model=SettlementResponse)
async def get_settlement(db: Session = Depends(get_db)):
    """Compute balances and the suggested transfers for the whole group."""
    try:
        return calculate_settlement(db)
    except Exception as e:
        logger.error(f"GET /api/settlement failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=format_error("Failed to compute settlement")
        )


@router.post("/settle", response_model=SettleResponse)
async def settle(
    request: SettleRequest,
    db: Session = Depends(get_db)
):
    """Mark the splits behind a suggested transfer as paid."""
    if not request.from_name or not request.to_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="from and to are required"
        )

    try:
        count = settle_transfer(request.from_name, request.to_name, db)
    except TravelerNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return SettleResponse(settled=count, from_name=request.from_name, to_name=request.to_name)
