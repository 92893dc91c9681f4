"""
Traveler management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from kickoff.db.session import get_db
from kickoff.models.traveler import Traveler
from kickoff.schemas.traveler import TravelerCreate, TravelerResponse

router = APIRouter(prefix="/travelers", tags=["travelers"])


@router.get("", response_model=List[TravelerResponse])
async def list_travelers(db: Session = Depends(get_db)):
    """List all travelers on the trip."""
    return db.query(Traveler).order_by(Traveler.id).all()


@router.post("", response_model=TravelerResponse, status_code=status.HTTP_201_CREATED)
async def create_traveler(
    traveler_data: TravelerCreate,
    db: Session = Depends(get_db)
):
    """Add a traveler to the trip."""
    existing = db.query(Traveler).filter(Traveler.name == traveler_data.name).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Traveler name already taken"
        )

    traveler = Traveler(
        name=traveler_data.name,
        color=traveler_data.color,
        emoji=traveler_data.emoji
    )
    db.add(traveler)
    db.commit()
    db.refresh(traveler)

    return traveler
