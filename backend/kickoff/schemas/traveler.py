"""
Pydantic schemas for Traveler entity.
"""
from pydantic import BaseModel, Field
from datetime import datetime


class TravelerBase(BaseModel):
    """Base traveler schema."""
    name: str = Field(min_length=1, max_length=50)
    color: str = Field(min_length=1, max_length=20)
    emoji: str = Field(min_length=1, max_length=16)


class TravelerCreate(TravelerBase):
    """Schema for traveler creation."""
    pass


class TravelerResponse(TravelerBase):
    """Schema for traveler response."""
    id: int
    created_at: datetime

    class Config:
        from_attributes = True
