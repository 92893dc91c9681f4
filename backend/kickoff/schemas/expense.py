"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal
from kickoff.models.expense import ExpenseCategory


class SplitCreate(BaseModel):
    """Custom share of an expense for one traveler."""
    traveler_id: int
    share: Decimal = Field(ge=0)


class ExpenseBase(BaseModel):
    """Base expense schema."""
    description: str
    amount: Decimal = Field(ge=0)
    category: ExpenseCategory = ExpenseCategory.OTHER
    paid_by: int  # Traveler ID of the payer
    date: dt_date
    notes: Optional[str] = None


class ExpenseCreate(ExpenseBase):
    """Schema for expense creation."""
    # Omitted means an equal split across all travelers
    splits: Optional[List[SplitCreate]] = None


class ExpenseUpdate(BaseModel):
    """Schema for expense update."""
    description: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)
    category: Optional[ExpenseCategory] = None
    paid_by: Optional[int] = None
    date: Optional[dt_date] = None
    notes: Optional[str] = None
    splits: Optional[List[SplitCreate]] = None  # Replaces all existing splits when provided


class SplitResponse(BaseModel):
    """Schema for expense split response."""
    id: int
    traveler_id: int
    traveler_name: str
    share: float
    settled: bool


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: int
    description: str
    amount: float
    category: str
    paid_by: int
    payer_name: str
    date: dt_date
    notes: Optional[str] = None
    splits: List[SplitResponse] = []
    created_at: datetime
    updated_at: datetime
