"""
Expense model for tracking shared spending.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Text, Boolean
from sqlalchemy.orm import relationship
from kickoff.db.base import BaseModel
import enum


class ExpenseCategory(str, enum.Enum):
    """Expense category enumeration."""
    FOOD = "food"
    TRANSPORT = "transport"
    TICKETS = "tickets"
    ACCOMMODATION = "accommodation"
    DRINKS = "drinks"
    ACTIVITIES = "activities"
    SHOPPING = "shopping"
    OTHER = "other"


class Expense(BaseModel):
    """Expense model representing a single payment made by one traveler."""
    __tablename__ = "expenses"

    description = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String(20), nullable=False, default=ExpenseCategory.OTHER.value)
    payer_id = Column(Integer, ForeignKey("travelers.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    # Relationships
    payer = relationship("Traveler", foreign_keys=[payer_id], back_populates="expenses_paid")
    splits = relationship("ExpenseSplit", back_populates="expense", cascade="all, delete-orphan")


class ExpenseSplit(BaseModel):
    """Share of an expense a traveler is responsible for."""
    __tablename__ = "expense_splits"

    expense_id = Column(Integer, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    traveler_id = Column(Integer, ForeignKey("travelers.id"), nullable=False, index=True)
    share = Column(Numeric(12, 2), nullable=False)
    settled = Column(Boolean, default=False, nullable=False)

    # Relationships
    expense = relationship("Expense", back_populates="splits")
    traveler = relationship("Traveler", back_populates="splits")
