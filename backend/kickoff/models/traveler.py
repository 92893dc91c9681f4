"""
Traveler model for trip members.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from kickoff.db.base import BaseModel


class Traveler(BaseModel):
    """Traveler model with unique display name."""
    __tablename__ = "travelers"

    name = Column(String(50), unique=True, nullable=False, index=True)
    color = Column(String(20), nullable=False)
    emoji = Column(String(16), nullable=False)

    # Relationships
    expenses_paid = relationship("Expense", foreign_keys="Expense.payer_id", back_populates="payer")
    splits = relationship("ExpenseSplit", back_populates="traveler")
