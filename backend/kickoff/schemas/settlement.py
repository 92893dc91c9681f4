"""
Pydantic schemas for the settlement report.

The settlement wire format is camelCase, shared with the budget widgets.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryBreakdown(CamelModel):
    """Paid/owed amounts within one expense category."""
    paid: float
    owes: float


class TravelerBalance(CamelModel):
    """Schema for one traveler's balance."""
    name: str
    emoji: str
    color: str
    total_paid: float
    total_owes: float
    balance: float  # Positive = owed by the group, negative = owes the group
    by_category: Dict[str, CategoryBreakdown] = {}


class SettlementTransfer(CamelModel):
    """Schema for a suggested transfer between two travelers."""
    from_name: str = Field(alias="from")
    to_name: str = Field(alias="to")
    amount: float
    settled: bool = False


class SettlementResponse(CamelModel):
    """Schema for the settlement report."""
    travelers: List[TravelerBalance]
    settlements: List[SettlementTransfer]
    total_group_spend: float
    per_person_average: float


class SettleRequest(CamelModel):
    """Schema for marking a suggested transfer as paid."""
    from_name: Optional[str] = Field(default=None, alias="from")
    to_name: Optional[str] = Field(default=None, alias="to")


class SettleResponse(CamelModel):
    """Schema for settle result."""
    settled: int  # Number of splits newly marked as settled
    from_name: str = Field(alias="from")
    to_name: str = Field(alias="to")
