"""Models package - Import all models for SQLAlchemy registration."""
from kickoff.models.traveler import Traveler
from kickoff.models.expense import Expense, ExpenseSplit, ExpenseCategory

__all__ = [
    "Traveler",
    "Expense",
    "ExpenseSplit",
    "ExpenseCategory",
]
