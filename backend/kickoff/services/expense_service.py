"""
Expense service for expense-related business logic.
"""
import logging
from sqlalchemy.orm import Session, joinedload
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple
from kickoff.models.expense import Expense, ExpenseSplit
from kickoff.models.traveler import Traveler
from kickoff.schemas.expense import ExpenseCreate, ExpenseUpdate, SplitCreate
from kickoff.services.balance_engine import round_money

logger = logging.getLogger(__name__)


class ExpenseServiceError(ValueError):
    """Raised when an expense references travelers that do not exist."""


def equal_shares(amount: Decimal, traveler_ids: Sequence[int]) -> List[Tuple[int, Decimal]]:
    """
    Split an amount evenly in whole cents.

    Leftover cents go one each to the last travelers, so the shares always
    add back up to the rounded amount (10.00 / 3 -> 3.33, 3.33, 3.34).
    """
    if not traveler_ids:
        return []
    cents = int(round_money(amount) * 100)
    base, remainder = divmod(cents, len(traveler_ids))
    first_extra = len(traveler_ids) - remainder

    shares = []
    for index, traveler_id in enumerate(traveler_ids):
        share_cents = base + (1 if index >= first_extra else 0)
        shares.append((traveler_id, Decimal(share_cents) / 100))
    return shares


def _check_travelers(traveler_ids: Sequence[int], db: Session):
    """Raise ExpenseServiceError unless every traveler ID exists."""
    wanted = set(traveler_ids)
    if not wanted:
        return
    found = {
        row.id for row in db.query(Traveler.id).filter(Traveler.id.in_(wanted)).all()
    }
    missing = sorted(wanted - found)
    if missing:
        raise ExpenseServiceError(f"Unknown traveler id(s): {', '.join(str(m) for m in missing)}")


def _build_splits(amount: Decimal, splits: Optional[List[SplitCreate]], db: Session) -> List[ExpenseSplit]:
    """Build split rows from custom shares or an equal split over all travelers."""
    if splits is None:
        traveler_ids = [t.id for t in db.query(Traveler).order_by(Traveler.id).all()]
        pairs = equal_shares(amount, traveler_ids)
    else:
        _check_travelers([s.traveler_id for s in splits], db)
        pairs = [(s.traveler_id, round_money(s.share)) for s in splits]
        total = sum((share for _, share in pairs), Decimal(0))
        if pairs and total != round_money(amount):
            # Accepted as-is, balances degrade gracefully
            logger.warning(f"Custom splits total {total} does not match expense amount {amount}")

    return [
        ExpenseSplit(traveler_id=traveler_id, share=share, settled=False)
        for traveler_id, share in pairs
    ]


def list_expenses(db: Session, category: Optional[str] = None, paid_by: Optional[int] = None) -> List[Expense]:
    """List expenses, optionally filtered by category and payer."""
    query = db.query(Expense).options(
        joinedload(Expense.payer),
        joinedload(Expense.splits).joinedload(ExpenseSplit.traveler)
    )
    if category:
        query = query.filter(Expense.category == category)
    if paid_by is not None:
        query = query.filter(Expense.payer_id == paid_by)
    return query.order_by(Expense.date, Expense.id).all()


def get_expense(expense_id: int, db: Session) -> Optional[Expense]:
    """Get a single expense with payer and splits loaded."""
    return db.query(Expense).options(
        joinedload(Expense.payer),
        joinedload(Expense.splits).joinedload(ExpenseSplit.traveler)
    ).filter(Expense.id == expense_id).first()


def create_expense_with_splits(expense_data: ExpenseCreate, db: Session) -> Expense:
    """Create an expense and its splits."""
    _check_travelers([expense_data.paid_by], db)
    amount = round_money(expense_data.amount)

    expense = Expense(
        description=expense_data.description,
        amount=amount,
        category=expense_data.category.value,
        payer_id=expense_data.paid_by,
        date=expense_data.date,
        notes=expense_data.notes
    )
    expense.splits = _build_splits(amount, expense_data.splits, db)
    db.add(expense)
    db.commit()

    logger.info(f"Created expense {expense.id} ({amount}) with {len(expense.splits)} split(s)")
    return get_expense(expense.id, db)


def update_expense(expense: Expense, update_data: ExpenseUpdate, db: Session) -> Expense:
    """
    Apply a partial update to an expense.

    Splits are only touched when provided; replacing them resets their
    settled flags.
    """
    if update_data.paid_by is not None:
        _check_travelers([update_data.paid_by], db)
        expense.payer_id = update_data.paid_by
    if update_data.description is not None:
        expense.description = update_data.description
    if update_data.amount is not None:
        expense.amount = round_money(update_data.amount)
    if update_data.category is not None:
        expense.category = update_data.category.value
    if update_data.date is not None:
        expense.date = update_data.date
    if update_data.notes is not None:
        expense.notes = update_data.notes

    if update_data.splits is not None:
        # delete-orphan cascade removes the old rows
        expense.splits = _build_splits(expense.amount, update_data.splits, db)

    db.commit()
    return get_expense(expense.id, db)


def delete_expense(expense: Expense, db: Session):
    """Delete an expense together with its splits."""
    expense_id = expense.id
    db.delete(expense)
    db.commit()
    logger.info(f"Deleted expense {expense_id}")
