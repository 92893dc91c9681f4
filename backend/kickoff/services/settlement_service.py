"""
Settlement service: loads the trip snapshot and runs the balance engine.
"""
import logging
from sqlalchemy.orm import Session
from typing import List, Tuple
from kickoff.models.expense import Expense, ExpenseSplit
from kickoff.models.traveler import Traveler
from kickoff.schemas.settlement import (
    SettlementResponse, TravelerBalance, SettlementTransfer, CategoryBreakdown
)
from kickoff.services.balance_engine import SettlementReport, TOLERANCE, build_settlement_report

logger = logging.getLogger(__name__)


class TravelerNotFoundError(ValueError):
    """Raised when a traveler name cannot be resolved."""


def load_snapshot(db: Session) -> Tuple[List[Traveler], List[Expense], List[ExpenseSplit]]:
    """Read all travelers, expenses and splits from one session."""
    travelers = db.query(Traveler).order_by(Traveler.id).all()
    expenses = db.query(Expense).order_by(Expense.id).all()
    splits = db.query(ExpenseSplit).order_by(ExpenseSplit.id).all()
    return travelers, expenses, splits


def to_settlement_response(report: SettlementReport, travelers: List[Traveler]) -> SettlementResponse:
    """Map an engine report onto the settlement wire schema."""
    by_id = {t.id: t for t in travelers}

    traveler_balances = []
    for balance in report.balances:
        traveler = by_id[balance.traveler_id]
        traveler_balances.append(TravelerBalance(
            name=traveler.name,
            emoji=traveler.emoji,
            color=traveler.color,
            total_paid=float(balance.total_paid),
            total_owes=float(balance.total_owed),
            balance=float(balance.net),
            by_category={
                category: CategoryBreakdown(paid=float(totals.paid), owes=float(totals.owed))
                for category, totals in balance.by_category.items()
            }
        ))

    settlements = [
        SettlementTransfer(
            from_name=by_id[t.from_traveler_id].name,
            to_name=by_id[t.to_traveler_id].name,
            amount=float(t.amount),
            settled=t.settled
        )
        for t in report.transfers
    ]

    return SettlementResponse(
        travelers=traveler_balances,
        settlements=settlements,
        total_group_spend=float(report.total_group_spend),
        per_person_average=float(report.per_person_average)
    )


def calculate_settlement(db: Session) -> SettlementResponse:
    """Load the snapshot and build the settlement response."""
    travelers, expenses, splits = load_snapshot(db)
    report = build_settlement_report(travelers, expenses, splits)

    drift = sum(b.net for b in report.balances)
    if abs(drift) > TOLERANCE * len(report.balances):
        logger.debug(f"Balances do not sum to zero (drift {drift}); splits may not match expense amounts")

    return to_settlement_response(report, travelers)


def settle_transfer(from_name: str, to_name: str, db: Session) -> int:
    """
    Mark every unsettled split owed by ``from_name`` on expenses paid by
    ``to_name`` as settled. Returns the number of splits changed.
    """
    debtor = db.query(Traveler).filter(Traveler.name == from_name).first()
    creditor = db.query(Traveler).filter(Traveler.name == to_name).first()
    if not debtor or not creditor:
        raise TravelerNotFoundError("Traveler not found")

    splits = db.query(ExpenseSplit).join(
        Expense, ExpenseSplit.expense_id == Expense.id
    ).filter(
        ExpenseSplit.traveler_id == debtor.id,
        Expense.payer_id == creditor.id,
        ExpenseSplit.settled == False  # noqa: E712
    ).all()

    for split in splits:
        split.settled = True
    db.commit()

    logger.info(f"Marked {len(splits)} split(s) settled: {from_name} -> {to_name}")
    return len(splits)
