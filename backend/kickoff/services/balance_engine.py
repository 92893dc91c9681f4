"""
Balance and settlement computation for shared trip expenses.

Pure functions over already-loaded rows: nothing here touches the database
or the web framework, so the same code backs the settlement API, the
settle action and the daily summary. Inputs are read through attribute
access only (ORM rows or any object with the same attribute names) and are
never mutated.

All amounts are ``Decimal``; comparisons against zero use a one-cent
tolerance and every emitted amount is rounded to cents, half away from zero.
"""
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence

CENT = Decimal("0.01")
TOLERANCE = Decimal("0.01")
ZERO = Decimal("0.00")
UNKNOWN_CATEGORY = "other"


def round_money(value) -> Decimal:
    """Round to cents, half away from zero."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class CategoryTotals:
    """Paid/owed totals of one traveler within one expense category."""
    def __init__(self, paid: Decimal = ZERO, owed: Decimal = ZERO):
        self.paid = paid
        self.owed = owed

    def __eq__(self, other):
        if not isinstance(other, CategoryTotals):
            return NotImplemented
        return (self.paid, self.owed) == (other.paid, other.owed)

    def __repr__(self):
        return f"CategoryTotals(paid={self.paid}, owed={self.owed})"


class Balance:
    """Net position of one traveler: positive means the group owes them."""
    def __init__(
        self,
        traveler_id: int,
        total_paid: Decimal = ZERO,
        total_owed: Decimal = ZERO,
        net: Decimal = ZERO,
        by_category: Optional[Dict[str, CategoryTotals]] = None
    ):
        self.traveler_id = traveler_id
        self.total_paid = total_paid
        self.total_owed = total_owed
        self.net = net
        self.by_category = by_category if by_category is not None else {}

    def __eq__(self, other):
        if not isinstance(other, Balance):
            return NotImplemented
        return (
            self.traveler_id == other.traveler_id
            and self.total_paid == other.total_paid
            and self.total_owed == other.total_owed
            and self.net == other.net
            and self.by_category == other.by_category
        )

    def __repr__(self):
        return (
            f"Balance(traveler_id={self.traveler_id!r}, paid={self.total_paid}, "
            f"owed={self.total_owed}, net={self.net})"
        )


class Transfer:
    """A suggested payment from a debtor to a creditor."""
    def __init__(self, from_traveler_id: int, to_traveler_id: int, amount: Decimal, settled: bool = False):
        self.from_traveler_id = from_traveler_id
        self.to_traveler_id = to_traveler_id
        self.amount = amount
        self.settled = settled

    def __eq__(self, other):
        if not isinstance(other, Transfer):
            return NotImplemented
        return (
            self.from_traveler_id == other.from_traveler_id
            and self.to_traveler_id == other.to_traveler_id
            and self.amount == other.amount
            and self.settled == other.settled
        )

    def __repr__(self):
        return (
            f"Transfer({self.from_traveler_id!r} -> {self.to_traveler_id!r}, "
            f"{self.amount}, settled={self.settled})"
        )


class SettlementReport:
    """Balances, the annotated settlement plan and group totals."""
    def __init__(
        self,
        balances: List[Balance],
        transfers: List[Transfer],
        total_group_spend: Decimal,
        per_person_average: Decimal
    ):
        self.balances = balances
        self.transfers = transfers
        self.total_group_spend = total_group_spend
        self.per_person_average = per_person_average


class DailySpend:
    """Total and per-person spending for a single day."""
    def __init__(self, spent: Decimal, per_person: Decimal, traveler_count: int, expense_count: int):
        self.spent = spent
        self.per_person = per_person
        self.traveler_count = traveler_count
        self.expense_count = expense_count


def compute_balances(travelers: Sequence, expenses: Iterable, splits: Iterable) -> List[Balance]:
    """
    Compute paid, owed and net totals for every traveler on the roster.

    Travelers without activity are included with zero totals. Expenses paid
    by, or splits owed by, someone off the roster are ignored. A split whose
    expense cannot be found is counted under the "other" category.
    """
    paid: Dict[int, Decimal] = {}
    owed: Dict[int, Decimal] = {}
    categories: Dict[int, Dict[str, List[Decimal]]] = {}

    for traveler in travelers:
        paid[traveler.id] = Decimal(0)
        owed[traveler.id] = Decimal(0)
        categories[traveler.id] = {}

    expense_categories: Dict[int, str] = {}
    for expense in expenses:
        expense_categories[expense.id] = expense.category
        if expense.payer_id not in paid:
            continue
        paid[expense.payer_id] += expense.amount
        bucket = categories[expense.payer_id].setdefault(expense.category, [Decimal(0), Decimal(0)])
        bucket[0] += expense.amount

    for split in splits:
        if split.traveler_id not in owed:
            continue
        owed[split.traveler_id] += split.share
        category = expense_categories.get(split.expense_id, UNKNOWN_CATEGORY)
        bucket = categories[split.traveler_id].setdefault(category, [Decimal(0), Decimal(0)])
        bucket[1] += split.share

    balances = []
    for traveler in travelers:
        total_paid = paid[traveler.id]
        total_owed = owed[traveler.id]
        balances.append(Balance(
            traveler_id=traveler.id,
            total_paid=round_money(total_paid),
            total_owed=round_money(total_owed),
            # Net is taken from the unrounded sums
            net=round_money(total_paid - total_owed),
            by_category={
                category: CategoryTotals(round_money(p), round_money(o))
                for category, (p, o) in categories[traveler.id].items()
            }
        ))
    return balances


def plan_settlement(balances: Iterable[Balance]) -> List[Transfer]:
    """
    Suggest transfers that bring every balance back to zero.

    Greedy matching: the largest debtor pays the largest creditor, then the
    cursor of whoever reached zero moves on. Usually yields the fewest
    transfers but is not guaranteed optimal. Unbalanced input is not an
    error; matching simply stops when either side runs out.
    """
    debtors = [[b.traveler_id, b.net] for b in balances if b.net < -TOLERANCE]
    creditors = [[b.traveler_id, b.net] for b in balances if b.net > TOLERANCE]

    # Most negative first / largest credit first (stable for ties)
    debtors.sort(key=lambda x: x[1])
    creditors.sort(key=lambda x: x[1], reverse=True)

    transfers = []
    debt_idx = 0
    cred_idx = 0

    while debt_idx < len(debtors) and cred_idx < len(creditors):
        debtor = debtors[debt_idx]
        creditor = creditors[cred_idx]
        amount = min(abs(debtor[1]), creditor[1])

        if amount > TOLERANCE:
            transfers.append(Transfer(debtor[0], creditor[0], round_money(amount)))

        debtor[1] += amount
        creditor[1] -= amount

        if abs(debtor[1]) < TOLERANCE:
            debt_idx += 1
        if creditor[1] < TOLERANCE:
            cred_idx += 1

    return transfers


def annotate_settled_status(transfers: Iterable[Transfer], splits: Iterable, expenses: Iterable) -> List[Transfer]:
    """
    Return copies of the transfers flagged as settled where applicable.

    A transfer counts as settled only when the debtor has at least one split
    on an expense paid by the creditor and every such split is marked
    settled. This is a display hint: a consolidated transfer may net out
    debts that never ran directly between the two travelers.
    """
    payer_by_expense = {expense.id: expense.payer_id for expense in expenses}
    flags: Dict[tuple, List[bool]] = {}
    for split in splits:
        payer_id = payer_by_expense.get(split.expense_id)
        if payer_id is None:
            continue
        flags.setdefault((split.traveler_id, payer_id), []).append(bool(split.settled))

    annotated = []
    for transfer in transfers:
        pair_flags = flags.get((transfer.from_traveler_id, transfer.to_traveler_id), [])
        annotated.append(Transfer(
            transfer.from_traveler_id,
            transfer.to_traveler_id,
            transfer.amount,
            settled=len(pair_flags) > 0 and all(pair_flags)
        ))
    return annotated


def daily_spend(expenses: Iterable, on_date: date, traveler_count: int) -> DailySpend:
    """Sum the expenses dated ``on_date`` and split the total per traveler."""
    day_expenses = [expense for expense in expenses if expense.date == on_date]
    spent = round_money(sum((expense.amount for expense in day_expenses), Decimal(0)))
    divisor = max(traveler_count, 1)
    return DailySpend(
        spent=spent,
        per_person=round_money(spent / divisor),
        traveler_count=divisor,
        expense_count=len(day_expenses)
    )


def build_settlement_report(travelers: Sequence, expenses: Sequence, splits: Sequence) -> SettlementReport:
    """Compute balances, the annotated plan and group spend totals."""
    balances = compute_balances(travelers, expenses, splits)
    transfers = annotate_settled_status(plan_settlement(balances), splits, expenses)

    total = round_money(sum((expense.amount for expense in expenses), Decimal(0)))
    per_person = round_money(total / max(len(travelers), 1))

    return SettlementReport(
        balances=balances,
        transfers=transfers,
        total_group_spend=total,
        per_person_average=per_person
    )
