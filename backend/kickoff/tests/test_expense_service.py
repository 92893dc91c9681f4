"""
Tests for split allocation and the settle action at the service level.
"""
from datetime import date
from decimal import Decimal

import pytest

from kickoff.models.expense import ExpenseSplit
from kickoff.models.traveler import Traveler
from kickoff.schemas.expense import ExpenseCreate, ExpenseUpdate, SplitCreate
from kickoff.services.expense_service import (
    ExpenseServiceError, create_expense_with_splits, equal_shares, update_expense
)
from kickoff.services.settlement_service import (
    TravelerNotFoundError, calculate_settlement, settle_transfer
)


@pytest.mark.parametrize("amount, count, expected", [
    ("90.00", 3, ["30.00", "30.00", "30.00"]),
    ("10.00", 3, ["3.33", "3.33", "3.34"]),
    ("0.05", 3, ["0.01", "0.02", "0.02"]),
    ("7.00", 1, ["7.00"]),
    ("0.00", 2, ["0.00", "0.00"]),
])
def test_equal_shares(amount, count, expected):
    shares = equal_shares(Decimal(amount), list(range(1, count + 1)))

    assert [share for _, share in shares] == [Decimal(e) for e in expected]
    assert [traveler_id for traveler_id, _ in shares] == list(range(1, count + 1))
    assert sum(share for _, share in shares) == Decimal(amount)


def test_equal_shares_with_nobody():
    assert equal_shares(Decimal("10.00"), []) == []


@pytest.fixture
def trio(db):
    travelers = [
        Traveler(name="Alice", color="#e11d48", emoji="a"),
        Traveler(name="Bob", color="#2563eb", emoji="b"),
        Traveler(name="Cara", color="#16a34a", emoji="c"),
    ]
    db.add_all(travelers)
    db.commit()
    return {t.name: t.id for t in travelers}


def test_create_defaults_to_equal_split(db, trio):
    expense = create_expense_with_splits(ExpenseCreate(
        description="Tacos",
        amount=Decimal("10"),
        category="food",
        paid_by=trio["Alice"],
        date=date(2026, 6, 12)
    ), db)

    shares = sorted((s.traveler_id, s.share) for s in expense.splits)
    assert shares == [
        (trio["Alice"], Decimal("3.33")),
        (trio["Bob"], Decimal("3.33")),
        (trio["Cara"], Decimal("3.34")),
    ]
    assert all(s.settled is False for s in expense.splits)


def test_create_rejects_unknown_payer(db, trio):
    with pytest.raises(ExpenseServiceError):
        create_expense_with_splits(ExpenseCreate(
            description="Gas",
            amount=Decimal("40"),
            paid_by=999,
            date=date(2026, 6, 12)
        ), db)


def test_replacing_splits_resets_settled_flags(db, trio):
    expense = create_expense_with_splits(ExpenseCreate(
        description="Stadium parking",
        amount=Decimal("30"),
        category="transport",
        paid_by=trio["Alice"],
        date=date(2026, 6, 12)
    ), db)
    assert settle_transfer("Bob", "Alice", db) == 1

    updated = update_expense(expense, ExpenseUpdate(splits=[
        SplitCreate(traveler_id=trio["Bob"], share=Decimal("15")),
        SplitCreate(traveler_id=trio["Cara"], share=Decimal("15")),
    ]), db)

    assert sorted(s.traveler_id for s in updated.splits) == [trio["Bob"], trio["Cara"]]
    assert all(s.settled is False for s in updated.splits)
    assert db.query(ExpenseSplit).count() == 2


def test_settle_only_touches_the_pair(db, trio):
    create_expense_with_splits(ExpenseCreate(
        description="Hotel", amount=Decimal("90"), category="accommodation",
        paid_by=trio["Alice"], date=date(2026, 6, 12)
    ), db)
    create_expense_with_splits(ExpenseCreate(
        description="Beers", amount=Decimal("30"), category="drinks",
        paid_by=trio["Bob"], date=date(2026, 6, 12)
    ), db)

    assert settle_transfer("Cara", "Alice", db) == 1
    assert settle_transfer("Cara", "Alice", db) == 0

    settled = db.query(ExpenseSplit).filter_by(settled=True).all()
    assert [(s.traveler_id, s.expense.payer_id) for s in settled] == [(trio["Cara"], trio["Alice"])]


def test_settle_unknown_traveler(db, trio):
    with pytest.raises(TravelerNotFoundError):
        settle_transfer("Cara", "Nobody", db)


def test_calculate_settlement_maps_names(db, trio):
    create_expense_with_splits(ExpenseCreate(
        description="Tickets", amount=Decimal("300"), category="tickets",
        paid_by=trio["Bob"], date=date(2026, 6, 14)
    ), db)

    response = calculate_settlement(db)

    assert [(s.from_name, s.to_name, s.amount) for s in response.settlements] == [
        ("Alice", "Bob", 100.0),
        ("Cara", "Bob", 100.0),
    ]
    assert response.total_group_spend == 300.0
    assert response.per_person_average == 100.0
