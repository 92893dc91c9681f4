"""
Tests for the daily summary.
"""
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from kickoff.services.summary_service import compose_daily_summary, day_number

TRIP_START = date(2026, 6, 11)


def expense(amount, on):
    return SimpleNamespace(amount=Decimal(amount), date=on)


def test_day_number():
    assert day_number(date(2026, 6, 11), TRIP_START) == 1
    assert day_number(date(2026, 6, 12), TRIP_START) == 2
    assert day_number(date(2026, 7, 1), TRIP_START) == 21


def test_summary_with_spending():
    day = date(2026, 6, 12)
    expenses = [expense("25.10", day), expense("1024.90", day), expense("8.00", date(2026, 6, 13))]

    result = compose_daily_summary(day, expenses, 3, "Kickoff 2026", TRIP_START)

    assert result.day_number == 2
    assert result.summary.splitlines() == [
        "\U0001F3F4 KICKOFF 2026 - Day 2 (June 12)",
        "",
        "\U0001F4B0 Spent today: $1,050.00 ($350.00 per person)",
    ]
    assert result.stats.spent == 1050.0
    assert result.stats.per_person == 350.0
    assert result.stats.traveler_count == 3
    assert result.stats.expense_count == 2


def test_summary_for_solo_traveler_omits_per_person():
    day = date(2026, 6, 20)

    result = compose_daily_summary(day, [expense("12.5", day)], 1, "Kickoff 2026", TRIP_START, "€")

    assert result.summary.splitlines()[-1] == "\U0001F4B0 Spent today: €12.50"


def test_summary_without_spending_is_header_only():
    result = compose_daily_summary(date(2026, 6, 11), [], 4, "Kickoff 2026", TRIP_START)

    assert result.summary == "\U0001F3F4 KICKOFF 2026 - Day 1 (June 11)"
    assert result.stats.spent == 0.0


def test_daily_summary_endpoint(client, travelers):
    client.post("/api/expenses", json={
        "description": "Arrowhead parking",
        "amount": "60.00",
        "category": "transport",
        "paid_by": travelers["Alice"],
        "date": "2026-06-16",
    })

    response = client.get("/api/daily-summary", params={"date": "2026-06-16"})

    assert response.status_code == 200
    data = response.json()
    assert data["date"] == "2026-06-16"
    assert data["dayNumber"] == 6
    assert data["stats"] == {"spent": 60.0, "perPerson": 20.0, "travelerCount": 3, "expenseCount": 1}
    assert "$60.00 ($20.00 per person)" in data["summary"]


def test_daily_summary_requires_valid_date(client):
    assert client.get("/api/daily-summary").status_code == 400
    assert client.get("/api/daily-summary", params={"date": "16/06/2026"}).status_code == 400
    bad = client.get("/api/daily-summary", params={"date": "2026-02-30"})
    assert bad.status_code == 400
    assert bad.json() == {"error": "date query param required (YYYY-MM-DD)"}
