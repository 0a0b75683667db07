"""
Tests for group balance and settlement endpoints.
"""
import pytest
from fastapi.testclient import TestClient
from yoursplit.main import app

client = TestClient(app)

MEMBERS = [
    {"id": "u_alice", "name": "Alice"},
    {"id": "u_bob", "name": "Bob"},
]


def expense(expense_id, amount, paid_by, group_id="g1", created_at="2026-01-10T12:00:00"):
    return {
        "id": expense_id,
        "description": f"Expense {expense_id}",
        "amount": amount,
        "paidById": paid_by,
        "groupId": group_id,
        "createdAt": created_at,
    }


def test_health():
    """Test health check endpoints."""
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200


def test_balances():
    """Test balance computation for two members."""
    response = client.post(
        "/api/groups/g1/balances",
        json={"members": MEMBERS, "expenses": [expense("e1", 100.00, "u_alice")]}
    )
    assert response.status_code == 200
    assert response.json() == {
        "groupId": "g1",
        "totalExpenses": 100.0,
        "perPersonShare": 50.0,
        "balances": [
            {"userId": "u_alice", "name": "Alice", "balance": 50.0},
            {"userId": "u_bob", "name": "Bob", "balance": -50.0},
        ],
    }


def test_balances_without_expenses():
    """Test that a group with no expenses is all zeros."""
    response = client.post("/api/groups/g1/balances", json={"members": MEMBERS})
    assert response.status_code == 200
    body = response.json()
    assert body["totalExpenses"] == 0
    assert body["perPersonShare"] == 0
    assert [b["balance"] for b in body["balances"]] == [0, 0]


def test_settlements():
    """Test settlement planning from balances."""
    response = client.post(
        "/api/groups/g1/settlements",
        json={"balances": [
            {"userId": "A", "name": "Ann", "balance": 66.66},
            {"userId": "B", "name": "Ben", "balance": -33.33},
            {"userId": "C", "name": "Cat", "balance": -33.33},
        ]}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["settlements"] == [
        {"from": "B", "to": "A", "amount": 33.33},
        {"from": "C", "to": "A", "amount": 33.33},
    ]
    assert body["members"] == {"A": "Ann", "B": "Ben", "C": "Cat"}


def test_settlements_when_settled():
    response = client.post(
        "/api/groups/g1/settlements",
        json={"balances": [
            {"userId": "A", "name": "Ann", "balance": 0},
            {"userId": "B", "name": "Ben", "balance": 0},
        ]}
    )
    assert response.status_code == 200
    assert response.json()["settlements"] == []


def test_summary():
    """Test balances, plan and summary text in one call."""
    response = client.post(
        "/api/groups/g1/summary",
        json={"members": MEMBERS, "expenses": [expense("e1", "100.00", "u_alice")]}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["settlements"] == [{"from": "u_bob", "to": "u_alice", "amount": 50.0}]
    assert "Bob -> Alice" in body["summary"]


def test_roster_policy_per_request():
    members = MEMBERS + [{"id": "u_carol", "name": "Carol", "joinedAt": "2026-02-01T00:00:00"}]
    payload = {"members": members, "expenses": [expense("e1", 90, "u_alice")]}

    current = client.post("/api/groups/g1/balances", json=payload).json()
    recorded = client.post(
        "/api/groups/g1/balances", json={**payload, "rosterPolicy": "as_recorded"}
    ).json()

    assert [b["balance"] for b in current["balances"]] == [60.0, -30.0, -30.0]
    assert [b["balance"] for b in recorded["balances"]] == [45.0, -45.0, 0]


@pytest.mark.parametrize("payload,status_code,code", [
    ({"members": MEMBERS, "expenses": [expense("e1", 10, "u_mallory")]}, 422, "unknown_payer"),
    ({"members": MEMBERS, "expenses": [expense("e1", -10, "u_alice")]}, 422, "invalid_amount"),
    ({"members": [], "expenses": [expense("e1", 10, "u_alice")]}, 400, "empty_roster"),
    ({"members": MEMBERS + MEMBERS[:1], "expenses": []}, 422, "duplicate_member"),
])
def test_balances_errors(payload, status_code, code):
    """Test that ledger errors map to typed error responses."""
    response = client.post("/api/groups/g1/balances", json=payload)
    assert response.status_code == status_code
    assert response.json()["code"] == code


def test_unbalanced_settlements():
    response = client.post(
        "/api/groups/g1/settlements",
        json={"balances": [
            {"userId": "A", "name": "Ann", "balance": 10},
            {"userId": "B", "name": "Ben", "balance": -9.99},
        ]}
    )
    assert response.status_code == 400
    assert response.json()["code"] == "unbalanced_input"


def test_expense_from_other_group():
    response = client.post(
        "/api/groups/g1/balances",
        json={"members": MEMBERS, "expenses": [expense("e1", 10, "u_alice", group_id="g2")]}
    )
    assert response.status_code == 422


def test_empty_description_rejected():
    bad = {**expense("e1", 10, "u_alice"), "description": ""}
    response = client.post("/api/groups/g1/balances", json={"members": MEMBERS, "expenses": [bad]})
    assert response.status_code == 422


@pytest.mark.parametrize("amount", ["1e30", "12345678901234567.00"])
def test_balances_amount_too_large(amount):
    """Test that amounts beyond the money column width are a validation error."""
    response = client.post(
        "/api/groups/g1/balances",
        json={"members": MEMBERS, "expenses": [expense("e1", amount, "u_alice")]}
    )
    assert response.status_code == 422


def test_settlements_balance_too_large():
    response = client.post(
        "/api/groups/g1/settlements",
        json={"balances": [
            {"userId": "A", "name": "Ann", "balance": "1e30"},
            {"userId": "B", "name": "Ben", "balance": "-1e30"},
        ]}
    )
    assert response.status_code == 422


@pytest.mark.parametrize("balances", [
    [("a", 0.004), ("b", 0)],
    [("a", 0.005), ("b", -0.005)],
])
def test_settlements_reject_fractional_cents(balances):
    """Test that sub-cent balances are refused rather than rounded."""
    response = client.post(
        "/api/groups/g1/settlements",
        json={"balances": [
            {"userId": uid, "name": uid.upper(), "balance": amount} for uid, amount in balances
        ]}
    )
    assert response.status_code == 422


def test_as_recorded_with_mixed_timezones():
    """Test that naive timestamps are read as UTC next to aware ones."""
    members = [
        {"id": "u_alice", "name": "Alice"},
        {"id": "u_bob", "name": "Bob", "joinedAt": "2026-01-01T00:00:00Z"},
        {"id": "u_carol", "name": "Carol", "joinedAt": "2026-02-01T00:00:00+02:00"},
    ]
    response = client.post(
        "/api/groups/g1/balances",
        json={
            "members": members,
            "expenses": [expense("e1", 100, "u_alice", created_at="2026-01-10T12:00:00")],
            "rosterPolicy": "as_recorded",
        }
    )
    assert response.status_code == 200
    assert [b["balance"] for b in response.json()["balances"]] == [50.0, -50.0, 0]
