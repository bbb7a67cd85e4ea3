from datetime import date

import pytest

from ledger.config import load_config
from ledger.errors import ClientError
from ledger.models import Budget, BudgetStatus, Transaction, parse_amount, parse_date


@pytest.mark.parametrize("value, expected", [
    ("2024-01-15", date(2024, 1, 15)),
    ("2024/01/15", date(2024, 1, 15)),
    ("2024-01-15T00:00:00Z", date(2024, 1, 15)),
    ("2024-01-15T10:30:00+02:00", date(2024, 1, 15)),
    ("15-01-2024", None),
    ("", None),
    (None, None),
    (20240115, None),
])
def test_parse_date(value, expected):
    assert parse_date(value) == expected


@pytest.mark.parametrize("value, expected", [
    (50, 50.0),
    (-12.5, -12.5),
    ("3.25", 3.25),
    (True, None),
    ("abc", None),
    ("nan", None),
    (10 ** 400, None),
    (None, None),
])
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


def test_transaction_from_payload():
    t = Transaction.from_payload({
        "date": "2024-01-20", "amount": 30, "category": " Food ", "type": "Expense",
    })
    assert t.id is None
    assert t.category == "Food"
    assert t.description == ""
    assert t.type == "expense"
    assert t.amount == 30.0


@pytest.mark.parametrize("payload", [
    None,
    [],
    {"amount": 1, "category": "A", "type": "income"},
    {"date": "2024-01-01", "amount": "x", "category": "A", "type": "income"},
    {"date": "2024-01-01", "amount": 1, "type": "income"},
    {"date": "2024-01-01", "amount": 1, "category": "A", "type": "transfer"},
    {"date": "2024-01-01", "amount": 1, "category": "A"},
    {"date": "2024-01-01", "amount": 1, "category": "A", "type": "income", "description": 5},
])
def test_transaction_from_payload_rejects(payload):
    with pytest.raises(ClientError):
        Transaction.from_payload(payload)


def test_normalized_only_touches_positive_expenses():
    d = date(2024, 1, 1)
    assert Transaction(None, d, 10.0, "A", "", "expense").normalized().amount == -10.0
    assert Transaction(None, d, -10.0, "A", "", "expense").normalized().amount == -10.0
    assert Transaction(None, d, -10.0, "A", "", "income").normalized().amount == -10.0
    assert Transaction(None, d, 10.0, "A", "", "income").normalized().amount == 10.0


def test_budget_from_payload():
    assert Budget.from_payload({"category": "Food", "amount": 200}).to_dict() == {
        "category": "Food", "amount": 200.0,
    }
    with pytest.raises(ClientError):
        Budget.from_payload({"category": "Food", "amount": -1})
    with pytest.raises(ClientError):
        Budget.from_payload({"amount": 10})


def test_budget_status_remaining():
    assert BudgetStatus("Food", 200.0, 30.0).remaining == 170.0


def test_load_config_env_and_overrides(monkeypatch):
    monkeypatch.setenv("LEDGER_PORT", "9090")
    monkeypatch.setenv("LEDGER_API_PREFIX", "/api/")
    monkeypatch.setenv("LEDGER_DB_PATH", "/tmp/env.db")
    config = load_config({"DATABASE": "/tmp/override.db"})
    assert config["PORT"] == 9090
    assert config["API_PREFIX"] == "/api"
    assert config["DATABASE"] == "/tmp/override.db"


def test_load_config_defaults(monkeypatch):
    for var in ("LEDGER_PORT", "LEDGER_API_PREFIX", "LEDGER_DB_PATH", "LEDGER_HOST", "LEDGER_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    config = load_config()
    assert config["PORT"] == 8080
    assert config["API_PREFIX"] == ""
    assert config["DATABASE"].endswith("finance.db")


@pytest.mark.parametrize("database", [":memory:", ""])
def test_load_config_rejects_non_file_database(database):
    with pytest.raises(ValueError):
        load_config({"DATABASE": database})
