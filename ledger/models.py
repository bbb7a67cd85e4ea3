# ledger/models.py
# lightweight model classes (not DB-bound ORM)
import math
from datetime import date, datetime

from .errors import ClientError

TRANSACTION_TYPES = ("income", "expense")
DATE_FORMATS = ["%Y-%m-%d", "%Y/%m/%d"]


# ---------------- Parsing helpers ----------------
def parse_date(value):
    """Parse a calendar date; ISO datetimes (e.g. 2024-01-15T00:00:00Z) keep their date part."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    s = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def parse_amount(value):
    """Float from a JSON number or numeric string, None when not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            amount = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            amount = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return amount if math.isfinite(amount) else None


def parse_type(value):
    if isinstance(value, str) and value.strip().lower() in TRANSACTION_TYPES:
        return value.strip().lower()
    return None


# ---------------- Models ----------------
class Transaction:
    def __init__(self, id, date, amount, category, description="", type="expense"):
        self.id = id
        self.date = date
        self.amount = amount
        self.category = category
        self.description = description
        self.type = type

    def __repr__(self):
        return (
            f"Transaction(id={self.id!r}, date={self.date!r}, amount={self.amount!r}, "
            f"category={self.category!r}, type={self.type!r})"
        )

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row["id"],
            date=parse_date(row["date"]),
            amount=row["amount"],
            category=row["category"],
            description=row["description"] or "",
            type=row["type"],
        )

    @classmethod
    def from_payload(cls, data):
        """Build a new (id-less) transaction from a decoded JSON body."""
        if not isinstance(data, dict):
            raise ClientError("request body must be a JSON object")

        date_val = parse_date(data.get("date"))
        if date_val is None:
            raise ClientError("Invalid or missing date")

        amount = parse_amount(data.get("amount"))
        if amount is None:
            raise ClientError("Invalid or missing amount")

        category = data.get("category")
        if not isinstance(category, str) or not category.strip():
            raise ClientError("category required")

        description = data.get("description") or ""
        if not isinstance(description, str):
            raise ClientError("description must be a string")

        tx_type = parse_type(data.get("type"))
        if tx_type is None:
            raise ClientError(f"type must be one of: {', '.join(TRANSACTION_TYPES)}")

        return cls(None, date_val, amount, category.strip(), description.strip(), tx_type)

    def normalized(self):
        """Copy with expense amounts stored negative; income keeps its sign."""
        amount = self.amount
        if self.type == "expense" and amount > 0:
            amount = -amount
        return Transaction(self.id, self.date, amount, self.category, self.description, self.type)

    def to_row(self):
        """Insert parameters, in (date, amount, category, description, type) order."""
        date_str = self.date.isoformat() if isinstance(self.date, date) else self.date
        return (date_str, self.amount, self.category, self.description, self.type)

    def to_dict(self):
        return {
            "id": self.id,
            "date": self.date.isoformat() if isinstance(self.date, date) else self.date,
            "amount": self.amount,
            "category": self.category,
            "description": self.description,
            "type": self.type,
        }


class Budget:
    def __init__(self, category, amount):
        self.category = category
        self.amount = amount

    @classmethod
    def from_row(cls, row):
        return cls(row["category"], row["amount"])

    @classmethod
    def from_payload(cls, data):
        if not isinstance(data, dict):
            raise ClientError("request body must be a JSON object")
        category = data.get("category")
        if not isinstance(category, str) or not category.strip():
            raise ClientError("category required")
        amount = parse_amount(data.get("amount"))
        if amount is None or amount < 0:
            raise ClientError("amount must be a non-negative number")
        return cls(category.strip(), amount)

    def to_dict(self):
        return {"category": self.category, "amount": self.amount}


class MonthlySummary:
    def __init__(self, month, total_income, total_expense):
        self.month = month
        self.total_income = total_income
        self.total_expense = total_expense
        self.savings = total_income - total_expense

    def to_dict(self):
        return {
            "month": self.month,
            "total_income": self.total_income,
            "total_expense": self.total_expense,
            "savings": self.savings,
        }


class CategorySummary:
    def __init__(self, category, total, type):
        self.category = category
        self.total = total
        self.type = type

    def to_dict(self):
        return {"category": self.category, "total": self.total, "type": self.type}


class BudgetStatus:
    def __init__(self, category, budget, spent):
        self.category = category
        self.budget = budget
        self.spent = spent
        self.remaining = budget - spent

    def to_dict(self):
        return {
            "category": self.category,
            "budget": self.budget,
            "spent": self.spent,
            "remaining": self.remaining,
        }
