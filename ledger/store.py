# ledger/store.py
import logging
import sqlite3
from contextlib import contextmanager

from .errors import StorageError
from .models import Budget, BudgetStatus, CategorySummary, MonthlySummary, Transaction

logger = logging.getLogger("ledger")

INSERT_TRANSACTION = (
    "INSERT INTO transactions (date, amount, category, description, type) VALUES (?, ?, ?, ?, ?)"
)

MONTHLY_SUMMARY = """
    SELECT strftime('%Y-%m', date) AS month,
           ROUND(SUM(CASE WHEN type = 'income' THEN amount ELSE 0 END), 2) AS income,
           ROUND(SUM(CASE WHEN type = 'expense' THEN ABS(amount) ELSE 0 END), 2) AS expense
    FROM transactions
    GROUP BY strftime('%Y-%m', date)
    ORDER BY month DESC
    LIMIT ?
"""

CATEGORY_SUMMARY = """
    SELECT category, SUM(amount) AS total, type
    FROM transactions
    GROUP BY category, type
    ORDER BY type, total DESC
"""

BUDGET_STATUS = """
    SELECT b.category, b.amount AS budget,
           ROUND(COALESCE(SUM(ABS(t.amount)), 0), 2) AS spent
    FROM budgets b
    LEFT JOIN transactions t ON t.category = b.category AND t.type = 'expense'
    GROUP BY b.category, b.amount
    ORDER BY b.category
"""


@contextmanager
def storage_errors(action):
    """Re-raise sqlite3 failures as StorageError."""
    try:
        yield
    except sqlite3.Error as e:
        raise StorageError(f"{action} failed: {e}") from e


class TransactionStore:
    """Queries against the transactions table through an injected connection."""

    def __init__(self, conn):
        self.conn = conn

    def list_all(self):
        with storage_errors("list transactions"):
            rows = self.conn.execute(
                "SELECT id, date, amount, category, description, type "
                "FROM transactions ORDER BY date DESC, id DESC"
            ).fetchall()
        return [Transaction.from_row(r) for r in rows]

    def insert(self, tx):
        tx = tx.normalized()
        with storage_errors("insert transaction"):
            cur = self.conn.execute(INSERT_TRANSACTION, tx.to_row())
            self.conn.commit()
        tx.id = cur.lastrowid
        logger.info(f"Transaction {tx.id} created ({tx.type} {tx.amount} {tx.category})")
        return tx

    def delete_by_id(self, tx_id):
        """No existence check: deleting a missing id succeeds."""
        with storage_errors("delete transaction"):
            cur = self.conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,))
            self.conn.commit()
        logger.info(f"Delete transaction {tx_id}: {cur.rowcount} row(s) removed")

    def bulk_insert(self, transactions):
        """
        Insert every transaction in one database transaction.

        Expense amounts are normalized exactly like insert(); incoming ids are
        ignored. If any row fails, the whole batch is rolled back and
        StorageError is raised.
        """
        rows = [tx.normalized().to_row() for tx in transactions]
        with storage_errors("import transactions"):
            # commits on success, rolls back on exception
            with self.conn:
                self.conn.executemany(INSERT_TRANSACTION, rows)
        logger.info(f"Imported {len(rows)} transactions")
        return len(rows)

    def monthly_summary(self, limit=12):
        with storage_errors("monthly summary"):
            rows = self.conn.execute(MONTHLY_SUMMARY, (limit,)).fetchall()
        return [MonthlySummary(r["month"], r["income"], r["expense"]) for r in rows]

    def category_summary(self):
        with storage_errors("category summary"):
            rows = self.conn.execute(CATEGORY_SUMMARY).fetchall()
        return [CategorySummary(r["category"], r["total"], r["type"]) for r in rows]


class BudgetStore:
    def __init__(self, conn):
        self.conn = conn

    def list_all(self):
        with storage_errors("list budgets"):
            rows = self.conn.execute(
                "SELECT category, amount FROM budgets ORDER BY category"
            ).fetchall()
        return [Budget.from_row(r) for r in rows]

    def upsert(self, budget):
        with storage_errors("save budget"):
            self.conn.execute(
                "INSERT INTO budgets (category, amount) VALUES (?, ?) "
                "ON CONFLICT(category) DO UPDATE SET amount = excluded.amount",
                (budget.category, budget.amount),
            )
            self.conn.commit()
        logger.info(f"Budget for {budget.category} set to {budget.amount}")
        return budget

    def delete(self, category):
        with storage_errors("delete budget"):
            self.conn.execute("DELETE FROM budgets WHERE category = ?", (category,))
            self.conn.commit()
        logger.info(f"Budget for {category} removed")

    def status(self):
        """Allocation against absolute expense total, per budgeted category."""
        with storage_errors("budget status"):
            rows = self.conn.execute(BUDGET_STATUS).fetchall()
        return [BudgetStatus(r["category"], r["budget"], r["spent"]) for r in rows]
