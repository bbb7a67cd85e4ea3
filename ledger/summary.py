# ledger/summary.py

from flask import Blueprint, jsonify

from .db import get_db
from .store import BudgetStore, TransactionStore

bp = Blueprint("summary", __name__, url_prefix="/summary")


@bp.route("/monthly", methods=["GET"])
def monthly_summary():
    """Last 12 months, most recent first."""
    summaries = TransactionStore(get_db()).monthly_summary()
    return jsonify([s.to_dict() for s in summaries])


@bp.route("/categories", methods=["GET"])
def category_summary():
    summaries = TransactionStore(get_db()).category_summary()
    return jsonify([s.to_dict() for s in summaries])


@bp.route("/budgets", methods=["GET"])
def budget_summary():
    return jsonify([s.to_dict() for s in BudgetStore(get_db()).status()])
