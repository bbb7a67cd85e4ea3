# ledger/budgets.py

from flask import Blueprint, jsonify, request

from .db import get_db
from .models import Budget
from .store import BudgetStore

bp = Blueprint("budgets", __name__, url_prefix="/budgets")


@bp.route("", methods=["GET"])
def list_budgets():
    return jsonify([b.to_dict() for b in BudgetStore(get_db()).list_all()])


@bp.route("", methods=["POST"])
def set_budget():
    """Create the budget for a category, or replace its allocation."""
    budget = Budget.from_payload(request.get_json(force=True, silent=True))
    BudgetStore(get_db()).upsert(budget)
    return jsonify(budget.to_dict()), 201


@bp.route("/<path:category>", methods=["DELETE"])
def delete_budget(category):
    BudgetStore(get_db()).delete(category)
    return "", 204
