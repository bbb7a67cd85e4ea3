# ledger/transactions.py

import logging

from flask import Blueprint, Response, jsonify, request
from werkzeug.utils import secure_filename

from . import csv_codec
from .db import get_db
from .errors import ClientError
from .models import Transaction
from .store import TransactionStore

logger = logging.getLogger("ledger")

bp = Blueprint("transactions", __name__, url_prefix="/transactions")


def _store():
    return TransactionStore(get_db())


@bp.route("", methods=["GET"])
def list_transactions():
    return jsonify([tx.to_dict() for tx in _store().list_all()])


@bp.route("", methods=["POST"])
def add_transaction():
    data = request.get_json(force=True, silent=True)
    tx = _store().insert(Transaction.from_payload(data))
    return jsonify(tx.to_dict()), 201


@bp.route("/<int(signed=True):tx_id>", methods=["DELETE"])
def delete_transaction(tx_id):
    _store().delete_by_id(tx_id)
    return "", 204


@bp.route("/import", methods=["POST"])
def import_transactions():
    if "file" not in request.files:
        raise ClientError("file required")

    file = request.files["file"]
    transactions = csv_codec.decode_bytes(file.read())
    logger.info(f"Importing {len(transactions)} rows from {secure_filename(file.filename or 'upload.csv')}")
    _store().bulk_insert(transactions)
    return "", 201


@bp.route("/export", methods=["GET"])
def export_transactions():
    content = csv_codec.encode(_store().list_all())
    return Response(
        content,
        status=200,
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment;filename=transactions.csv"},
    )
