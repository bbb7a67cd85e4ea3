# ledger/app.py

import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

from . import budgets, db, summary, transactions
from .config import load_config
from .errors import LedgerError

logger = logging.getLogger("ledger")

CORS_METHODS = ["GET", "POST", "DELETE", "OPTIONS"]


# ---------------- Flask App Factory ----------------
def create_app(config=None):
    app = Flask(__name__)
    app.config.update(load_config(config))

    logging.basicConfig(level=app.config["LOG_LEVEL"])

    # CORS: any origin, no credentials
    CORS(
        app,
        origins="*",
        methods=CORS_METHODS,
        allow_headers=["Content-Type"],
        send_wildcard=True,
    )

    @app.before_request
    def answer_preflight():
        if request.method == "OPTIONS":
            return app.response_class(status=204)

    # Blueprints
    prefix = app.config["API_PREFIX"]
    for module in (transactions, summary, budgets):
        app.register_blueprint(module.bp, url_prefix=prefix + module.bp.url_prefix)

    # Initialize DB once, before serving
    with app.app_context():
        db.init_db(app.config["DATABASE"])
        logger.info(f"Database initialized at {app.config['DATABASE']}")

    app.teardown_appcontext(db.close_db)

    @app.errorhandler(LedgerError)
    def handle_ledger_error(err):
        if err.status_code >= 500:
            logger.error(f"{request.method} {request.path}: {err.message}", exc_info=err)
        else:
            logger.info(f"{request.method} {request.path} rejected: {err.message}")
        return jsonify(err.to_dict()), err.status_code

    # ---------------- Core Endpoints ----------------
    @app.route(prefix + "/")
    def root():
        return jsonify({"msg": "Ledger backend root"})

    @app.route(prefix + "/health")
    def health():
        return jsonify({"status": "ok"})

    return app
