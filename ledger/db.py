# ledger/db.py
import os
import sqlite3

from flask import current_app, g

SCHEMA_FILE = os.path.join(os.path.dirname(__file__), "schema.sql")


def connect(path):
    """Open a connection returning sqlite3.Row rows."""
    # ensure directory exists
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def get_db():
    """Connection for the current app context, opened on first use."""
    db = getattr(g, "_database", None)
    if db is None:
        db = g._database = connect(current_app.config["DATABASE"])
    return db


def close_db(exception=None):
    db = g.pop("_database", None)
    if db is not None:
        db.close()


def init_schema(conn):
    """Run schema.sql against an open connection. Idempotent (IF NOT EXISTS)."""
    with open(SCHEMA_FILE, "r", encoding="utf-8") as f:
        sql = f.read()
    conn.executescript(sql)
    conn.commit()


def init_db(path):
    """
    Create the tables at `path` once, at startup.
    Errors propagate so the caller refuses to start.
    """
    conn = connect(path)
    try:
        init_schema(conn)
    finally:
        conn.close()
