# ledger/__init__.py
"""Personal-finance ledger service: transactions, CSV import/export and summaries over HTTP."""

from .app import create_app

__version__ = "1.0.0"

__all__ = ["create_app", "__version__"]
