# ledger/errors.py


class LedgerError(Exception):
    """Base error; carries the HTTP status the API answers with."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message}


class ClientError(LedgerError):
    """Malformed request: bad JSON body, missing upload, unknown type."""

    status_code = 400


class FormatError(ClientError):
    """Uploaded CSV could not be decoded into transactions."""


class StorageError(LedgerError):
    """Any failure reported by the database."""

    status_code = 500
