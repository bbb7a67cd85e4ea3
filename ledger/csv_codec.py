# ledger/csv_codec.py
import csv
import io
import sys

from .errors import FormatError
from .models import TRANSACTION_TYPES, Transaction, parse_amount, parse_date, parse_type

COLUMNS = ["id", "date", "amount", "category", "description", "type"]
REQUIRED_COLUMNS = {"date", "amount", "category", "type"}
ENCODINGS = ("utf-8-sig", "latin-1", "utf-16")

# no upload size limit, so no per-field limit either
csv.field_size_limit(sys.maxsize)


def decode_bytes(raw):
    """Decode an uploaded file and parse it; see decode()."""
    if not raw:
        raise FormatError("Empty file")
    # utf-16 needs a BOM; without one latin-1 would already have accepted the bytes
    if raw[:2] in (b"\xff\xfe", b"\xfe\xff"):
        return decode(raw.decode("utf-16"))
    for enc in ENCODINGS:
        try:
            return decode(raw.decode(enc))
        except UnicodeDecodeError:
            continue
    raise FormatError("Could not decode file")


def decode(text):
    """
    Parse CSV text with a header row into transactions.

    The header must name date, amount, category and type; id and description
    are optional. Any other column, or any row that does not parse, raises
    FormatError and nothing is returned.
    """
    reader = csv.DictReader(io.StringIO(text))
    try:
        fieldnames = reader.fieldnames
    except csv.Error as e:
        raise FormatError(f"Header: {e}") from e
    header = [name.strip().lower() for name in (fieldnames or [])]
    if not header:
        raise FormatError("CSV header row is missing")

    unknown = [name for name in header if name not in COLUMNS]
    if unknown:
        raise FormatError(f"Unknown CSV column(s): {', '.join(unknown)}")
    missing = sorted(REQUIRED_COLUMNS - set(header))
    if missing:
        raise FormatError(f"Missing CSV column(s): {', '.join(missing)}")
    reader.fieldnames = header

    transactions = []
    i = 0
    try:
        for i, row in enumerate(reader, start=1):
            if None in row:
                raise FormatError(f"Row {i}: too many fields")
            transactions.append(_row_to_transaction(i, row))
    except csv.Error as e:
        raise FormatError(f"Row {i + 1}: {e}") from e
    return transactions


def _row_to_transaction(i, row):
    date_val = parse_date(row.get("date"))
    if date_val is None:
        raise FormatError(f"Row {i}: invalid date {row.get('date')!r}")

    amount = parse_amount(row.get("amount"))
    if amount is None:
        raise FormatError(f"Row {i}: invalid amount {row.get('amount')!r}")

    category = (row.get("category") or "").strip()
    if not category:
        raise FormatError(f"Row {i}: category required")

    tx_type = parse_type(row.get("type"))
    if tx_type is None:
        raise FormatError(
            f"Row {i}: type must be one of {', '.join(TRANSACTION_TYPES)}, got {row.get('type')!r}"
        )

    description = (row.get("description") or "").strip()
    return Transaction(None, date_val, amount, category, description, tx_type)


def encode(transactions):
    """CSV text with the header row first, even when there are no transactions."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(COLUMNS)
    for tx in transactions:
        d = tx.to_dict()
        writer.writerow([d[col] for col in COLUMNS])
    return out.getvalue()
