"""
import_engine.field_map - Column names and field-level value parsing.

The same names are used as CSV header columns and as JSON object keys,
so both input paths agree on what a deal looks like.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

UNIQUE_KEY = "uniqueKey"
FROM_CODE  = "fromCode"
TO_CODE    = "toCode"
TIMESTAMP  = "timestamp"
AMOUNT     = "amount"

# Order and count are load-bearing for the CSV path
COLUMNS: tuple[str, ...] = (UNIQUE_KEY, FROM_CODE, TO_CODE, TIMESTAMP, AMOUNT)
EXPECTED_HEADER = ",".join(COLUMNS)

CURRENCY_CODE_LENGTH = 3

# Plain decimal literal: no underscores, no NaN / Infinity
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_timestamp(raw: str) -> datetime:
    """
    Parse an ISO-8601 date-time that carries a UTC offset.
    Raises ValueError for malformed or offset-less input.
    """
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("missing UTC offset")
    return value


def parse_amount(raw: str) -> Decimal:
    """Parse an exact decimal amount.  Raises ValueError when malformed."""
    if not _DECIMAL_RE.fullmatch(raw):
        raise ValueError("not a decimal number")
    try:
        return Decimal(raw)
    except InvalidOperation as exc:
        raise ValueError("not a decimal number") from exc
