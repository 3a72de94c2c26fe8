"""
import_engine.csv_parser - Turn delimited deal text into candidates.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG) and decoding
  • Exact header check (fatal on mismatch)
  • Per-line structural checks: column count, currency-code shape,
    timestamp and amount syntax.  Business rules are left to the validator.

A bad line never stops the parse; it becomes an Invalid outcome and the
next line is read.  Only a bad header or an unreadable source is fatal.

Lines are split literally on commas: quotes are ordinary characters, so a
parsed row re-joins to the same five fields.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import BinaryIO, Optional, TextIO, Union

from import_engine.field_map import (
    AMOUNT, COLUMNS, CURRENCY_CODE_LENGTH, EXPECTED_HEADER,
    FROM_CODE, TIMESTAMP, TO_CODE,
    parse_amount, parse_timestamp,
)
from import_engine.records import CandidateRecord, Invalid

logger = logging.getLogger(__name__)

Source = Union[str, bytes, BinaryIO, TextIO]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
DELIMITER = ","


class CsvStructureError(Exception):
    """The input as a whole cannot be parsed."""


class CsvHeaderError(CsvStructureError):
    """First line is not the expected header."""


class CsvReadError(CsvStructureError):
    """The source could not be read."""


class _RowError(Exception):
    def __init__(self, reason: str, unique_key: Optional[str] = None):
        super().__init__(reason)
        self.reason = reason
        self.unique_key = unique_key


@dataclass
class CsvParseResult:
    candidates: list[CandidateRecord] = field(default_factory=list)
    parse_errors: list[Invalid] = field(default_factory=list)
    total_rows: int = 0     # data rows, header and blank lines excluded


def parse(source: Source, name: str = "<text>") -> CsvParseResult:
    """
    Parse CSV deal text.

    Raises CsvHeaderError when the header does not match EXPECTED_HEADER,
    CsvReadError when the source cannot be read.
    """
    result = CsvParseResult()
    text = _read(source, name)
    if not text:
        logger.warning(f"CSV '{name}' has no content. Returning empty result.")
        return result

    lines = _LINE_BREAK.split(text)
    header = lines[0].strip()
    if header != EXPECTED_HEADER:
        message = (f"Invalid CSV header in '{name}'. "
                   f"Expected: '{EXPECTED_HEADER}', but was: '{lines[0]}'")
        logger.error(message)
        raise CsvHeaderError(message)

    for line_no, line in enumerate(lines[1:], start=2):   # line 1 = header
        if not line.strip():
            continue

        result.total_rows += 1
        try:
            result.candidates.append(_parse_line(line))
        except _RowError as exc:
            logger.warning(f"Skipping line {line_no} in CSV '{name}': {exc.reason}")
            result.parse_errors.append(
                Invalid(result.total_rows, exc.unique_key, exc.reason)
            )

    logger.info(f"Parsed {len(result.candidates)} deals from CSV '{name}' "
                f"(total_rows={result.total_rows}, "
                f"parse_errors={len(result.parse_errors)})")
    return result


# ── Private helpers ────────────────────────────────────────────────────

def _read(source: Source, name: str) -> str:
    if isinstance(source, (str, bytes)):
        return _decode(source)
    try:
        raw = source.read()
    except OSError as exc:
        message = f"I/O error while reading CSV '{name}': {exc}"
        logger.error(message)
        raise CsvReadError(message) from exc
    return _decode(raw)


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode("utf-8", errors="replace")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw


def _parse_line(line: str) -> CandidateRecord:
    """Build a candidate from one data line or raise _RowError."""
    tokens = line.split(DELIMITER)
    if len(tokens) < len(COLUMNS):
        raise _RowError(
            f"wrong column count: expected {len(COLUMNS)} columns "
            f"but found {len(tokens)}. Line content: {line}"
        )

    unique_key, from_code, to_code, ts_raw, amount_raw = (
        t.strip() for t in tokens[:len(COLUMNS)]
    )
    key = unique_key or None

    from_code = _currency(FROM_CODE, from_code, key)
    to_code = _currency(TO_CODE, to_code, key)

    if not ts_raw:
        raise _RowError(f"missing {TIMESTAMP} value.", key)
    try:
        timestamp = parse_timestamp(ts_raw)
    except ValueError as exc:
        raise _RowError(f"invalid {TIMESTAMP} '{ts_raw}'. Error: {exc}", key)

    if not amount_raw:
        raise _RowError(f"missing {AMOUNT} value.", key)
    try:
        amount = parse_amount(amount_raw)
    except ValueError as exc:
        raise _RowError(f"invalid {AMOUNT} '{amount_raw}'. Error: {exc}", key)

    return CandidateRecord(
        unique_key=unique_key,
        from_code=from_code,
        to_code=to_code,
        timestamp=timestamp,
        amount=amount,
    )


def _currency(column: str, value: str, key: Optional[str]) -> str:
    # Shape only; alphabetic content is the validator's call
    if len(value) != CURRENCY_CODE_LENGTH:
        raise _RowError(
            f"invalid {column} '{value}'. Expected 3-letter ISO code.", key
        )
    return value.upper()
