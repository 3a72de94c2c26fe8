"""
import_engine.records - Candidate deals and per-row outcomes.

A CandidateRecord is what both input paths (JSON list, CSV text) hand to
the pipeline; the pipeline never knows which path produced it.  Each
record ends up as exactly one RowOutcome.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from import_engine.field_map import (
    AMOUNT, FROM_CODE, TIMESTAMP, TO_CODE, UNIQUE_KEY,
    parse_amount, parse_timestamp,
)


class PayloadError(ValueError):
    """Raised when a structured payload cannot be turned into candidates."""


@dataclass(frozen=True)
class CandidateRecord:
    unique_key: Optional[str]
    from_code: Optional[str]
    to_code: Optional[str]
    timestamp: Optional[datetime]
    amount: Optional[Decimal]

    @classmethod
    def from_payload(cls, item: dict[str, Any]) -> "CandidateRecord":
        """
        Build a candidate from one JSON object.

        Missing keys become None and are left for the validator to reject.
        Values of the wrong type raise PayloadError: that is a malformed
        request, not a row-level problem.
        """
        return cls(
            unique_key=_optional_str(item, UNIQUE_KEY),
            from_code=_optional_str(item, FROM_CODE),
            to_code=_optional_str(item, TO_CODE),
            timestamp=_optional_timestamp(item.get(TIMESTAMP)),
            amount=_optional_amount(item.get(AMOUNT)),
        )


def candidates_from_payload(payload: Any) -> list[Optional[CandidateRecord]]:
    """Convert a decoded JSON body into candidates (``None`` stays ``None``)."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise PayloadError("Malformed JSON request: expected an array of deals")

    candidates: list[Optional[CandidateRecord]] = []
    for pos, item in enumerate(payload, start=1):
        if item is None:
            candidates.append(None)
        elif isinstance(item, dict):
            try:
                candidates.append(CandidateRecord.from_payload(item))
            except PayloadError as exc:
                raise PayloadError(f"Malformed JSON request: element {pos}: {exc}") from exc
        else:
            raise PayloadError(
                f"Malformed JSON request: element {pos} is not an object"
            )
    return candidates


def _optional_str(item: dict, key: str) -> Optional[str]:
    val = item.get(key)
    if val is None or isinstance(val, str):
        return val
    raise PayloadError(f"{key} must be a string")


def _optional_timestamp(val: Any) -> Optional[datetime]:
    if val is None:
        return None
    if not isinstance(val, str):
        raise PayloadError(f"{TIMESTAMP} must be an ISO-8601 string")
    try:
        return parse_timestamp(val)
    except ValueError as exc:
        raise PayloadError(f"invalid {TIMESTAMP} {val!r}: {exc}") from exc


def _optional_amount(val: Any) -> Optional[Decimal]:
    if val is None:
        return None
    # bool is an int subclass; "amount": true is not a number
    if isinstance(val, bool) or not isinstance(val, (int, float, str)):
        raise PayloadError(f"{AMOUNT} must be a number")
    try:
        return parse_amount(str(val))
    except ValueError as exc:
        raise PayloadError(f"invalid {AMOUNT} {val!r}: {exc}") from exc


# ── Row outcomes ───────────────────────────────────────────────────────

class DuplicateCause(enum.Enum):
    PRE_CHECK = "Duplicate uniqueKey (already imported)"
    STORAGE = "Duplicate uniqueKey detected at storage level"


@dataclass(frozen=True)
class RowOutcome:
    row_index: int                  # 1-based
    unique_key: Optional[str]

    @property
    def message(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> dict:
        return {
            "rowIndex": self.row_index,
            "uniqueKey": self.unique_key,
            "message": self.message,
        }


@dataclass(frozen=True)
class Imported(RowOutcome):

    @property
    def message(self) -> str:
        return "imported"


@dataclass(frozen=True)
class Invalid(RowOutcome):
    reason: str

    @property
    def message(self) -> str:
        return self.reason


@dataclass(frozen=True)
class Duplicate(RowOutcome):
    cause: DuplicateCause

    @property
    def message(self) -> str:
        return self.cause.value
