"""
import_engine.validator - Business rules for a single candidate deal.

Rules run in a fixed order and the first failure wins, so the reported
reason is always the first rule a candidate violates.
"""

from __future__ import annotations

from typing import Optional

from import_engine.field_map import CURRENCY_CODE_LENGTH
from import_engine.records import CandidateRecord


def validate(candidate: Optional[CandidateRecord]) -> Optional[str]:
    """Return the rejection reason, or None when the candidate is valid."""
    if candidate is None:
        return "Deal payload is null"

    if not (candidate.unique_key or "").strip():
        return "uniqueKey must not be empty"

    if not is_currency_code(candidate.from_code):
        return "fromCode must be a 3-letter ISO code"
    if not is_currency_code(candidate.to_code):
        return "toCode must be a 3-letter ISO code"

    if candidate.from_code.strip().upper() == candidate.to_code.strip().upper():
        return "fromCode and toCode must be different"

    if candidate.timestamp is None:
        return "timestamp must not be null"

    if candidate.amount is None:
        return "amount must not be null"
    if not candidate.amount.is_finite() or candidate.amount <= 0:
        return "amount must be strictly positive"

    return None


def is_currency_code(code: Optional[str]) -> bool:
    if code is None:
        return False
    code = code.strip()
    return len(code) == CURRENCY_CODE_LENGTH and code.isalpha()
