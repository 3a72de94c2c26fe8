"""
import_engine.row_processor - Validate, de-duplicate and persist one deal.

Single-responsibility: given a candidate and its 1-based position, try to
store it and return the RowOutcome.  Never raises for a bad row.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from db.models import Deal
from import_engine.duplicates import DuplicateOracle
from import_engine.records import (
    CandidateRecord, Duplicate, DuplicateCause, Imported, Invalid, RowOutcome,
)
from import_engine.validator import validate
from services.deal_store import DealStore

logger = logging.getLogger(__name__)


class RowProcessor:

    def __init__(self, store: DealStore, oracle: Optional[DuplicateOracle] = None):
        self._store = store
        self._oracle = oracle or DuplicateOracle(store)

    def process(self, row_index: int, candidate: Optional[CandidateRecord]) -> RowOutcome:
        key = candidate.unique_key if candidate is not None else None

        reason = validate(candidate)
        if reason:
            logger.warning(f"Row {row_index} (uniqueKey={key}): validation error, {reason}")
            return Invalid(row_index, key, reason)

        try:
            if self._oracle.exists_by_key(key):
                outcome = Duplicate(row_index, key, DuplicateCause.PRE_CHECK)
                logger.warning(f"Row {row_index} (uniqueKey={key}): {outcome.message}")
                return outcome

            self._store.insert(to_deal(candidate))

        except Exception as exc:
            if self._oracle.is_storage_conflict(exc):
                outcome = Duplicate(row_index, key, DuplicateCause.STORAGE)
                logger.warning(f"Row {row_index} (uniqueKey={key}): {outcome.message}")
                return outcome
            # Any other failure marks the row invalid; the batch carries on
            message = f"Unexpected error during import: {exc}"
            logger.exception(f"Row {row_index} (uniqueKey={key}): {message}")
            return Invalid(row_index, key, message)

        logger.info(f"Row {row_index} (uniqueKey={key}): successfully imported")
        return Imported(row_index, key)


def to_deal(candidate: CandidateRecord) -> Deal:
    """Map a validated candidate onto a new Deal, stamped with the import time."""
    return Deal(
        unique_key=candidate.unique_key,
        from_code=candidate.from_code,
        to_code=candidate.to_code,
        deal_timestamp=candidate.timestamp,
        amount=candidate.amount,
        imported_at=datetime.now(timezone.utc),
    )
