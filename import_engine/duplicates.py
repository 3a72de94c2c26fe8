"""
import_engine.duplicates - Duplicate detection against stored deals.

The existence check is an optimistic pre-check that saves a wasted
write.  It cannot close the race with a concurrent batch; the store's
UNIQUE constraint does, and ``is_storage_conflict`` recognises it.
"""

from __future__ import annotations

from services.deal_store import DealStore, DuplicateKeyError


class DuplicateOracle:

    def __init__(self, store: DealStore):
        self._store = store

    def exists_by_key(self, unique_key: str) -> bool:
        return self._store.exists_by_key(unique_key)

    @staticmethod
    def is_storage_conflict(exc: BaseException) -> bool:
        return isinstance(exc, DuplicateKeyError)
