"""
services.deal_store - Persistence capability for imported deals.

Two operations only: ``exists_by_key`` and ``insert``.  Session
management is the caller's responsibility (open before, close after);
each insert commits on its own so one failing deal never takes a
neighbour down with it.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from db.models import Deal

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a deal could not be written."""


class DuplicateKeyError(StoreError):
    """Raised when the unique_key constraint rejected an insert."""

    def __init__(self, unique_key: str):
        super().__init__(f"unique_key {unique_key!r} already stored")
        self.unique_key = unique_key


class DealStore:

    def __init__(self, session: Session):
        self._session = session

    def exists_by_key(self, unique_key: str) -> bool:
        """
        Raises StoreError when the lookup fails.  The session is rolled
        back first; Postgres refuses every later statement otherwise.
        """
        try:
            return self._key_taken(unique_key)
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreError(str(exc)) from exc

    def insert(self, deal: Deal) -> Deal:
        """
        Add and commit one deal.  Returns it with ``id`` assigned.

        Raises DuplicateKeyError when the UNIQUE constraint fired,
        StoreError for any other database failure.  The session is
        rolled back in both cases and stays usable.
        """
        self._session.add(deal)
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            # IntegrityError also covers NOT NULL / CHECK failures; only a
            # row that now holds the key makes this a duplicate.
            if self.exists_by_key(deal.unique_key):
                raise DuplicateKeyError(deal.unique_key) from exc
            raise StoreError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreError(str(exc)) from exc
        return deal

    def count(self) -> int:
        return self._session.query(Deal).count()

    def _key_taken(self, unique_key: str) -> bool:
        return self._session.query(Deal.id).filter(
            Deal.unique_key == unique_key
        ).first() is not None
