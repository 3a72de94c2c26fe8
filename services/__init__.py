"""
services - Persistence-facing layer sitting between the import engine and DB.
"""

from services.deal_store import (                     # noqa: F401
    DealStore,
    DuplicateKeyError,
    StoreError,
)
