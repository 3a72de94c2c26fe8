"""
db.models - SQLAlchemy ORM declarations.

Tables
------
deals  - one row per imported FX deal.  ``unique_key`` carries the
         uniqueness constraint the whole import pipeline protects;
         ``id`` is a surrogate key assigned by the database.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, DateTime, Numeric, UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Deal(Base):
    __tablename__ = "deals"

    # ── Keys ───────────────────────────────────────────────────────────
    id         = Column(Integer, primary_key=True, autoincrement=True)
    unique_key = Column(String(255), nullable=False)

    # ── Deal payload ───────────────────────────────────────────────────
    from_code      = Column(String(3), nullable=False)
    to_code        = Column(String(3), nullable=False)
    deal_timestamp = Column(DateTime(timezone=True), nullable=False)
    amount         = Column(Numeric(19, 4, asdecimal=True), nullable=False)

    # ── Bookkeeping ────────────────────────────────────────────────────
    imported_at = Column(DateTime(timezone=True), nullable=False,
                         default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("unique_key", name="uk_deals_unique_key"),
    )

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "uniqueKey": self.unique_key,
            "fromCode": self.from_code,
            "toCode": self.to_code,
            "timestamp": self.deal_timestamp.isoformat() if self.deal_timestamp else None,
            "amount": str(self.amount) if self.amount is not None else None,
            "importedAt": self.imported_at.isoformat() if self.imported_at else None,
        }

    def __repr__(self) -> str:
        return f"<Deal {self.id} {self.unique_key}>"
