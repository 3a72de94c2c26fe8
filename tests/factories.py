from datetime import datetime, timezone
from decimal import Decimal

import factory

from import_engine.records import CandidateRecord


class CandidateFactory(factory.Factory):
    """Factory for valid CandidateRecord instances."""

    class Meta:
        model = CandidateRecord

    unique_key = factory.Sequence(lambda n: f"D-{n}")
    from_code = "USD"
    to_code = "EUR"
    timestamp = datetime(2025, 1, 1, 10, 15, 30, tzinfo=timezone.utc)
    amount = Decimal("12345.6789")
