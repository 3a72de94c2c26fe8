"""
import_engine.report - Structured result of an import run.

ImportReport is immutable; ``record`` returns a new report with one more
row accounted for, which keeps the two counting invariants true at every
step:

    total_rows == imported + invalid + duplicates
    len(errors) == invalid + duplicates
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from import_engine.records import Duplicate, Imported, Invalid, RowOutcome


@dataclass(frozen=True)
class ImportReport:
    total_rows: int = 0
    imported: int = 0
    invalid: int = 0
    duplicates: int = 0
    errors: tuple[RowOutcome, ...] = ()

    def record(self, outcome: RowOutcome) -> "ImportReport":
        if isinstance(outcome, Imported):
            return replace(self, total_rows=self.total_rows + 1,
                           imported=self.imported + 1)
        if isinstance(outcome, Invalid):
            return replace(self, total_rows=self.total_rows + 1,
                           invalid=self.invalid + 1,
                           errors=self.errors + (outcome,))
        if isinstance(outcome, Duplicate):
            return replace(self, total_rows=self.total_rows + 1,
                           duplicates=self.duplicates + 1,
                           errors=self.errors + (outcome,))
        raise TypeError(f"unknown row outcome: {outcome!r}")

    def to_dict(self) -> dict:
        return {
            "totalRows": self.total_rows,
            "imported": self.imported,
            "invalid": self.invalid,
            "duplicates": self.duplicates,
            "errors": [e.to_dict() for e in self.errors],
        }
