"""
import_engine.merger - Fold CSV parse errors into a pipeline report.

Rows that failed parsing never reached the pipeline, so they can only be
invalid.  The parser's row count is authoritative for the total.
"""

from __future__ import annotations

from typing import Sequence

from import_engine.records import Invalid
from import_engine.report import ImportReport


def merge(
    parse_errors: Sequence[Invalid],
    total_rows: int,
    report: ImportReport,
) -> ImportReport:
    """Parse errors come first, then pipeline errors, each in original order."""
    return ImportReport(
        total_rows=total_rows,
        imported=report.imported,
        invalid=report.invalid + len(parse_errors),
        duplicates=report.duplicates,
        errors=tuple(parse_errors) + report.errors,
    )
