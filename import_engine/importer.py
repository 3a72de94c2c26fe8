"""
import_engine.importer - Top-level orchestrator.

Runs every candidate through the RowProcessor and folds the outcomes into
an ImportReport.  There is no batch-level transaction: each deal commits
on its own, so a failing row never blocks the ones around it.

The CSV path adds csv_parser in front and merger behind the same loop.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from import_engine.csv_parser import Source, parse
from import_engine.duplicates import DuplicateOracle
from import_engine.merger import merge
from import_engine.records import CandidateRecord
from import_engine.report import ImportReport
from import_engine.row_processor import RowProcessor
from services.deal_store import DealStore

logger = logging.getLogger(__name__)


def run_import(
    candidates: Optional[Sequence[Optional[CandidateRecord]]],
    store: DealStore,
    *,
    oracle: Optional[DuplicateOracle] = None,
) -> ImportReport:
    """
    Import a batch of candidate deals.

    Parameters
    ----------
    candidates : deals in input order; None or empty is a zero-row batch
    store : where deals are checked and written
    oracle : duplicate pre-check, defaults to one backed by ``store``

    Returns
    -------
    ImportReport accounting for every candidate exactly once
    """
    report = ImportReport()
    if not candidates:
        logger.info("Received empty FX deals batch")
        return report

    logger.info(f"Starting FX deals import with total_rows={len(candidates)}")
    processor = RowProcessor(store, oracle)

    for row_index, candidate in enumerate(candidates, start=1):
        report = report.record(processor.process(row_index, candidate))

    logger.info(f"Finished FX deals import with total_rows={report.total_rows}, "
                f"imported={report.imported}, invalid={report.invalid}, "
                f"duplicates={report.duplicates}")
    return report


def run_csv_import(source: Source, store: DealStore, *, name: str = "<text>") -> ImportReport:
    """
    Parse CSV text, import the parsed deals, and merge parse errors in.

    Raises CsvStructureError (bad header, unreadable source); every other
    problem is reported per row.
    """
    parsed = parse(source, name)
    report = run_import(parsed.candidates, store)
    merged = merge(parsed.parse_errors, parsed.total_rows, report)

    logger.info(f"Finished CSV import of '{name}': total_rows={merged.total_rows}, "
                f"imported={merged.imported}, invalid={merged.invalid}, "
                f"duplicates={merged.duplicates}, errors={len(merged.errors)}")
    return merged
