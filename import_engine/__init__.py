"""
import_engine - FX deal import pipeline.

Public API:
    run_import(candidates, store)   → ImportReport
    run_csv_import(source, store)   → ImportReport  (raises CsvStructureError)
    candidates_from_payload(json)   → list of CandidateRecord
"""

from import_engine.importer import run_import, run_csv_import       # noqa: F401
from import_engine.report import ImportReport                       # noqa: F401
from import_engine.records import (                                 # noqa: F401
    CandidateRecord,
    PayloadError,
    candidates_from_payload,
)
from import_engine.csv_parser import (                              # noqa: F401
    CsvStructureError,
    CsvHeaderError,
    CsvReadError,
)
