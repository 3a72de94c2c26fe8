"""
FXDEALS - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR      = Path(__file__).resolve().parent
CSV_SEED_PATH = Path(os.environ.get("FXDEALS_CSV_SEED", BASE_DIR / "fx_deals_seed.csv"))

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("FXDEALS_DB", f"sqlite:///{BASE_DIR / 'fxdeals.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST  = os.environ.get("FXDEALS_HOST", "0.0.0.0")
PORT  = int(os.environ.get("FXDEALS_PORT", "8080"))
DEBUG = os.environ.get("FXDEALS_DEBUG", "0") == "1"

# Uploads above this size are rejected by Flask before parsing starts
MAX_UPLOAD_MB = int(os.environ.get("FXDEALS_MAX_UPLOAD_MB", "16"))

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL  = os.environ.get("FXDEALS_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
