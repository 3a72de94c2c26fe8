#!/usr/bin/env python3
"""
FXDEALS - FX Deals Warehouse
============================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import logging

from flask import Flask

import config
from db import init_db, get_session
from api import api_bp

logger = logging.getLogger("fxdeals")


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    """Root handler for the whole process; module loggers propagate here."""
    logging.basicConfig(level=level, format=config.LOG_FORMAT)


def create_app(db_url: str | None = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_MB * 1024 * 1024

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url or config.DB_URL)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    return app


def _seed_if_empty():
    """Import the seed CSV when the deals table is empty."""
    from import_engine import CsvStructureError, run_csv_import
    from services.deal_store import DealStore

    session = get_session()
    try:
        store = DealStore(session)
        count = store.count()
        if count > 0:
            logger.info(f"Database has {count} deals.")
            return

        if not config.CSV_SEED_PATH.exists():
            logger.info(f"No seed CSV at {config.CSV_SEED_PATH} - starting empty.")
            return

        logger.info(f"Database empty → importing {config.CSV_SEED_PATH.name} …")
        with open(config.CSV_SEED_PATH, "rb") as fh:
            try:
                report = run_csv_import(fh, store, name=config.CSV_SEED_PATH.name)
            except CsvStructureError as exc:
                logger.error(f"Seed import skipped: {exc}")
                return
    finally:
        session.close()

    logger.info(f"Seed done: {report.imported} imported, {report.invalid} invalid, "
                f"{report.duplicates} duplicates / {report.total_rows} rows")
    for err in report.errors[:10]:
        logger.warning(f"  Row {err.row_index}: {err.message}")


def main():
    configure_logging()
    app = create_app()
    _seed_if_empty()

    logger.info(f"Serving on http://{config.HOST}:{config.PORT}/api/deals")
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
