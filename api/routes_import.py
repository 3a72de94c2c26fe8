"""
api.routes_import - /api/deals/import endpoints.

Both endpoints return the same summary shape; row-level problems are
reported inside it rather than as an HTTP error.
"""

import logging

from flask import request, jsonify
from werkzeug.exceptions import BadRequest

from api import api_bp
from db import get_session
from import_engine import (
    PayloadError, candidates_from_payload, run_csv_import, run_import,
)
from services.deal_store import DealStore

logger = logging.getLogger(__name__)


@api_bp.route("/import", methods=["POST"])
def import_deals():
    """
    POST /api/deals/import

    JSON body: [{uniqueKey, fromCode, toCode, timestamp, amount}, …]
    """
    try:
        payload = request.get_json(force=True)
    except BadRequest as exc:
        raise PayloadError(f"Malformed JSON request: {exc.description}") from exc

    candidates = candidates_from_payload(payload)
    logger.info(f"Received JSON batch with {len(candidates)} FX deals")

    session = get_session()
    try:
        report = run_import(candidates, DealStore(session))
    finally:
        session.close()
    return jsonify(report.to_dict())


@api_bp.route("/import/csv", methods=["POST"])
def import_deals_csv():
    """
    POST /api/deals/import/csv

    Multipart: field name 'file'
    Or: raw CSV as request body (Content-Type: text/csv).
    """
    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("file")
        if not f:
            raise PayloadError("no 'file' field in upload")
        source, name = f.stream, f.filename or "upload.csv"
    else:
        source, name = request.get_data(), "request body"

    logger.info(f"Received CSV for FX deals import: name='{name}', "
                f"size={request.content_length} bytes")

    session = get_session()
    try:
        report = run_csv_import(source, DealStore(session), name=name)
    finally:
        session.close()
    return jsonify(report.to_dict())
