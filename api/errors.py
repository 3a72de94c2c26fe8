"""
api.errors - JSON error handlers for the API blueprint.

Request-level failures only: a malformed payload or an unparseable CSV.
Per-row problems never get here, they live in the import summary.
"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from api import api_bp
from import_engine import CsvStructureError, PayloadError

logger = logging.getLogger(__name__)


def error_response(status: HTTPStatus, message: str, validation_errors=None):
    body = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status.value,
        "error": status.phrase,
        "message": message,
        "path": request.path,
        "validationErrors": validation_errors,
    }
    return jsonify(body), status.value


@api_bp.errorhandler(PayloadError)
def api_bad_payload(exc):
    logger.warning(f"Malformed payload for request {request.path}: {exc}")
    return error_response(HTTPStatus.BAD_REQUEST, str(exc))


@api_bp.errorhandler(CsvStructureError)
def api_bad_csv(exc):
    logger.warning(f"Rejected CSV for request {request.path}: {exc}")
    return error_response(HTTPStatus.BAD_REQUEST, str(exc))


# Routing 404/405 never reach a blueprint handler, hence the app-wide one
@api_bp.errorhandler(HTTPException)
@api_bp.app_errorhandler(HTTPException)
def api_http_error(exc):
    return error_response(HTTPStatus(exc.code), exc.description)


@api_bp.errorhandler(Exception)
def api_server_error(exc):
    logger.exception(f"Unexpected error for request {request.path}")
    return error_response(HTTPStatus.INTERNAL_SERVER_ERROR,
                          f"Unexpected server error: {exc}")
