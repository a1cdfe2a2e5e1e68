import logging
from flask import Blueprint
from werkzeug.exceptions import HTTPException
from app.utils.responses import error

errors_bp = Blueprint("errors_bp", __name__)


class APIError(Exception):
    """Base for service-level failures that map onto an HTTP status."""

    status_code = 400

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload


class NotFoundError(APIError):
    status_code = 404


class ConflictError(APIError):
    status_code = 409


@errors_bp.app_errorhandler(APIError)
def handle_api_error(e):
    if e.status_code >= 500:
        logging.error("Service error: %s", e.message)
    return error(e.message, status=e.status_code, code=e.status_code, data=e.payload)


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    msg = e.description or getattr(e, "name", "HTTP Error")
    return error(msg, status=e.code, code=e.code)


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    logging.exception("Unhandled exception")
    return error(
        "An unexpected error occurred. Please try again later.",
        status=500,
        code=500,
    )
