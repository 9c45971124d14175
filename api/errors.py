from flask import jsonify
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

from auth.errors import AuthError

logger = logging.getLogger(__name__)

_HTTP_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
}


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def register_error_handlers(app):
    # Auth taxonomy: validation 400, duplicates 409, authentication 401
    @app.errorhandler(AuthError)
    def handle_auth_error(err: AuthError):
        if err.status >= 500:
            logger.exception("Auth error", exc_info=err)
        return error_response(err.error, err.message, err.status)

    # Marshmallow validation errors map to 400
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        # err.messages contains field-level details
        messages = err.messages if isinstance(err.messages, dict) else {"_schema": err.messages}
        return error_response("VALIDATION_ERROR", "Invalid input", 400, details=messages)

    # Integrity errors (unique constraints, FK violations, check constraints)
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # the session was already rolled back by DBStorage.save(); db text stays in the log
        lower_msg = str(getattr(err, "orig", err)).lower()
        logger.warning("Integrity error: %s", lower_msg)
        if "unique constraint" in lower_msg or "unique violation" in lower_msg or "duplicate key" in lower_msg:
            return error_response("CONFLICT", "Unique constraint violated.", 409)
        if "foreign key" in lower_msg:
            return error_response("BAD_REQUEST", "Foreign key constraint failed.", 400)
        return error_response("BAD_REQUEST", "Integrity error.", 400)

    # Werkzeug HTTPExceptions (abort(404) and friends) map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = err.code or 500
        return error_response(_HTTP_CODES.get(status, "HTTP_ERROR"), err.description, status)

    # 500 Internal Error (catch-all); details go to the log only
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500)
