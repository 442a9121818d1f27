from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    SessionError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_error(message: str, status: int, **extra: Any):
    body = {"success": False, "error": message}
    body.update(extra)
    return jsonify(body), status


def json_body() -> dict:
    """Request JSON as a dict; a missing or non-object body reads as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register_error_handlers(app: Flask) -> None:
    """Map the domain exception taxonomy onto HTTP status codes."""

    @app.errorhandler(ValidationError)
    def _handle_validation_error(exc):
        return json_error(str(exc), 400)

    @app.errorhandler(AuthenticationError)
    def _handle_auth_error(exc):
        return json_error(str(exc), 401)

    @app.errorhandler(NotFoundError)
    def _handle_not_found(exc):
        return json_error(str(exc), 404)

    @app.errorhandler(ConflictError)
    def _handle_conflict(exc):
        return json_error(str(exc), 409, code=exc.code)

    @app.errorhandler(SessionError)
    def _handle_session_error(exc):
        # Invalid/expired sessions are an ordinary outcome for the scanner UI.
        return json_error(str(exc), 200)

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc):
        return json_error(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def _handle_unexpected_error(exc):
        logger.exception("Unhandled exception on %s %s", request.method, request.path)
        return json_error(str(exc), 500)
