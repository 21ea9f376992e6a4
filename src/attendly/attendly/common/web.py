from __future__ import annotations

import logging
from datetime import date, datetime
from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConcurrentModificationError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .datetime_utils import parse_iso_date, parse_iso_datetime
from .serialization import to_json

logger = logging.getLogger(__name__)


def ok(data: Any = None, *, message: str | None = None, status: int = 200):
    body: dict = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = to_json(data)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    """The external auth provider stores ``employee_id`` and ``role`` in the session."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session or "role" not in session:
            raise AuthenticationError("Please sign in to continue")
        return view(*args, **kwargs)

    return wrapper


def current_employee_id() -> int:
    return int(session["employee_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        raise AuthenticationError("Unknown role in session")


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def date_arg(data: dict, key: str) -> date:
    value = str(data.get(key) or "").strip()
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{key} must be a date (YYYY-MM-DD)")


def datetime_arg(data: dict, key: str) -> datetime:
    value = str(data.get(key) or "").strip()
    try:
        return parse_iso_datetime(value)
    except ValueError:
        raise ValidationError(f"{key} must be an ISO timestamp")


def int_arg(data: dict, key: str) -> int:
    try:
        return int(data.get(key))
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be a whole number")


def register_error_handlers(app: Flask) -> None:
    """Map domain errors to HTTP responses; never leak stack traces."""

    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        if isinstance(exc, AuthenticationError):
            return fail(str(exc), 401)
        if isinstance(exc, AuthorizationError):
            return fail(str(exc), 403)
        if isinstance(exc, NotFoundError):
            return fail(str(exc), 404)
        if isinstance(exc, ConcurrentModificationError):
            return fail("The record was changed by someone else, please retry", 409)
        if isinstance(exc, StorageError):
            logger.error("Storage error: %s", exc)
            return fail("Storage is unavailable", 503)
        return fail(str(exc), 400)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return fail(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return fail("Internal server error", 500)
