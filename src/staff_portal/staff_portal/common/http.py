from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from flask import Flask, jsonify, request

from ..core.exceptions import (
    AlreadyClockedInError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NoOpenEntryError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from .datetime_utils import local_midnight

# Checked in order; subclasses must come before their bases.
STATUS_CODES: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NoOpenEntryError, 404),
    (NotFoundError, 404),
    (AlreadyClockedInError, 409),
    (ConflictError, 409),
    (StoreUnavailableError, 503),
)


def status_code_for(exc: DomainError) -> int:
    for exc_type, code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    return 400


def iso_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def iso_day_start(value: Optional[date]) -> Optional[str]:
    """Range fields go out as local-midnight timestamps."""
    return local_midnight(value).isoformat() if value else None


def json_body() -> dict:
    """Request JSON as a dict; a missing body counts as empty."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("JSON object body required")
    return body


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        code = status_code_for(exc)
        if isinstance(exc, StoreUnavailableError):
            app.logger.exception("Record store unavailable")
        return jsonify({"error": exc.code, "message": str(exc)}), code
