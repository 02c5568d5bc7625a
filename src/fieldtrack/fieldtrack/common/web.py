from __future__ import annotations

from functools import wraps

from flask import current_app, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .logger import get_logger

logger = get_logger("web")

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (StoreError, 502),
)


def json_error(message: str, status: int, **extra):
    body = {"error": message}
    body.update(extra)
    return jsonify(body), status


def error_response(e: DomainError):
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
    if isinstance(e, ValidationError):
        return json_error(str(e), status, errors=e.errors)
    return json_error(str(e), status)


def form_data() -> dict:
    """Form fields or a JSON body, whichever the client sent."""
    if request.is_json:
        return dict(request.get_json(silent=True) or {})
    return request.form.to_dict()


def handle_errors(view):
    """Render domain errors as JSON; log anything else as a system error."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            logger.exception("Unhandled error in %s", request.endpoint)
            if current_app.config.get("DEBUG"):
                return json_error(f"System error: {e}", 500)
            return json_error("System error", 500)

    return wrapper


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue.", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue.", 401)
        if session.get("role") != Role.ADMIN.value:
            return json_error("Access Denied: Administrative privileges required.", 403)
        return view(*args, **kwargs)

    return wrapper
