"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.exceptions import AuthorizationError, ConflictError, DomainError, NotFoundError, ValidationError
from ..core.principal import Principal

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def current_principal() -> Optional[Principal]:
    """Build the caller capability from the session set by the login layer."""
    if "user_id" not in session:
        return None
    site_id = session.get("site_id")
    return Principal(
        user_id=int(session["user_id"]),
        is_super_admin=bool(session.get("is_super_admin", False)),
        site_id=int(site_id) if site_id else None,
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        principal = current_principal()
        if principal is None:
            return jsonify({"success": False, "message": "Authentication required"}), 401
        return view(principal, *args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        principal = current_principal()
        if principal is None:
            return jsonify({"success": False, "message": "Authentication required"}), 401
        if not (principal.is_super_admin or session.get("is_admin")):
            return jsonify({"success": False, "message": "You do not have permission"}), 403
        return view(principal, *args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def error_response(exc: Exception):
    if isinstance(exc, DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                return jsonify({"success": False, "message": str(exc)}), status
        return jsonify({"success": False, "message": str(exc)}), 400

    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"success": False, "message": "Internal server error"}), 500
