from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import jsonify, request

from ..core.exceptions import AuthenticationError, DomainError, InvalidTransitionError
from ..users.service import AuthService

logger = logging.getLogger(__name__)


def error_response(message: str, status: int, **extra: Any):
    body = {"success": False, "error": message}
    body.update(extra)
    return jsonify(body), status


def domain_error_response(e: DomainError):
    """JSON envelope for a domain error, using the status its class declares."""
    extra = {}
    if isinstance(e, InvalidTransitionError) and e.field and e.timestamp:
        extra[e.field] = e.timestamp
    return error_response(str(e), e.status_code, **extra)


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def make_bearer_required(auth_service: AuthService):
    def bearer_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                auth_service.verify_bearer(request.headers.get("Authorization"))
            except AuthenticationError as e:
                logger.info("rejected %s %s: %s", request.method, request.path, e)
                return error_response(str(e), 401)
            return view(*args, **kwargs)

        return wrapper

    return bearer_required
