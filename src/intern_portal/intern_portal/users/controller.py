from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.web import domain_error_response, error_response, json_body, make_bearer_required
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    bearer_required = make_bearer_required(container.auth_service)

    @app.route("/admin-login", methods=["POST"], endpoint="admin_login")
    @bearer_required
    def admin_login():
        data = json_body()
        username = str(data.get("username") or "")
        logger.info("admin login attempt for username: %s", username)
        try:
            container.auth_service.authenticate(username, str(data.get("password") or ""))
            logger.info("admin login successful")
            return jsonify({"success": True, "message": "Login successful"})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("admin login failed")
            return error_response(f"Login failed: {e}", 500)
