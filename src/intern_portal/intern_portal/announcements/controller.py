from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.web import domain_error_response, error_response, json_body, make_bearer_required
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    bearer_required = make_bearer_required(container.auth_service)

    @app.route("/announcement", methods=["GET"], endpoint="get_announcement")
    @bearer_required
    def get_announcement():
        try:
            return jsonify({"success": True, "text": container.announcement_service.get()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("retrieving announcement failed")
            return error_response(f"Failed to retrieve announcement: {e}", 500)

    @app.route("/announcement", methods=["POST"], endpoint="save_announcement")
    @bearer_required
    def save_announcement():
        try:
            container.announcement_service.save(json_body().get("text"))
            return jsonify({"success": True, "message": "Announcement saved"})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("saving announcement failed")
            return error_response(f"Failed to save announcement: {e}", 500)
