from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.web import domain_error_response, error_response, json_body, make_bearer_required
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    bearer_required = make_bearer_required(container.auth_service)

    @app.route("/check-in", methods=["POST"], endpoint="check_in")
    @bearer_required
    def check_in():
        application_id = json_body().get("applicationId")
        logger.info("processing check-in for: %s", application_id)
        try:
            stamped = container.attendance_service.check_in(application_id)
            return jsonify({"success": True, "checkInTime": stamped, "applicationId": application_id})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("check-in failed for %s", application_id)
            return error_response(f"Check-in failed: {e}", 500)

    @app.route("/check-out", methods=["POST"], endpoint="check_out")
    @bearer_required
    def check_out():
        application_id = json_body().get("applicationId")
        logger.info("processing check-out for: %s", application_id)
        try:
            stamped = container.attendance_service.check_out(application_id)
            return jsonify({"success": True, "checkOutTime": stamped, "applicationId": application_id})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("check-out failed for %s", application_id)
            return error_response(f"Check-out failed: {e}", 500)
