from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import domain_error_response, error_response, json_body, make_bearer_required
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    bearer_required = make_bearer_required(container.auth_service)

    def _submit():
        data = json_body()
        logger.info(
            "received application submission%s: %s %s",
            " (test mode)" if data.get("testMode") else "",
            data.get("firstName", ""),
            data.get("lastName", ""),
        )
        try:
            record = container.application_service.submit(data)
            return jsonify({"success": True, "applicationId": record["applicationId"], "applicationData": record})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("application submission failed")
            return error_response(f"Application submission failed: {e}", 500)

    app.add_url_rule(
        "/submit-application", "submit_application", bearer_required(_submit), methods=["POST"]
    )
    # Same handler under the form's second route name.
    app.add_url_rule(
        "/submit-internship-application",
        "submit_internship_application",
        bearer_required(_submit),
        methods=["POST"],
    )

    @app.route("/get-applications", methods=["GET"], endpoint="get_applications")
    @bearer_required
    def get_applications():
        try:
            applications = container.application_service.list_applications(
                status=request.args.get("status"),
                search=request.args.get("q"),
            )
            logger.info("found %d applications", len(applications))
            return jsonify({"success": True, "applications": applications, "count": len(applications)})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("fetching applications failed")
            return error_response(f"Failed to fetch applications: {e}", 500)

    @app.route("/applications/summary", methods=["GET"], endpoint="applications_summary")
    @bearer_required
    def applications_summary():
        try:
            return jsonify({"success": True, "summary": container.application_service.summary().to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("summary failed")
            return error_response(f"Failed to build summary: {e}", 500)

    @app.route("/applications/<application_id>", methods=["GET"], endpoint="get_application")
    @bearer_required
    def get_application(application_id: str):
        try:
            return jsonify({"success": True, "application": container.application_service.get_application(application_id)})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("fetching application %s failed", application_id)
            return error_response(f"Failed to fetch application: {e}", 500)

    @app.route("/save-comments", methods=["POST"], endpoint="save_comments")
    @bearer_required
    def save_comments():
        data = json_body()
        application_id = data.get("applicationId")
        logger.info("saving comments for: %s", application_id)
        try:
            record = container.application_service.save_comments(application_id, data.get("comments"))
            return jsonify({"success": True, "applicationId": record["applicationId"], "comments": record["comments"]})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("save comments failed")
            return error_response(f"Save comments failed: {e}", 500)
