from __future__ import annotations

import io
import json
import logging

from flask import Flask, jsonify, request, send_file

from ..common.web import domain_error_response, error_response, json_body, make_bearer_required
from ..container import Container
from ..core.exceptions import DomainError
from .payload import build_payload
from .qr import render_qr_png

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    bearer_required = make_bearer_required(container.auth_service)

    @app.route("/scan", methods=["POST"], endpoint="scan")
    @bearer_required
    def scan():
        """Resolve a scanned code: JSON ``{payload}`` text or a multipart ``image`` upload."""
        try:
            if "image" in request.files:
                application = container.scan_service.lookup_image(request.files["image"].stream)
            else:
                payload = json_body().get("payload")
                if not payload:
                    return error_response("Scanned payload or image is required", 400)
                if isinstance(payload, dict):
                    payload = json.dumps(payload)
                application = container.scan_service.lookup_text(str(payload))

            logger.info("scan resolved to %s", application["applicationId"])
            return jsonify({"success": True, "application": application})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("scan failed")
            return error_response(f"Scan failed: {e}", 500)

    @app.route("/applications/<application_id>/qr.png", methods=["GET"], endpoint="application_qr")
    @bearer_required
    def application_qr(application_id: str):
        try:
            record = container.application_service.get_application(application_id)
            png = render_qr_png(build_payload(record))
            return send_file(io.BytesIO(png), mimetype="image/png")
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("QR rendering failed for %s", application_id)
            return error_response(f"Failed to render QR code: {e}", 500)
