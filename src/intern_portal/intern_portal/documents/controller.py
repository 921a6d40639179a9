from __future__ import annotations

import io
import logging

from flask import Flask, send_file

from ..common.web import domain_error_response, error_response, make_bearer_required
from ..container import Container
from ..core.exceptions import DomainError
from ..scanning.payload import build_payload
from ..scanning.qr import render_qr_png
from .pdf import render_details_pdf, render_enrollment_pdf

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    bearer_required = make_bearer_required(container.auth_service)

    def _pdf_response(pdf: bytes, filename: str):
        return send_file(io.BytesIO(pdf), mimetype="application/pdf", as_attachment=True, download_name=filename)

    @app.route("/applications/<application_id>/confirmation.pdf", methods=["GET"], endpoint="confirmation_pdf")
    @bearer_required
    def confirmation_pdf(application_id: str):
        try:
            record = container.application_service.get_application(application_id)
            pdf = render_enrollment_pdf(
                record,
                qr_png=render_qr_png(build_payload(record)),
                announcement=container.announcement_service.get(),
            )
            return _pdf_response(pdf, f"enrollment_{application_id}.pdf")
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("confirmation PDF failed for %s", application_id)
            return error_response(f"Failed to generate PDF: {e}", 500)

    @app.route("/applications/<application_id>/details.pdf", methods=["GET"], endpoint="details_pdf")
    @bearer_required
    def details_pdf(application_id: str):
        try:
            record = container.application_service.get_application(application_id)
            return _pdf_response(render_details_pdf(record), f"application_{application_id}.pdf")
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("details PDF failed for %s", application_id)
            return error_response(f"Failed to generate PDF: {e}", 500)
