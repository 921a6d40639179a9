from __future__ import annotations

import logging

from flask import Flask, jsonify, request, send_file, url_for

from ..common.web import domain_error_response, error_response, make_bearer_required
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    bearer_required = make_bearer_required(container.auth_service)

    @app.route("/upload-resume", methods=["POST"], endpoint="upload_resume")
    @bearer_required
    def upload_resume():
        file = request.files.get("file")
        file_path = request.form.get("filePath", "")
        if file is None or not file_path:
            return error_response("File or file path missing", 400)

        try:
            stored = container.resume_storage.save(file.stream, file_path)
            signed_url = url_for("download_resume", token=stored.token, _external=True)
            return jsonify({"success": True, "signedUrl": signed_url, "path": stored.path})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.exception("resume upload failed")
            return error_response(f"Resume upload failed: {e}", 500)

    # Signed link is the credential here; no bearer token.
    @app.route("/resumes/<token>", methods=["GET"], endpoint="download_resume")
    def download_resume(token: str):
        try:
            path = container.resume_storage.resolve(token)
            return send_file(path, as_attachment=True, download_name=path.name)
        except DomainError as e:
            return domain_error_response(e)
