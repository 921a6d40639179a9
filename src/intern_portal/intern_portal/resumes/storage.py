from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.utils import secure_filename

from ..core.constants import DEFAULT_MAX_RESUME_BYTES, DEFAULT_SIGNED_URL_MAX_AGE
from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredResume:
    path: str
    token: str
    size: int


class ResumeStorage:
    """Resume files on local disk, handed out through signed, expiring tokens."""

    def __init__(
        self,
        upload_folder: str | Path,
        *,
        secret_key: str,
        max_bytes: int = DEFAULT_MAX_RESUME_BYTES,
        max_age: int = DEFAULT_SIGNED_URL_MAX_AGE,
    ):
        self._root = Path(upload_folder).resolve()
        self._signer = URLSafeTimedSerializer(secret_key, salt="resume-download")
        self._max_bytes = int(max_bytes)
        self._max_age = int(max_age)

    def _normalize(self, file_path: str) -> str:
        parts = [secure_filename(p) for p in str(file_path or "").replace("\\", "/").split("/")]
        parts = [p for p in parts if p]
        if not parts:
            raise ValidationError("File or file path missing")
        return "/".join(parts)

    def save(self, stream: BinaryIO, file_path: str) -> StoredResume:
        """Write (or overwrite) ``file_path`` under the upload folder."""
        relative = self._normalize(file_path)

        data = stream.read(self._max_bytes + 1)
        if not data:
            raise ValidationError("File or file path missing")
        if len(data) > self._max_bytes:
            raise ValidationError(f"File exceeds the {self._max_bytes // (1024 * 1024)} MB limit")

        target = self._root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.info("resume stored: %s (%d bytes)", relative, len(data))

        return StoredResume(path=relative, token=self._signer.dumps(relative), size=len(data))

    def resolve(self, token: str) -> Path:
        try:
            relative = self._signer.loads(token, max_age=self._max_age)
        except SignatureExpired:
            raise NotFoundError("Download link has expired")
        except BadSignature:
            raise NotFoundError("Resume not found")

        target = (self._root / relative).resolve()
        if self._root not in target.parents or not target.is_file():
            raise NotFoundError("Resume not found")
        return target
