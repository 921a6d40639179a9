from __future__ import annotations

import logging
from typing import BinaryIO

from ..applications.repository import ApplicationRepository
from ..attendance.model import with_attendance_status
from ..core.constants import QR_PAYLOAD_TYPE
from ..core.exceptions import NotFoundError, ValidationError
from .payload import ScannedPayload, parse_payload
from .qr import decode_qr_image

logger = logging.getLogger(__name__)


class ScanService:
    """Resolve a scanned QR payload to its application record. Read-only."""

    def __init__(self, applications: ApplicationRepository):
        self._applications = applications

    def lookup(self, payload: ScannedPayload) -> dict:
        if payload.type != QR_PAYLOAD_TYPE:
            raise ValidationError("Invalid QR code type")

        record = self._applications.get(payload.application_id)
        if record is None:
            logger.info("scanned application not found: %s", payload.application_id)
            raise NotFoundError("Application not found")
        return with_attendance_status(record)

    def lookup_text(self, text: str) -> dict:
        return self.lookup(parse_payload(text))

    def lookup_image(self, stream: BinaryIO) -> dict:
        return self.lookup_text(decode_qr_image(stream))
