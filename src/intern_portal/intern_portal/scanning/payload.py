from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional

from ..applications.model import APPLICANT_NAME, APPLICATION_ID, SUBMITTED_AT
from ..common.datetime_utils import to_iso
from ..core.constants import QR_PAYLOAD_TYPE
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ScannedPayload:
    """What the applicant's QR code carries back to the dashboard."""

    application_id: str
    applicant_name: str
    type: str
    timestamp: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "applicationId": self.application_id,
            "applicantName": self.applicant_name,
            "type": self.type,
            "timestamp": self.timestamp,
        }


def build_payload(record: Mapping, *, timestamp: Optional[datetime] = None) -> str:
    """JSON text for the QR symbol; falls back to ``submittedAt`` when no timestamp is given."""
    payload = ScannedPayload(
        application_id=record[APPLICATION_ID],
        applicant_name=str(record.get(APPLICANT_NAME) or ""),
        type=QR_PAYLOAD_TYPE,
        timestamp=to_iso(timestamp) if timestamp else record.get(SUBMITTED_AT),
    )
    return json.dumps(payload.to_dict(), ensure_ascii=False)


def parse_payload(text: str) -> ScannedPayload:
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        raise ValidationError("Invalid QR code")

    if not isinstance(data, dict) or not isinstance(data.get("applicationId"), str) or not data["applicationId"]:
        raise ValidationError("Invalid QR code")

    return ScannedPayload(
        application_id=data["applicationId"],
        applicant_name=str(data.get("applicantName") or ""),
        type=str(data.get("type") or ""),
        timestamp=data.get("timestamp"),
    )
