from __future__ import annotations

import re
import secrets
import string
from dataclasses import dataclass
from datetime import datetime

from ..core.constants import APPLICATION_ID_RANDOM_LENGTH, APPLICATION_KEY_PREFIX

# Application records are plain JSON dicts. These are the keys the service relies on.
APPLICATION_ID = "applicationId"
APPLICANT_NAME = "applicantName"
SUBMITTED_AT = "submittedAt"
PHONE = "phone"
CHECK_IN_TIME = "checkInTime"
CHECK_OUT_TIME = "checkOutTime"
COMMENTS = "comments"
LAST_COMMENT_UPDATE = "lastCommentUpdate"
ATTENDANCE_STATUS = "attendanceStatus"
TEST_MODE = "testMode"

REQUIRED_FIELDS = {
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    PHONE: "Phone number",
}

# Fields only the server may write on submission.
SERVER_MANAGED_FIELDS = (
    SUBMITTED_AT,
    CHECK_IN_TIME,
    CHECK_OUT_TIME,
    COMMENTS,
    LAST_COMMENT_UPDATE,
    ATTENDANCE_STATUS,
    TEST_MODE,
)

SEARCHABLE_FIELDS = (APPLICATION_ID, APPLICANT_NAME, "email", PHONE, "university", "department")

_ID_RE = re.compile(r"^[A-Z]{2,10}-\d{10,16}-[A-Z0-9]{4,16}$")
_ID_ALPHABET = string.ascii_uppercase + string.digits


def application_key(application_id: str) -> str:
    return f"{APPLICATION_KEY_PREFIX}{application_id}"


def generate_application_id(prefix: str, now: datetime) -> str:
    """``<prefix>-<epoch millis>-<random>``, e.g. ``INT-1700000000000-ABC1234``."""
    millis = int(now.timestamp() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(APPLICATION_ID_RANDOM_LENGTH))
    return f"{prefix}-{millis}-{suffix}"


def is_valid_application_id(value: object) -> bool:
    return isinstance(value, str) and bool(_ID_RE.match(value))


@dataclass(frozen=True)
class ApplicationSummary:
    """Read-model for the dashboard header counters."""

    total: int
    not_checked_in: int
    checked_in: int
    checked_out: int

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "notCheckedIn": self.not_checked_in,
            "checkedIn": self.checked_in,
            "checkedOut": self.checked_out,
        }
