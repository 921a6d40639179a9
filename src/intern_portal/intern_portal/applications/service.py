from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from typing import Any, Mapping, Optional

from ..attendance.model import attendance_status, with_attendance_status
from ..common.datetime_utils import now_utc, parse_iso, to_iso
from ..common.validators import require_email, require_fields, require_non_empty
from ..core.constants import RECORD_WRITE_ATTEMPTS, DEFAULT_APPLICATION_ID_PREFIX
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateApplicationError, NotFoundError, StorageFailure, ValidationError
from .model import (
    APPLICANT_NAME,
    APPLICATION_ID,
    COMMENTS,
    LAST_COMMENT_UPDATE,
    PHONE,
    REQUIRED_FIELDS,
    SEARCHABLE_FIELDS,
    SERVER_MANAGED_FIELDS,
    SUBMITTED_AT,
    TEST_MODE,
    ApplicationSummary,
    generate_application_id,
    is_valid_application_id,
)
from .repository import ApplicationRepository

logger = logging.getLogger(__name__)


def _submitted_sort_key(record: Mapping) -> float:
    submitted = parse_iso(record.get(SUBMITTED_AT))
    return submitted.timestamp() if submitted else 0.0


class ApplicationService:
    """Use cases: submit, list, look up and annotate applications."""

    def __init__(
        self,
        applications: ApplicationRepository,
        *,
        id_prefix: str = DEFAULT_APPLICATION_ID_PREFIX,
        max_attempts: int = RECORD_WRITE_ATTEMPTS,
    ):
        self._applications = applications
        self._id_prefix = id_prefix
        self._max_attempts = max(1, int(max_attempts))

    def submit(self, data: Mapping[str, Any], *, now: Optional[datetime] = None) -> dict:
        now = now or now_utc()
        require_fields(data, REQUIRED_FIELDS)
        require_email(data.get("email"))

        test_mode = bool(data.get(TEST_MODE))
        phone = require_non_empty(data.get(PHONE), REQUIRED_FIELDS[PHONE])

        if not test_mode and self._applications.phone_exists(phone):
            logger.info("duplicate phone number rejected: %s", phone)
            raise DuplicateApplicationError(
                "This phone number is already registered. Please use a different phone number."
            )

        application_id = data.get(APPLICATION_ID)
        if application_id is None or application_id == "":
            application_id = generate_application_id(self._id_prefix, now)
        elif not is_valid_application_id(application_id):
            raise ValidationError("Application ID is malformed")
        elif self._applications.get(application_id) is not None:
            raise DuplicateApplicationError("Application ID already exists")

        record = {k: v for k, v in data.items() if k not in SERVER_MANAGED_FIELDS}
        record[APPLICATION_ID] = application_id
        record[PHONE] = phone
        if not str(record.get(APPLICANT_NAME) or "").strip():
            record[APPLICANT_NAME] = f"{str(data['firstName']).strip()} {str(data['lastName']).strip()}"
        record[SUBMITTED_AT] = to_iso(now)

        self._applications.save(record)
        logger.info("application stored: %s%s", application_id, " (test mode)" if test_mode else "")
        return record

    def list_applications(self, *, status: Optional[str] = None, search: Optional[str] = None) -> list[dict]:
        wanted_status = None
        if status:
            try:
                wanted_status = AttendanceStatus(status)
            except ValueError:
                raise ValidationError(f"Unknown attendance status: {status}")

        needle = (search or "").strip().lower()

        rows = []
        for record in self._applications.list_all():
            if wanted_status is not None and attendance_status(record) != wanted_status:
                continue
            if needle and not any(needle in str(record.get(f) or "").lower() for f in SEARCHABLE_FIELDS):
                continue
            rows.append(with_attendance_status(record))

        rows.sort(key=_submitted_sort_key, reverse=True)
        return rows

    def get_application(self, application_id: str) -> dict:
        record = self._applications.get(require_non_empty(application_id, "Application ID"))
        if record is None:
            raise NotFoundError("Application not found")
        return with_attendance_status(record)

    def save_comments(self, application_id: str, comments: Optional[str], *, now: Optional[datetime] = None) -> dict:
        """Set ``comments``/``lastCommentUpdate`` without clobbering a concurrent attendance write."""
        application_id = require_non_empty(application_id, "Application ID")
        stamped = to_iso(now or now_utc())

        for attempt in range(1, self._max_attempts + 1):
            found = self._applications.get_versioned(application_id)
            if found is None:
                raise NotFoundError("Application not found")

            updated = dict(found.value)
            updated[COMMENTS] = comments or ""
            updated[LAST_COMMENT_UPDATE] = stamped
            if self._applications.save_if_version(updated, found.version):
                logger.info("comments saved for %s", application_id)
                return updated

            logger.warning(
                "concurrent update on %s while saving comments (attempt %d/%d)",
                application_id, attempt, self._max_attempts,
            )

        raise StorageFailure(f"Could not save comments for {application_id}: record kept changing")

    def summary(self) -> ApplicationSummary:
        counts = Counter(attendance_status(r) for r in self._applications.list_all())
        return ApplicationSummary(
            total=sum(counts.values()),
            not_checked_in=counts[AttendanceStatus.NOT_CHECKED_IN],
            checked_in=counts[AttendanceStatus.CHECKED_IN],
            checked_out=counts[AttendanceStatus.CHECKED_OUT],
        )
