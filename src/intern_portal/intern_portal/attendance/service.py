from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Mapping, Optional

from ..applications.model import CHECK_IN_TIME, CHECK_OUT_TIME
from ..applications.repository import ApplicationRepository
from ..common.datetime_utils import now_utc, to_iso
from ..common.validators import require_non_empty
from ..core.constants import RECORD_WRITE_ATTEMPTS
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidTransitionError, NotFoundError, StorageFailure
from .model import AttendanceDuration, attendance_duration, attendance_status

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in/check-out state machine over application records.

    not-checked-in -> checked-in -> checked-out; no skips, no reversal.
    Writes are compare-and-swap on the record's store version: when another
    writer got there first the record is reloaded and the transition is
    validated again, so only one of two racing check-ins can succeed.
    """

    def __init__(self, applications: ApplicationRepository, *, max_attempts: int = RECORD_WRITE_ATTEMPTS):
        self._applications = applications
        self._max_attempts = max(1, int(max_attempts))

    def check_in(self, application_id: str, *, now: Optional[datetime] = None) -> str:
        def guard(record: Mapping) -> None:
            if record.get(CHECK_IN_TIME):
                raise InvalidTransitionError(
                    "Already checked in", field=CHECK_IN_TIME, timestamp=record[CHECK_IN_TIME]
                )

        stamped = self._transition(application_id, CHECK_IN_TIME, guard, now=now)
        logger.info("check-in successful for %s at %s", application_id, stamped)
        return stamped

    def check_out(self, application_id: str, *, now: Optional[datetime] = None) -> str:
        def guard(record: Mapping) -> None:
            if not record.get(CHECK_IN_TIME):
                raise InvalidTransitionError("Not checked in yet")
            if record.get(CHECK_OUT_TIME):
                raise InvalidTransitionError(
                    "Already checked out", field=CHECK_OUT_TIME, timestamp=record[CHECK_OUT_TIME]
                )

        stamped = self._transition(application_id, CHECK_OUT_TIME, guard, now=now)
        logger.info("check-out successful for %s at %s", application_id, stamped)
        return stamped

    def status(self, record: Mapping) -> AttendanceStatus:
        return attendance_status(record)

    def duration(self, record: Mapping) -> Optional[AttendanceDuration]:
        return attendance_duration(record)

    def _transition(
        self,
        application_id: str,
        field: str,
        guard: Callable[[Mapping], None],
        *,
        now: Optional[datetime],
    ) -> str:
        application_id = require_non_empty(application_id, "Application ID")
        stamped = to_iso(now or now_utc())

        for attempt in range(1, self._max_attempts + 1):
            found = self._applications.get_versioned(application_id)
            if found is None:
                raise NotFoundError("Application not found")

            guard(found.value)

            updated = dict(found.value)
            updated[field] = stamped
            if self._applications.save_if_version(updated, found.version):
                return stamped

            logger.warning(
                "concurrent update on %s while setting %s (attempt %d/%d)",
                application_id, field, attempt, self._max_attempts,
            )

        raise StorageFailure(f"Could not save {field} for {application_id}: record kept changing")
