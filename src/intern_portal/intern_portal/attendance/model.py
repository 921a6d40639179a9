from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..applications.model import ATTENDANCE_STATUS, CHECK_IN_TIME, CHECK_OUT_TIME
from ..common.datetime_utils import parse_iso
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceDuration:
    """Time between check-in and check-out, floored to whole minutes."""

    hours: int
    minutes: int

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def __str__(self) -> str:
        return f"{self.hours}h {self.minutes}m"


def attendance_status(record: Mapping) -> AttendanceStatus:
    """Pure projection of the two timestamps; the status itself is never stored."""
    if record.get(CHECK_OUT_TIME):
        return AttendanceStatus.CHECKED_OUT
    if record.get(CHECK_IN_TIME):
        return AttendanceStatus.CHECKED_IN
    return AttendanceStatus.NOT_CHECKED_IN


def attendance_duration(record: Mapping) -> Optional[AttendanceDuration]:
    check_in = parse_iso(record.get(CHECK_IN_TIME))
    check_out = parse_iso(record.get(CHECK_OUT_TIME))
    if check_in is None or check_out is None:
        return None

    total_minutes = int((check_out - check_in).total_seconds() // 60)
    hours, minutes = divmod(max(total_minutes, 0), 60)
    return AttendanceDuration(hours=hours, minutes=minutes)


def with_attendance_status(record: Mapping) -> dict:
    """Copy of ``record`` annotated with its derived ``attendanceStatus``."""
    annotated = dict(record)
    annotated[ATTENDANCE_STATUS] = attendance_status(record).value
    return annotated
