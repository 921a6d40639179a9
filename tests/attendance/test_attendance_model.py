from __future__ import annotations

import pytest

from src.intern_portal.intern_portal.attendance.model import (
    AttendanceDuration,
    attendance_duration,
    attendance_status,
    with_attendance_status,
)
from src.intern_portal.intern_portal.core.enums import AttendanceStatus

IN = "2026-02-01T08:30:00.000Z"
OUT = "2026-02-01T17:05:30.000Z"


@pytest.mark.parametrize(
    "record, expected",
    [
        ({}, AttendanceStatus.NOT_CHECKED_IN),
        ({"checkInTime": None, "checkOutTime": None}, AttendanceStatus.NOT_CHECKED_IN),
        ({"checkInTime": IN}, AttendanceStatus.CHECKED_IN),
        ({"checkInTime": IN, "checkOutTime": OUT}, AttendanceStatus.CHECKED_OUT),
    ],
)
def test_status_is_derived_from_timestamps(record, expected):
    assert attendance_status(record) == expected


def test_duration_requires_both_timestamps():
    assert attendance_duration({}) is None
    assert attendance_duration({"checkInTime": IN}) is None


def test_duration_hours_and_remainder_minutes():
    duration = attendance_duration({"checkInTime": IN, "checkOutTime": OUT})

    assert duration == AttendanceDuration(hours=8, minutes=35)
    assert duration.total_minutes == 515
    assert str(duration) == "8h 35m"


def test_duration_accepts_offset_timestamps():
    duration = attendance_duration(
        {"checkInTime": "2026-02-01T14:00:00+05:30", "checkOutTime": "2026-02-01T09:15:00Z"}
    )
    assert duration == AttendanceDuration(hours=0, minutes=45)


def test_annotation_does_not_touch_original():
    record = {"applicationId": "INT-1-A", "checkInTime": IN}

    annotated = with_attendance_status(record)

    assert annotated["attendanceStatus"] == "checked-in"
    assert "attendanceStatus" not in record
