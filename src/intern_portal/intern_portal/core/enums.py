from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Derived attendance state of an application; never stored."""

    NOT_CHECKED_IN = "not-checked-in"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
