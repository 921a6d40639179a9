from __future__ import annotations

from datetime import timedelta

import pytest

from src.intern_portal.intern_portal.applications.repository import ApplicationRepository
from src.intern_portal.intern_portal.attendance.model import AttendanceDuration
from src.intern_portal.intern_portal.attendance.service import AttendanceService
from src.intern_portal.intern_portal.core.enums import AttendanceStatus
from src.intern_portal.intern_portal.core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    StorageFailure,
    ValidationError,
)

APP_ID = "INT-1700000000000-ABC1234"


@pytest.fixture
def repo(store) -> ApplicationRepository:
    repo = ApplicationRepository(store)
    repo.save({"applicationId": APP_ID, "applicantName": "Asha Rao", "submittedAt": "2026-01-31T10:00:00.000Z"})
    return repo


def test_check_in_stamps_time_and_persists(repo, fixed_now):
    svc = AttendanceService(repo)

    stamped = svc.check_in(APP_ID, now=fixed_now)

    assert stamped == "2026-02-01T08:30:00.000Z"
    record = repo.get(APP_ID)
    assert record["checkInTime"] == stamped
    assert record["applicantName"] == "Asha Rao"
    assert svc.status(record) == AttendanceStatus.CHECKED_IN


def test_second_check_in_fails_and_keeps_original_time(repo, fixed_now):
    svc = AttendanceService(repo)
    first = svc.check_in(APP_ID, now=fixed_now)

    with pytest.raises(InvalidTransitionError) as exc:
        svc.check_in(APP_ID, now=fixed_now + timedelta(minutes=5))

    assert "Already checked in" in str(exc.value)
    assert exc.value.timestamp == first
    assert repo.get(APP_ID)["checkInTime"] == first


def test_check_out_before_check_in_mutates_nothing(repo, store, fixed_now):
    svc = AttendanceService(repo)
    before = repo.get(APP_ID)
    writes = store.writes

    with pytest.raises(InvalidTransitionError) as exc:
        svc.check_out(APP_ID, now=fixed_now)

    assert "Not checked in yet" in str(exc.value)
    assert repo.get(APP_ID) == before
    assert store.writes == writes


def test_check_out_twice_fails_with_existing_time(repo, fixed_now):
    svc = AttendanceService(repo)
    svc.check_in(APP_ID, now=fixed_now)
    out = svc.check_out(APP_ID, now=fixed_now + timedelta(hours=1))

    with pytest.raises(InvalidTransitionError) as exc:
        svc.check_out(APP_ID, now=fixed_now + timedelta(hours=2))

    assert exc.value.timestamp == out
    assert svc.status(repo.get(APP_ID)) == AttendanceStatus.CHECKED_OUT


def test_check_in_after_check_out_is_rejected(repo, fixed_now):
    svc = AttendanceService(repo)
    svc.check_in(APP_ID, now=fixed_now)
    svc.check_out(APP_ID, now=fixed_now + timedelta(hours=1))

    with pytest.raises(InvalidTransitionError):
        svc.check_in(APP_ID, now=fixed_now + timedelta(hours=2))


def test_unknown_application_is_not_found(repo, fixed_now):
    svc = AttendanceService(repo)
    with pytest.raises(NotFoundError):
        svc.check_in("INT-1700000000000-NOPE000", now=fixed_now)
    with pytest.raises(NotFoundError):
        svc.check_out("INT-1700000000000-NOPE000", now=fixed_now)


def test_missing_application_id_is_validation_error(repo):
    with pytest.raises(ValidationError):
        AttendanceService(repo).check_in("")


def test_duration_is_floored_to_whole_minutes(repo, fixed_now):
    svc = AttendanceService(repo)
    svc.check_in(APP_ID, now=fixed_now)
    svc.check_out(APP_ID, now=fixed_now + timedelta(hours=2, minutes=35, seconds=59))

    assert svc.duration(repo.get(APP_ID)) == AttendanceDuration(hours=2, minutes=35)


class RacingStore:
    """Wraps a store so that another writer sneaks in before the first conditional write."""

    def __init__(self, inner, sneak):
        self._inner = inner
        self._sneak = sneak
        self.raced = False

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def set_if_version(self, key, value, expected_version):
        if not self.raced:
            self.raced = True
            self._sneak(self._inner, key)
        return self._inner.set_if_version(key, value, expected_version)


def test_racing_check_in_loses_to_concurrent_check_in(store, fixed_now):
    ApplicationRepository(store).save({"applicationId": APP_ID})

    def other_check_in(inner, key):
        record = inner.get(key)
        record["checkInTime"] = "2026-02-01T08:29:59.000Z"
        inner.set(key, record)

    repo = ApplicationRepository(RacingStore(store, other_check_in))

    with pytest.raises(InvalidTransitionError) as exc:
        AttendanceService(repo).check_in(APP_ID, now=fixed_now)

    assert exc.value.timestamp == "2026-02-01T08:29:59.000Z"
    assert store.get("application:" + APP_ID)["checkInTime"] == "2026-02-01T08:29:59.000Z"


def test_check_in_retries_after_unrelated_concurrent_write(store, fixed_now):
    ApplicationRepository(store).save({"applicationId": APP_ID})

    def other_comment(inner, key):
        record = inner.get(key)
        record["comments"] = "arrived early"
        inner.set(key, record)

    repo = ApplicationRepository(RacingStore(store, other_comment))
    stamped = AttendanceService(repo).check_in(APP_ID, now=fixed_now)

    saved = store.get("application:" + APP_ID)
    assert saved["checkInTime"] == stamped
    assert saved["comments"] == "arrived early"


def test_gives_up_when_record_keeps_changing(store, fixed_now):
    ApplicationRepository(store).save({"applicationId": APP_ID})

    class AlwaysConflicting:
        def __getattr__(self, name):
            return getattr(store, name)

        def set_if_version(self, key, value, expected_version):
            return False

    with pytest.raises(StorageFailure):
        AttendanceService(ApplicationRepository(AlwaysConflicting()), max_attempts=2).check_in(APP_ID, now=fixed_now)
