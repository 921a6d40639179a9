from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Optional

import pytest

from src.intern_portal.intern_portal.store.repository import VersionedValue


class InMemoryKeyValueStore:
    """Dict-backed stand-in for the MySQL store; values are deep-copied like a JSON round trip."""

    def __init__(self):
        self._data: dict[str, tuple[Any, int]] = {}
        self.writes = 0

    def get(self, key: str) -> Optional[Any]:
        found = self._data.get(key)
        return copy.deepcopy(found[0]) if found else None

    def get_by_prefix(self, prefix: str):
        return [copy.deepcopy(v) for k, (v, _) in self._data.items() if k.startswith(prefix)]

    def set(self, key: str, value: Any) -> None:
        version = self._data[key][1] + 1 if key in self._data else 1
        self._data[key] = (copy.deepcopy(value), version)
        self.writes += 1

    def get_versioned(self, key: str) -> Optional[VersionedValue]:
        found = self._data.get(key)
        if not found:
            return None
        return VersionedValue(value=copy.deepcopy(found[0]), version=found[1])

    def set_if_version(self, key: str, value: Any, expected_version: int) -> bool:
        found = self._data.get(key)
        if not found or found[1] != expected_version:
            return False
        self.set(key, value)
        return True


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def app(monkeypatch, tmp_path, store):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.intern_portal.intern_portal.main import create_app

    flask_app = create_app(store=store, overrides={"UPLOAD_FOLDER": str(tmp_path / "uploads")})
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": "Bearer test-token"}
