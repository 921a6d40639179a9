from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import APPLICATION_KEY_PREFIX
from ..store.repository import KeyValueStore, VersionedValue
from .model import APPLICATION_ID, PHONE, application_key


class ApplicationRepository:
    """Application records on top of the key-value store (``application:<id>`` keys)."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def get(self, application_id: str) -> Optional[dict]:
        return self._store.get(application_key(application_id))

    def get_versioned(self, application_id: str) -> Optional[VersionedValue]:
        return self._store.get_versioned(application_key(application_id))

    def list_all(self) -> Sequence[dict]:
        return list(self._store.get_by_prefix(APPLICATION_KEY_PREFIX))

    def save(self, record: dict) -> None:
        self._store.set(application_key(record[APPLICATION_ID]), record)

    def save_if_version(self, record: dict, expected_version: int) -> bool:
        return self._store.set_if_version(application_key(record[APPLICATION_ID]), record, expected_version)

    def phone_exists(self, phone: str) -> bool:
        wanted = phone.strip()
        return any(str(r.get(PHONE) or "").strip() == wanted for r in self.list_all())
