from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import ANNOUNCEMENT_KEY
from ..store.repository import KeyValueStore

logger = logging.getLogger(__name__)


class AnnouncementService:
    """Free-text banner shown on the public application form."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def get(self) -> str:
        text = self._store.get(ANNOUNCEMENT_KEY)
        return text if isinstance(text, str) else ""

    def save(self, text: Optional[str]) -> str:
        text = "" if text is None else str(text)
        self._store.set(ANNOUNCEMENT_KEY, text)
        logger.info("announcement saved (%d chars)", len(text))
        return text
