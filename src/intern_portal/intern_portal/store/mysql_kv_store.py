from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import mysql.connector

from ..core.exceptions import StorageFailure
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    decode_json_column,
    encode_json_column,
    escape_like,
    fetchall,
    fetchone,
)
from .repository import KeyValueStore, VersionedValue

logger = logging.getLogger(__name__)


class MySQLKeyValueStore(KeyValueStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[Any]:
        found = self.get_versioned(key)
        return found.value if found else None

    def get_by_prefix(self, prefix: str) -> Sequence[Any]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT kv_value FROM kv_store WHERE kv_key LIKE %s",
                    (escape_like(prefix) + "%",),
                )
                return [decode_json_column(r["kv_value"]) for r in fetchall(cur)]
        except mysql.connector.Error as e:
            logger.error("prefix scan failed for %r: %s", prefix, e)
            raise StorageFailure(f"Failed to read from store: {e}") from e

    def set(self, key: str, value: Any) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO kv_store(kv_key, kv_value, version)
                    VALUES(%s, %s, 1)
                    ON DUPLICATE KEY UPDATE kv_value=VALUES(kv_value), version=version+1
                    """,
                    (key, encode_json_column(value)),
                )
        except mysql.connector.Error as e:
            logger.error("write failed for %r: %s", key, e)
            raise StorageFailure(f"Failed to write to store: {e}") from e

    def get_versioned(self, key: str) -> Optional[VersionedValue]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT kv_value, version FROM kv_store WHERE kv_key=%s",
                    (key,),
                )
                r = fetchone(cur)
        except mysql.connector.Error as e:
            logger.error("read failed for %r: %s", key, e)
            raise StorageFailure(f"Failed to read from store: {e}") from e

        if not r:
            return None
        return VersionedValue(value=decode_json_column(r["kv_value"]), version=int(r["version"]))

    def set_if_version(self, key: str, value: Any, expected_version: int) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE kv_store
                    SET kv_value=%s, version=version+1
                    WHERE kv_key=%s AND version=%s
                    """,
                    (encode_json_column(value), key, int(expected_version)),
                )
                return cur.rowcount > 0
        except mysql.connector.Error as e:
            logger.error("conditional write failed for %r: %s", key, e)
            raise StorageFailure(f"Failed to write to store: {e}") from e
