from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .repository import KeyValueStore


class MySQLKeyValueStore(KeyValueStore):
    """Profile store kept in the ``profile_store`` table.

    Several profiles can share one database; every row is scoped by ``profile``.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, profile: str = "default"):
        self._conn_factory = conn_factory
        self._profile = profile

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT value FROM profile_store WHERE profile=%s AND storage_key=%s",
                (self._profile, key),
            )
            row = fetchone(cur)
            return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profile_store(profile, storage_key, value)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE value=VALUES(value)
                """,
                (self._profile, key, value),
            )

    def remove(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM profile_store WHERE profile=%s AND storage_key=%s",
                (self._profile, key),
            )

    def keys(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT storage_key FROM profile_store WHERE profile=%s ORDER BY storage_key",
                (self._profile,),
            )
            return [r["storage_key"] for r in fetchall(cur)]

    def clear(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM profile_store WHERE profile=%s", (self._profile,))
