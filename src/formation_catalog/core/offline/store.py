"""Persistent key-value string stores for the offline cache."""

import sqlite3
import time
from pathlib import Path

from loguru import logger

from formation_catalog.core.database.schema import migrate_schema


class StoreWriteError(Exception):
    """The store rejected a write (quota exceeded, disk full, I/O error)."""


class SqliteBlobStore:
    """String values in a single SQLite table, with an optional byte quota.

    The quota applies to the UTF-8 size of all stored values together, the way
    browser storage rejects writes past its limit.
    """

    def __init__(self, conn: sqlite3.Connection, *, max_bytes: int | None = None) -> None:
        self.conn = conn
        self.max_bytes = max_bytes
        migrate_schema(conn)

    @classmethod
    def open(cls, db_path: Path, *, max_bytes: int | None = None) -> "SqliteBlobStore":
        db_path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Opening blob store {}", db_path)
        return cls(sqlite3.connect(str(db_path)), max_bytes=max_bytes)

    def close(self) -> None:
        self.conn.close()

    def get(self, key: str) -> str | None:
        row = self.conn.execute("SELECT value FROM blobs WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        if self.max_bytes is not None:
            others = self.conn.execute(
                "SELECT COALESCE(SUM(LENGTH(CAST(value AS BLOB))), 0) FROM blobs WHERE key != ?",
                (key,),
            ).fetchone()[0]
            needed = others + len(value.encode("utf-8"))
            if needed > self.max_bytes:
                msg = f"Quota exceeded: {needed} bytes > {self.max_bytes}"
                raise StoreWriteError(msg)

        now_ms = int(time.time() * 1000)
        try:
            self.conn.execute(
                "INSERT OR REPLACE INTO blobs (key, value, updated_at) VALUES (?, ?, ?)",
                (key, value, now_ms),
            )
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            msg = f"Failed to write {key!r}: {e}"
            raise StoreWriteError(msg) from e

    def remove(self, key: str) -> None:
        self.conn.execute("DELETE FROM blobs WHERE key = ?", (key,))
        self.conn.commit()
