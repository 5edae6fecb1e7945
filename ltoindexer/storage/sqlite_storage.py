"""
SQLite storage backend for the LTO Chain Indexer.

This module provides the embedded, persistent backend. Documents and scalar
values share a key-value table, sets are stored one row per member, and the
ranked transaction index relies on an AUTOINCREMENT id as its rank so ranks
are strictly increasing across all sequences.

sqlite3 is blocking, so every statement runs in a worker thread.
"""

import asyncio
import json
import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Any

from ltoindexer.core.errors import StorageUnavailable
from ltoindexer.storage.base import StorageInterface

logger = logging.getLogger(__name__)


class SQLiteStorage(StorageInterface):
    """
    SQLite storage backend.

    A single connection is shared between worker threads and guarded by a lock;
    the indexer is the only writer.
    """

    name = "sqlite"

    def __init__(self, database_path: str = "lto-index.db"):
        """
        Initialize the SQLite backend.
        
        Args:
            database_path: Path to the SQLite database file (":memory:" for a private in-memory database)
        """
        if ".." in database_path:
            raise ValueError(f"Security: Invalid database path '{database_path}'. Path traversal detected.")

        self.database_path = database_path
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(database_path, check_same_thread=False)
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to open SQLite database {database_path}: {e}", backend=self.name)
        self._initialize_database()

    def _initialize_database(self) -> None:
        """Initialize the database schema."""
        with self._cursor() as cursor:
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS sets (
                    key TEXT NOT NULL,
                    member TEXT NOT NULL,
                    PRIMARY KEY (key, member)
                )
            """)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS tx_index (
                    rank INTEGER PRIMARY KEY AUTOINCREMENT,
                    tx_type TEXT NOT NULL,
                    address TEXT NOT NULL,
                    transaction_id TEXT NOT NULL,
                    timestamp INTEGER NOT NULL,
                    UNIQUE (tx_type, address, transaction_id)
                )
            """)
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_tx_index_sequence ON tx_index (tx_type, address, rank)")

    @contextmanager
    def _cursor(self):
        """Cursor inside a transaction; sqlite errors become StorageUnavailable."""
        with self._lock:
            try:
                with self._conn:
                    yield self._conn.cursor()
            except sqlite3.Error as e:
                logger.error(f"SQLite operation failed on {self.database_path}: {e}")
                raise StorageUnavailable(f"SQLite operation failed: {e}", backend=self.name)

    def _fetchone(self, sql: str, params: tuple = ()) -> tuple | None:
        with self._cursor() as cursor:
            return cursor.execute(sql, params).fetchone()

    def _fetchall(self, sql: str, params: tuple = ()) -> list[tuple]:
        with self._cursor() as cursor:
            return cursor.execute(sql, params).fetchall()

    def _execute(self, sql: str, params: tuple = ()) -> None:
        with self._cursor() as cursor:
            cursor.execute(sql, params)

    async def _run(self, func, *args):
        return await asyncio.to_thread(func, *args)

    async def get_object(self, key: str) -> dict[str, Any]:
        row = await self._run(self._fetchone, "SELECT value FROM kv WHERE key = ?", (key,))
        return json.loads(row[0]) if row else {}

    async def add_object(self, key: str, value: dict[str, Any]) -> None:
        await self.set_value(key, json.dumps(value))

    async def get_value(self, key: str) -> str | None:
        row = await self._run(self._fetchone, "SELECT value FROM kv WHERE key = ?", (key,))
        return row[0] if row else None

    async def set_value(self, key: str, value: str) -> None:
        await self._run(self._execute, "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, str(value)))

    async def del_value(self, key: str) -> None:
        await self._run(self._execute, "DELETE FROM kv WHERE key = ?", (key,))

    async def sadd(self, key: str, member: str) -> None:
        await self._run(self._execute, "INSERT OR IGNORE INTO sets (key, member) VALUES (?, ?)", (key, member))

    async def srem(self, key: str, member: str) -> None:
        await self._run(self._execute, "DELETE FROM sets WHERE key = ? AND member = ?", (key, member))

    async def get_array(self, key: str) -> list[str]:
        rows = await self._run(self._fetchall, "SELECT member FROM sets WHERE key = ? ORDER BY rowid", (key,))
        return [row[0] for row in rows]

    def _incr(self, key: str) -> int:
        with self._cursor() as cursor:
            cursor.execute("INSERT OR IGNORE INTO kv (key, value) VALUES (?, '0')", (key,))
            cursor.execute("UPDATE kv SET value = CAST(value AS INTEGER) + 1 WHERE key = ?", (key,))
            return int(cursor.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()[0])

    async def incr_value(self, key: str) -> int:
        return await self._run(self._incr, key)

    async def get_multiple_values(self, keys: list[str]) -> list[str | None]:
        if not keys:
            return []
        placeholders = ", ".join("?" for _ in keys)
        rows = await self._run(self._fetchall, f"SELECT key, value FROM kv WHERE key IN ({placeholders})", tuple(keys))
        found = dict(rows)
        return [found.get(key) for key in keys]

    async def index_tx(self, tx_type: str, address: str, transaction_id: str, timestamp: int) -> None:
        await self._run(
            self._execute,
            "INSERT OR IGNORE INTO tx_index (tx_type, address, transaction_id, timestamp) VALUES (?, ?, ?, ?)",
            (tx_type, address, transaction_id, int(timestamp))
        )

    async def get_tx(self, tx_type: str, address: str, limit: int, offset: int) -> list[str]:
        rows = await self._run(
            self._fetchall,
            "SELECT transaction_id FROM tx_index WHERE tx_type = ? AND address = ? ORDER BY rank LIMIT ? OFFSET ?",
            (tx_type, address, int(limit), int(offset))
        )
        return [row[0] for row in rows]

    async def count_tx(self, tx_type: str, address: str) -> int:
        row = await self._run(
            self._fetchone,
            "SELECT COUNT(*) FROM tx_index WHERE tx_type = ? AND address = ?",
            (tx_type, address)
        )
        return int(row[0])

    async def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.info(f"SQLite database {self.database_path} closed")
