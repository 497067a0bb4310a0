from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator, List, Optional

from .errors import UpstreamError
from .models import RecordEntity
from .repositories import Repository


class SQLiteRepository(Repository):
    """
    Lightweight SQLite repository implementing the Repository interface.

    A connection is opened per call, so concurrent requests never share one.
    ``sqlite3.Error`` is re-raised as ``UpstreamError`` with the driver message.
    """

    def __init__(self, db_path: str, table: str = "data") -> None:
        if not table.isidentifier():
            raise ValueError(f"Invalid table name: {table!r}")
        try:
            os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        except OSError as e:
            raise UpstreamError(str(e)) from e
        self._db_path = db_path
        self._table = table
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            conn = sqlite3.connect(self._db_path)
        except sqlite3.Error as e:
            raise UpstreamError(str(e)) from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            raise UpstreamError(str(e)) from e
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self._table} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )

    def _row_to_entity(self, row: sqlite3.Row) -> RecordEntity:
        return {
            "id": int(row["id"]),
            "name": str(row["name"]),
            "created_at": datetime.fromisoformat(row["created_at"]),
        }

    def _fetch(self, conn: sqlite3.Connection, record_id: int) -> Optional[sqlite3.Row]:
        return conn.execute(f"SELECT * FROM {self._table} WHERE id = ?", (record_id,)).fetchone()

    def ping(self) -> None:
        with self._conn() as conn:
            conn.execute(f"SELECT COUNT(*) FROM {self._table}").fetchone()

    def list(self) -> List[RecordEntity]:
        with self._conn() as conn:
            rows = conn.execute(f"SELECT * FROM {self._table} ORDER BY id ASC").fetchall()
            return [self._row_to_entity(r) for r in rows]

    def create(self, name: str) -> RecordEntity:
        now = datetime.now(timezone.utc).isoformat()
        with self._conn() as conn:
            cur = conn.execute(
                f"INSERT INTO {self._table} (name, created_at) VALUES (?, ?)",
                (name, now),
            )
            row = self._fetch(conn, cur.lastrowid)
            assert row is not None
            return self._row_to_entity(row)

    def update(self, record_id: int, name: str) -> Optional[RecordEntity]:
        with self._conn() as conn:
            conn.execute(f"UPDATE {self._table} SET name = ? WHERE id = ?", (name, record_id))
            row = self._fetch(conn, record_id)
            return self._row_to_entity(row) if row else None

    def delete(self, record_id: int) -> None:
        with self._conn() as conn:
            conn.execute(f"DELETE FROM {self._table} WHERE id = ?", (record_id,))
