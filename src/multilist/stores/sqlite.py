"""SQLiteListStore — durable, single-file list storage using sqlite3."""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from multilist.exceptions import StoreError
from multilist.stores.base import BatchCommand, ListStore, normalize_range

T = TypeVar("T")

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS list_store (
    key      TEXT    NOT NULL,
    position INTEGER NOT NULL,
    value    TEXT    NOT NULL,
    PRIMARY KEY (key, position)
)
"""


class SQLiteListStore(ListStore):
    """Persistent store backed by a single SQLite file.

    Each element is one row ``(key, position, value)``; positions of a key
    are always ``0 .. length - 1``.  Every public call and every batch runs
    inside its own transaction.

    Parameters:
        db_path: Path to the SQLite database file.  Use ``":memory:"``
                 for an in-memory database (useful for testing).
    """

    def __init__(self, db_path: str = "multilist.db") -> None:
        self._db_path = db_path
        self._db: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    def _connect(self) -> sqlite3.Connection:
        if self._db is None:
            self._db = sqlite3.connect(self._db_path, check_same_thread=False)
            self._db.execute(_CREATE_TABLE)
            self._db.commit()
        return self._db

    def close(self) -> None:
        with self._lock:
            if self._db:
                self._db.close()
                self._db = None

    def _run(self, operation: str, fn: Callable[..., T], *args: Any) -> T:
        """Run ``fn(db, *args)`` in a transaction, translating driver errors."""
        with self._lock:
            db = self._connect()
            try:
                with db:
                    return fn(db, *args)
            except sqlite3.Error as exc:
                raise StoreError(operation, str(exc)) from exc

    # ── ListStore protocol ───────────────────────────────────

    def length(self, key: str) -> int:
        return self._run("length", _length, key)

    def range(self, key: str, start: int, end: int) -> list[str]:
        return self._run("range", _range, key, start, end)

    def index_get(self, key: str, index: int) -> str | None:
        return self._run("index_get", _index_get, key, index)

    def index_set(self, key: str, index: int, value: str) -> None:
        self._run("index_set", _index_set, key, index, value)

    def push_right(self, key: str, *values: str) -> int:
        return self._run("push_right", _push_right, key, values)

    def trim_last(self, key: str) -> None:
        self._run("trim_last", _trim_last, key)

    def remove_matching(self, key: str, value: str) -> int:
        return self._run("remove_matching", _remove_matching, key, value)

    def delete(self, key: str) -> int:
        return self._run("delete", _delete, key)

    def exists(self, key: str) -> bool:
        return self._run("exists", _exists, key)

    def list_keys(self, prefix: str = "") -> list[str]:
        return self._run("list_keys", _list_keys, prefix)

    def execute_batch(self, commands: Sequence[BatchCommand]) -> None:
        self._run("execute_batch", _apply_all, commands)


# ── statement helpers (run inside an open transaction) ───────


def _length(db: sqlite3.Connection, key: str) -> int:
    row = db.execute("SELECT COUNT(*) FROM list_store WHERE key = ?", (key,)).fetchone()
    return int(row[0])


def _range(db: sqlite3.Connection, key: str, start: int, end: int) -> list[str]:
    bounds = normalize_range(_length(db, key), start, end)
    if bounds is None:
        return []
    cursor = db.execute(
        "SELECT value FROM list_store WHERE key = ? AND position BETWEEN ? AND ? "
        "ORDER BY position",
        (key, bounds[0], bounds[1]),
    )
    return [row[0] for row in cursor.fetchall()]


def _resolve_index(db: sqlite3.Connection, key: str, index: int) -> int | None:
    length = _length(db, key)
    if index < 0:
        index += length
    if 0 <= index < length:
        return index
    return None


def _index_get(db: sqlite3.Connection, key: str, index: int) -> str | None:
    position = _resolve_index(db, key, index)
    if position is None:
        return None
    row = db.execute(
        "SELECT value FROM list_store WHERE key = ? AND position = ?", (key, position)
    ).fetchone()
    return row[0] if row else None


def _index_set(db: sqlite3.Connection, key: str, index: int, value: str) -> None:
    position = _resolve_index(db, key, index)
    if position is None:
        raise StoreError("index_set", f"index {index} out of range for '{key}'")
    db.execute(
        "UPDATE list_store SET value = ? WHERE key = ? AND position = ?", (value, key, position)
    )


def _push_right(db: sqlite3.Connection, key: str, values: Sequence[str]) -> int:
    length = _length(db, key)
    db.executemany(
        "INSERT INTO list_store (key, position, value) VALUES (?, ?, ?)",
        [(key, length + offset, value) for offset, value in enumerate(values)],
    )
    return length + len(values)


def _trim_last(db: sqlite3.Connection, key: str) -> None:
    db.execute(
        "DELETE FROM list_store WHERE key = ? AND position = "
        "(SELECT MAX(position) FROM list_store WHERE key = ?)",
        (key, key),
    )


def _remove_matching(db: sqlite3.Connection, key: str, value: str) -> int:
    cursor = db.execute(
        "SELECT value FROM list_store WHERE key = ? ORDER BY position", (key,)
    )
    values = [row[0] for row in cursor.fetchall()]
    kept = [v for v in values if v != value]
    removed = len(values) - len(kept)
    if removed:
        _delete(db, key)
        _push_right(db, key, kept)
    return removed


def _delete(db: sqlite3.Connection, key: str) -> int:
    cursor = db.execute("DELETE FROM list_store WHERE key = ?", (key,))
    return 1 if cursor.rowcount > 0 else 0


def _exists(db: sqlite3.Connection, key: str) -> bool:
    row = db.execute("SELECT 1 FROM list_store WHERE key = ? LIMIT 1", (key,)).fetchone()
    return row is not None


def _list_keys(db: sqlite3.Connection, prefix: str) -> list[str]:
    cursor = db.execute(
        "SELECT DISTINCT key FROM list_store WHERE substr(key, 1, ?) = ?",
        (len(prefix), prefix),
    )
    return [row[0] for row in cursor.fetchall()]


def _apply_all(db: sqlite3.Connection, commands: Sequence[BatchCommand]) -> None:
    for cmd in commands:
        if cmd.op == "delete":
            _delete(db, cmd.key)
        elif cmd.op == "push_right":
            _push_right(db, cmd.key, cmd.args)  # type: ignore[arg-type]
        else:
            raise StoreError("execute_batch", f"unsupported operation '{cmd.op}'")
