"""InMemoryListStore — zero-config, dict-backed lists for development and testing."""

from __future__ import annotations

import threading
from collections.abc import MutableMapping, Sequence

from multilist.exceptions import StoreError
from multilist.stores.base import BatchCommand, ListStore, normalize_range


class InMemoryListStore(ListStore):
    """In-memory store using a dict of Python lists.  Data is lost on process exit.

    All operations, including batches, run under one re-entrant lock, so a
    batch is never observed half-applied by another thread.
    """

    def __init__(self) -> None:
        self._data: dict[str, list[str]] = {}
        self._lock = threading.RLock()

    # ── ListStore protocol ───────────────────────────────────

    def length(self, key: str) -> int:
        with self._lock:
            return len(self._data.get(key, ()))

    def range(self, key: str, start: int, end: int) -> list[str]:
        with self._lock:
            values = self._data.get(key, [])
            bounds = normalize_range(len(values), start, end)
            if bounds is None:
                return []
            return values[bounds[0] : bounds[1] + 1]

    def index_get(self, key: str, index: int) -> str | None:
        with self._lock:
            values = self._data.get(key, [])
            if -len(values) <= index < len(values):
                return values[index]
            return None

    def index_set(self, key: str, index: int, value: str) -> None:
        with self._lock:
            _index_set(self._data, key, index, value)

    def push_right(self, key: str, *values: str) -> int:
        with self._lock:
            return _push_right(self._data, key, values)

    def trim_last(self, key: str) -> None:
        with self._lock:
            _trim_last(self._data, key)

    def remove_matching(self, key: str, value: str) -> int:
        with self._lock:
            return _remove_matching(self._data, key, value)

    def delete(self, key: str) -> int:
        with self._lock:
            return 1 if self._data.pop(key, None) is not None else 0

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def list_keys(self, prefix: str = "") -> list[str]:
        with self._lock:
            return [key for key in self._data if key.startswith(prefix)]

    def execute_batch(self, commands: Sequence[BatchCommand]) -> None:
        with self._lock:
            touched = {cmd.key for cmd in commands}
            staged = {key: list(self._data[key]) for key in touched if key in self._data}
            for cmd in commands:
                _apply(staged, cmd)
            for key in touched:
                if key in staged:
                    self._data[key] = staged[key]
                else:
                    self._data.pop(key, None)


# ── helpers operating on any key -> list mapping ─────────────


def _index_set(data: MutableMapping[str, list[str]], key: str, index: int, value: str) -> None:
    values = data.get(key)
    if values is None or not -len(values) <= index < len(values):
        raise StoreError("index_set", f"index {index} out of range for '{key}'")
    values[index] = value


def _push_right(data: MutableMapping[str, list[str]], key: str, values: Sequence[str]) -> int:
    if not values:
        return len(data.get(key, ()))
    target = data.setdefault(key, [])
    target.extend(values)
    return len(target)


def _trim_last(data: MutableMapping[str, list[str]], key: str) -> None:
    values = data.get(key)
    if not values:
        return
    values.pop()
    if not values:
        del data[key]


def _remove_matching(data: MutableMapping[str, list[str]], key: str, value: str) -> int:
    values = data.get(key)
    if not values:
        return 0
    kept = [v for v in values if v != value]
    removed = len(values) - len(kept)
    if kept:
        data[key] = kept
    else:
        del data[key]
    return removed


def _apply(data: MutableMapping[str, list[str]], cmd: BatchCommand) -> None:
    if cmd.op == "delete":
        data.pop(cmd.key, None)
    elif cmd.op == "push_right":
        _push_right(data, cmd.key, cmd.args)  # type: ignore[arg-type]
    else:
        raise StoreError("execute_batch", f"unsupported operation '{cmd.op}'")
