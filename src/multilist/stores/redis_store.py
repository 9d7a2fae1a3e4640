"""RedisListStore — list storage on a Redis server via redis-py."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

try:
    import redis
except ImportError as exc:
    raise ImportError(
        "RedisListStore requires the 'redis' package. "
        "Install it with: pip install multilist[redis]"
    ) from exc

from multilist.exceptions import StoreError
from multilist.stores.base import BatchCommand, ListStore

_GLOB_SPECIALS = "\\*?[]"


def _s(value: Any) -> str:
    return value.decode("utf-8") if isinstance(value, (bytes, bytearray)) else str(value)


def _escape_glob(prefix: str) -> str:
    return "".join(f"\\{ch}" if ch in _GLOB_SPECIALS else ch for ch in prefix)


class RedisListStore(ListStore):
    """Store backed by native Redis lists.

    Every primitive maps onto one Redis command (``LLEN``, ``LRANGE``,
    ``LINDEX``, ``LSET``, ``RPUSH``, ``LTRIM``, ``LREM``, ``DEL``,
    ``EXISTS``); batches run in a ``MULTI``/``EXEC`` pipeline.

    Parameters:
        client: An existing ``redis.Redis`` client.  Responses may be bytes
                or str; both are handled.
        url:    Connection URL used to build a client when *client* is
                omitted (e.g. ``"redis://localhost:6379/0"``).
    """

    def __init__(self, client: redis.Redis | None = None, *, url: str | None = None) -> None:
        if client is None:
            client = redis.Redis.from_url(url) if url else redis.Redis()
        self._client = client

    @property
    def client(self) -> redis.Redis:
        return self._client

    def close(self) -> None:
        self._client.close()

    def _call(self, operation: str, command: str, *args: Any) -> Any:
        try:
            return getattr(self._client, command)(*args)
        except redis.RedisError as exc:
            raise StoreError(operation, str(exc)) from exc

    # ── ListStore protocol ───────────────────────────────────

    def length(self, key: str) -> int:
        return int(self._call("length", "llen", key))

    def range(self, key: str, start: int, end: int) -> list[str]:
        return [_s(v) for v in self._call("range", "lrange", key, start, end)]

    def index_get(self, key: str, index: int) -> str | None:
        value = self._call("index_get", "lindex", key, index)
        return None if value is None else _s(value)

    def index_set(self, key: str, index: int, value: str) -> None:
        self._call("index_set", "lset", key, index, value)

    def push_right(self, key: str, *values: str) -> int:
        if not values:
            return self.length(key)
        return int(self._call("push_right", "rpush", key, *values))

    def trim_last(self, key: str) -> None:
        self._call("trim_last", "ltrim", key, 0, -2)

    def remove_matching(self, key: str, value: str) -> int:
        return int(self._call("remove_matching", "lrem", key, 0, value))

    def delete(self, key: str) -> int:
        return int(self._call("delete", "delete", key))

    def exists(self, key: str) -> bool:
        return bool(self._call("exists", "exists", key))

    def list_keys(self, prefix: str = "") -> list[str]:
        try:
            return [_s(k) for k in self._client.scan_iter(match=f"{_escape_glob(prefix)}*")]
        except redis.RedisError as exc:
            raise StoreError("list_keys", str(exc)) from exc

    def execute_batch(self, commands: Sequence[BatchCommand]) -> None:
        try:
            with self._client.pipeline(transaction=True) as pipe:
                for cmd in commands:
                    if cmd.op == "delete":
                        pipe.delete(cmd.key)
                    elif cmd.op == "push_right":
                        pipe.rpush(cmd.key, *cmd.args)
                    else:
                        raise StoreError("execute_batch", f"unsupported operation '{cmd.op}'")
                pipe.execute()
        except redis.RedisError as exc:
            raise StoreError("execute_batch", str(exc)) from exc
