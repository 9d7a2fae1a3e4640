"""ListContext — the store + namespace pair every NestedList operates in."""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any

from multilist.exceptions import ConfigurationError
from multilist.keys import DEFAULT_NAMESPACE, KeyCodec, codec_for
from multilist.stores.base import ListStore


def ensure_store(store: Any) -> ListStore:
    """Return *store* as a :class:`ListStore`.

    Accepts a :class:`ListStore` or a raw ``redis.Redis`` client, which is
    wrapped in a :class:`~multilist.stores.redis_store.RedisListStore`.

    Raises:
        ConfigurationError: If *store* is anything else.
    """
    if store is None:
        raise ConfigurationError("A store handle is required")
    if isinstance(store, ListStore):
        return store

    redis_module = sys.modules.get("redis")
    if redis_module is not None and isinstance(store, redis_module.Redis):
        from multilist.stores.redis_store import RedisListStore

        return RedisListStore(store)

    raise ConfigurationError(
        f"{type(store).__name__} is not a list store; "
        "subclass multilist.stores.ListStore or pass a redis.Redis client"
    )


def ensure_namespace(namespace: Any) -> str:
    if not isinstance(namespace, str) or not namespace:
        raise ConfigurationError(f"Namespace must be a non-empty string, got {namespace!r}")
    return namespace


@dataclass(frozen=True)
class ListContext:
    """Immutable configuration handed to :class:`~multilist.NestedList`.

    Attributes:
        store:     Backend holding the flat lists.  Validated on creation.
        namespace: Prefix isolating this library's keys from other users
                   of the same store.
    """

    store: ListStore
    namespace: str = DEFAULT_NAMESPACE

    def __post_init__(self) -> None:
        object.__setattr__(self, "store", ensure_store(self.store))
        ensure_namespace(self.namespace)

    @property
    def codec(self) -> KeyCodec:
        return codec_for(self.namespace)

    def with_namespace(self, namespace: str) -> ListContext:
        """Return a copy of this context addressing *namespace*."""
        return replace(self, namespace=namespace)
