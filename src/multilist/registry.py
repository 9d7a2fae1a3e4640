"""Process-wide default store and namespace.

NestedList handles created without an explicit :class:`ListContext` read
this registry on every operation, so a namespace change applies to all
subsequent calls.  Data already stored under the old namespace is not
migrated, and reference tokens written earlier keep their old prefix.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from multilist.context import ListContext, ensure_namespace, ensure_store
from multilist.exceptions import NotConfiguredError
from multilist.keys import DEFAULT_NAMESPACE

if TYPE_CHECKING:
    from multilist.nested_list import NestedList
    from multilist.stores.base import ListStore

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_store: ListStore | None = None
_namespace: str = DEFAULT_NAMESPACE


def configure_store(store: Any) -> ListStore:
    """Install *store* as the process-wide default and return it.

    Raises:
        ConfigurationError: If *store* is neither a ListStore nor a redis.Redis client.
    """
    global _store
    validated = ensure_store(store)
    with _lock:
        _store = validated
    logger.debug("Configured store %s", type(validated).__name__)
    return validated


def current_store() -> ListStore:
    """Return the configured store.

    Raises:
        NotConfiguredError: If :func:`configure_store` has not been called.
    """
    with _lock:
        if _store is None:
            raise NotConfiguredError()
        return _store


def set_namespace(namespace: str) -> None:
    global _namespace
    ensure_namespace(namespace)
    with _lock:
        _namespace = namespace
    logger.debug("Namespace set to '%s'", namespace)


def current_namespace() -> str:
    with _lock:
        return _namespace


def default_context() -> ListContext:
    """Snapshot the registry as a :class:`ListContext`."""
    with _lock:
        return ListContext(store=current_store(), namespace=_namespace)


def reset() -> None:
    """Forget the configured store and restore the default namespace."""
    global _store, _namespace
    with _lock:
        _store = None
        _namespace = DEFAULT_NAMESPACE


def get_list(key: str | None = None) -> NestedList:
    """Return a handle for *key* (or a freshly generated key).

    Raises:
        NotConfiguredError: If no store has been configured.
    """
    from multilist.nested_list import NestedList

    current_store()
    return NestedList(key)
