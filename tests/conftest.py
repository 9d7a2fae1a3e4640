"""Shared test fixtures."""

import pytest

from multilist import ListContext, registry
from multilist.stores import InMemoryListStore, SQLiteListStore


@pytest.fixture(autouse=True)
def _reset_registry():
    registry.reset()
    yield
    registry.reset()


@pytest.fixture
def store():
    return InMemoryListStore()


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request):
    if request.param == "sqlite":
        s = SQLiteListStore(":memory:")
        yield s
        s.close()
    else:
        yield InMemoryListStore()


@pytest.fixture
def ctx(any_store):
    return ListContext(store=any_store, namespace="ns")


@pytest.fixture
def configured(store):
    """Install the in-memory store as the process-wide default."""
    registry.configure_store(store)
    return store
