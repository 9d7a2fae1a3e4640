"""Tests for SQLiteListStore specifics."""

import sqlite3

import pytest

from multilist import ListContext, NestedList, StoreError
from multilist.stores import SQLiteListStore


def test_data_survives_reopen(tmp_path):
    path = str(tmp_path / "lists.db")
    store = SQLiteListStore(path)
    outer = NestedList("outer", context=ListContext(store=store, namespace="ns"))
    outer.append_many(["a", ["b", "c"]])
    store.close()

    reopened = SQLiteListStore(path)
    outer = NestedList("outer", context=ListContext(store=reopened, namespace="ns"))
    assert outer.to_flat_array() == ["a", ["b", "c"]]
    reopened.close()


def test_close_is_idempotent():
    store = SQLiteListStore(":memory:")
    store.push_right("k", "a")
    store.close()
    store.close()


def test_positions_stay_contiguous_after_removal():
    store = SQLiteListStore(":memory:")
    store.push_right("k", "x", "a", "x", "b")
    store.remove_matching("k", "x")
    store.push_right("k", "c")
    assert store.range("k", 0, -1) == ["a", "b", "c"]
    assert store.index_get("k", 2) == "c"


def test_driver_errors_become_store_errors(monkeypatch):
    store = SQLiteListStore(":memory:")
    store.push_right("k", "a")

    class BrokenConnection:
        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def execute(self, *args, **kwargs):
            raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(store, "_db", BrokenConnection())
    with pytest.raises(StoreError) as exc_info:
        store.length("k")
    assert exc_info.value.operation == "length"
    assert "disk I/O error" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)
