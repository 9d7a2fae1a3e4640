"""Storage backends holding the flat lists behind every NestedList."""

from multilist.stores.base import Batch, BatchCommand, ListStore
from multilist.stores.memory import InMemoryListStore
from multilist.stores.sqlite import SQLiteListStore

__all__ = ["Batch", "BatchCommand", "InMemoryListStore", "ListStore", "SQLiteListStore"]
