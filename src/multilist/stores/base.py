"""ListStore protocol — flat list primitives plus an atomic batch."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Literal

BatchOp = Literal["delete", "push_right"]


@dataclass(frozen=True)
class BatchCommand:
    """A single mutation recorded inside a :class:`Batch`."""

    op: BatchOp
    key: str
    args: tuple[object, ...] = ()


class Batch:
    """Collects mutations to be applied as one indivisible unit.

    Obtained from :meth:`ListStore.atomic_batch`; nothing reaches the
    store until the ``with`` block exits cleanly.
    """

    def __init__(self) -> None:
        self.commands: list[BatchCommand] = []

    def __len__(self) -> int:
        return len(self.commands)

    def delete(self, key: str) -> Batch:
        self.commands.append(BatchCommand("delete", key))
        return self

    def push_right(self, key: str, *values: str) -> Batch:
        if values:
            self.commands.append(BatchCommand("push_right", key, values))
        return self


def normalize_range(length: int, start: int, end: int) -> tuple[int, int] | None:
    """Translate inclusive, possibly negative bounds into ``(first, last)``.

    Follows Redis ``LRANGE`` rules: negative indices count from the end,
    out-of-range bounds are clamped, and ``None`` means an empty slice.
    """
    if start < 0:
        start += length
    if end < 0:
        end += length
    start = max(start, 0)
    end = min(end, length - 1)
    if start > end:
        return None
    return start, end


class ListStore(ABC):
    """Abstract base for all list backends.

    A store holds flat lists of strings addressed by fully-qualified keys.
    It knows nothing about namespaces, references or nesting; those live in
    :class:`~multilist.nested_list.NestedList`.

    A key that holds no elements does not exist: removing the last element
    of a list removes the key.
    """

    @abstractmethod
    def length(self, key: str) -> int:
        """Return the number of elements, ``0`` if the key is absent."""
        ...

    @abstractmethod
    def range(self, key: str, start: int, end: int) -> list[str]:
        """Return elements ``start`` through ``end`` (both inclusive)."""
        ...

    @abstractmethod
    def index_get(self, key: str, index: int) -> str | None:
        """Return the element at *index*, or ``None`` if out of range."""
        ...

    @abstractmethod
    def index_set(self, key: str, index: int, value: str) -> None:
        """Overwrite the element at *index*.

        Raises:
            StoreError: If *index* is outside the current list.
        """
        ...

    @abstractmethod
    def push_right(self, key: str, *values: str) -> int:
        """Append *values* in order and return the new length."""
        ...

    @abstractmethod
    def trim_last(self, key: str) -> None:
        """Remove the final element.  No-op on an empty list."""
        ...

    @abstractmethod
    def remove_matching(self, key: str, value: str) -> int:
        """Remove every element equal to *value*; return how many were removed."""
        ...

    @abstractmethod
    def delete(self, key: str) -> int:
        """Remove the key and all its elements; return ``1`` if it existed."""
        ...

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return ``True`` if the key holds at least one element."""
        ...

    @abstractmethod
    def list_keys(self, prefix: str = "") -> list[str]:
        """Return every existing key starting with *prefix*."""
        ...

    @abstractmethod
    def execute_batch(self, commands: Sequence[BatchCommand]) -> None:
        """Apply *commands* as a single all-or-nothing transition."""
        ...

    @contextmanager
    def atomic_batch(self) -> Iterator[Batch]:
        """Record mutations inside a ``with`` block and apply them atomically.

        Example::

            with store.atomic_batch() as batch:
                batch.delete("ns:k")
                batch.push_right("ns:k", "a", "b")

        If the block raises, the recorded commands are discarded.
        """
        batch = Batch()
        yield batch
        if batch.commands:
            self.execute_batch(batch.commands)

    def clear_namespace(self, namespace: str) -> int:
        """Delete every key under ``"{namespace}:"``; return how many were removed."""
        keys = self.list_keys(f"{namespace}:")
        if not keys:
            return 0
        with self.atomic_batch() as batch:
            for key in keys:
                batch.delete(key)
        return len(keys)

    def close(self) -> None:  # noqa: B027
        """Release any held connection.  Default is a no-op."""
