"""NestedList — an arbitrarily nested list persisted as flat store lists."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, TypeAlias

from multilist import registry
from multilist._internal.values import is_sequence, is_string_convertible, to_plain_string
from multilist.context import ListContext
from multilist.exceptions import TypeNotStorableError
from multilist.keys import codec_for

logger = logging.getLogger(__name__)

Element: TypeAlias = "str | NestedList"


def generate_key() -> str:
    """Return a random 32-character hex key."""
    return secrets.token_hex(16)


class NestedList:
    """Array-like handle on one backing list.

    A handle is only a logical key plus an optional :class:`ListContext`;
    it holds no data.  Each slot of the backing list is either a plain
    string or a reference token pointing at another list, which reads
    back as a new ``NestedList`` handle.  Nesting is always by reference:
    storing a Python list creates an anonymous sublist and stores its
    token.

    When *context* is omitted the handle uses the process-wide registry
    (see :mod:`multilist.registry`), re-read on every operation.

    Parameters:
        key:     Logical key.  A random hex key is generated when omitted.
        context: Store and namespace to operate in.

    Example::

        outer = NestedList("outer", context=ctx)
        outer.push("a")
        outer.push(["b", "c"])
        outer.to_flat_array()  # ["a", ["b", "c"]]
    """

    __slots__ = ("_key", "_context")

    def __init__(self, key: str | None = None, *, context: ListContext | None = None) -> None:
        self._key = generate_key() if key is None else str(key)
        self._context = context

    # ── identity ─────────────────────────────────────────────

    @property
    def key(self) -> str:
        return self._key

    @property
    def context(self) -> ListContext:
        """The explicit context, or a snapshot of the registry."""
        return self._context if self._context is not None else registry.default_context()

    @property
    def qualified_key(self) -> str:
        return self.context.codec.qualify(self._key)

    @staticmethod
    def qualified_key_for(key: str, context: ListContext | None = None) -> str:
        """Return the store key *key* would live at in *context*."""
        if context is not None:
            return context.codec.qualify(key)
        return codec_for(registry.current_namespace()).qualify(key)

    def __repr__(self) -> str:
        return f"NestedList({self._key!r})"

    def __eq__(self, other: object) -> bool:
        """Handles compare by key; anything else compares against the materialized list."""
        if isinstance(other, NestedList):
            return self._key == other._key
        if is_sequence(other):
            return _deep_equal(self.to_flat_array(), other)  # type: ignore[arg-type]
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key)

    # ── selection / iteration ────────────────────────────────

    def get(self, index: int) -> Element | None:
        """Return the element at *index*, or ``None`` when out of range."""
        ctx = self.context
        raw = ctx.store.index_get(ctx.codec.qualify(self._key), index)
        if raw is None:
            return None
        return self._resolve(ctx, raw)

    def __getitem__(self, index: int) -> Element | None:
        return self.get(index)

    def all(self) -> list[Element]:
        """Return every element, sublists as handles."""
        return list(self)

    def __iter__(self) -> Iterator[Element]:
        # Read now; the returned iterator walks this snapshot lazily.
        ctx = self.context
        raw_values = ctx.store.range(ctx.codec.qualify(self._key), 0, -1)
        return (self._resolve(ctx, raw) for raw in raw_values)

    def count(self) -> int:
        ctx = self.context
        return ctx.store.length(ctx.codec.qualify(self._key))

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        return self.exists()

    def __contains__(self, value: object) -> bool:
        return any(item == value for item in self)

    def exists(self) -> bool:
        ctx = self.context
        return ctx.store.exists(ctx.codec.qualify(self._key))

    # ── conversion ───────────────────────────────────────────

    def to_flat_array(self) -> list[Any]:
        """Return a plain nested list with every reference resolved.

        There is no cycle guard: a list that (transitively) contains itself
        recurses until Python raises ``RecursionError``.
        """
        return [
            item.to_flat_array() if isinstance(item, NestedList) else item for item in self
        ]

    # ── modification ─────────────────────────────────────────

    def set(self, index: int, value: Any) -> None:
        """Store *value* at *index*, growing the list as needed.

        Writing past the end pads the gap with empty strings, so assignment
        to any non-negative index succeeds.  Negative indices count from the
        end and must fall inside the list.

        Raises:
            TypeNotStorableError: If *value* cannot be stored.
            IndexError: If a negative *index* reaches before the first element.
        """
        ctx = self.context
        stored = self._storable_value(ctx, value)
        key = ctx.codec.qualify(self._key)
        length = ctx.store.length(key)

        if index < 0:
            if index + length < 0:
                raise IndexError(f"index {index} out of range for list of length {length}")
            index += length

        if index < length:
            ctx.store.index_set(key, index, stored)
            return

        padding = index - length
        if padding:
            logger.debug("Padding '%s' with %d placeholder(s) up to index %d", key, padding, index)
        ctx.store.push_right(key, *([""] * padding), stored)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    def push(self, value: Any) -> int:
        """Append *value*; return the new length."""
        ctx = self.context
        return ctx.store.push_right(ctx.codec.qualify(self._key), self._storable_value(ctx, value))

    def append(self, value: Any) -> None:
        self.push(value)

    def append_many(self, values: Any) -> None:
        """Push each element of *values* in order.

        A single non-sequence value is pushed as-is.
        """
        if is_sequence(values):
            for value in values:
                self.push(value)
        else:
            self.push(values)

    def extend(self, values: Iterable[Any]) -> None:
        self.append_many(values if is_sequence(values) else list(values))

    def __iadd__(self, values: Any) -> NestedList:
        self.append_many(values)
        return self

    def pop_last(self) -> None:
        """Drop the final element.  Safe on an empty list."""
        ctx = self.context
        ctx.store.trim_last(ctx.codec.qualify(self._key))

    def pop(self) -> None:
        self.pop_last()

    def remove_at(self, index: int) -> None:
        """Remove the element at *index*, shifting later elements left.

        Stores offer no positional delete, so the list is read, filtered,
        and rebuilt (delete + re-push) inside one atomic batch.  Readers
        never see the list missing or half rebuilt.

        The initial read is *not* part of the batch: a write that lands
        between the read and the batch is lost.  Avoid this call on lists
        with concurrent writers.

        An out-of-range *index* leaves the list untouched.
        """
        ctx = self.context
        key = ctx.codec.qualify(self._key)
        values = ctx.store.range(key, 0, -1)

        position = index + len(values) if index < 0 else index
        if not 0 <= position < len(values):
            logger.warning(
                "remove_at(%d) ignored for '%s': list has %d element(s)", index, key, len(values)
            )
            return

        kept = values[:position] + values[position + 1 :]
        logger.debug(
            "Rebuilding '%s' without index %d (%d -> %d)", key, position, len(values), len(kept)
        )
        with ctx.store.atomic_batch() as batch:
            batch.delete(key)
            batch.push_right(key, *kept)

    def __delitem__(self, index: int) -> None:
        self.remove_at(index)

    def remove_value(self, value: Any) -> int:
        """Remove every element equal to *value*; return how many were removed.

        A ``NestedList`` matches slots holding its reference token; the
        sublist itself is left untouched.  A plain sequence never matches
        (storing it would mint a fresh sublist), so nothing is removed.

        Raises:
            TypeNotStorableError: If *value* cannot be stored at all.
        """
        ctx = self.context
        if isinstance(value, NestedList):
            target = ctx.codec.encode(value.key)
        elif is_sequence(value):
            return 0
        elif is_string_convertible(value):
            target = to_plain_string(value)
        else:
            raise TypeNotStorableError(value)
        return ctx.store.remove_matching(ctx.codec.qualify(self._key), target)

    def remove(self, value: Any) -> None:
        self.remove_value(value)

    def clear(self) -> None:
        """Delete the backing list.  Referenced sublists are not touched."""
        ctx = self.context
        ctx.store.delete(ctx.codec.qualify(self._key))

    # ── storage helpers ──────────────────────────────────────

    def _child(self, key: str | None = None) -> NestedList:
        return NestedList(key, context=self._context)

    def _resolve(self, ctx: ListContext, raw: str) -> Element:
        if ctx.codec.is_reference(raw):
            return self._child(ctx.codec.decode(raw))
        return raw

    def _storable_value(self, ctx: ListContext, value: Any) -> str:
        if isinstance(value, NestedList):
            return ctx.codec.encode(value.key)
        if is_sequence(value):
            sublist = self._child()
            for item in value:
                sublist.push(item)
            return ctx.codec.encode(sublist.key)
        if is_string_convertible(value):
            return to_plain_string(value)
        raise TypeNotStorableError(value)


def _deep_equal(flat: list[Any], other: Sequence[Any]) -> bool:
    if len(flat) != len(other):
        return False
    for mine, theirs in zip(flat, other):
        if isinstance(mine, list):
            if not is_sequence(theirs) or not _deep_equal(mine, theirs):
                return False
        elif mine != theirs:
            return False
    return True
