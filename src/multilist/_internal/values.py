"""Classification of values a NestedList slot can hold."""

from __future__ import annotations

import numbers
from abc import ABC
from collections.abc import Sequence
from typing import Any

from multilist.exceptions import TypeNotStorableError


class StringConvertible(ABC):
    """Marker for types whose ``str()`` is a meaningful stored value.

    A class opts in by defining its own ``__str__`` (anywhere below
    ``object`` in its MRO) or by being registered explicitly::

        StringConvertible.register(MyId)

    Strings, bytes and every :class:`numbers.Number` are registered up
    front.  Objects that only inherit ``object.__str__`` (which renders
    ``<Foo object at 0x...>``) are rejected.
    """

    @classmethod
    def __subclasshook__(cls, subclass: type) -> bool:
        if cls is not StringConvertible:
            return NotImplemented
        for klass in subclass.__mro__[:-1]:
            if "__str__" in klass.__dict__:
                return True
        return NotImplemented


StringConvertible.register(str)
StringConvertible.register(bytes)
StringConvertible.register(bytearray)
StringConvertible.register(numbers.Number)


def is_sequence(value: Any) -> bool:
    """``True`` for ordered sequences that should become sublists."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_string_convertible(value: Any) -> bool:
    return value is not None and isinstance(value, StringConvertible)


def to_plain_string(value: Any) -> str:
    """Render *value* as the string stored in a slot.

    Raises:
        TypeNotStorableError: If *value* is bytes that are not valid UTF-8.
    """
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TypeNotStorableError(value) from exc
    return str(value)
