"""Key resolution and reference encoding for a single namespace.

Every backing list lives at ``"{namespace}:{key}"``.  A slot that points at
another list holds the *reference token* ``"{namespace}:~>{key}"``.  Decoding
is purely syntactic: any stored string starting with the token prefix is a
reference, whoever wrote it.
"""

from __future__ import annotations

import re
from functools import lru_cache

DEFAULT_NAMESPACE = "redismultilist"
REFERENCE_MARKER = "~>"


class KeyCodec:
    """Qualifies logical keys and encodes/decodes reference tokens.

    A codec is bound to one namespace; its patterns are compiled once.
    Use :func:`codec_for` to get a shared instance per namespace.
    """

    __slots__ = ("namespace", "_key_prefix", "_ref_prefix", "_pattern")

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        self._key_prefix = f"{namespace}:"
        self._ref_prefix = f"{namespace}:{REFERENCE_MARKER}"
        self._pattern = re.compile(
            rf"{re.escape(namespace)}:(?:{re.escape(REFERENCE_MARKER)})?(.+)", re.DOTALL
        )

    def __repr__(self) -> str:
        return f"KeyCodec(namespace={self.namespace!r})"

    def qualify(self, logical_key: str) -> str:
        """Return the fully-qualified store key for *logical_key*."""
        return f"{self._key_prefix}{logical_key}"

    def encode(self, logical_key: str) -> str:
        """Return the reference token pointing at *logical_key*."""
        return f"{self._ref_prefix}{logical_key}"

    def is_reference(self, raw_value: str) -> bool:
        return raw_value.startswith(self._ref_prefix)

    def decode(self, raw_value: str) -> str:
        """Strip the namespace (and marker, if present) from *raw_value*.

        Accepts both a qualified key and a reference token.

        Raises:
            ValueError: If *raw_value* does not belong to this namespace.
        """
        match = self._pattern.match(raw_value)
        if match is None:
            raise ValueError(f"{raw_value!r} is not a key in namespace {self.namespace!r}")
        return match.group(1)


@lru_cache(maxsize=64)
def codec_for(namespace: str) -> KeyCodec:
    """Return the shared :class:`KeyCodec` for *namespace*."""
    return KeyCodec(namespace)
