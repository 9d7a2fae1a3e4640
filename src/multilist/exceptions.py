"""Custom exceptions for the multilist package."""

from __future__ import annotations

from typing import Any


class MultiListError(Exception):
    """Base exception for all multilist errors."""


class ConfigurationError(MultiListError):
    """Raised when a store handle or configuration value is invalid."""


class NotConfiguredError(ConfigurationError):
    """Raised when an operation needs a store but none has been configured."""

    def __init__(self, message: str = "No store has been configured") -> None:
        super().__init__(message)


class TypeNotStorableError(MultiListError, TypeError):
    """Raised when a value is neither a list, a sequence, nor string-convertible."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"The value {value!r} ({type(value).__name__}) does not represent a list, "
            "is not a string, and cannot be made a string"
        )


class StoreError(MultiListError):
    """Raised when a store operation fails."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Store error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
