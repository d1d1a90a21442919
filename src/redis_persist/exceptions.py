"""Custom exceptions for the redis_persist package."""

from __future__ import annotations

from typing import Any


class PersistError(Exception):
    """Base exception for all persistence errors."""


class UnsupportedTypeError(PersistError):
    """Raised when a value has no capability for the requested operation."""

    def __init__(self, value: Any, operation: str) -> None:
        self.value = value
        self.operation = operation
        super().__init__(
            f"Unsupported type '{type(value).__name__}' for '{operation}': "
            "implement IdentifiedValue or a matching hook"
        )


class InvalidBindingTypeError(PersistError):
    """Raised when a collection binding is built over something that is not a list."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid binding: {detail}")


class CodecError(PersistError):
    """Raised when a value cannot be encoded or a payload cannot be decoded."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Codec error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class RecordNotFoundError(PersistError):
    """Raised when a generic load finds nothing stored under the key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No record stored under '{key}'")


class CounterError(PersistError):
    """Raised when a counter read or increment fails."""

    def __init__(self, key: str, operation: str, detail: str = "") -> None:
        self.key = key
        self.operation = operation
        msg = f"Counter '{key}' failed during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class PoolClosedError(PersistError):
    """Raised when a connection is requested from a closed pool."""

    def __init__(self) -> None:
        super().__init__("Connection pool is closed")
