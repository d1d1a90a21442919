"""Codec protocol — turns a value's state into bytes and back, in place."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from redis_persist.exceptions import CodecError


class Codec(ABC):
    """Abstract base for payload codecs.

    ``decode`` restores state *into* an existing instance rather than
    returning a new one, so callers keep their own references valid.
    For any supported value ``v`` and a blank instance ``b`` of the same
    class, ``decode(encode(v), b)`` leaves ``b == v``.
    """

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Serialize the state of *value*."""
        ...

    @abstractmethod
    def decode(self, data: bytes, value: Any) -> None:
        """Restore the state held in *data* into *value*."""
        ...


def state_of(value: Any) -> dict[str, Any]:
    """Return the instance state of *value* as a plain dict."""
    try:
        return dict(vars(value))
    except TypeError as exc:
        raise CodecError("encode", f"'{type(value).__name__}' has no instance __dict__") from exc


def restore_state(value: Any, state: Any) -> None:
    """Replace the instance state of *value* with *state*."""
    if not isinstance(state, dict):
        raise CodecError("decode", f"expected a state mapping, got {type(state).__name__}")
    try:
        target = vars(value)
    except TypeError as exc:
        raise CodecError("decode", f"'{type(value).__name__}' has no instance __dict__") from exc
    target.clear()
    target.update(state)
