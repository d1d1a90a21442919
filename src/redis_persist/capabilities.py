"""Capability interfaces a type opts into, and how dispatch classifies them.

A value takes part in persistence by subclassing one or more of:

* :class:`IdentifiedValue` — reports the key it lives under; enough for the
  generic encode-and-store path.
* :class:`Saver` / :class:`Loader` / :class:`Remover` — one hook each that
  replaces the generic path for that operation entirely.

Precedence is fixed: hook, then ``IdentifiedValue``, then unsupported.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import redis


class IdentifiedValue(ABC):
    """A value with a stable string key — its only identity in the store."""

    @abstractmethod
    def get_key(self) -> str: ...


class Saver(ABC):
    @abstractmethod
    def redis_save(self, conn: redis.Redis) -> Any:
        """Persist ``self`` using *conn*.  Replaces the generic save."""
        ...


class Loader(ABC):
    @abstractmethod
    def redis_load(self, conn: redis.Redis) -> Any:
        """Populate ``self`` using *conn*.  Replaces the generic load."""
        ...


class Remover(ABC):
    @abstractmethod
    def redis_remove(self, conn: redis.Redis) -> Any:
        """Delete ``self`` using *conn*.  Replaces the generic remove."""
        ...


class Record(IdentifiedValue):
    """Wraps any codec-encodable object so it can be stored under *key*.

    Example::

        rec = Record("settings:alice", {"theme": "dark"})
        persister.save(rec)

        blank = Record("settings:alice")
        persister.load(blank)
        blank.obj  # {"theme": "dark"}
    """

    def __init__(self, key: str, obj: Any = None) -> None:
        self.key = key
        self.obj = obj

    def get_key(self) -> str:
        return self.key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.key == other.key and self.obj == other.obj

    def __repr__(self) -> str:
        return f"Record(key={self.key!r}, obj={self.obj!r})"


class Operation(str, Enum):
    SAVE = "save"
    LOAD = "load"
    REMOVE = "remove"


class Strategy(Enum):
    """How the dispatcher handles a value for one operation."""

    CUSTOM = "custom"
    IDENTIFIED = "identified"
    UNSUPPORTED = "unsupported"


_HOOKS: dict[Operation, type] = {
    Operation.SAVE: Saver,
    Operation.LOAD: Loader,
    Operation.REMOVE: Remover,
}


def classify(value: Any, operation: Operation) -> Strategy:
    """Pick the strategy for *value*; a hook always beats ``IdentifiedValue``."""
    if isinstance(value, _HOOKS[operation]):
        return Strategy.CUSTOM
    if isinstance(value, IdentifiedValue):
        return Strategy.IDENTIFIED
    return Strategy.UNSUPPORTED
