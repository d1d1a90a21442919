"""Counter — atomic integer counter stored under a single key."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import redis

from redis_persist.exceptions import CounterError

if TYPE_CHECKING:
    from redis_persist.pool import RedisPool

logger = logging.getLogger(__name__)


class Counter:
    """Reads and increments an integer stored at ``key``.

    ``get`` and ``incr`` raise :class:`CounterError` on failure.  The
    ``*_or_zero`` variants log the failure and return ``0`` instead, which
    makes a failed read indistinguishable from a real zero; only use them
    where that is acceptable.
    """

    def __init__(self, pool: RedisPool, key: str) -> None:
        self._pool = pool
        self.key = key

    def get(self) -> int:
        """Return the current value; a missing key counts as ``0``."""
        try:
            with self._pool.connection() as conn:
                reply = conn.get(self.key)
        except redis.RedisError as exc:
            raise CounterError(self.key, "get", str(exc)) from exc
        if reply is None:
            return 0
        return _to_int(self.key, "get", reply)

    def incr(self, amount: int = 1) -> int:
        """Atomically add *amount* and return the new value."""
        try:
            with self._pool.connection() as conn:
                reply = conn.incr(self.key) if amount == 1 else conn.incrby(self.key, amount)
        except redis.RedisError as exc:
            raise CounterError(self.key, "incr", str(exc)) from exc
        return _to_int(self.key, "incr", reply)

    def get_or_zero(self) -> int:
        try:
            return self.get()
        except CounterError as exc:
            logger.error("%s", exc)
            return 0

    def incr_or_zero(self, amount: int = 1) -> int:
        try:
            return self.incr(amount)
        except CounterError as exc:
            logger.error("%s", exc)
            return 0


def _to_int(key: str, operation: str, reply: object) -> int:
    if isinstance(reply, int):
        return reply
    if isinstance(reply, (bytes, str)):
        try:
            return int(reply)
        except ValueError as exc:
            raise CounterError(key, operation, f"unparsable reply {reply!r}") from exc
    raise CounterError(key, operation, f"unexpected reply {reply!r}")
