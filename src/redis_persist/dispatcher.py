"""Persister — the generic save / load / remove entry points."""

from __future__ import annotations

import logging
from collections.abc import MutableSequence
from typing import TYPE_CHECKING, Any

from redis_persist.capabilities import Operation, Strategy, classify
from redis_persist.codecs.pickle_codec import PickleCodec
from redis_persist.collection import CollectionBinding, make_binding
from redis_persist.exceptions import RecordNotFoundError, UnsupportedTypeError

if TYPE_CHECKING:
    import redis

    from redis_persist.codecs.base import Codec
    from redis_persist.pool import RedisPool

logger = logging.getLogger(__name__)


class Persister:
    """Routes a value to its persistence strategy.

    Each top-level call checks out one pooled connection and releases it
    when done.  The ``*_with_conn`` variants run on a connection the caller
    already holds, which is how hooks compose nested operations.

    Parameters:
        pool:  Connection pool handle shared by every call.
        codec: Payload codec for the generic path.  Defaults to
               :class:`~redis_persist.codecs.PickleCodec`.
    """

    def __init__(self, pool: RedisPool, codec: Codec | None = None) -> None:
        self._pool = pool
        self._codec: Codec = codec or PickleCodec()

    @property
    def pool(self) -> RedisPool:
        return self._pool

    @property
    def codec(self) -> Codec:
        return self._codec

    # ── pooled entry points ──────────────────────────────────

    def save(self, value: Any) -> Any:
        with self._pool.connection() as conn:
            return self.save_with_conn(conn, value)

    def load(self, value: Any) -> Any:
        with self._pool.connection() as conn:
            return self.load_with_conn(conn, value)

    def remove(self, value: Any) -> Any:
        with self._pool.connection() as conn:
            return self.remove_with_conn(conn, value)

    # ── connection-scoped variants ───────────────────────────

    def save_with_conn(self, conn: redis.Redis, value: Any) -> Any:
        strategy = classify(value, Operation.SAVE)
        logger.debug("save %s via %s", type(value).__name__, strategy.value)
        if strategy is Strategy.CUSTOM:
            return value.redis_save(conn)
        if strategy is Strategy.IDENTIFIED:
            conn.set(value.get_key(), self._codec.encode(value))
            return None
        raise UnsupportedTypeError(value, Operation.SAVE.value)

    def load_with_conn(self, conn: redis.Redis, value: Any) -> Any:
        strategy = classify(value, Operation.LOAD)
        logger.debug("load %s via %s", type(value).__name__, strategy.value)
        if strategy is Strategy.CUSTOM:
            return value.redis_load(conn)
        if strategy is Strategy.IDENTIFIED:
            key = value.get_key()
            data = conn.get(key)
            if data is None:
                raise RecordNotFoundError(key)
            self._codec.decode(data, value)
            return None
        raise UnsupportedTypeError(value, Operation.LOAD.value)

    def remove_with_conn(self, conn: redis.Redis, value: Any) -> Any:
        strategy = classify(value, Operation.REMOVE)
        logger.debug("remove %s via %s", type(value).__name__, strategy.value)
        if strategy is Strategy.CUSTOM:
            return value.redis_remove(conn)
        if strategy is Strategy.IDENTIFIED:
            conn.delete(value.get_key())
            return None
        raise UnsupportedTypeError(value, Operation.REMOVE.value)

    # ── collection helpers ───────────────────────────────────

    def bind(self, key: str, seq: MutableSequence[Any], element_type: type) -> CollectionBinding:
        """Bind *seq* to the Redis set at *key*; see :func:`make_binding`."""
        return make_binding(self, key, seq, element_type)

    def save_list(self, key: str, seq: MutableSequence[Any], element_type: type) -> None:
        self.save(self.bind(key, seq, element_type))

    def load_list(self, key: str, seq: MutableSequence[Any], element_type: type) -> None:
        self.load(self.bind(key, seq, element_type))

    def remove_list(self, key: str, seq: MutableSequence[Any], element_type: type) -> None:
        self.remove(self.bind(key, seq, element_type))
