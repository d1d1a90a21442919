"""RedisPool — an explicit connection-pool handle shared by every operation."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import redis

from redis_persist.config import RedisConfig
from redis_persist.exceptions import PoolClosedError

logger = logging.getLogger(__name__)


class RedisPool:
    """Hands out short-lived clients, each pinned to one pooled connection.

    Build one at process start, pass it to :class:`~redis_persist.Persister`
    and :class:`~redis_persist.Counter`, and call :meth:`close` on shutdown.
    Connections authenticate and select the configured database when they
    are first opened.

    Parameters:
        connection_pool: The underlying ``redis.ConnectionPool``.
    """

    def __init__(self, connection_pool: redis.ConnectionPool) -> None:
        self._pool = connection_pool
        self._closed = False

    @classmethod
    def from_config(cls, config: RedisConfig) -> RedisPool:
        logger.debug(
            "Creating Redis pool for %s db=%d max_idle=%d",
            config.address,
            config.database,
            config.max_idle,
        )
        pool = redis.ConnectionPool(
            host=config.host,
            port=config.port,
            password=config.password or None,
            db=config.database,
            max_connections=config.max_idle,
            socket_timeout=config.socket_timeout,
        )
        return cls(pool)

    @contextmanager
    def connection(self) -> Iterator[redis.Redis]:
        """Check out one connection for the duration of the ``with`` block.

        The connection goes back to the pool on every exit path.
        """
        if self._closed:
            raise PoolClosedError()
        client = redis.Redis(connection_pool=self._pool, single_connection_client=True)
        try:
            yield client
        finally:
            client.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._pool.disconnect()
        logger.debug("Redis pool closed")

    def __enter__(self) -> RedisPool:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
