"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field

import fakeredis
import pytest
import redis

from redis_persist import IdentifiedValue, Persister, RedisPool


@dataclass
class User(IdentifiedValue):
    id: int = 0
    name: str = ""
    tags: list[str] = field(default_factory=list)

    def get_key(self) -> str:
        return f"user:{self.id}"


@pytest.fixture
def server():
    return fakeredis.FakeServer()


@pytest.fixture
def pool(server):
    handle = RedisPool(
        redis.ConnectionPool(server=server, connection_class=fakeredis.FakeRedisConnection)
    )
    yield handle
    handle.close()


@pytest.fixture
def persister(pool):
    return Persister(pool)


@pytest.fixture
def raw(server):
    """A plain client on the same fake server, for inspecting stored state."""
    return fakeredis.FakeRedis(server=server)


@pytest.fixture
def users():
    return [
        User(id=1, name="alice", tags=["admin"]),
        User(id=2, name="bob"),
        User(id=3, name="carol", tags=["ops", "oncall"]),
    ]
