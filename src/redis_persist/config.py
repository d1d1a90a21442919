"""Connection settings for the Redis backend."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisConfig(BaseSettings):
    """Where and how to reach Redis.

    Values can be passed directly or read from ``REDIS_PERSIST_*``
    environment variables (and a ``.env`` file, if present).

    Attributes:
        address:        TCP endpoint as ``host:port``.
        password:       Sent with ``AUTH`` on connect when set.
        database:       Logical database index sent with ``SELECT``.
        max_idle:       Ceiling on pooled connections.
        socket_timeout: Per-command socket timeout in seconds.
    """

    address: str = "localhost:6379"
    password: str | None = None
    database: int = Field(default=0, ge=0)
    max_idle: int = Field(default=10, ge=1)
    socket_timeout: float | None = None

    model_config = SettingsConfigDict(
        env_prefix="REDIS_PERSIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        host, sep, port = value.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError(f"address must look like 'host:port', got {value!r}")
        return value

    @property
    def host(self) -> str:
        return self.address.rpartition(":")[0]

    @property
    def port(self) -> int:
        return int(self.address.rpartition(":")[2])
