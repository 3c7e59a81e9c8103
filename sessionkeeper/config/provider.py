"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol

PERSISTENT_BACKENDS = ("memory", "redis")
SESSION_BACKENDS = ("memory", "none")


@dataclass
class StorageConfig:
    """Storage backend configuration."""
    persistent_backend: str
    session_backend: str
    redis_url: str
    key_prefix: str
    persistent_quota: Optional[int]
    session_quota: Optional[int]

    @property
    def uses_redis(self) -> bool:
        """Check if the long-lived backend is Redis."""
        return self.persistent_backend == "redis"

    @property
    def has_session_backend(self) -> bool:
        """Check if a session-scoped backend is configured."""
        return self.session_backend != "none"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration."""
        ...

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        ...


def _parse_quota(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        quota = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer number of characters, got {raw!r}")
    if quota <= 0:
        raise ValueError(f"{name} must be positive, got {quota}")
    return quota


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration from environment variables."""
        persistent_backend = os.getenv("SESSIONKEEPER_PERSISTENT_BACKEND", "memory").lower()
        if persistent_backend not in PERSISTENT_BACKENDS:
            raise ValueError(
                f"SESSIONKEEPER_PERSISTENT_BACKEND must be one of {', '.join(PERSISTENT_BACKENDS)}, "
                f"got {persistent_backend!r}"
            )

        session_backend = os.getenv("SESSIONKEEPER_SESSION_BACKEND", "memory").lower()
        if session_backend not in SESSION_BACKENDS:
            raise ValueError(
                f"SESSIONKEEPER_SESSION_BACKEND must be one of {', '.join(SESSION_BACKENDS)}, "
                f"got {session_backend!r}"
            )

        return StorageConfig(
            persistent_backend=persistent_backend,
            session_backend=session_backend,
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
            key_prefix=os.getenv("SESSIONKEEPER_KEY_PREFIX", ""),
            persistent_quota=_parse_quota("SESSIONKEEPER_PERSISTENT_QUOTA"),
            session_quota=_parse_quota("SESSIONKEEPER_SESSION_QUOTA"),
        )

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration from environment variables."""
        return LoggingConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
