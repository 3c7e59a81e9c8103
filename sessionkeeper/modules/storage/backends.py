"""
Concrete storage backends.

MemoryStorage mirrors browser Web Storage: a flat string map with an optional
capacity limit. RedisStorage keeps long-lived entries in Redis.
"""

import logging
from typing import Dict, Optional

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import OutOfMemoryError
from redis.exceptions import TimeoutError as RedisTimeoutError

from ...exceptions import StorageQuotaExceeded, StorageUnavailable

logger = logging.getLogger(__name__)


class MemoryStorage:
    """
    In-process key-value storage.

    Usage is counted as the characters of every key plus its value, which is
    how browsers account Web Storage quota.
    """

    def __init__(self, quota: Optional[int] = None, name: str = "memory"):
        """
        Initialize memory storage.

        Args:
            quota: Maximum characters stored (None for unlimited)
            name: Label used in log messages
        """
        self.quota = quota
        self.name = name
        self._data: Dict[str, str] = {}

    @property
    def usage(self) -> int:
        """Characters currently stored."""
        return sum(len(k) + len(v) for k, v in self._data.items())

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        value = str(value)
        if self.quota is not None:
            current = self._data.get(key)
            reclaimed = len(key) + len(current) if current is not None else 0
            needed = self.usage - reclaimed + len(key) + len(value)
            if needed > self.quota:
                raise StorageQuotaExceeded(
                    f"{self.name} storage quota exceeded ({needed} > {self.quota})"
                )
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        """Drop every entry (the browsing session ended)."""
        self._data.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class RedisStorage:
    """Long-lived storage backed by Redis."""

    def __init__(self, redis_client, key_prefix: str = ""):
        """
        Initialize Redis storage.

        Args:
            redis_client: Sync Redis client
            key_prefix: Prefix prepended to every key
        """
        self.redis = redis_client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "") -> "RedisStorage":
        """Create storage from a Redis connection URL."""
        return cls(redis.Redis.from_url(url, decode_responses=True), key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.redis.get(self._key(key))
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise StorageUnavailable(f"Redis storage is not available: {e}") from e

        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self.redis.set(self._key(key), value)
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise StorageUnavailable(f"Redis storage is not available: {e}") from e
        except OutOfMemoryError as e:
            # maxmemory reached with a noeviction policy
            logger.warning(f"Redis refused write for {key}: {e}")
            raise StorageQuotaExceeded(f"Redis storage quota exceeded: {e}") from e

    def remove(self, key: str) -> None:
        try:
            self.redis.delete(self._key(key))
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise StorageUnavailable(f"Redis storage is not available: {e}") from e
