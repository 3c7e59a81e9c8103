"""
Shared pytest fixtures for Sessionkeeper tests.

This module provides common fixtures including:
- Token minting with a fixed clock
- In-memory storage backends, store and session manager
- Redis mocks for the Redis backend
"""

import os
import sys
from typing import Any, Dict
from unittest.mock import MagicMock

import jwt
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sessionkeeper.modules.session import ModuleSessionManager
from sessionkeeper.modules.storage import CredentialStore, MemoryStorage

# Fixed "now" for every expiry decision in the tests
NOW = 1_700_000_000


def make_token(claims: Dict[str, Any], secret: str = "test-secret") -> str:
    """Create a signed test token (the signature is never checked)."""
    return jwt.encode(claims, secret, algorithm="HS256")


def live_token(role: str, **claims) -> str:
    """Token with the given role expiring an hour after NOW."""
    return make_token({"role": role, "exp": NOW + 3600, **claims})


def expired_token(role: str, **claims) -> str:
    """Token with the given role that expired an hour before NOW."""
    return make_token({"role": role, "exp": NOW - 3600, **claims})


# =============================================================================
# Storage Infrastructure
# =============================================================================

@pytest.fixture
def persistent():
    """Long-lived in-memory backend."""
    return MemoryStorage(name="persistent")


@pytest.fixture
def session_storage():
    """Session-scoped in-memory backend."""
    return MemoryStorage(name="session")


@pytest.fixture
def store(persistent, session_storage):
    """CredentialStore over both in-memory backends."""
    return CredentialStore(persistent, session_storage)


@pytest.fixture
def manager(store):
    """ModuleSessionManager with a fixed clock."""
    return ModuleSessionManager(store, clock=lambda: NOW)


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================

@pytest.fixture
def mock_redis():
    """Create a mock sync Redis client."""
    redis = MagicMock()
    redis.get = MagicMock(return_value=None)
    redis.set = MagicMock(return_value=True)
    redis.delete = MagicMock(return_value=1)
    return redis


@pytest.fixture
def mock_redis_with_data():
    """
    Redis mock with in-memory data storage for more realistic tests.

    This allows testing code that reads back what it writes.
    """
    storage = {}

    redis = MagicMock()

    def mock_set(key, value, *args, **kwargs):
        storage[key] = value
        return True

    def mock_get(key):
        return storage.get(key)

    def mock_delete(*keys):
        count = 0
        for key in keys:
            if key in storage:
                del storage[key]
                count += 1
        return count

    redis.set = MagicMock(side_effect=mock_set)
    redis.get = MagicMock(side_effect=mock_get)
    redis.delete = MagicMock(side_effect=mock_delete)
    redis._storage = storage  # Expose for test assertions

    return redis
