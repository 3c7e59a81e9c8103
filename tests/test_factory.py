"""
Tests for environment configuration and the session factory.
"""

from unittest.mock import patch

import pytest

from conftest import NOW, live_token
from sessionkeeper.config import EnvConfigProvider, StorageConfig
from sessionkeeper.modules.session import SessionFactory
from sessionkeeper.modules.storage import MemoryStorage, RedisStorage

ENV_VARS = [
    "SESSIONKEEPER_PERSISTENT_BACKEND",
    "SESSIONKEEPER_SESSION_BACKEND",
    "SESSIONKEEPER_KEY_PREFIX",
    "SESSIONKEEPER_PERSISTENT_QUOTA",
    "SESSIONKEEPER_SESSION_QUOTA",
    "REDIS_URL",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every sessionkeeper variable from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class StaticConfigProvider:
    """Config provider returning a fixed storage config."""

    def __init__(self, storage_config: StorageConfig):
        self.storage_config = storage_config

    def get_storage_config(self) -> StorageConfig:
        return self.storage_config


def test_env_config_defaults(clean_env):
    """Test configuration defaults."""
    config = EnvConfigProvider().get_storage_config()

    assert config.persistent_backend == "memory"
    assert config.session_backend == "memory"
    assert config.redis_url == "redis://localhost:6379/0"
    assert config.key_prefix == ""
    assert config.persistent_quota is None
    assert config.session_quota is None
    assert config.uses_redis is False
    assert config.has_session_backend is True


def test_env_config_from_environment(clean_env):
    """Test configuration read from environment variables."""
    clean_env.setenv("SESSIONKEEPER_PERSISTENT_BACKEND", "Redis")
    clean_env.setenv("SESSIONKEEPER_SESSION_BACKEND", "none")
    clean_env.setenv("SESSIONKEEPER_KEY_PREFIX", "app:")
    clean_env.setenv("SESSIONKEEPER_SESSION_QUOTA", "5000")
    clean_env.setenv("REDIS_URL", "redis://cache:6379/2")

    config = EnvConfigProvider().get_storage_config()

    assert config.uses_redis is True
    assert config.has_session_backend is False
    assert config.key_prefix == "app:"
    assert config.session_quota == 5000
    assert config.redis_url == "redis://cache:6379/2"


@pytest.mark.parametrize(
    "name, value",
    [
        ("SESSIONKEEPER_PERSISTENT_BACKEND", "sqlite"),
        ("SESSIONKEEPER_SESSION_BACKEND", "redis"),
        ("SESSIONKEEPER_PERSISTENT_QUOTA", "lots"),
        ("SESSIONKEEPER_SESSION_QUOTA", "0"),
    ],
)
def test_env_config_rejects_invalid_values(clean_env, name, value):
    """Test that bad configuration fails at load time."""
    clean_env.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        EnvConfigProvider().get_storage_config()


def test_env_logging_config(clean_env):
    """Test log level configuration."""
    assert EnvConfigProvider().get_logging_config().level == "INFO"

    clean_env.setenv("LOG_LEVEL", "debug")
    assert EnvConfigProvider().get_logging_config().level == "DEBUG"


def test_build_memory_stack(clean_env):
    """Test building the default in-memory stack."""
    clean_env.setenv("SESSIONKEEPER_PERSISTENT_QUOTA", "1000")

    manager = SessionFactory.build(EnvConfigProvider(), clock=lambda: NOW)

    assert isinstance(manager.store.persistent, MemoryStorage)
    assert manager.store.persistent.quota == 1000
    assert isinstance(manager.store.session, MemoryStorage)

    token = live_token("admin")
    manager.login("admin", token)
    assert manager.current_role("admin") == "admin"


def test_build_redis_stack(mock_redis_with_data):
    """Test building a stack over an injected Redis client."""
    provider = StaticConfigProvider(
        StorageConfig(
            persistent_backend="redis",
            session_backend="none",
            redis_url="redis://localhost:6379/0",
            key_prefix="sk:",
            persistent_quota=None,
            session_quota=None,
        )
    )

    manager = SessionFactory.build(provider, redis_client=mock_redis_with_data, clock=lambda: NOW)

    assert isinstance(manager.store.persistent, RedisStorage)
    assert manager.store.session is None

    token = live_token("restaurant")
    manager.login("restaurant", token, {"name": "Cafe"})

    assert mock_redis_with_data._storage["sk:restaurant_accessToken"] == token
    assert manager.current_user("restaurant") == {"name": "Cafe"}

    manager.logout_all()
    assert mock_redis_with_data._storage == {}


def test_build_redis_stack_from_url(clean_env):
    """Test that the Redis client is created from the configured URL."""
    clean_env.setenv("SESSIONKEEPER_PERSISTENT_BACKEND", "redis")
    clean_env.setenv("REDIS_URL", "redis://cache:6379/3")

    with patch("sessionkeeper.modules.storage.backends.redis.Redis.from_url") as from_url:
        manager = SessionFactory.build(EnvConfigProvider())

    from_url.assert_called_once_with("redis://cache:6379/3", decode_responses=True)
    assert manager.store.persistent.redis is from_url.return_value


def test_build_for_testing_defaults():
    """Test the test-stack builder."""
    manager = SessionFactory.build_for_testing(clock=lambda: NOW)

    assert isinstance(manager.store.persistent, MemoryStorage)
    assert isinstance(manager.store.session, MemoryStorage)
    assert manager.store.persistent is not manager.store.session
