"""
Session Factory following Black Box Design principles.

This factory:
- Constructs the storage backends based on configuration
- Wires them into the credential store and session manager
- Returns only the session manager (hiding implementation)
"""

import logging
from typing import Callable, Optional

from ...config.provider import ConfigProvider
from ..storage import CredentialStore, MemoryStorage, RedisStorage, StoragePort
from .session import ModuleSessionManager

logger = logging.getLogger(__name__)


class SessionFactory:
    """
    Factory for building the session stack.

    This is the composition root that:
    - Creates both storage backends
    - Wires them together via dependency injection
    - Returns only the public interface
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        redis_client=None,
        clock: Optional[Callable[[], float]] = None,
    ) -> ModuleSessionManager:
        """
        Build the complete session stack.

        Args:
            config_provider: Configuration provider
            redis_client: Optional sync Redis client (created from the URL if omitted)
            clock: Optional clock for expiry checks

        Returns:
            ModuleSessionManager (hides all implementation details)
        """
        storage_config = config_provider.get_storage_config()

        persistent: StoragePort
        if storage_config.uses_redis:
            logger.info("Building session stack with Redis long-lived storage")
            if redis_client is not None:
                persistent = RedisStorage(redis_client, key_prefix=storage_config.key_prefix)
            else:
                persistent = RedisStorage.from_url(
                    storage_config.redis_url, key_prefix=storage_config.key_prefix
                )
        else:
            logger.info("Building session stack with in-memory long-lived storage")
            persistent = MemoryStorage(quota=storage_config.persistent_quota, name="persistent")

        session: Optional[StoragePort] = None
        if storage_config.has_session_backend:
            session = MemoryStorage(quota=storage_config.session_quota, name="session")
        else:
            logger.info("No session storage configured; session-only logins are persisted")

        return ModuleSessionManager(CredentialStore(persistent, session), clock=clock)

    @staticmethod
    def build_for_testing(
        persistent: Optional[StoragePort] = None,
        session: Optional[StoragePort] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> ModuleSessionManager:
        """
        Build a session stack over in-memory backends.

        Args:
            persistent: Long-lived backend (fresh MemoryStorage if omitted)
            session: Session backend (fresh MemoryStorage if omitted)
            clock: Optional clock for expiry checks

        Returns:
            ModuleSessionManager for testing
        """
        store = CredentialStore(
            persistent if persistent is not None else MemoryStorage(name="persistent"),
            session if session is not None else MemoryStorage(name="session"),
        )
        return ModuleSessionManager(store, clock=clock)
