"""
Verified credential persistence across two storage backends.

Writes are checked by reading the token back. When a backend runs out of
capacity the store purges the legacy unscoped keys and retries once against
the long-lived backend.

Known limitation: the write, read-back and compare are three separate
operations. Another context writing the same key in between can make the
comparison fail (or pass against its value); last writer wins.
"""

import json
import logging
from typing import Any, Iterable, Optional

from ...exceptions import StorageQuotaExceeded, VerificationFailure
from .interfaces import Durability, StorageKeys, StoragePort

logger = logging.getLogger(__name__)

AUTHENTICATED_FLAG = "true"

# Pre-namespacing keys, only ever in the long-lived backend
LEGACY_KEYS = ("accessToken", "user")


class CredentialStore:
    """
    Durable key-value persistence for module credentials.

    This is a black box that:
    - Selects a backend by durability tier
    - Verifies every token write by reading it back
    - Falls back to the long-lived backend once on quota exhaustion
    """

    def __init__(self, persistent: StoragePort, session: Optional[StoragePort] = None):
        """
        Initialize with injected backends.

        Args:
            persistent: Long-lived backend
            session: Session-scoped backend. Without one, session-only
                credentials go to the long-lived backend.
        """
        self.persistent = persistent
        self.session = session

    def backend_for(self, durability: Durability) -> StoragePort:
        """Resolve the backend a durability tier writes to."""
        if durability == Durability.SESSION_ONLY and self.session is not None:
            return self.session
        return self.persistent

    def write(
        self,
        keys: StorageKeys,
        token: str,
        user: Any = None,
        durability: Durability = Durability.PERSISTENT,
    ) -> None:
        """
        Write a credential and verify it.

        Args:
            keys: Key set for the module
            token: Bearer token
            user: Optional JSON-serializable user object
            durability: Requested durability tier

        Raises:
            VerificationFailure: Token did not read back, or the quota
                fallback could not persist it
            StorageError: Any non-quota backend failure, unretried
        """
        backend = self.backend_for(durability)

        try:
            self._write_entries(backend, keys, token, user)
            self._verify(backend, keys, token)
        except StorageQuotaExceeded as e:
            logger.warning(f"Storage quota exceeded ({e}). Attempting to clear old data...")
            self._quota_fallback(backend, keys, token, user)

    def _quota_fallback(self, failed: StoragePort, keys: StorageKeys, token: str, user: Any) -> None:
        """Purge legacy keys and retry the write exactly once in the long-lived backend."""
        try:
            self.remove_legacy()
            self._write_entries(self.persistent, keys, token, user)
            self._verify(self.persistent, keys, token)
        except Exception as retry_error:
            logger.error(f"Failed to store credentials after clearing space: {retry_error}")
            raise VerificationFailure(
                "Unable to persist credentials. Clear storage and try again."
            ) from retry_error

        if failed is not self.persistent:
            # Leftovers of the failed attempt would split the credential
            self._remove_keys(failed, keys)

    def _write_entries(self, backend: StoragePort, keys: StorageKeys, token: str, user: Any) -> None:
        backend.set(keys.token_key, token)
        backend.set(keys.flag_key, AUTHENTICATED_FLAG)
        if user is None:
            return

        try:
            backend.set(keys.user_key, json.dumps(user))
        except (TypeError, ValueError, StorageQuotaExceeded) as e:
            # The token is what matters; the user object is a convenience copy
            logger.warning(f"Failed to store user data, but token was stored: {e}")

    def _verify(self, backend: StoragePort, keys: StorageKeys, token: str) -> None:
        stored = backend.get(keys.token_key)
        if stored != token:
            raise VerificationFailure(f"Token storage verification failed for key: {keys.token_key}")

    def read(self, keys: StorageKeys, durability: Durability = Durability.PERSISTENT) -> Optional[str]:
        """Read the token from the backend of a durability tier."""
        if durability == Durability.SESSION_ONLY and self.session is None:
            return None
        return self.backend_for(durability).get(keys.token_key)

    def read_user(self, keys: StorageKeys, durability: Durability = Durability.PERSISTENT) -> Any:
        """
        Read the stored user object.

        Returns:
            Decoded user object, or None if absent or not valid JSON
        """
        if durability == Durability.SESSION_ONLY and self.session is None:
            return None

        raw = self.backend_for(durability).get(keys.user_key)
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Stored user data under {keys.user_key} is not valid JSON: {e}")
            return None

    def clear(self, keys: StorageKeys) -> None:
        """Remove a key set from both backends."""
        self._remove_keys(self.persistent, keys)
        if self.session is not None:
            self._remove_keys(self.session, keys)

    def remove(self, key: str, durability: Durability) -> None:
        """Remove a single key from the backend of a durability tier."""
        if durability == Durability.SESSION_ONLY and self.session is None:
            return
        self.backend_for(durability).remove(key)

    def remove_legacy(self) -> None:
        """Remove the legacy unscoped keys from the long-lived backend."""
        self._remove_keys(self.persistent, LEGACY_KEYS)

    @staticmethod
    def _remove_keys(backend: StoragePort, keys: Iterable[str]) -> None:
        for key in keys:
            backend.remove(key)
