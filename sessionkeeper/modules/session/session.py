"""
Per-module session management.

Composes the token codec, the expiry policy and the credential store. This is
the only component collaborators (UI, HTTP client) talk to, and the only one
that knows which storage keys belong to which module.
"""

import logging
from typing import Any, Callable, List, Optional, Union

from ...exceptions import PreconditionViolation
from ..storage import CredentialStore, Durability, StorageKeys
from ..token import decode_token, get_role, get_user_id, is_expired, is_token_expired
from .models import LEGACY_SCAN_ORDER, ROLE_MODULE_MAP, Credential, Module, SessionStatus

logger = logging.getLogger(__name__)

ModuleLike = Union[Module, str]


class ModuleSessionManager:
    """
    Credential lifecycle manager for independent application modules.

    Reads never cache: every call goes back to storage, so changes made by
    another context sharing the same backends are always picked up.

    Queries have one documented side effect: a token found expired is logged
    out on the spot. status() reports this as ``evicted`` and listeners
    registered with on_evict() are told about it.
    """

    def __init__(self, store: CredentialStore, clock: Optional[Callable[[], float]] = None):
        """
        Initialize session manager.

        Args:
            store: Credential store over the long-lived and session backends
            clock: Returns current time in seconds since epoch (defaults to wall clock)
        """
        self.store = store
        self.clock = clock
        self._evict_listeners: List[Callable[[Module], None]] = []

    @staticmethod
    def _resolve(module: ModuleLike) -> Module:
        if not module:
            raise PreconditionViolation("Module is required")
        try:
            return Module(module)
        except ValueError as e:
            raise PreconditionViolation(f"Unknown module: {module}") from e

    @staticmethod
    def _keys(module: Module) -> StorageKeys:
        return StorageKeys.for_module(module.value)

    def _now(self) -> Optional[float]:
        return self.clock() if self.clock else None

    def login(
        self,
        module: ModuleLike,
        token: str,
        user: Any = None,
        remember_me: bool = True,
    ) -> Credential:
        """
        Store a module's credential after a successful login.

        Args:
            module: Module name
            token: Bearer token
            user: Optional JSON-serializable user object
            remember_me: Only honoured for the user module. False keeps the
                credential in the session-scoped backend.

        Returns:
            The credential that was written

        Raises:
            PreconditionViolation: Module or token missing, or module unknown
            StorageError: Credential could not be persisted
        """
        if not module or not token:
            raise PreconditionViolation(f"Invalid parameters: module={module}, token={bool(token)}")

        module = self._resolve(module)
        if module == Module.USER and not remember_me:
            durability = Durability.SESSION_ONLY
        else:
            durability = Durability.PERSISTENT

        keys = self._keys(module)

        # Never leave a live copy in the other tier
        stale_tier = (
            Durability.PERSISTENT if durability == Durability.SESSION_ONLY else Durability.SESSION_ONLY
        )
        if module == Module.USER:
            for key in keys:
                self.store.remove(key, stale_tier)

        self.store.write(keys, token, user, durability)
        logger.info(f"Stored credentials for {module.value} ({durability.value})")

        return Credential(module=module, token=token, user=user, durability=durability)

    def get_token(self, module: ModuleLike) -> Optional[str]:
        """
        Get a module's stored token without checking expiry.

        The long-lived backend wins; only the user module falls back to the
        session-scoped backend.
        """
        module = self._resolve(module)
        keys = self._keys(module)

        token = self.store.read(keys, Durability.PERSISTENT)
        if token:
            return token
        if module == Module.USER:
            return self.store.read(keys, Durability.SESSION_ONLY) or None
        return None

    def status(self, module: ModuleLike) -> SessionStatus:
        """
        Query a module's session, logging it out if its token expired.

        Returns:
            SessionStatus; ``evicted`` is True when this call logged the module out
        """
        module = self._resolve(module)
        token = self.get_token(module)
        if not token:
            return SessionStatus(module=module, token=None, role=None, authenticated=False)

        payload = decode_token(token)
        if is_expired(payload, now=self._now()):
            logger.info(f"Token for {module.value} expired, clearing session")
            self.logout(module)
            self._notify_evicted(module)
            return SessionStatus(
                module=module, token=None, role=None, authenticated=False, evicted=True
            )

        return SessionStatus(
            module=module,
            token=token,
            role=payload.get("role") or None,
            authenticated=True,
        )

    def current_role(self, module: Optional[ModuleLike] = None) -> Optional[str]:
        """
        Get the role of the current user.

        Args:
            module: Module to check. Without one, modules are scanned in the
                legacy order user, restaurant, delivery, admin and the role
                of the first live token is returned. The scan does not log
                anything out.

        Returns:
            Role claim or None
        """
        if module:
            return self.status(module).role

        for candidate in LEGACY_SCAN_ORDER:
            token = self.get_token(candidate)
            if token and not is_token_expired(token, now=self._now()):
                return get_role(token)

        return None

    def is_authenticated(self, module: ModuleLike) -> bool:
        """Check for a present, unexpired token. Expired tokens are logged out."""
        return self.status(module).authenticated

    def current_user(self, module: ModuleLike) -> Any:
        """Get the stored user object of an authenticated module, or None."""
        module = self._resolve(module)
        if not self.status(module).authenticated:
            return None

        keys = self._keys(module)
        if self.store.read(keys, Durability.PERSISTENT):
            return self.store.read_user(keys, Durability.PERSISTENT)
        return self.store.read_user(keys, Durability.SESSION_ONLY)

    def current_user_id(self, module: ModuleLike) -> Optional[str]:
        """Get the user id claim of an authenticated module's token, or None."""
        state = self.status(module)
        if not state.authenticated:
            return None
        return get_user_id(state.token)

    def logout(self, module: ModuleLike) -> None:
        """Clear every key a module may hold, in both backends."""
        module = self._resolve(module)
        self.store.clear(self._keys(module))
        self.store.remove(f"{module.value}AuthData", Durability.SESSION_ONLY)
        logger.debug(f"Cleared credentials for {module.value}")

    def logout_all(self) -> None:
        """Log out every module and drop the legacy unscoped keys."""
        for module in Module:
            self.logout(module)
        self.store.remove_legacy()

    @staticmethod
    def has_access(role: Optional[str], module: ModuleLike) -> bool:
        """Check whether a role grants access to a module (one role, one module)."""
        if not role:
            return False
        return ROLE_MODULE_MAP.get(role) == module

    def on_evict(self, callback: Callable[[Module], None]) -> None:
        """Register a callback invoked with the module whenever an expired session is cleared."""
        self._evict_listeners.append(callback)

    def _notify_evicted(self, module: Module) -> None:
        for callback in self._evict_listeners:
            try:
                callback(module)
            except Exception as e:
                logger.warning(f"Eviction listener failed for {module.value}: {e}")
