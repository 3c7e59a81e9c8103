"""
Sessionkeeper - Per-Module Credential Lifecycle Manager

Keeps bearer-token sessions for several independent application modules
(admin, restaurant, delivery, user) that share one storage context.

Architecture:
- Each module is self-contained with clear interfaces
- Storage backends are injected, never reached through globals
- Only the session module touches storage keys
- All communication through defined interfaces

Modules:
- token: Bearer token decoding and expiry policy
- storage: Storage backends and verified credential writes
- session: Per-module login, logout and role queries
- http: Bearer auth flow for HTTP clients
"""

from .modules.session import Credential, Durability, Module, ModuleSessionManager, SessionStatus

__version__ = "1.0.0"

__all__ = [
    "Credential",
    "Durability",
    "Module",
    "ModuleSessionManager",
    "SessionStatus",
]
