"""
Session Module - Black Box Interface

Purpose: Manage per-module credential lifecycle
Interface: login(), status(), current_role(), is_authenticated(), logout(), logout_all(), has_access()
Hidden: Storage keys, durability selection, expiry eviction

Replaceable with any session backend (database, in-memory, distributed cache).
"""

from ..storage.interfaces import Durability
from .factory import SessionFactory
from .models import LEGACY_SCAN_ORDER, Credential, Module, SessionStatus
from .session import ModuleSessionManager

__all__ = [
    "Credential",
    "Durability",
    "LEGACY_SCAN_ORDER",
    "Module",
    "ModuleSessionManager",
    "SessionFactory",
    "SessionStatus",
]
