"""
Storage Module - Black Box Interface

Purpose: Abstract all credential persistence
Interface: StoragePort, MemoryStorage, RedisStorage, CredentialStore
Hidden: Backend specifics, quota accounting, write verification and fallback

Backends can be replaced with any StoragePort without affecting other modules.
"""

from .backends import MemoryStorage, RedisStorage
from .interfaces import Durability, StorageKeys, StoragePort
from .store import LEGACY_KEYS, CredentialStore

__all__ = [
    "CredentialStore",
    "Durability",
    "LEGACY_KEYS",
    "MemoryStorage",
    "RedisStorage",
    "StorageKeys",
    "StoragePort",
]
