"""Storage interfaces following Black Box Design principles."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol


class Durability(str, Enum):
    """Storage durability tier for a credential."""

    PERSISTENT = "persistent"
    SESSION_ONLY = "session"


class StoragePort(Protocol):
    """Protocol for key-value storage backends - allows swappable implementations."""

    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Returns:
            Stored string or None if the key is absent
        """
        ...

    def set(self, key: str, value: str) -> None:
        """
        Write a value.

        Raises:
            StorageQuotaExceeded: Backend is out of capacity
            StorageUnavailable: Backend cannot be reached
        """
        ...

    def remove(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        ...


@dataclass(frozen=True)
class StorageKeys:
    """The key set one module's credential occupies in a backend."""
    token_key: str
    flag_key: str
    user_key: str

    @classmethod
    def for_module(cls, module: str) -> "StorageKeys":
        """Build the namespaced keys for a module name."""
        return cls(
            token_key=f"{module}_accessToken",
            flag_key=f"{module}_authenticated",
            user_key=f"{module}_user",
        )

    def __iter__(self):
        return iter((self.token_key, self.flag_key, self.user_key))
