"""
Sessionkeeper session data models.

These models define the structure of the data passed between the session
manager and its collaborators.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..storage.interfaces import Durability

# Enums


class Module(str, Enum):
    """Application modules with isolated credential namespaces."""

    ADMIN = "admin"
    RESTAURANT = "restaurant"
    DELIVERY = "delivery"
    USER = "user"


# Legacy scan order for current_role() without a module. Callers depend on it.
LEGACY_SCAN_ORDER = (Module.USER, Module.RESTAURANT, Module.DELIVERY, Module.ADMIN)

# One role grants exactly one module
ROLE_MODULE_MAP = {
    "admin": Module.ADMIN,
    "restaurant": Module.RESTAURANT,
    "delivery": Module.DELIVERY,
    "user": Module.USER,
}


# Models


class Credential(BaseModel):
    """A module's login credential as it was written to storage."""

    module: Module = Field(..., description="Module the credential belongs to")
    token: str = Field(..., description="Bearer token", min_length=1)
    user: Optional[Any] = Field(None, description="JSON-serializable user object")
    durability: Durability = Field(
        default=Durability.PERSISTENT, description="Storage durability tier"
    )


@dataclass
class SessionStatus:
    """Result of a session query."""
    module: Module
    token: Optional[str]
    role: Optional[str]
    authenticated: bool
    evicted: bool = False
