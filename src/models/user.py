"""User model type definitions for database operations."""

from datetime import datetime
from enum import Enum
from typing import TypedDict


class UserRole(str, Enum):
    """User role values matching the user_role database enum."""

    USER = "USER"
    ADMIN = "ADMIN"


class User(TypedDict):
    """User table row representation.

    User IDs are issued by the external identity provider, so they are
    plain text rather than UUIDs.
    """

    id: str
    name: str
    email: str
    image_url: str | None
    role: UserRole | None
    created_at: datetime
    updated_at: datetime
