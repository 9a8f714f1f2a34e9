"""Bootstrap component port definitions.

Protocol interfaces for external dependencies.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pharmacy.domain.entities import User


class UserRepoPort(Protocol):
    """Repository for user persistence."""

    def exists_by_username(self, username: str) -> bool:
        """Check whether a user with this username is stored."""
        ...

    def save(self, user: User) -> User:
        """Persist a user to storage."""
        ...


class PasswordHasherPort(Protocol):
    """Password hashing adapter."""

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password for storage."""
        ...


class TimePort(Protocol):
    """Port for time operations - enables deterministic testing."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
