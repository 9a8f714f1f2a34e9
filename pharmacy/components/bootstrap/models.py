"""Bootstrap component data models.

Frozen dataclasses for inputs and outputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pharmacy.domain.entities import RoleType, User

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_ROLE: RoleType = "ADMIN"


@dataclass(frozen=True)
class BootstrapInput:
    """Input parameters for bootstrap operation."""

    username: str = DEFAULT_ADMIN_USERNAME
    password: str = DEFAULT_ADMIN_PASSWORD
    role: RoleType = DEFAULT_ADMIN_ROLE


@dataclass(frozen=True)
class BootstrapOutput:
    """Result of bootstrap operation."""

    user: User | None
    created: bool
    skipped_reason: str | None

    @classmethod
    def skipped(cls, reason: str) -> BootstrapOutput:
        """Create a skipped result."""
        return cls(user=None, created=False, skipped_reason=reason)

    @classmethod
    def created_user(cls, user: User) -> BootstrapOutput:
        """Create a success result with user."""
        return cls(user=user, created=True, skipped_reason=None)
