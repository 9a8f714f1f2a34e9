from typing import Protocol

from pharmacy.domain.entities import User


class UsernameTakenError(Exception):
    """Raised by save() when another user already holds the username."""

    def __init__(self, username: str):
        super().__init__(f"Username already taken: {username}")
        self.username = username


class UserRepoPort(Protocol):
    def exists_by_username(self, username: str) -> bool:
        ...

    def get_by_username(self, username: str) -> User | None:
        ...

    def list_all(self) -> list[User]:
        ...

    def save(self, user: User) -> User:
        """Insert or update by id. Raises UsernameTakenError on a duplicate username."""
        ...
