from typing import Protocol


class PasswordHasherPort(Protocol):
    def hash_password(self, password: str) -> str:
        """One-way, salted hash suitable for storage."""
        ...

    def verify_password(self, plain: str, hashed: str) -> bool: ...
