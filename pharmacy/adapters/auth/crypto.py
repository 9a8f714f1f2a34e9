from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError


class Argon2PasswordHasher:
    def __init__(self, ph: PasswordHasher | None = None) -> None:
        self.ph = ph or PasswordHasher()

    def hash_password(self, password: str) -> str:
        return str(self.ph.hash(password))

    def verify_password(self, plain: str, hashed: str) -> bool:
        try:
            self.ph.verify(hashed, plain)
            return True
        except (VerifyMismatchError, InvalidHashError):
            return False
