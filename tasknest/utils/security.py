from typing import Optional
from passlib.context import CryptContext


class PasswordHasher:
    """One-way bcrypt hashing for user passwords."""

    def __init__(self, rounds: int = 10):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )
        self._dummy_hash = self.hash("tasknest-unknown-account")

    def hash(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify(self, plain: str, hashed: Optional[str]) -> bool:
        """
        Check a password against a stored hash.

        With no stored hash the password is checked against a throwaway hash
        of the same cost and the result is always False, so an unknown account
        takes as long to reject as a wrong password.
        """
        if hashed is None:
            self.pwd_context.verify(plain, self._dummy_hash)
            return False
        return self.pwd_context.verify(plain, hashed)
