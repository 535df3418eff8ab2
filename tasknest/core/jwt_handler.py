from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from typing import Optional

from .config import Settings


class InvalidTokenError(Exception):
    """Token is malformed, expired, badly signed or carries no usable subject."""


class TokenService:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 1440):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    def create_access_token(self, subject: int, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        payload = {"sub": str(subject), "exp": expire}
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """
        Verify signature and expiry of a token.

        Returns:
            int: the subject (user id) the token was issued for

        Raises:
            InvalidTokenError: if the token cannot be trusted
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Token subject is missing or malformed") from e
