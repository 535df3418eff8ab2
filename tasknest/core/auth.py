"""
Authentication and authorization dependencies.

``authenticate`` turns a bearer token into an ``AuthContext`` for the
request; ``require_permission`` builds a dependency that additionally checks
the subject's role against ``ROLE_PERMISSIONS``. Both raise application
errors instead of returning, which ends the request before the handler runs.
"""
import logging
from typing import Callable, Dict, FrozenSet, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from .database import get_db
from .errors import AuthenticationError, AuthorizationError
from .jwt_handler import InvalidTokenError, TokenService
from ..models.user import User, UserRole

# Configure logging
logger = logging.getLogger(__name__)

# Security scheme
security = HTTPBearer(
    scheme_name="Bearer Token",
    description="JWT issued by POST / or POST /login",
    auto_error=False,
)

ROLE_PERMISSIONS: Dict[str, FrozenSet[str]] = {
    UserRole.ADMIN.value: frozenset({"users:read", "tasks:manage"}),
    UserRole.USER.value: frozenset(),
}


class AuthContext:
    """The authenticated subject of the current request."""

    def __init__(self, user_id: int):
        self.user_id = user_id

    def __str__(self):
        return f"AuthContext(user_id={self.user_id})"

    def __repr__(self):
        return self.__str__()


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> AuthContext:
    """
    Dependency that verifies the bearer token.

    Raises:
        AuthenticationError: if no token was sent or it fails verification
    """
    if credentials is None:
        logger.warning(f"Missing bearer token for {request.method} {request.url.path}")
        raise AuthenticationError("Authentication required")

    try:
        user_id = tokens.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning(f"Token verification failed: {e}")
        raise AuthenticationError("Invalid or expired token")

    request.state.user_id = user_id
    logger.info(f"Authenticated user {user_id}")
    return AuthContext(user_id)


def has_permission(role: Optional[str], capability: str) -> bool:
    """True when ``role`` is known and grants ``capability``."""
    return capability in ROLE_PERMISSIONS.get(role, frozenset())


def require_permission(capability: str) -> Callable[..., AuthContext]:
    """Build a dependency that lets the request through only if the subject holds ``capability``."""

    def check_permission(
        auth: AuthContext = Depends(authenticate),
        db: Session = Depends(get_db),
    ) -> AuthContext:
        user = db.get(User, auth.user_id)
        role = user.role if user else None
        if not has_permission(role, capability):
            logger.warning(f"User {auth.user_id} with role {role!r} denied {capability}")
            raise AuthorizationError("Access denied")
        return auth

    return check_permission
