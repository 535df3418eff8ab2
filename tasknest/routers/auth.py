import logging
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, authenticate, get_token_service
from ..core.database import get_db
from ..core.errors import (
    AuthenticationError, CredentialsTooShortError, NotFoundError,
    UnexpectedError, ValidationError,
)
from ..core.jwt_handler import TokenService
from ..core.pipeline import pipeline
from ..core.validation import validate_login, validate_register
from ..models.user import User
from ..schemas.user import LoginRequest, Message, RegisterRequest, Token
from ..utils.security import PasswordHasher

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def register_user(data: RegisterRequest, db: Session, hasher: PasswordHasher) -> User:
    """
    Store a new user with a hashed password.

    Raises:
        ValidationError: if the email is already registered
        UnexpectedError: on any other persistence failure
    """
    user = User(
        name=data.name,
        email=data.email,
        hashed_password=hasher.hash(data.password),
        role=data.role.value,
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        logger.warning(f"Registration rejected, email already in use: {data.email}")
        raise ValidationError("Email already registered")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error registering user: {e}")
        raise UnexpectedError("Could not register user")

    logger.info(f"User registered: {user.email}")
    return user


def login_user(data: LoginRequest, db: Session, hasher: PasswordHasher, tokens: TokenService) -> str:
    """
    Check credentials and issue an access token.

    Unknown email and wrong password fail identically.
    """
    try:
        user = db.query(User).filter(User.email == data.email).first()
    except SQLAlchemyError as e:
        logger.error(f"Error loading user for login: {e}")
        raise UnexpectedError("Could not log in")

    stored_hash = user.hashed_password if user else None
    if not hasher.verify(data.password, stored_hash) or user is None:
        logger.warning(f"Failed login attempt for {data.email}")
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = tokens.create_access_token(user.id)
    logger.info(f"User logged in: {user.email}")
    return token


@router.post("/")
async def register_or_login(
    request: Request,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """Register when the payload carries a name, otherwise log in."""
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    if not payload.get("email"):
        raise CredentialsTooShortError("Email or name is too short")

    if payload.get("name"):
        data = validate_register.validate(payload)
        await run_in_threadpool(register_user, data, db, hasher)
        return {"message": "User registered"}

    data = validate_login.validate(payload)
    token = await run_in_threadpool(login_user, data, db, hasher, tokens)
    return {"token": token}


@router.post("/register", response_model=Message, dependencies=pipeline(validate_register))
def register(
    data: RegisterRequest = Depends(validate_register),
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    register_user(data, db, hasher)
    return {"message": "User registered"}


@router.post("/login", response_model=Token, dependencies=pipeline(validate_login))
def login(
    data: LoginRequest = Depends(validate_login),
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    return {"token": login_user(data, db, hasher, tokens)}


@router.get("/api/protected", dependencies=pipeline(authenticate))
def protected(auth: AuthContext = Depends(authenticate), db: Session = Depends(get_db)):
    """Echo the authenticated subject."""
    user = db.get(User, auth.user_id)
    if user is None:
        raise NotFoundError("User not found")

    logger.info(f"Protected resource served to user {auth.user_id}")
    return {
        "message": "Cool!",
        "userId": auth.user_id,
        "timestamp": user.created_at.isoformat(),
    }
