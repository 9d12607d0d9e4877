"""Registration, JWT login and auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ratatoing.api.v1.errors import to_http_exception
from ratatoing.core.config import get_settings
from ratatoing.core.database import get_db
from ratatoing.core.enums import UserStatus
from ratatoing.core.security import create_access_token, decode_access_token, verify_password
from ratatoing.models import User
from ratatoing.schemas.auth import CurrentUser, LoginRequest, RegisterRequest, TokenResponse
from ratatoing.schemas.users import UserOut, UsersListResponse
from ratatoing.services.authorization import has_authority
from ratatoing.services.errors import WorkflowError
from ratatoing.services.registration import get_user_by_username, register_user

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)

# Why a correctly authenticated account is still refused a token.
_REFUSED_STATUS_MESSAGES = {
    UserStatus.PENDING.value: "Your account is pending approval",
    UserStatus.BANNED.value: "Your account has been banned",
}


@router.post("/register", response_model=UserOut, status_code=201)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """
    Self-service sign-up. The new account is pending until a Banson approves or bans it;
    it cannot log in before that.
    """
    try:
        user = register_user(db, body, get_settings())
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return UserOut.model_validate(user)


@router.post("", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    user = get_user_by_username(db, body.username)
    if user is None or not verify_password(body.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
        )
    refused = _REFUSED_STATUS_MESSAGES.get(user.status)
    if refused is not None:
        logger.info("Login refused", extra={"user_id": user.id, "status": user.status})
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=refused)
    token = create_access_token(sub=user.id, rank=user.rank)
    return TokenResponse(access_token=token, token_type="bearer")


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: require valid Bearer JWT for an active account and return the caller.
    Rank, status and job are read from the database, not from the token.
    """
    if credentials is None:
        raise _unauthenticated("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthenticated("Invalid or expired token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthenticated("Invalid token payload")
    user = db.get(User, user_id)
    if user is None:
        raise _unauthenticated("User not found")
    if user.status != UserStatus.ACTIVE.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=_REFUSED_STATUS_MESSAGES.get(user.status, "Account is not active"),
        )
    return CurrentUser.model_validate(user)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require an authenticated Banson. Raises 403 for every other rank."""
    if not has_authority(current_user.rank):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user


@router.get("/me", response_model=UserOut)
def read_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    return UserOut.model_validate(db.get(User, current_user.id))


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all members (Banson only)."""
    users = db.query(User).order_by(User.id).all()
    return UsersListResponse(users=[UserOut.model_validate(u) for u in users])
