"""Self-service registration: new members start pending and wait for a Banson's decision."""

import logging
import secrets
from typing import TYPE_CHECKING

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ratatoing.core.enums import Rank, UserStatus
from ratatoing.core.security import hash_password
from ratatoing.models import User
from ratatoing.schemas.auth import RegisterRequest
from ratatoing.services.errors import ConstraintViolationError, InvalidStateError

if TYPE_CHECKING:
    from ratatoing.core.config import Settings

logger = logging.getLogger(__name__)

EMAIL_DOMAIN = "ratatoing"
CELL_DIGITS_LENGTH = 10
# Attempts at drawing an unused cell number before giving up.
CELL_DIGITS_MAX_ATTEMPTS = 20


def get_user_by_username(session: Session, username: str) -> User | None:
    """Case-insensitive username lookup."""
    return (
        session.query(User)
        .filter(func.lower(User.username) == username.strip().lower())
        .first()
    )


def contains_blocked_name(value: str | None, blocked_names: list[str]) -> bool:
    if not value:
        return False
    lowered = value.lower()
    return any(blocked in lowered for blocked in blocked_names)


def generate_cell_digits(session: Session) -> str:
    """Draw a 10-digit contact number starting with 1 that no member holds yet."""
    for _ in range(CELL_DIGITS_MAX_ATTEMPTS):
        candidate = str(10 ** (CELL_DIGITS_LENGTH - 1) + secrets.randbelow(10 ** (CELL_DIGITS_LENGTH - 1)))
        taken = session.query(User.id).filter(User.cell_digits == candidate).first()
        if taken is None:
            return candidate
    raise ConstraintViolationError("Could not allocate a unique cell number; try again.")


def register_user(session: Session, body: RegisterRequest, settings: "Settings") -> User:
    """
    Create a pending Nibbler account.

    Raises ConstraintViolationError for blocked names or a taken username, and
    InvalidStateError when the same username is already waiting for approval.
    """
    blocked = settings.REGISTRATION_BLOCKED_NAMES
    if contains_blocked_name(body.username, blocked) or contains_blocked_name(body.name, blocked):
        raise ConstraintViolationError("Name/username contains forbidden or violating content.")

    existing = get_user_by_username(session, body.username)
    if existing is not None:
        if existing.status == UserStatus.PENDING.value:
            raise InvalidStateError("Account waiting on approval.", current_status=existing.status)
        raise ConstraintViolationError("Username is already taken.")

    username = body.username.strip()
    user = User(
        username=username,
        password_hash=hash_password(body.password),
        name=body.name.strip(),
        email=f"{username.lower()}@{EMAIL_DOMAIN}",
        description=body.description,
        cell_digits=generate_cell_digits(session),
        rank=Rank.NIBBLER.value,
        status=UserStatus.PENDING.value,
        pocket_sniffles=0,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConstraintViolationError("Username, email or cell number is already taken.") from e

    session.refresh(user)
    logger.info("Registration submitted", extra={"user_id": user.id, "username": user.username})
    return user
