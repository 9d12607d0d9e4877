"""Member credentials: bcrypt password hashes and the signed session token handed out at login.

The token only identifies the member (sub) and snapshots their rank at login time. Request
handlers re-read rank and status from the users row, so a ban takes effect on the next request.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from ratatoing.core.config import settings

BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72

# Shared by the registration schema and the bootstrap script.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    return bcrypt.hashpw(
        _password_bytes(plain_password),
        bcrypt.gensalt(rounds=BCRYPT_ROUNDS),
    ).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """False for a wrong password and for a stored value that is not a bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(sub: str | int, rank: str) -> str:
    """Sign a token for member sub, valid for JWT_EXPIRE_MINUTES."""
    issued_at = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "rank": rank,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry; return the claims (sub, rank, iat, exp).
    Raises jwt.PyJWTError for tampered, malformed or expired tokens.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
    )
