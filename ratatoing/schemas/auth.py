"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field

from ratatoing.core.enums import Rank, UserStatus


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=3, max_length=50, description="Username")
    password: str = Field(..., min_length=8, max_length=128, description="Password")


class RegisterRequest(BaseModel):
    """Self-service sign-up. The account stays pending until a Banson decides on it."""

    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    description: str | None = Field(
        default=None,
        min_length=10,
        max_length=500,
        description="Why the applicant wants to join the nation.",
    )


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class CurrentUser(BaseModel):
    """
    Authenticated caller, passed explicitly into every workflow call.

    Built from the users row on each request, so rank/status/job are current.
    """

    model_config = {"from_attributes": True}

    id: int
    username: str
    rank: Rank
    status: UserStatus = UserStatus.ACTIVE
    job: str | None = None
