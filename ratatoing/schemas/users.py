"""Pydantic schemas for user records returned by the API (never includes the password hash)."""

from datetime import datetime

from pydantic import BaseModel, Field


class UserOut(BaseModel):
    """Public view of a member."""

    model_config = {"from_attributes": True}

    id: int
    username: str
    name: str
    email: str
    description: str | None = None
    cell_digits: str
    rank: str
    status: str
    job: str | None = None
    pocket_sniffles: int = Field(..., ge=0)
    approved_by: int | None = Field(
        default=None,
        description="Banson who decided the registration (approve or ban).",
    )
    approved_at: datetime | None = None
    created_at: datetime | None = None


class UsersListResponse(BaseModel):
    users: list[UserOut]
