"""Pydantic schemas for the approvals queue (pending and recently decided records)."""

from pydantic import BaseModel, Field

from ratatoing.core.enums import EntityKind
from ratatoing.schemas.jobs import JobApplicationOut
from ratatoing.schemas.users import UserOut


class ApprovalQueueResponse(BaseModel):
    """
    Records of one kind. Exactly one of users/applications is filled, matching kind.

    Pending queues are oldest first; recently decided lists are newest first.
    """

    kind: EntityKind
    users: list[UserOut] = Field(default_factory=list)
    applications: list[JobApplicationOut] = Field(default_factory=list)
