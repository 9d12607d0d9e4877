"""Pydantic schemas for job applications."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from ratatoing.core.enums import JOB_VALUES
from ratatoing.models import JobApplication


def _validate_job(value: str) -> str:
    """Ensure job is one of the fixed job set (exact, case-sensitive)."""
    if value not in JOB_VALUES:
        raise ValueError(f"job must be one of {sorted(JOB_VALUES)}, got {value!r}")
    return value


class JobApplicationRequest(BaseModel):
    """Body for POST /jobs/apply."""

    job: str = Field(..., description="Requested job.")
    description: str = Field(
        ...,
        min_length=10,
        max_length=2000,
        description="Application letter.",
    )

    @field_validator("job")
    @classmethod
    def validate_job(cls, v: str) -> str:
        return _validate_job(v)


class JobApplicationOut(BaseModel):
    """Job application with the applicant's display fields."""

    id: int
    user_id: int
    username: str | None = None
    name: str | None = None
    job: str
    description: str
    status: str
    reviewed_by: int | None = None
    reviewed_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, application: JobApplication) -> "JobApplicationOut":
        applicant = application.applicant
        return cls(
            id=application.id,
            user_id=application.user_id,
            username=applicant.username if applicant is not None else None,
            name=applicant.name if applicant is not None else None,
            job=application.job,
            description=application.description,
            status=application.status,
            reviewed_by=application.reviewed_by,
            reviewed_at=application.reviewed_at,
            created_at=application.created_at,
        )


class JobApplicationsResponse(BaseModel):
    applications: list[JobApplicationOut]
