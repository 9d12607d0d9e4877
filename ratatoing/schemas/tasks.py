"""Pydantic schemas for tasks and payouts."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from ratatoing.core.enums import JOB_VALUES


def _validate_job(value: str) -> str:
    if value not in JOB_VALUES:
        raise ValueError(f"job must be one of {sorted(JOB_VALUES)}, got {value!r}")
    return value


class TaskCreateRequest(BaseModel):
    """Body for POST /tasks (Banson only)."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=4000)
    assigned_job: str
    assigned_to: int | None = Field(default=None, description="Member id; omit to address the whole job.")
    due_date: datetime | None = None
    template: bool = Field(default=False, description="Create a reusable template instead of a live task.")

    @field_validator("assigned_job")
    @classmethod
    def validate_assigned_job(cls, v: str) -> str:
        return _validate_job(v)


class TaskSpawnRequest(BaseModel):
    """Body for POST /tasks/{id}/spawn."""

    assigned_to: int | None = None
    due_date: datetime | None = None


class TaskOut(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    title: str
    description: str
    assigned_job: str
    assigned_to: int | None = None
    original_task_id: int | None = None
    created_by: int
    due_date: datetime | None = None
    status: str
    created_at: datetime | None = None
    completed_by: int | None = None
    completed_at: datetime | None = None


class TasksResponse(BaseModel):
    tasks: list[TaskOut]


class PayoutRequest(BaseModel):
    """Body for POST /payouts (Banson only)."""

    job: str
    amount: int = Field(..., gt=0, le=1_000_000)
    task_id: int | None = Field(default=None, description="Pay the member who completed this task.")
    description: str | None = Field(default=None, max_length=500)

    @field_validator("job")
    @classmethod
    def validate_job(cls, v: str) -> str:
        return _validate_job(v)


class PayoutOut(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    task_id: int | None = None
    amount: int
    paid_by: int
    job: str
    description: str | None = None
    created_at: datetime | None = None


class PayoutResponse(BaseModel):
    payout: PayoutOut
    recipient_ids: list[int] = Field(..., description="Members credited by this payout.")
