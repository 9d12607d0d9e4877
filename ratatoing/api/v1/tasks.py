"""Tasks and payouts endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ratatoing.api.v1.auth import get_current_user
from ratatoing.api.v1.errors import to_http_exception
from ratatoing.core.database import get_db
from ratatoing.schemas.auth import CurrentUser
from ratatoing.schemas.tasks import (
    PayoutOut,
    PayoutRequest,
    PayoutResponse,
    TaskCreateRequest,
    TaskOut,
    TaskSpawnRequest,
    TasksResponse,
)
from ratatoing.services import tasks as task_service
from ratatoing.services.errors import WorkflowError
from ratatoing.services.payouts import issue_payout

router = APIRouter()
payouts_router = APIRouter()


@router.get("", response_model=TasksResponse)
def get_tasks(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> TasksResponse:
    """
    Tasks visible to the caller, newest first.

    Bansons see everything including templates; members see live tasks addressed to
    them and unaddressed tasks of their job.
    """
    tasks = task_service.list_visible_tasks(db, current_user)
    return TasksResponse(tasks=[TaskOut.model_validate(t) for t in tasks])


@router.post("", response_model=TaskOut, status_code=201)
def post_task(
    body: TaskCreateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> TaskOut:
    try:
        task = task_service.create_task(
            db,
            current_user,
            title=body.title,
            description=body.description,
            assigned_job=body.assigned_job,
            assigned_to=body.assigned_to,
            due_date=body.due_date,
            template=body.template,
        )
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return TaskOut.model_validate(task)


@router.post("/{task_id}/spawn", response_model=TaskOut, status_code=201)
def post_spawn_task(
    task_id: int,
    body: TaskSpawnRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> TaskOut:
    """Create a pending task from template task_id."""
    try:
        task = task_service.spawn_from_template(
            db,
            current_user,
            task_id,
            assigned_to=body.assigned_to,
            due_date=body.due_date,
        )
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return TaskOut.model_validate(task)


@router.post("/{task_id}/complete", response_model=TaskOut)
def post_complete_task(
    task_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> TaskOut:
    try:
        task = task_service.complete_task(db, current_user, task_id)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return TaskOut.model_validate(task)


@router.post("/{task_id}/cancel", response_model=TaskOut)
def post_cancel_task(
    task_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> TaskOut:
    try:
        task = task_service.cancel_task(db, current_user, task_id)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return TaskOut.model_validate(task)


@payouts_router.post("", response_model=PayoutResponse, status_code=201)
def post_payout(
    body: PayoutRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PayoutResponse:
    """
    Pay pocket sniffles to a job (Banson only).

    With task_id the member who completed that task is paid once; without it every
    active holder of the job receives amount.
    """
    try:
        payout, recipients = issue_payout(
            db,
            current_user,
            job=body.job,
            amount=body.amount,
            task_id=body.task_id,
            description=body.description,
        )
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return PayoutResponse(payout=PayoutOut.model_validate(payout), recipient_ids=recipients)
