"""Approvals endpoints: Banson review queues for registrations and job applications."""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ratatoing.api.v1.auth import get_current_user
from ratatoing.api.v1.errors import to_http_exception
from ratatoing.core.config import get_settings
from ratatoing.core.database import get_db
from ratatoing.core.enums import EntityKind
from ratatoing.schemas.approvals import ApprovalQueueResponse
from ratatoing.schemas.auth import CurrentUser
from ratatoing.schemas.jobs import JobApplicationOut
from ratatoing.schemas.users import UserOut
from ratatoing.services import approvals
from ratatoing.services.authorization import ensure_authority
from ratatoing.services.errors import WorkflowError

router = APIRouter()


def _queue_response(kind: EntityKind, rows: list) -> ApprovalQueueResponse:
    if kind is EntityKind.USERS:
        return ApprovalQueueResponse(kind=kind, users=[UserOut.model_validate(u) for u in rows])
    return ApprovalQueueResponse(
        kind=kind,
        applications=[JobApplicationOut.from_model(a) for a in rows],
    )


@router.get("/{kind}/pending", response_model=ApprovalQueueResponse)
def get_pending(
    kind: EntityKind,
    db: Annotated[Session, Depends(get_db)],
    reviewer: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApprovalQueueResponse:
    """Records of one kind waiting for a decision, oldest request first."""
    try:
        ensure_authority(reviewer, "list_pending")
        rows = approvals.list_pending(db, kind)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return _queue_response(kind, rows)


@router.get("/{kind}/recent", response_model=ApprovalQueueResponse)
def get_recently_decided(
    kind: EntityKind,
    db: Annotated[Session, Depends(get_db)],
    reviewer: Annotated[CurrentUser, Depends(get_current_user)],
    limit: Annotated[int | None, Query(ge=1, le=approvals.MAX_RECENT_LIMIT)] = None,
) -> ApprovalQueueResponse:
    """
    Recently decided records of one kind, newest decision first.

    limit defaults to RECENT_DECISIONS_LIMIT. Decisions older than
    RECENT_DECISIONS_WINDOW_DAYS are left out unless the window is 0.
    """
    settings = get_settings()
    window_days = settings.RECENT_DECISIONS_WINDOW_DAYS
    window = timedelta(days=window_days) if window_days > 0 else None
    try:
        ensure_authority(reviewer, "list_recently_decided")
        rows = approvals.list_recently_decided(
            db,
            kind,
            limit if limit is not None else settings.RECENT_DECISIONS_LIMIT,
            window=window,
        )
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return _queue_response(kind, rows)


@router.post("/users/{user_id}/approve", response_model=UserOut)
def post_approve_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    reviewer: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserOut:
    """pending -> active. The account can log in afterwards."""
    try:
        user = approvals.approve_user(db, reviewer, user_id)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return UserOut.model_validate(user)


@router.post("/users/{user_id}/ban", response_model=UserOut)
def post_ban_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    reviewer: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserOut:
    """pending -> banned. Banned is final."""
    try:
        user = approvals.ban_user(db, reviewer, user_id)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return UserOut.model_validate(user)


@router.post("/jobs/{application_id}/approve", response_model=JobApplicationOut)
def post_approve_job(
    application_id: int,
    db: Annotated[Session, Depends(get_db)],
    reviewer: Annotated[CurrentUser, Depends(get_current_user)],
) -> JobApplicationOut:
    """pending -> approved; the applicant takes the requested job in the same transaction."""
    try:
        application = approvals.approve_job(db, reviewer, application_id)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return JobApplicationOut.from_model(application)


@router.post("/jobs/{application_id}/reject", response_model=JobApplicationOut)
def post_reject_job(
    application_id: int,
    db: Annotated[Session, Depends(get_db)],
    reviewer: Annotated[CurrentUser, Depends(get_current_user)],
) -> JobApplicationOut:
    try:
        application = approvals.reject_job(db, reviewer, application_id)
    except WorkflowError as e:
        raise to_http_exception(e) from e
    return JobApplicationOut.from_model(application)
