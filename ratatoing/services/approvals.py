"""Moderation workflow: decide pending registrations and job applications.

Every decision checks the reviewer's authority first, then that the record exists and
is still pending, and finally applies the change as a conditional UPDATE guarded by
status = 'pending'. When another reviewer decided the record in between, the UPDATE
matches no row and the call fails with InvalidStateError; nothing is written.

Job approval writes the application status and the applicant's job in the same
transaction: either both persist or neither does.
"""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from ratatoing.core.enums import JOB_VALUES, ApplicationStatus, EntityKind, UserStatus
from ratatoing.models import JobApplication, User
from ratatoing.schemas.auth import CurrentUser
from ratatoing.services.authorization import ensure_authority
from ratatoing.services.errors import (
    ConstraintViolationError,
    InvalidStateError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

MAX_RECENT_LIMIT = 100


def _now() -> datetime:
    return datetime.now(UTC)


def _coerce_kind(kind: EntityKind | str) -> EntityKind:
    try:
        return EntityKind(kind)
    except ValueError:
        raise ConstraintViolationError(
            f"kind must be one of {sorted(k.value for k in EntityKind)}, got {kind!r}."
        ) from None


# --- Registrations ---------------------------------------------------------------


def _decide_user(
    session: Session,
    reviewer: CurrentUser,
    user_id: int,
    outcome: UserStatus,
    action: str,
) -> User:
    ensure_authority(reviewer, action)

    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("user", user_id)
    if user.status != UserStatus.PENDING.value:
        raise InvalidStateError(
            f"User {user_id} is {user.status}; only pending users can be approved or banned.",
            current_status=user.status,
        )

    try:
        updated = (
            session.query(User)
            .filter(
                User.id == user_id,
                User.status == UserStatus.PENDING.value,
                User.approved_by.is_(None),
            )
            .update(
                {
                    "status": outcome.value,
                    "approved_by": reviewer.id,
                    "approved_at": _now(),
                },
                synchronize_session=False,
            )
        )
        if updated != 1:
            raise InvalidStateError(f"User {user_id} was already decided by another reviewer.")
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(user)
    logger.info(
        "User registration decided",
        extra={"user_id": user_id, "outcome": outcome.value, "reviewer_id": reviewer.id},
    )
    return user


def approve_user(session: Session, reviewer: CurrentUser, user_id: int) -> User:
    """pending -> active. Records the reviewer in approved_by."""
    return _decide_user(session, reviewer, user_id, UserStatus.ACTIVE, "approve_user")


def ban_user(session: Session, reviewer: CurrentUser, user_id: int) -> User:
    """pending -> banned. The reviewer is still recorded in approved_by for attribution."""
    return _decide_user(session, reviewer, user_id, UserStatus.BANNED, "ban_user")


# --- Job applications --------------------------------------------------------------


def _load_pending_application(session: Session, application_id: int) -> JobApplication:
    application = session.get(JobApplication, application_id)
    if application is None:
        raise NotFoundError("job application", application_id)
    if application.status != ApplicationStatus.PENDING.value:
        raise InvalidStateError(
            f"Job application {application_id} is already {application.status}.",
            current_status=application.status,
        )
    return application


def _transition_application(
    session: Session,
    application_id: int,
    outcome: ApplicationStatus,
    reviewer: CurrentUser,
) -> None:
    updated = (
        session.query(JobApplication)
        .filter(
            JobApplication.id == application_id,
            JobApplication.status == ApplicationStatus.PENDING.value,
        )
        .update(
            {
                "status": outcome.value,
                "reviewed_by": reviewer.id,
                "reviewed_at": _now(),
            },
            synchronize_session=False,
        )
    )
    if updated != 1:
        raise InvalidStateError(
            f"Job application {application_id} was already decided by another reviewer."
        )


def _assign_job(session: Session, user_id: int, job: str) -> None:
    updated = (
        session.query(User)
        .filter(User.id == user_id)
        .update({"job": job}, synchronize_session=False)
    )
    if updated != 1:
        raise NotFoundError("user", user_id)


def approve_job(session: Session, reviewer: CurrentUser, application_id: int) -> JobApplication:
    """pending -> approved, and the applicant's job becomes the requested job (one transaction)."""
    ensure_authority(reviewer, "approve_job")
    application = _load_pending_application(session, application_id)
    if application.job not in JOB_VALUES:
        raise ConstraintViolationError(
            f"Job application {application_id} requests unknown job {application.job!r}."
        )
    user_id = application.user_id
    job = application.job

    try:
        _transition_application(session, application_id, ApplicationStatus.APPROVED, reviewer)
        _assign_job(session, user_id, job)
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(application)
    logger.info(
        "Job application approved",
        extra={
            "application_id": application_id,
            "user_id": user_id,
            "job": job,
            "reviewer_id": reviewer.id,
        },
    )
    return application


def reject_job(session: Session, reviewer: CurrentUser, application_id: int) -> JobApplication:
    """pending -> rejected. The applicant is left untouched."""
    ensure_authority(reviewer, "reject_job")
    application = _load_pending_application(session, application_id)

    try:
        _transition_application(session, application_id, ApplicationStatus.REJECTED, reviewer)
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(application)
    logger.info(
        "Job application rejected",
        extra={"application_id": application_id, "reviewer_id": reviewer.id},
    )
    return application


# --- Queues ------------------------------------------------------------------------


def list_pending(session: Session, kind: EntityKind | str) -> list[User] | list[JobApplication]:
    """Pending records of one kind, oldest request first (ties broken by id)."""
    kind = _coerce_kind(kind)
    if kind is EntityKind.USERS:
        return (
            session.query(User)
            .filter(User.status == UserStatus.PENDING.value)
            .order_by(User.created_at.asc(), User.id.asc())
            .all()
        )
    return (
        session.query(JobApplication)
        .filter(JobApplication.status == ApplicationStatus.PENDING.value)
        .order_by(JobApplication.created_at.asc(), JobApplication.id.asc())
        .all()
    )


def list_recently_decided(
    session: Session,
    kind: EntityKind | str,
    limit: int,
    window: timedelta | None = None,
) -> list[User] | list[JobApplication]:
    """
    Decided records of one kind, newest decision first, at most limit rows.

    Includes both outcomes (active and banned users; approved and rejected
    applications). With window set, decisions older than now - window are left out.
    """
    kind = _coerce_kind(kind)
    if limit < 1 or limit > MAX_RECENT_LIMIT:
        raise ConstraintViolationError(f"limit must be between 1 and {MAX_RECENT_LIMIT}.")

    if kind is EntityKind.USERS:
        model, decided_at, pending = User, User.approved_at, UserStatus.PENDING.value
    else:
        model, decided_at, pending = (
            JobApplication,
            JobApplication.reviewed_at,
            ApplicationStatus.PENDING.value,
        )

    query = session.query(model).filter(model.status != pending, decided_at.isnot(None))
    if window is not None:
        query = query.filter(decided_at >= _now() - window)
    return query.order_by(decided_at.desc(), model.id.desc()).limit(limit).all()
