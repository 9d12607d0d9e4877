"""Member side of the job workflow: apply, follow own applications, quit."""

import logging

from sqlalchemy.orm import Session

from ratatoing.core.enums import JOB_VALUES, ApplicationStatus
from ratatoing.models import JobApplication, User
from ratatoing.schemas.auth import CurrentUser
from ratatoing.services.errors import ConstraintViolationError, InvalidStateError, NotFoundError

logger = logging.getLogger(__name__)


def _load_user(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("user", user_id)
    return user


def submit_application(
    session: Session,
    applicant: CurrentUser,
    job: str,
    description: str,
) -> JobApplication:
    """
    File a pending application for job.

    A member may hold one job and have at most one pending application at a time.
    """
    if job not in JOB_VALUES:
        raise ConstraintViolationError(f"job must be one of {sorted(JOB_VALUES)}, got {job!r}.")

    user = _load_user(session, applicant.id)
    if user.job is not None:
        raise InvalidStateError(
            f"You already work as {user.job}; quit before applying for another job."
        )
    pending = (
        session.query(JobApplication.id)
        .filter(
            JobApplication.user_id == user.id,
            JobApplication.status == ApplicationStatus.PENDING.value,
        )
        .first()
    )
    if pending is not None:
        raise InvalidStateError("You already have a job application waiting for review.")

    application = JobApplication(
        user_id=user.id,
        job=job,
        description=description.strip(),
        status=ApplicationStatus.PENDING.value,
    )
    session.add(application)
    session.commit()
    session.refresh(application)
    logger.info(
        "Job application submitted",
        extra={"application_id": application.id, "user_id": user.id, "job": job},
    )
    return application


def list_own_applications(session: Session, applicant: CurrentUser) -> list[JobApplication]:
    """The caller's applications, newest first."""
    return (
        session.query(JobApplication)
        .filter(JobApplication.user_id == applicant.id)
        .order_by(JobApplication.created_at.desc(), JobApplication.id.desc())
        .all()
    )


def quit_job(session: Session, member: CurrentUser) -> User:
    """Clear the caller's job. Fails with InvalidStateError when they have none."""
    user = _load_user(session, member.id)
    previous_job = user.job
    if previous_job is None:
        raise InvalidStateError("You do not currently have a job.")

    updated = (
        session.query(User)
        .filter(User.id == user.id, User.job == previous_job)
        .update({"job": None}, synchronize_session=False)
    )
    if updated != 1:
        session.rollback()
        raise InvalidStateError("Your job changed while quitting; refresh and try again.")
    session.commit()
    session.refresh(user)
    logger.info("Job resigned", extra={"user_id": user.id, "job": previous_job})
    return user
