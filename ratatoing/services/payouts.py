"""Payouts: a Banson pays out to the holders of a job, or to whoever completed a task."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ratatoing.core.enums import JOB_VALUES, TaskStatus, TransactionType, UserStatus
from ratatoing.models import Payout, Task, User
from ratatoing.schemas.auth import CurrentUser
from ratatoing.services.authorization import ensure_authority
from ratatoing.services.bank import credit, record_transaction
from ratatoing.services.errors import (
    ConstraintViolationError,
    InvalidStateError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def _task_recipients(session: Session, task_id: int, job: str) -> list[int]:
    task = session.get(Task, task_id)
    if task is None:
        raise NotFoundError("task", task_id)
    if task.assigned_job != job:
        raise ConstraintViolationError(
            f"Task {task_id} belongs to {task.assigned_job}, not {job}."
        )
    if task.status != TaskStatus.COMPLETED.value or task.completed_by is None:
        raise InvalidStateError(
            f"Task {task_id} is {task.status}; only completed tasks can be paid.",
            current_status=task.status,
        )
    already_paid = session.query(Payout.id).filter(Payout.task_id == task_id).first()
    if already_paid is not None:
        raise InvalidStateError(f"Task {task_id} has already been paid out.")
    return [task.completed_by]


def _job_recipients(session: Session, job: str) -> list[int]:
    rows = (
        session.query(User.id)
        .filter(User.job == job, User.status == UserStatus.ACTIVE.value)
        .order_by(User.id.asc())
        .all()
    )
    if not rows:
        raise InvalidStateError(f"Nobody currently works as {job}.")
    return [row.id for row in rows]


def issue_payout(
    session: Session,
    issuer: CurrentUser,
    *,
    job: str,
    amount: int,
    task_id: int | None = None,
    description: str | None = None,
) -> tuple[Payout, list[int]]:
    """
    Credit amount to each recipient and record one payout row.

    With task_id the single recipient is the member who completed that task; otherwise
    every active holder of job is paid. Returns (payout, recipient ids).
    """
    ensure_authority(issuer, "issue_payout")
    if job not in JOB_VALUES:
        raise ConstraintViolationError(f"job must be one of {sorted(JOB_VALUES)}, got {job!r}.")
    if amount <= 0:
        raise ConstraintViolationError("Amount must be a positive number.")

    if task_id is not None:
        recipients = _task_recipients(session, task_id, job)
    else:
        recipients = _job_recipients(session, job)

    label = description or f"{job} payout"
    try:
        payout = Payout(
            task_id=task_id,
            amount=amount,
            paid_by=issuer.id,
            job=job,
            description=description,
        )
        session.add(payout)
        # Flush first so a concurrent payout for the same task fails before any credit.
        session.flush()
        for user_id in recipients:
            credit(session, user_id, amount)
            record_transaction(
                session,
                sender_id=None,
                recipient_id=user_id,
                amount=amount,
                kind=TransactionType.PAYOUT,
                description=label,
            )
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if task_id is not None:
            raise InvalidStateError(f"Task {task_id} has already been paid out.") from e
        raise
    except Exception:
        session.rollback()
        raise

    session.refresh(payout)
    logger.info(
        "Payout issued",
        extra={
            "payout_id": payout.id,
            "job": job,
            "amount": amount,
            "recipient_count": len(recipients),
            "issuer_id": issuer.id,
        },
    )
    return payout, recipients
