"""Job tasks: Bansons create and cancel them; job holders complete them.

A task addressed to a member (assigned_to) can only be completed by that member; a task
addressed to a job can be completed by any holder of that job. Bansons may complete
anything. Completion and cancellation are conditional on status = 'pending'.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from ratatoing.core.enums import JOB_VALUES, TaskStatus
from ratatoing.models import Task, User
from ratatoing.schemas.auth import CurrentUser
from ratatoing.services.authorization import ensure_authority, has_authority
from ratatoing.services.errors import (
    ConstraintViolationError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


def _require_job(job: str) -> None:
    if job not in JOB_VALUES:
        raise ConstraintViolationError(f"job must be one of {sorted(JOB_VALUES)}, got {job!r}.")


def _require_member(session: Session, user_id: int | None) -> None:
    if user_id is not None and session.get(User, user_id) is None:
        raise NotFoundError("user", user_id)


def _load_task(session: Session, task_id: int) -> Task:
    task = session.get(Task, task_id)
    if task is None:
        raise NotFoundError("task", task_id)
    return task


def create_task(
    session: Session,
    creator: CurrentUser,
    *,
    title: str,
    description: str,
    assigned_job: str,
    assigned_to: int | None = None,
    due_date: datetime | None = None,
    template: bool = False,
) -> Task:
    ensure_authority(creator, "create_task")
    _require_job(assigned_job)
    _require_member(session, assigned_to)

    task = Task(
        title=title.strip(),
        description=description.strip(),
        assigned_job=assigned_job,
        assigned_to=assigned_to,
        created_by=creator.id,
        due_date=due_date,
        status=(TaskStatus.TEMPLATE if template else TaskStatus.PENDING).value,
    )
    session.add(task)
    session.commit()
    session.refresh(task)
    logger.info(
        "Task created",
        extra={"task_id": task.id, "job": assigned_job, "template": template, "creator_id": creator.id},
    )
    return task


def spawn_from_template(
    session: Session,
    creator: CurrentUser,
    template_id: int,
    *,
    assigned_to: int | None = None,
    due_date: datetime | None = None,
) -> Task:
    """Create a pending copy of a template task, linked back via original_task_id."""
    ensure_authority(creator, "spawn_task")
    template = _load_task(session, template_id)
    if template.status != TaskStatus.TEMPLATE.value:
        raise InvalidStateError(
            f"Task {template_id} is not a template.", current_status=template.status
        )
    _require_member(session, assigned_to)

    task = Task(
        title=template.title,
        description=template.description,
        assigned_job=template.assigned_job,
        assigned_to=assigned_to if assigned_to is not None else template.assigned_to,
        original_task_id=template.id,
        created_by=creator.id,
        due_date=due_date if due_date is not None else template.due_date,
        status=TaskStatus.PENDING.value,
    )
    session.add(task)
    session.commit()
    session.refresh(task)
    logger.info("Task spawned from template", extra={"task_id": task.id, "template_id": template_id})
    return task


def list_visible_tasks(session: Session, viewer: CurrentUser) -> list[Task]:
    """
    Bansons see every task including templates. Members see live tasks addressed to
    them, plus unaddressed tasks of their job.
    """
    query = session.query(Task)
    if not has_authority(viewer.rank):
        addressed = Task.assigned_to == viewer.id
        if viewer.job:
            addressed = or_(
                addressed,
                and_(Task.assigned_to.is_(None), Task.assigned_job == viewer.job),
            )
        query = query.filter(Task.status != TaskStatus.TEMPLATE.value, addressed)
    return query.order_by(Task.created_at.desc(), Task.id.desc()).all()


def _can_complete(task: Task, actor: CurrentUser) -> bool:
    if has_authority(actor.rank):
        return True
    if task.assigned_to is not None:
        return task.assigned_to == actor.id
    return actor.job is not None and actor.job == task.assigned_job


def _close_task(session: Session, task_id: int, values: dict) -> None:
    updated = (
        session.query(Task)
        .filter(Task.id == task_id, Task.status == TaskStatus.PENDING.value)
        .update(values, synchronize_session=False)
    )
    if updated != 1:
        raise InvalidStateError(f"Task {task_id} was already closed.")


def complete_task(session: Session, actor: CurrentUser, task_id: int) -> Task:
    task = _load_task(session, task_id)
    if not _can_complete(task, actor):
        raise UnauthorizedError("This task is not addressed to you or your job.")
    if task.status != TaskStatus.PENDING.value:
        raise InvalidStateError(
            f"Task {task_id} is {task.status}; only pending tasks can be completed.",
            current_status=task.status,
        )

    try:
        _close_task(
            session,
            task_id,
            {
                "status": TaskStatus.COMPLETED.value,
                "completed_by": actor.id,
                "completed_at": datetime.now(UTC),
            },
        )
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(task)
    logger.info("Task completed", extra={"task_id": task_id, "completed_by": actor.id})
    return task


def cancel_task(session: Session, actor: CurrentUser, task_id: int) -> Task:
    ensure_authority(actor, "cancel_task")
    task = _load_task(session, task_id)
    if task.status != TaskStatus.PENDING.value:
        raise InvalidStateError(
            f"Task {task_id} is {task.status}; only pending tasks can be cancelled.",
            current_status=task.status,
        )

    try:
        _close_task(session, task_id, {"status": TaskStatus.CANCELLED.value})
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(task)
    logger.info("Task cancelled", extra={"task_id": task_id, "actor_id": actor.id})
    return task
