"""ORM model for job tasks (templates and assigned instances)."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, func

from ratatoing.core.enums import JOB_VALUES, TASK_STATUS_VALUES, TaskStatus, sql_in_list
from ratatoing.models.base import Base


class Task(Base):
    """
    Work item for a job category, optionally addressed to one member.

    Templates (status 'template') are never completed; pending copies spawned from
    them carry original_task_id.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(f"status IN ({sql_in_list(TASK_STATUS_VALUES)})", name="ck_tasks_status"),
        CheckConstraint(f"assigned_job IN ({sql_in_list(JOB_VALUES)})", name="ck_tasks_assigned_job"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    assigned_job = Column(String(64), nullable=False, index=True)
    assigned_to = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    original_task_id = Column(
        Integer,
        ForeignKey("tasks.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(16), nullable=False, default=TaskStatus.PENDING.value, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    completed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
