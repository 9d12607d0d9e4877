"""ORM model for job applications reviewed on the approvals page."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from ratatoing.core.enums import APPLICATION_STATUS_VALUES, JOB_VALUES, ApplicationStatus, sql_in_list
from ratatoing.models.base import Base


class JobApplication(Base):
    """
    A member's request to hold a job.

    Decided exactly once; approval also writes job onto the applicant.
    """

    __tablename__ = "job_applications"
    __table_args__ = (
        CheckConstraint(
            f"status IN ({sql_in_list(APPLICATION_STATUS_VALUES)})",
            name="ck_job_applications_status",
        ),
        CheckConstraint(f"job IN ({sql_in_list(JOB_VALUES)})", name="ck_job_applications_job"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job = Column(String(64), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, default=ApplicationStatus.PENDING.value, index=True)
    reviewed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    applicant = relationship("User", foreign_keys=[user_id], lazy="joined")
