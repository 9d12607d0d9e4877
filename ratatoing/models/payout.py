"""ORM model for payouts granted to job holders."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, func

from ratatoing.models.base import Base


class Payout(Base):
    """One payout decision; the individual credits are recorded as payout transactions."""

    __tablename__ = "payouts"
    __table_args__ = (CheckConstraint("amount > 0", name="ck_payouts_amount_positive"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Unique: a task is paid at most once. NULLs (job-wide payouts) do not collide.
    task_id = Column(
        Integer,
        ForeignKey("tasks.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
        index=True,
    )
    amount = Column(Integer, nullable=False)
    paid_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job = Column(String(64), nullable=False, index=True)
    description = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
