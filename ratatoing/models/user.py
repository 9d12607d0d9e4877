"""ORM model for community members (registration, rank, moderation status, balance)."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)

from ratatoing.core.enums import (
    JOB_VALUES,
    RANK_VALUES,
    USER_STATUS_VALUES,
    Rank,
    UserStatus,
    sql_in_list,
)
from ratatoing.models.base import Base


class User(Base):
    """
    Registered member.

    status starts 'pending' and is decided once by a Banson ('active' or 'banned').
    approved_by/approved_at record who made that decision and when, for both outcomes.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(f"rank IN ({sql_in_list(RANK_VALUES)})", name="ck_users_rank"),
        CheckConstraint(f"status IN ({sql_in_list(USER_STATUS_VALUES)})", name="ck_users_status"),
        CheckConstraint(f"job IS NULL OR job IN ({sql_in_list(JOB_VALUES)})", name="ck_users_job"),
        CheckConstraint("pocket_sniffles >= 0", name="ck_users_pocket_sniffles_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    cell_digits = Column(String(10), nullable=False, unique=True)
    rank = Column(String(32), nullable=False, default=Rank.NIBBLER.value)
    status = Column(String(16), nullable=False, default=UserStatus.PENDING.value, index=True)
    job = Column(String(64), nullable=True, index=True)
    pocket_sniffles = Column(Integer, nullable=False, default=0)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
