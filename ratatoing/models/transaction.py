"""ORM model for the pocket sniffles ledger."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, func

from ratatoing.core.enums import TRANSACTION_TYPE_VALUES, sql_in_list
from ratatoing.models.base import Base


class Transaction(Base):
    """
    Balance movement. sender_id is null for credits from the system (admin grants,
    payouts); recipient_id is null for withdrawals.
    """

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        CheckConstraint(f"type IN ({sql_in_list(TRANSACTION_TYPE_VALUES)})", name="ck_transactions_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    recipient_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    amount = Column(Integer, nullable=False)
    type = Column(String(16), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
