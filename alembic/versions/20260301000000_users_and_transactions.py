"""Users table (rank, moderation status, balance) and the transactions ledger.

Revision ID: 20260301000000
Revises:
Create Date: 2026-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20260301000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("cell_digits", sa.String(length=10), nullable=False),
        sa.Column("rank", sa.String(length=32), nullable=False, server_default="Nibbler"),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("pocket_sniffles", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("approved_by", sa.Integer(), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "rank IN ('Banson', 'Cheese Guard', 'Elite Nibbler', 'Nibbler')",
            name="ck_users_rank",
        ),
        sa.CheckConstraint(
            "status IN ('active', 'banned', 'pending')",
            name="ck_users_status",
        ),
        sa.CheckConstraint("pocket_sniffles >= 0", name="ck_users_pocket_sniffles_non_negative"),
        sa.ForeignKeyConstraint(["approved_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("cell_digits"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_status"), "users", ["status"], unique=False)

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sender_id", sa.Integer(), nullable=True),
        sa.Column("recipient_id", sa.Integer(), nullable=True),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        sa.CheckConstraint(
            "type IN ('admin', 'payout', 'transfer')",
            name="ck_transactions_type",
        ),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_transactions_sender_id"), "transactions", ["sender_id"], unique=False)
    op.create_index(
        op.f("ix_transactions_recipient_id"), "transactions", ["recipient_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_transactions_recipient_id"), table_name="transactions")
    op.drop_index(op.f("ix_transactions_sender_id"), table_name="transactions")
    op.drop_table("transactions")
    op.drop_index(op.f("ix_users_status"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
