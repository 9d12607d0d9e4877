"""Add shop_items and emails; allow 'purchase' rows in the transactions ledger.

Revision ID: 20260501000000
Revises: 20260401000000
Create Date: 2026-05-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20260501000000"
down_revision: Union[str, None] = "20260401000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _replace_transaction_type_check(values: str) -> None:
    with op.batch_alter_table("transactions") as batch_op:
        batch_op.drop_constraint("ck_transactions_type", type_="check")
        batch_op.create_check_constraint("ck_transactions_type", f"type IN ({values})")


def upgrade() -> None:
    op.create_table(
        "shop_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("seller_id", sa.Integer(), nullable=False),
        sa.Column("buyer_id", sa.Integer(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="available"),
        sa.Column("original_price", sa.Integer(), nullable=True),
        sa.Column("previous_owner_id", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("sold_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('available', 'reselling', 'sold')",
            name="ck_shop_items_status",
        ),
        sa.CheckConstraint("price > 0", name="ck_shop_items_price_positive"),
        sa.ForeignKeyConstraint(["seller_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["buyer_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["previous_owner_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("seller_id", "buyer_id", "status"):
        op.create_index(op.f(f"ix_shop_items_{column}"), "shop_items", [column], unique=False)

    op.create_table(
        "emails",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sender_id", sa.Integer(), nullable=False),
        sa.Column("recipient_id", sa.Integer(), nullable=False),
        sa.Column("subject", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_emails_sender_id"), "emails", ["sender_id"], unique=False)
    op.create_index(op.f("ix_emails_recipient_id"), "emails", ["recipient_id"], unique=False)

    _replace_transaction_type_check("'admin', 'payout', 'purchase', 'transfer'")


def downgrade() -> None:
    op.execute("DELETE FROM transactions WHERE type = 'purchase'")
    _replace_transaction_type_check("'admin', 'payout', 'transfer'")
    op.drop_index(op.f("ix_emails_recipient_id"), table_name="emails")
    op.drop_index(op.f("ix_emails_sender_id"), table_name="emails")
    op.drop_table("emails")
    for column in ("status", "buyer_id", "seller_id"):
        op.drop_index(op.f(f"ix_shop_items_{column}"), table_name="shop_items")
    op.drop_table("shop_items")
