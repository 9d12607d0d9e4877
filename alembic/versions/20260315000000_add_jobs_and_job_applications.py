"""Add users.job and the job_applications table reviewed on the approvals page.

Revision ID: 20260315000000
Revises: 20260301000000
Create Date: 2026-03-15

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20260315000000"
down_revision: Union[str, None] = "20260301000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JOB_IN_LIST = "'Arcade Manager', 'Forum Moderator', 'Immigrants Officer', 'Media Curator'"


def upgrade() -> None:
    with op.batch_alter_table("users") as batch_op:
        batch_op.add_column(sa.Column("job", sa.String(length=64), nullable=True))
        batch_op.create_index(batch_op.f("ix_users_job"), ["job"], unique=False)
        batch_op.create_check_constraint(
            "ck_users_job", f"job IS NULL OR job IN ({JOB_IN_LIST})"
        )

    op.create_table(
        "job_applications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("job", sa.String(length=64), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("reviewed_by", sa.Integer(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "status IN ('approved', 'pending', 'rejected')",
            name="ck_job_applications_status",
        ),
        sa.CheckConstraint(f"job IN ({JOB_IN_LIST})", name="ck_job_applications_job"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reviewed_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_job_applications_user_id"), "job_applications", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_job_applications_status"), "job_applications", ["status"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_job_applications_status"), table_name="job_applications")
    op.drop_index(op.f("ix_job_applications_user_id"), table_name="job_applications")
    op.drop_table("job_applications")
    with op.batch_alter_table("users") as batch_op:
        batch_op.drop_constraint("ck_users_job", type_="check")
        batch_op.drop_index(batch_op.f("ix_users_job"))
        batch_op.drop_column("job")
