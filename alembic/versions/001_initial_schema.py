"""Initial schema — pr_statuses, pull_requests, pr_reviewers.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pr_statuses",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="OPEN"),
    )

    op.create_table(
        "pull_requests",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("author_id", UUID(as_uuid=True), nullable=False),
        sa.Column("status_id", UUID(as_uuid=True), sa.ForeignKey("pr_statuses.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("merged_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "pr_reviewers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("pr_id", UUID(as_uuid=True), sa.ForeignKey("pull_requests.id"), nullable=False),
        sa.Column("reviewer_id", UUID(as_uuid=True), nullable=False),
        sa.UniqueConstraint("pr_id", "reviewer_id", name="uq_pr_reviewers_pr_reviewer"),
    )
    op.create_index("ix_pr_reviewers_pr_id", "pr_reviewers", ["pr_id"])


def downgrade() -> None:
    op.drop_index("ix_pr_reviewers_pr_id", table_name="pr_reviewers")
    op.drop_table("pr_reviewers")
    op.drop_table("pull_requests")
    op.drop_table("pr_statuses")
