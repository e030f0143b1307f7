"""Assignment snapshots for shared read-only links

Revision ID: 0003_assignment_snapshots
Revises: 0002_location_style_notes
Create Date: 2025-10-20
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

revision: str = "0003_assignment_snapshots"
down_revision: Union[str, None] = "0002_location_style_notes"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "assignment_snapshots",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("token", sa.String(64), nullable=False),
        sa.Column("data", JSONType, nullable=False),
        sa.Column("locations", JSONType, nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_assignment_snapshots"),
        sa.UniqueConstraint("token", name="uq_assignment_snapshots_token"),
    )


def downgrade() -> None:
    op.drop_table("assignment_snapshots")
