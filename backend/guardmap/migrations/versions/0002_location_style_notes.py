"""Location style and notes as separate columns

Revision ID: 0002_location_style_notes
Revises: 0001_initial
Create Date: 2025-10-02
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0002_location_style_notes"
down_revision: Union[str, None] = "0001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("locations", sa.Column("style", sa.Text, nullable=True))
    op.add_column("locations", sa.Column("notes", sa.Text, nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("locations") as batch_op:
        batch_op.drop_column("notes")
        batch_op.drop_column("style")
