"""Initial schema - locations, personnel

Revision ID: 0001_initial
Revises: None
Create Date: 2025-09-14
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # -- locations --
    op.create_table(
        "locations",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("latitude", sa.String(50), nullable=False),
        sa.Column("longitude", sa.String(50), nullable=False),
        sa.Column("location_type", sa.String(20), nullable=False),
        sa.Column("radius", sa.Integer, nullable=True),
        sa.Column("is_active", sa.Boolean, server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_locations"),
    )
    op.create_index("ix_locations_location_type", "locations", ["location_type"])

    # -- personnel --
    op.create_table(
        "personnel",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("location_id", sa.Integer, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(64), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("personnel_type", sa.String(20), server_default="security", nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_personnel"),
        sa.ForeignKeyConstraint(
            ["location_id"],
            ["locations.id"],
            name="fk_personnel_location_id_locations",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_personnel_location_id", "personnel", ["location_id"])


def downgrade() -> None:
    op.drop_index("ix_personnel_location_id", table_name="personnel")
    op.drop_table("personnel")
    op.drop_index("ix_locations_location_type", table_name="locations")
    op.drop_table("locations")
