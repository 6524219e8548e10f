"""Create glucose_readings table.

Revision ID: 002_glucose_readings
Revises: 001_users
Create Date: 2026-01-12
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "002_glucose_readings"
down_revision = "001_users"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "glucose_readings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("value", sa.Integer(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "value >= 20 AND value <= 600", name="ck_glucose_readings_value_range"
        ),
    )
    op.create_index(
        "ix_glucose_readings_user_timestamp",
        "glucose_readings",
        ["user_id", "timestamp"],
    )


def downgrade() -> None:
    op.drop_index("ix_glucose_readings_user_timestamp")
    op.drop_table("glucose_readings")
