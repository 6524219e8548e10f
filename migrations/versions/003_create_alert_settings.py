"""Create alert_settings table.

Revision ID: 003_alert_settings
Revises: 002_glucose_readings
Create Date: 2026-01-14
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "003_alert_settings"
down_revision = "002_glucose_readings"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "alert_settings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("high_threshold", sa.Integer(), nullable=False, server_default="180"),
        sa.Column("low_threshold", sa.Integer(), nullable=False, server_default="70"),
        sa.Column("email_alerts", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("sms_alerts", sa.Boolean(), nullable=False, server_default="false"),
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
    )
    op.create_index(
        "ix_alert_settings_user_id",
        "alert_settings",
        ["user_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_alert_settings_user_id")
    op.drop_table("alert_settings")
