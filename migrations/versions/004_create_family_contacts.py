"""Create family_contacts table.

Revision ID: 004_family_contacts
Revises: 003_alert_settings
Create Date: 2026-01-14
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "004_family_contacts"
down_revision = "003_alert_settings"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "family_contacts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("relationship", sa.String(50), nullable=False),
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
        "ix_family_contacts_user_id",
        "family_contacts",
        ["user_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_family_contacts_user_id")
    op.drop_table("family_contacts")
