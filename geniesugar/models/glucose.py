"""Glucose reading model.

Manually logged glucose readings. Each new reading is checked against
the owner's alert settings right after it is stored.
"""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from geniesugar.models.base import Base


class GlucoseReading(Base):
    """A single glucose measurement in mg/dL."""

    __tablename__ = "glucose_readings"

    __table_args__ = (
        Index("ix_glucose_readings_user_timestamp", "user_id", "timestamp"),
        CheckConstraint(
            "value >= 20 AND value <= 600", name="ck_glucose_readings_value_range"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    value: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    note: Mapped[str | None] = mapped_column(
        Text(),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    user = relationship("User", back_populates="glucose_readings")

    def __repr__(self) -> str:
        return (
            f"<GlucoseReading(user_id={self.user_id}, value={self.value}, "
            f"timestamp={self.timestamp})>"
        )
