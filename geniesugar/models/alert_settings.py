"""Alert settings model.

Per-user glucose thresholds and notification channel toggles.
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, Integer
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from geniesugar.models.base import Base, TimestampMixin

DEFAULT_HIGH_THRESHOLD = 180
DEFAULT_LOW_THRESHOLD = 70
DEFAULT_EMAIL_ALERTS = True
DEFAULT_SMS_ALERTS = False


class AlertSettings(Base, TimestampMixin):
    """User-specific alert configuration.

    One-to-one with User. A reading at or above high_threshold, or at
    or below low_threshold, triggers notifications.
    """

    __tablename__ = "alert_settings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    # Glucose thresholds (mg/dL)
    high_threshold: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_HIGH_THRESHOLD,
    )

    low_threshold: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_LOW_THRESHOLD,
    )

    # Channel toggles
    email_alerts: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=DEFAULT_EMAIL_ALERTS,
    )

    # Stored for the settings page; there is no SMS transport
    sms_alerts: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=DEFAULT_SMS_ALERTS,
    )

    user = relationship("User", back_populates="alert_settings")

    def __repr__(self) -> str:
        return (
            f"<AlertSettings(user_id={self.user_id}, "
            f"low={self.low_threshold}, high={self.high_threshold}, "
            f"email={self.email_alerts}, sms={self.sms_alerts})>"
        )
