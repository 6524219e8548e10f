"""Alert settings schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from geniesugar.models.alert_settings import (
    DEFAULT_EMAIL_ALERTS,
    DEFAULT_HIGH_THRESHOLD,
    DEFAULT_LOW_THRESHOLD,
    DEFAULT_SMS_ALERTS,
)


class AlertSettingsResponse(BaseModel):
    """Response schema for alert settings."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    high_threshold: int
    low_threshold: int
    email_alerts: bool
    sms_alerts: bool
    updated_at: datetime


class AlertSettingsUpdate(BaseModel):
    """Request schema for updating alert settings.

    All fields are optional; only provided fields are updated.
    """

    high_threshold: int | None = Field(
        default=None,
        ge=100,
        le=600,
        description="High glucose threshold (mg/dL). Range: 100-600.",
    )
    low_threshold: int | None = Field(
        default=None,
        ge=20,
        le=100,
        description="Low glucose threshold (mg/dL). Range: 20-100.",
    )
    email_alerts: bool | None = Field(
        default=None,
        description="Send alert emails to the account's own address.",
    )
    sms_alerts: bool | None = Field(
        default=None,
        description="Send alert text messages (not delivered yet).",
    )

    @model_validator(mode="after")
    def validate_threshold_ordering(self) -> "AlertSettingsUpdate":
        """Ensure low_threshold < high_threshold when both are given."""
        if (
            self.low_threshold is not None
            and self.high_threshold is not None
            and self.low_threshold >= self.high_threshold
        ):
            msg = "low_threshold must be less than high_threshold"
            raise ValueError(msg)
        return self


class AlertSettingsDefaults(BaseModel):
    """Default alert settings for reference."""

    high_threshold: int = DEFAULT_HIGH_THRESHOLD
    low_threshold: int = DEFAULT_LOW_THRESHOLD
    email_alerts: bool = DEFAULT_EMAIL_ALERTS
    sms_alerts: bool = DEFAULT_SMS_ALERTS
