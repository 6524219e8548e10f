"""Alert settings service.

Per-user glucose thresholds and channel toggles with a get-or-create
pattern. Reading the settings page creates the defaults; until then a
user has no settings and readings are never alerted on.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from geniesugar.logging_config import get_logger
from geniesugar.models.alert_settings import (
    DEFAULT_EMAIL_ALERTS,
    DEFAULT_HIGH_THRESHOLD,
    DEFAULT_LOW_THRESHOLD,
    DEFAULT_SMS_ALERTS,
    AlertSettings,
)
from geniesugar.schemas.alert_settings import AlertSettingsUpdate
from geniesugar.services.audit_service import ALERT_SETTINGS_UPDATED, log_event

logger = get_logger(__name__)


def _default_settings(user_id: uuid.UUID) -> AlertSettings:
    return AlertSettings(
        user_id=user_id,
        high_threshold=DEFAULT_HIGH_THRESHOLD,
        low_threshold=DEFAULT_LOW_THRESHOLD,
        email_alerts=DEFAULT_EMAIL_ALERTS,
        sms_alerts=DEFAULT_SMS_ALERTS,
    )


async def get_alert_settings(
    user_id: uuid.UUID,
    db: AsyncSession,
) -> AlertSettings | None:
    """Return the user's alert settings, or None if never configured."""
    result = await db.execute(
        select(AlertSettings).where(AlertSettings.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def get_or_create_alert_settings(
    user_id: uuid.UUID,
    db: AsyncSession,
) -> AlertSettings:
    """Get the user's alert settings, creating defaults if none exist.

    Args:
        user_id: User's UUID.
        db: Database session.

    Returns:
        The user's AlertSettings record.
    """
    settings = await get_alert_settings(user_id, db)
    if settings is not None:
        return settings

    settings = _default_settings(user_id)
    db.add(settings)
    try:
        await db.commit()
    except IntegrityError:
        # Concurrent request already created the row
        await db.rollback()
        result = await db.execute(
            select(AlertSettings).where(AlertSettings.user_id == user_id)
        )
        return result.scalar_one()
    await db.refresh(settings)

    logger.info(
        "Created default alert settings",
        user_id=str(user_id),
    )

    return settings


async def upsert_alert_settings(
    user_id: uuid.UUID,
    updates: AlertSettingsUpdate,
    db: AsyncSession,
    ip_address: str | None = None,
) -> AlertSettings:
    """Merge a partial update into the user's alert settings.

    Creates the defaults first if the user has none. Threshold ordering
    is checked against the merged values, so a lone high_threshold update
    below the stored low_threshold is rejected.

    The change and its audit entry are committed together; nothing is
    committed if validation fails.

    Raises:
        ValueError: If low_threshold >= high_threshold after merge.
    """
    settings = await get_or_create_alert_settings(user_id, db)

    new_high = (
        updates.high_threshold
        if updates.high_threshold is not None
        else settings.high_threshold
    )
    new_low = (
        updates.low_threshold
        if updates.low_threshold is not None
        else settings.low_threshold
    )

    if new_low >= new_high:
        msg = (
            f"low_threshold ({new_low}) must be less than "
            f"high_threshold ({new_high})"
        )
        raise ValueError(msg)

    update_data = updates.model_dump(exclude_none=True)
    for field, value in update_data.items():
        setattr(settings, field, value)

    await log_event(
        db,
        event_type=ALERT_SETTINGS_UPDATED,
        user_id=user_id,
        detail={"fields": sorted(update_data)},
        ip_address=ip_address,
    )
    await db.commit()
    await db.refresh(settings)

    logger.info(
        "Updated alert settings",
        user_id=str(user_id),
        fields=list(update_data.keys()),
    )

    return settings
