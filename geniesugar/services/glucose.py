"""Glucose reading service."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geniesugar.logging_config import get_logger
from geniesugar.models.glucose import GlucoseReading
from geniesugar.schemas.glucose import GlucoseReadingCreate
from geniesugar.services.audit_service import GLUCOSE_LOGGED, log_event

logger = get_logger(__name__)


async def list_readings(
    user_id: uuid.UUID,
    db: AsyncSession,
) -> list[GlucoseReading]:
    """List a user's readings, newest first."""
    result = await db.execute(
        select(GlucoseReading)
        .where(GlucoseReading.user_id == user_id)
        .order_by(GlucoseReading.timestamp.desc())
    )
    return list(result.scalars().all())


async def create_reading(
    user_id: uuid.UUID,
    data: GlucoseReadingCreate,
    db: AsyncSession,
) -> GlucoseReading:
    """Store a reading and its audit entry in one commit.

    Alert evaluation is not done here; callers schedule it once this
    returns so the write never waits on notification delivery.
    """
    reading = GlucoseReading(
        user_id=user_id,
        value=data.value,
        timestamp=data.timestamp,
        note=data.note,
    )
    db.add(reading)
    await log_event(
        db,
        event_type=GLUCOSE_LOGGED,
        user_id=user_id,
        detail={"value": data.value},
    )
    await db.commit()
    await db.refresh(reading)

    logger.info(
        "Glucose reading logged",
        user_id=str(user_id),
        reading_id=str(reading.id),
    )

    return reading


async def delete_reading(
    reading_id: uuid.UUID,
    user_id: uuid.UUID,
    db: AsyncSession,
) -> bool:
    """Delete a reading owned by ``user_id``. Returns False if not found."""
    result = await db.execute(
        select(GlucoseReading).where(
            GlucoseReading.id == reading_id,
            GlucoseReading.user_id == user_id,
        )
    )
    reading = result.scalar_one_or_none()
    if reading is None:
        return False

    await db.delete(reading)
    await db.commit()

    logger.info(
        "Glucose reading deleted",
        user_id=str(user_id),
        reading_id=str(reading_id),
    )

    return True
