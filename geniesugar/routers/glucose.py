"""Glucose readings router.

Logging a reading schedules the alert check as a background task, so
the response never waits on, or fails because of, email delivery.
"""

import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from geniesugar.core.auth import get_current_user, require_patient
from geniesugar.database import get_db
from geniesugar.models.user import User
from geniesugar.schemas.glucose import (
    GlucoseReadingCreate,
    GlucoseReadingListResponse,
    GlucoseReadingResponse,
)
from geniesugar.services.alert_notifier import check_and_send_glucose_alerts
from geniesugar.services.glucose import create_reading, delete_reading, list_readings

router = APIRouter(prefix="/api/glucose", tags=["glucose"])


@router.get("", response_model=GlucoseReadingListResponse)
async def get_readings(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> GlucoseReadingListResponse:
    """List the current user's glucose readings, newest first."""
    readings = await list_readings(user.id, db)
    return GlucoseReadingListResponse(
        readings=[GlucoseReadingResponse.model_validate(r) for r in readings],
        count=len(readings),
    )


@router.post(
    "",
    response_model=GlucoseReadingResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_patient)],
)
async def log_reading(
    data: GlucoseReadingCreate,
    background_tasks: BackgroundTasks,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> GlucoseReadingResponse:
    """Log a glucose reading and check it against the user's alert settings."""
    reading = await create_reading(user.id, data, db)

    background_tasks.add_task(
        check_and_send_glucose_alerts,
        user.id,
        reading.value,
        reading.timestamp,
    )

    return GlucoseReadingResponse.model_validate(reading)


@router.delete(
    "/{reading_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_patient)],
)
async def remove_reading(
    reading_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete one of the current user's readings."""
    deleted = await delete_reading(reading_id, user.id, db)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Glucose reading not found",
        )
