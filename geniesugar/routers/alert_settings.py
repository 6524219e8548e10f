"""Alert settings router."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from geniesugar.core.auth import get_current_user
from geniesugar.database import get_db
from geniesugar.models.user import User
from geniesugar.schemas.alert_settings import (
    AlertSettingsDefaults,
    AlertSettingsResponse,
    AlertSettingsUpdate,
)
from geniesugar.services.alert_settings import (
    get_or_create_alert_settings,
    upsert_alert_settings,
)

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get("/settings", response_model=AlertSettingsResponse)
async def get_settings(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> AlertSettingsResponse:
    """Get the current user's alert settings.

    Creates the defaults on first access.
    """
    alert_settings = await get_or_create_alert_settings(user.id, db)
    return AlertSettingsResponse.model_validate(alert_settings)


@router.put("/settings", response_model=AlertSettingsResponse)
async def put_settings(
    body: AlertSettingsUpdate,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> AlertSettingsResponse:
    """Update the current user's alert settings.

    Only provided fields are updated.
    """
    try:
        alert_settings = await upsert_alert_settings(
            user.id,
            body,
            db,
            ip_address=request.client.host if request.client else None,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return AlertSettingsResponse.model_validate(alert_settings)


@router.get("/settings/defaults", response_model=AlertSettingsDefaults)
async def get_settings_defaults() -> AlertSettingsDefaults:
    """Default alert settings applied to new users."""
    return AlertSettingsDefaults()
