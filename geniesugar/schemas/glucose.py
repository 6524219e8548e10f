"""Glucose reading schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

MIN_GLUCOSE_MG_DL = 20
MAX_GLUCOSE_MG_DL = 600


class GlucoseReadingCreate(BaseModel):
    """Request schema for logging a glucose reading."""

    value: int = Field(
        ...,
        ge=MIN_GLUCOSE_MG_DL,
        le=MAX_GLUCOSE_MG_DL,
        description="Glucose value in mg/dL. Range: 20-600.",
    )
    timestamp: datetime = Field(..., description="When the reading was taken.")
    note: str | None = Field(default=None, max_length=1000)


class GlucoseReadingResponse(BaseModel):
    """Response schema for a single glucose reading."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    value: int
    timestamp: datetime
    note: str | None = None


class GlucoseReadingListResponse(BaseModel):
    """Response schema for a user's glucose readings."""

    readings: list[GlucoseReadingResponse]
    count: int
