"""Family contact schemas."""

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator


class FamilyContactCreate(BaseModel):
    """Request schema for adding a family contact."""

    name: str = Field(
        ...,
        min_length=2,
        max_length=100,
        description="Contact name (2-100 characters).",
    )
    email: EmailStr = Field(..., description="Address that receives alert copies.")
    phone: str | None = Field(default=None, max_length=32)
    relationship: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Relationship to the patient, e.g. 'Mother'.",
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            msg = "Name must be at least 2 characters"
            raise ValueError(msg)
        return v

    @field_validator("relationship")
    @classmethod
    def strip_relationship(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Relationship is required"
            raise ValueError(msg)
        return v

    @field_validator("phone")
    @classmethod
    def blank_phone_to_none(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
        return v or None


class FamilyContactResponse(BaseModel):
    """Response schema for a single family contact."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    name: str
    email: str
    phone: str | None = None
    relationship: str = Field(
        validation_alias=AliasChoices("relationship_label", "relationship"),
    )
    created_at: datetime


class FamilyContactListResponse(BaseModel):
    """Response schema for listing family contacts."""

    contacts: list[FamilyContactResponse]
    count: int
