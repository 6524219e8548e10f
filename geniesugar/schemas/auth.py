"""Authentication schemas.

Pydantic schemas for registration, login, logout and the current user.
"""

import re
import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from geniesugar.models.user import UserRole

_PASSWORD_RULES = "Password must be at least 8 characters with uppercase, lowercase, and number"

# Roles a visitor may pick at sign-up; admins are provisioned out of band
SELF_SERVICE_ROLES = (UserRole.PATIENT, UserRole.PHYSICIAN, UserRole.DIETITIAN)


class UserRegistrationRequest(BaseModel):
    """Request schema for user registration."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (min 8 chars, must include uppercase, lowercase, and number)",
    )
    full_name: str = Field(
        ...,
        min_length=2,
        max_length=255,
        description="Full name (at least 2 characters)",
    )
    role: UserRole = Field(default=UserRole.PATIENT, description="Account role")

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        if not re.search(r"[a-z]", v):
            raise ValueError(_PASSWORD_RULES)
        if not re.search(r"[A-Z]", v):
            raise ValueError(_PASSWORD_RULES)
        if not re.search(r"\d", v):
            raise ValueError(_PASSWORD_RULES)
        return v

    @field_validator("full_name")
    @classmethod
    def strip_full_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            msg = "Full name must be at least 2 characters"
            raise ValueError(msg)
        return v

    @field_validator("role")
    @classmethod
    def reject_admin_signup(cls, v: UserRole) -> UserRole:
        if v not in SELF_SERVICE_ROLES:
            msg = "Role must be one of: patient, physician, dietitian"
            raise ValueError(msg)
        return v


class UserResponse(BaseModel):
    """Public user information."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    email: str
    full_name: str
    role: UserRole
    is_active: bool
    created_at: datetime


class UserRegistrationResponse(BaseModel):
    """Response schema for successful registration."""

    id: uuid.UUID = Field(..., description="User's unique identifier")
    email: str = Field(..., description="User's email address")
    role: UserRole = Field(..., description="Assigned user role")
    message: str = Field(default="Registration successful")


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class LoginResponse(BaseModel):
    """Response schema for successful login."""

    message: str = Field(default="Login successful")
    user: UserResponse = Field(..., description="Authenticated user details")


class LogoutResponse(BaseModel):
    """Response schema for logout."""

    message: str = Field(default="Logged out successfully")


class ErrorResponse(BaseModel):
    """Error response schema."""

    detail: str = Field(..., description="Error message")
