"""User account model with role-based access control."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from geniesugar.models.base import Base, TimestampMixin


class UserRole(str, enum.Enum):
    """User roles.

    - PATIENT: Logs readings and owns alert settings and family contacts
    - PHYSICIAN, DIETITIAN: Care-team accounts; may sign up and manage
      their own settings and contacts, but cannot log readings
    - ADMIN: Reserved for operators; created directly in the database,
      never through registration, and not required by any endpoint
    """

    PATIENT = "patient"
    PHYSICIAN = "physician"
    DIETITIAN = "dietitian"
    ADMIN = "admin"


class User(Base, TimestampMixin):
    """User account.

    Attributes:
        id: Unique user identifier (UUID)
        email: Login email, stored lowercased
        hashed_password: Bcrypt hash
        full_name: Name shown to family contacts in alert emails
        role: patient, physician, dietitian or admin
        is_active: Whether the account may log in
        last_login_at: Timestamp of last successful login
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            name="userrole",
            create_type=False,  # Created in migration
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        default=UserRole.PATIENT,
    )
    is_active: Mapped[bool] = mapped_column(
        default=True,
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    glucose_readings = relationship(
        "GlucoseReading",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    alert_settings = relationship(
        "AlertSettings",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )
    family_contacts = relationship(
        "FamilyContact",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def display_name(self) -> str:
        """Name used when addressing other people about this user."""
        return self.full_name or self.email

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role.value})>"
