"""Family contact model.

People who receive a copy of a patient's glucose alert emails.
"""

import uuid

from sqlalchemy import ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from geniesugar.models.base import Base, TimestampMixin


class FamilyContact(Base, TimestampMixin):
    """Family or emergency contact owned by a single user."""

    __tablename__ = "family_contacts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    phone: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
    )

    relationship_label: Mapped[str] = mapped_column(
        "relationship",
        String(50),
        nullable=False,
    )

    user = relationship("User", back_populates="family_contacts")

    def __repr__(self) -> str:
        return (
            f"<FamilyContact(name={self.name!r}, email={self.email!r}, "
            f"relationship={self.relationship_label!r})>"
        )
