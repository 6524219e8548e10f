"""Family contact service.

List, add and remove the contacts that are copied on glucose alerts.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geniesugar.logging_config import get_logger
from geniesugar.models.family_contact import FamilyContact
from geniesugar.schemas.family_contact import FamilyContactCreate
from geniesugar.services.audit_service import (
    FAMILY_CONTACT_ADDED,
    FAMILY_CONTACT_REMOVED,
    log_event,
)

logger = get_logger(__name__)


async def list_contacts(
    user_id: uuid.UUID,
    db: AsyncSession,
) -> list[FamilyContact]:
    """List a user's family contacts, oldest first."""
    result = await db.execute(
        select(FamilyContact)
        .where(FamilyContact.user_id == user_id)
        .order_by(FamilyContact.created_at)
    )
    return list(result.scalars().all())


async def get_contact(
    contact_id: uuid.UUID,
    user_id: uuid.UUID,
    db: AsyncSession,
) -> FamilyContact | None:
    """Get a single contact, scoped to its owner."""
    result = await db.execute(
        select(FamilyContact).where(
            FamilyContact.id == contact_id,
            FamilyContact.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def add_contact(
    user_id: uuid.UUID,
    data: FamilyContactCreate,
    db: AsyncSession,
    ip_address: str | None = None,
) -> FamilyContact:
    """Create a family contact owned by ``user_id``, audited in the same commit."""
    contact = FamilyContact(
        user_id=user_id,
        name=data.name,
        email=str(data.email),
        phone=data.phone,
        relationship_label=data.relationship,
    )
    db.add(contact)
    await db.flush()
    await log_event(
        db,
        event_type=FAMILY_CONTACT_ADDED,
        user_id=user_id,
        detail={"contact_id": str(contact.id)},
        ip_address=ip_address,
    )
    await db.commit()
    await db.refresh(contact)

    logger.info(
        "Added family contact",
        user_id=str(user_id),
        contact_id=str(contact.id),
    )

    return contact


async def remove_contact(
    contact_id: uuid.UUID,
    user_id: uuid.UUID,
    db: AsyncSession,
    ip_address: str | None = None,
) -> bool:
    """Delete a contact owned by ``user_id``, audited in the same commit.

    Returns:
        True if deleted, False if it does not exist or belongs to someone else.
    """
    contact = await get_contact(contact_id, user_id, db)
    if contact is None:
        return False

    await db.delete(contact)
    await log_event(
        db,
        event_type=FAMILY_CONTACT_REMOVED,
        user_id=user_id,
        detail={"contact_id": str(contact_id)},
        ip_address=ip_address,
    )
    await db.commit()

    logger.info(
        "Removed family contact",
        user_id=str(user_id),
        contact_id=str(contact_id),
    )

    return True
