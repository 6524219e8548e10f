"""Family contacts router.

Contacts listed here receive a copy of every glucose alert.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from geniesugar.core.auth import get_current_user
from geniesugar.database import get_db
from geniesugar.models.user import User
from geniesugar.schemas.family_contact import (
    FamilyContactCreate,
    FamilyContactListResponse,
    FamilyContactResponse,
)
from geniesugar.services.family_contact import (
    add_contact,
    list_contacts,
    remove_contact,
)

router = APIRouter(prefix="/api/family-contacts", tags=["family-contacts"])


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.get("", response_model=FamilyContactListResponse)
async def get_contacts(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> FamilyContactListResponse:
    """List the current user's family contacts."""
    contacts = await list_contacts(user.id, db)
    return FamilyContactListResponse(
        contacts=[FamilyContactResponse.model_validate(c) for c in contacts],
        count=len(contacts),
    )


@router.post(
    "",
    response_model=FamilyContactResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_contact(
    data: FamilyContactCreate,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> FamilyContactResponse:
    """Add a family contact."""
    contact = await add_contact(user.id, data, db, ip_address=_client_ip(request))
    return FamilyContactResponse.model_validate(contact)


@router.delete(
    "/{contact_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_contact(
    contact_id: uuid.UUID,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    """Remove a family contact owned by the current user."""
    removed = await remove_contact(
        contact_id, user.id, db, ip_address=_client_ip(request)
    )
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Family contact not found",
        )
