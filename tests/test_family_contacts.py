"""Tests for family contacts: schema validation, service and endpoints."""

import json
import uuid
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from geniesugar.core.auth import get_current_user
from geniesugar.database import get_db
from geniesugar.main import app
from geniesugar.models.family_contact import FamilyContact
from geniesugar.models.user import UserRole
from geniesugar.schemas.family_contact import FamilyContactCreate, FamilyContactResponse
from geniesugar.services.family_contact import (
    add_contact,
    list_contacts,
    remove_contact,
)


def _mock_user():
    user = MagicMock()
    user.id = uuid.uuid4()
    user.email = "sara@example.com"
    user.role = UserRole.PATIENT
    user.is_active = True
    return user


def _mock_db(scalar=None, scalars=None):
    mock_db = AsyncMock()
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = scalar
    mock_result.scalars.return_value.all.return_value = scalars or []
    mock_db.execute = AsyncMock(return_value=mock_result)
    mock_db.add = MagicMock()
    mock_db.expunge = MagicMock()

    async def _flush():
        for call in mock_db.add.call_args_list:
            if call.args[0].id is None:
                call.args[0].id = uuid.uuid4()

    async def _refresh(obj):
        if obj.created_at is None:
            obj.created_at = datetime.now(UTC)

    mock_db.flush = AsyncMock(side_effect=_flush)
    mock_db.refresh = AsyncMock(side_effect=_refresh)
    return mock_db


def _contact(user_id=None, name="Omar Ahmed", email="omar@example.com"):
    return FamilyContact(
        id=uuid.uuid4(),
        user_id=user_id or uuid.uuid4(),
        name=name,
        email=email,
        phone=None,
        relationship_label="Brother",
        created_at=datetime.now(UTC),
    )


# ---------------------------------------------------------------------------
# Schema validation
# ---------------------------------------------------------------------------
class TestFamilyContactCreateSchema:
    def test_valid_contact(self):
        data = FamilyContactCreate(
            name="  Omar Ahmed ",
            email="omar@example.com",
            relationship=" Brother ",
        )
        assert data.name == "Omar Ahmed"
        assert data.relationship == "Brother"
        assert data.phone is None

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            FamilyContactCreate(name="Omar", email="not-an-email", relationship="Brother")

    def test_short_name_rejected(self):
        with pytest.raises(ValidationError):
            FamilyContactCreate(name=" O ", email="omar@example.com", relationship="Brother")

    def test_blank_relationship_rejected(self):
        with pytest.raises(ValidationError):
            FamilyContactCreate(name="Omar", email="omar@example.com", relationship="   ")

    def test_blank_phone_becomes_none(self):
        data = FamilyContactCreate(
            name="Omar",
            email="omar@example.com",
            phone="  ",
            relationship="Brother",
        )
        assert data.phone is None

    def test_response_reads_relationship_from_model(self):
        response = FamilyContactResponse.model_validate(_contact())
        assert response.relationship == "Brother"
        assert response.model_dump()["relationship"] == "Brother"


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------
class TestFamilyContactService:
    @pytest.mark.asyncio
    async def test_list_contacts(self):
        user_id = uuid.uuid4()
        contacts = [_contact(user_id), _contact(user_id, name="Lina")]

        result = await list_contacts(user_id, _mock_db(scalars=contacts))

        assert result == contacts

    @pytest.mark.asyncio
    async def test_add_contact(self):
        user_id = uuid.uuid4()
        mock_db = _mock_db()
        data = FamilyContactCreate(
            name="Omar Ahmed",
            email="omar@example.com",
            phone="+15550100",
            relationship="Brother",
        )

        contact = await add_contact(user_id, data, mock_db, ip_address="203.0.113.7")

        added = [c.args[0] for c in mock_db.add.call_args_list]
        assert added[0] is contact
        assert added[1].event_type == "FAMILY_CONTACT_ADDED"
        assert json.loads(added[1].detail) == {"contact_id": str(contact.id)}
        assert added[1].ip_address == "203.0.113.7"
        names = [name for name, _, _ in mock_db.mock_calls]
        assert names.count("commit") == 1
        assert names.index("flush") < names.index("commit")
        assert contact.user_id == user_id
        assert contact.email == "omar@example.com"
        assert contact.phone == "+15550100"
        assert contact.relationship_label == "Brother"

    @pytest.mark.asyncio
    async def test_remove_owned_contact(self):
        user_id = uuid.uuid4()
        contact = _contact(user_id)
        mock_db = _mock_db(scalar=contact)

        assert await remove_contact(contact.id, user_id, mock_db) is True
        mock_db.delete.assert_awaited_once_with(contact)
        mock_db.commit.assert_awaited_once()
        audit_entry = mock_db.add.call_args.args[0]
        assert audit_entry.event_type == "FAMILY_CONTACT_REMOVED"

    @pytest.mark.asyncio
    async def test_remove_missing_contact(self):
        mock_db = _mock_db(scalar=None)

        assert await remove_contact(uuid.uuid4(), uuid.uuid4(), mock_db) is False
        mock_db.delete.assert_not_awaited()
        mock_db.commit.assert_not_awaited()


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------
class TestFamilyContactsApi:
    """Tests for /api/family-contacts endpoints."""

    @pytest.mark.asyncio
    async def test_list_requires_auth(self, client):
        response = await client.get("/api/family-contacts")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_list_contacts(self, client):
        mock_user = _mock_user()
        contacts = [_contact(mock_user.id)]

        app.dependency_overrides[get_current_user] = lambda: mock_user
        app.dependency_overrides[get_db] = lambda: _mock_db(scalars=contacts)

        try:
            response = await client.get("/api/family-contacts")
            assert response.status_code == 200
            data = response.json()
            assert data["count"] == 1
            assert data["contacts"][0]["name"] == "Omar Ahmed"
            assert data["contacts"][0]["relationship"] == "Brother"
        finally:
            app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_create_contact(self, client):
        mock_user = _mock_user()
        mock_db = _mock_db()

        app.dependency_overrides[get_current_user] = lambda: mock_user
        app.dependency_overrides[get_db] = lambda: mock_db

        try:
            response = await client.post(
                "/api/family-contacts",
                json={
                    "name": "Omar Ahmed",
                    "email": "omar@example.com",
                    "relationship": "Brother",
                },
            )
            assert response.status_code == 201
            data = response.json()
            contact, audit_entry = [c.args[0] for c in mock_db.add.call_args_list]
            assert data["id"] == str(contact.id)
            assert data["email"] == "omar@example.com"
            assert data["relationship"] == "Brother"
            assert audit_entry.event_type == "FAMILY_CONTACT_ADDED"
            mock_db.commit.assert_awaited_once()
        finally:
            app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_create_rejects_invalid_email(self, client):
        mock_user = _mock_user()

        app.dependency_overrides[get_current_user] = lambda: mock_user
        app.dependency_overrides[get_db] = lambda: _mock_db()

        try:
            response = await client.post(
                "/api/family-contacts",
                json={"name": "Omar", "email": "nope", "relationship": "Brother"},
            )
            assert response.status_code == 422
        finally:
            app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_delete_other_users_contact_returns_404(self, client):
        mock_user = _mock_user()

        app.dependency_overrides[get_current_user] = lambda: mock_user
        app.dependency_overrides[get_db] = lambda: _mock_db(scalar=None)

        try:
            response = await client.delete(f"/api/family-contacts/{uuid.uuid4()}")
            assert response.status_code == 404
            assert response.json()["detail"] == "Family contact not found"
        finally:
            app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_delete_owned_contact(self, client):
        mock_user = _mock_user()
        contact = _contact(mock_user.id)
        mock_db = _mock_db(scalar=contact)

        app.dependency_overrides[get_current_user] = lambda: mock_user
        app.dependency_overrides[get_db] = lambda: mock_db

        try:
            response = await client.delete(f"/api/family-contacts/{contact.id}")
            assert response.status_code == 204
            mock_db.delete.assert_awaited_once_with(contact)
            audit_entry = mock_db.add.call_args.args[0]
            assert audit_entry.event_type == "FAMILY_CONTACT_REMOVED"
        finally:
            app.dependency_overrides.clear()
