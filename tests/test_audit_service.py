"""Tests for the audit logging service."""

import json
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from geniesugar.services.audit_service import GLUCOSE_LOGGED, USER_REGISTERED, log_event


def _mock_db():
    mock_db = AsyncMock()
    mock_db.add = MagicMock()
    mock_db.expunge = MagicMock()
    return mock_db


class TestLogEvent:
    @pytest.mark.asyncio
    async def test_stages_entry_without_committing(self):
        mock_db = _mock_db()
        user_id = uuid.uuid4()

        await log_event(
            mock_db,
            event_type=GLUCOSE_LOGGED,
            user_id=user_id,
            detail={"value": 185},
            ip_address="203.0.113.7",
        )

        entry = mock_db.add.call_args.args[0]
        assert entry.event_type == GLUCOSE_LOGGED
        assert entry.user_id == user_id
        assert json.loads(entry.detail) == {"value": 185}
        assert entry.ip_address == "203.0.113.7"
        mock_db.flush.assert_awaited_once()
        mock_db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_detail_stored_as_null(self):
        mock_db = _mock_db()

        await log_event(mock_db, event_type=USER_REGISTERED)

        assert mock_db.add.call_args.args[0].detail is None

    @pytest.mark.asyncio
    async def test_flush_failure_is_swallowed(self):
        mock_db = _mock_db()
        mock_db.flush = AsyncMock(side_effect=RuntimeError("db gone"))

        await log_event(mock_db, event_type=USER_REGISTERED)

        mock_db.expunge.assert_called_once()
