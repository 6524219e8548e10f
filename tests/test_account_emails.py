"""Tests for account lifecycle emails."""

from unittest.mock import AsyncMock

import pytest

from geniesugar.models.user import UserRole
from geniesugar.services.account_emails import format_welcome_email, send_welcome_email
from geniesugar.services.email_channel import EmailDeliveryError


class TestFormatWelcomeEmail:
    def test_subject(self):
        subject, _ = format_welcome_email("Sara Ahmed", UserRole.PATIENT)
        assert subject == "Welcome to GenieSugar"

    def test_body_names_user_and_role(self):
        _, body = format_welcome_email("Dr. Karim", UserRole.PHYSICIAN)
        assert "Dr. Karim" in body
        assert "Physician" in body
        assert "/login" in body


class TestSendWelcomeEmail:
    @pytest.mark.asyncio
    async def test_success_returns_true(self):
        channel = AsyncMock()
        sent = await send_welcome_email(
            "sara@example.com", "Sara Ahmed", UserRole.PATIENT, channel=channel
        )
        assert sent is True
        channel.send.assert_awaited_once()
        assert channel.send.await_args.args[0] == "sara@example.com"

    @pytest.mark.asyncio
    async def test_delivery_failure_returns_false(self):
        channel = AsyncMock()
        channel.send.side_effect = EmailDeliveryError("SendGrid API error: 500")
        sent = await send_welcome_email(
            "sara@example.com", "Sara Ahmed", UserRole.PATIENT, channel=channel
        )
        assert sent is False

    @pytest.mark.asyncio
    async def test_unexpected_failure_returns_false(self):
        channel = AsyncMock()
        channel.send.side_effect = RuntimeError("boom")
        sent = await send_welcome_email(
            "sara@example.com", "Sara Ahmed", UserRole.DIETITIAN, channel=channel
        )
        assert sent is False
