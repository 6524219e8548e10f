"""Email delivery through the SendGrid v3 HTTP API.

The rest of the application depends only on the ``EmailChannel``
contract: ``await channel.send(to, subject, html_body)`` returns on
success and raises ``EmailDeliveryError`` on failure.
"""

from typing import Protocol

import httpx

from geniesugar.config import settings
from geniesugar.logging_config import get_logger

logger = get_logger(__name__)


class EmailDeliveryError(Exception):
    """Email could not be handed to the delivery provider."""


class EmailChannel(Protocol):
    async def send(self, to: str, subject: str, html_body: str) -> None: ...


class SendGridEmailChannel:
    """EmailChannel backed by SendGrid's mail/send endpoint.

    Args:
        api_key: SendGrid API key; defaults to SENDGRID_API_KEY.
        transport: Optional httpx transport, used by tests to stub the API.
    """

    def __init__(
        self,
        api_key: str | None = None,
        from_email: str | None = None,
        from_name: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = settings.sendgrid_api_key if api_key is None else api_key
        self.from_email = from_email or settings.from_email
        self.from_name = from_name or settings.from_name
        self.api_url = api_url or settings.sendgrid_api_url
        self.timeout = timeout or settings.email_timeout_seconds
        self._transport = transport

    def _build_payload(self, to: str, subject: str, html_body: str) -> dict:
        return {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": subject,
            "content": [{"type": "text/html", "value": html_body}],
        }

    async def send(self, to: str, subject: str, html_body: str) -> None:
        """Send one HTML email.

        Raises:
            EmailDeliveryError: If the API key is missing, the request fails,
                or SendGrid answers with a non-2xx status.
        """
        if not self.api_key:
            raise EmailDeliveryError("SendGrid API key is not configured")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.api_url,
                    json=self._build_payload(to, subject, html_body),
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"SendGrid request failed: {e}") from e

        if not response.is_success:
            raise EmailDeliveryError(
                f"SendGrid API error: {response.status_code} {response.text}"
            )

        logger.debug("Email accepted by SendGrid", subject=subject)


def get_email_channel() -> EmailChannel:
    """Return the configured email channel."""
    return SendGridEmailChannel()
