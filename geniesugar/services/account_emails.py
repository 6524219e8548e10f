"""Account lifecycle emails."""

import html

from geniesugar.config import settings
from geniesugar.logging_config import get_logger
from geniesugar.models.user import UserRole
from geniesugar.services.email_channel import (
    EmailChannel,
    EmailDeliveryError,
    get_email_channel,
)

logger = get_logger(__name__)

ROLE_LABEL: dict[UserRole, str] = {
    UserRole.PATIENT: "Patient",
    UserRole.PHYSICIAN: "Physician",
    UserRole.DIETITIAN: "Dietitian",
    UserRole.ADMIN: "Administrator",
}


def format_welcome_email(full_name: str, role: UserRole) -> tuple[str, str]:
    """Build the (subject, html) pair for a new account."""
    safe_name = html.escape(full_name)
    login_url = html.escape(f"{settings.app_url}/login")
    body = "\n".join(
        [
            f"<h2>Welcome to GenieSugar, {safe_name}</h2>",
            "<p>GenieSugar helps patients and their care team track glucose "
            "and stay informed.</p>",
            f"<p>You registered as a <strong>{ROLE_LABEL.get(role, 'Patient')}"
            "</strong>.</p>",
            f'<p><a href="{login_url}">Log in to GenieSugar</a></p>',
        ]
    )
    return "Welcome to GenieSugar", body


async def send_welcome_email(
    email: str,
    full_name: str,
    role: UserRole,
    channel: EmailChannel | None = None,
) -> bool:
    """Send the welcome email. Failures are logged, never raised.

    Returns:
        True if the email was handed to the provider.
    """
    subject, body = format_welcome_email(full_name, role)
    try:
        await (channel or get_email_channel()).send(email, subject, body)
    except EmailDeliveryError as e:
        logger.warning("Failed to send welcome email", error=str(e))
        return False
    except Exception:
        logger.exception("Unexpected error sending welcome email")
        return False
    return True
