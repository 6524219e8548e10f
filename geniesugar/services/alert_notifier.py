"""Glucose alert delivery by email.

A reading that breaches the user's thresholds fans out to:
  - the user's own address, when email alerts are enabled
  - every family contact with an email address, regardless of that toggle

Each recipient is attempted independently: a failed send is logged and
the remaining recipients are still tried. Nothing is retried or
deduplicated, so every breaching reading produces its own notifications.
"""

import html
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from geniesugar.database import get_db_session
from geniesugar.logging_config import get_logger
from geniesugar.models.alert_settings import AlertSettings
from geniesugar.models.family_contact import FamilyContact
from geniesugar.models.user import User
from geniesugar.services.alert_evaluator import AlertClassification, evaluate
from geniesugar.services.alert_settings import get_alert_settings
from geniesugar.services.email_channel import (
    EmailChannel,
    EmailDeliveryError,
    get_email_channel,
)
from geniesugar.services.family_contact import list_contacts

logger = get_logger(__name__)

SELF_ALERT = "self_alert"
FAMILY_ALERT = "family_alert"

ALERT_HEADLINE: dict[AlertClassification, str] = {
    AlertClassification.HIGH: "High Glucose Alert",
    AlertClassification.LOW: "Low Glucose Alert",
}


@dataclass
class DeliveryAttempt:
    """One attempted notification send."""

    recipient: str
    kind: str
    alert_type: AlertClassification
    glucose_value: int
    delivered: bool = False
    error: str | None = None


def format_glucose_alert_email(
    full_name: str,
    glucose_value: int,
    alert_type: AlertClassification,
    timestamp: datetime,
) -> tuple[str, str]:
    """Build the (subject, html) pair for the user's own alert."""
    headline = ALERT_HEADLINE.get(alert_type, "Glucose Alert")
    recorded_at = timestamp.strftime("%Y-%m-%d %H:%M %Z").strip()

    body = "\n".join(
        [
            f"<h2>{headline}</h2>",
            f"<p>Dear {html.escape(full_name)},</p>",
            f"<p>Your glucose reading is <strong>{glucose_value} mg/dL</strong>.</p>",
            f"<p>Recorded at: {recorded_at}</p>",
        ]
    )
    return f"GenieSugar Alert: {glucose_value} mg/dL", body


def format_family_alert_email(
    contact_name: str,
    patient_name: str,
    glucose_value: int,
    alert_type: AlertClassification,
) -> tuple[str, str]:
    """Build the (subject, html) pair sent to a family contact."""
    safe_patient = html.escape(patient_name)

    body = "\n".join(
        [
            f"<p>Dear {html.escape(contact_name)},</p>",
            f"<p>{safe_patient} recorded a {alert_type.value} glucose value:</p>",
            f"<h2>{glucose_value} mg/dL</h2>",
        ]
    )
    return f"Family Alert: {patient_name}", body


async def _deliver(
    channel: EmailChannel,
    attempt: DeliveryAttempt,
    subject: str,
    body: str,
    user_id: uuid.UUID,
) -> None:
    """Send one email and record the outcome on ``attempt``. Never raises."""
    try:
        await channel.send(attempt.recipient, subject, body)
        attempt.delivered = True
        logger.info(
            "Glucose alert email sent",
            user_id=str(user_id),
            kind=attempt.kind,
            alert_type=attempt.alert_type.value,
        )
    except EmailDeliveryError as e:
        attempt.error = str(e)
        logger.warning(
            "Failed to send glucose alert email",
            user_id=str(user_id),
            kind=attempt.kind,
            error=str(e),
        )
    except Exception as e:
        attempt.error = str(e)
        logger.error(
            "Unexpected error sending glucose alert email",
            user_id=str(user_id),
            kind=attempt.kind,
            error=str(e),
        )


async def dispatch_glucose_alert(
    alert: AlertClassification,
    user: User,
    alert_settings: AlertSettings,
    contacts: Sequence[FamilyContact],
    glucose_value: int,
    timestamp: datetime,
    channel: EmailChannel,
) -> list[DeliveryAttempt]:
    """Send the notifications for one classified reading.

    Args:
        alert: HIGH or LOW; NONE sends nothing.
        user: Owner of the reading.
        alert_settings: The user's channel toggles.
        contacts: The user's family contacts.
        glucose_value: Reading value in mg/dL.
        timestamp: When the reading was taken.
        channel: Email delivery channel.

    Returns:
        One DeliveryAttempt per recipient that was tried.
    """
    attempts: list[DeliveryAttempt] = []
    if alert is AlertClassification.NONE:
        return attempts

    if alert_settings.email_alerts:
        attempt = DeliveryAttempt(
            recipient=user.email,
            kind=SELF_ALERT,
            alert_type=alert,
            glucose_value=glucose_value,
        )
        subject, body = format_glucose_alert_email(
            user.display_name, glucose_value, alert, timestamp
        )
        await _deliver(channel, attempt, subject, body, user.id)
        attempts.append(attempt)

    if alert_settings.sms_alerts:
        logger.debug("SMS alerts are not supported, skipping", user_id=str(user.id))

    for contact in contacts:
        if not contact.email:
            continue
        attempt = DeliveryAttempt(
            recipient=contact.email,
            kind=FAMILY_ALERT,
            alert_type=alert,
            glucose_value=glucose_value,
        )
        subject, body = format_family_alert_email(
            contact.name, user.display_name, glucose_value, alert
        )
        await _deliver(channel, attempt, subject, body, user.id)
        attempts.append(attempt)

    return attempts


async def check_and_send_glucose_alerts(
    user_id: uuid.UUID,
    glucose_value: int,
    timestamp: datetime,
    channel: EmailChannel | None = None,
) -> list[DeliveryAttempt]:
    """Evaluate a freshly stored reading and notify if it breaches thresholds.

    Runs as a background task after the reading's request has returned,
    so it opens its own session. Any failure is logged and swallowed.
    """
    try:
        async with get_db_session() as db:
            alert_settings = await get_alert_settings(user_id, db)
            if alert_settings is None:
                logger.debug(
                    "No alert settings configured, skipping alert check",
                    user_id=str(user_id),
                )
                return []

            alert = evaluate(glucose_value, alert_settings)
            if alert is AlertClassification.NONE:
                return []

            user = await db.get(User, user_id)
            if user is None:
                logger.warning(
                    "Reading owner not found, skipping alert",
                    user_id=str(user_id),
                )
                return []

            contacts = await list_contacts(user_id, db)

        attempts = await dispatch_glucose_alert(
            alert,
            user,
            alert_settings,
            contacts,
            glucose_value,
            timestamp,
            channel or get_email_channel(),
        )
    except Exception:
        logger.exception(
            "Alert check failed",
            user_id=str(user_id),
        )
        return []

    logger.info(
        "Glucose alert dispatched",
        user_id=str(user_id),
        alert_type=alert.value,
        glucose_value=glucose_value,
        attempted=len(attempts),
        delivered=sum(1 for a in attempts if a.delivered),
    )
    return attempts
