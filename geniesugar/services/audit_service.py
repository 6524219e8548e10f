"""Audit logging service."""

import json
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from geniesugar.logging_config import get_logger
from geniesugar.models.audit_log import AuditLog

logger = get_logger(__name__)

USER_REGISTERED = "USER_REGISTERED"
GLUCOSE_LOGGED = "GLUCOSE_LOGGED"
ALERT_SETTINGS_UPDATED = "ALERT_SETTINGS_UPDATED"
FAMILY_CONTACT_ADDED = "FAMILY_CONTACT_ADDED"
FAMILY_CONTACT_REMOVED = "FAMILY_CONTACT_REMOVED"


async def log_event(
    db: AsyncSession,
    event_type: str,
    user_id: uuid.UUID | None = None,
    detail: dict[str, Any] | None = None,
    ip_address: str | None = None,
) -> None:
    """Stage an audit log entry in the caller's transaction.

    The entry is flushed, not committed; it lands with the caller's next
    commit. Errors are logged and never raised so callers are not disrupted.
    """
    entry = AuditLog(
        event_type=event_type,
        user_id=user_id,
        detail=json.dumps(detail) if detail else None,
        ip_address=ip_address,
    )
    try:
        db.add(entry)
        await db.flush()
    except Exception:
        try:
            db.expunge(entry)
        except Exception:
            pass
        logger.exception(
            "Failed to write audit log",
            event_type=event_type,
        )
