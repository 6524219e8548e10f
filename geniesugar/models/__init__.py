# Database Models
from geniesugar.models.alert_settings import AlertSettings
from geniesugar.models.audit_log import AuditLog
from geniesugar.models.base import Base, TimestampMixin
from geniesugar.models.family_contact import FamilyContact
from geniesugar.models.glucose import GlucoseReading
from geniesugar.models.user import User, UserRole

__all__ = [
    "AlertSettings",
    "AuditLog",
    "Base",
    "FamilyContact",
    "GlucoseReading",
    "TimestampMixin",
    "User",
    "UserRole",
]
