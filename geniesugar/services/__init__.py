# Business Logic Services
from geniesugar.services.alert_evaluator import AlertClassification, evaluate
from geniesugar.services.alert_notifier import (
    DeliveryAttempt,
    check_and_send_glucose_alerts,
    dispatch_glucose_alert,
)
from geniesugar.services.email_channel import (
    EmailChannel,
    EmailDeliveryError,
    SendGridEmailChannel,
)

__all__ = [
    "AlertClassification",
    "DeliveryAttempt",
    "EmailChannel",
    "EmailDeliveryError",
    "SendGridEmailChannel",
    "check_and_send_glucose_alerts",
    "dispatch_glucose_alert",
    "evaluate",
]
