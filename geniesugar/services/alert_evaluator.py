"""Glucose alert evaluation.

Classifies a single reading against a user's high/low thresholds.
"""

import enum
from typing import Protocol


class AlertClassification(str, enum.Enum):
    """Outcome of comparing one reading to the thresholds."""

    NONE = "none"
    HIGH = "high"
    LOW = "low"


class Thresholds(Protocol):
    """Anything carrying high/low thresholds, e.g. an AlertSettings row."""

    high_threshold: int
    low_threshold: int


def evaluate(value: int, thresholds: Thresholds | None) -> AlertClassification:
    """Classify a glucose value (mg/dL).

    Both boundaries are inclusive: a value equal to the high threshold is
    HIGH and a value equal to the low threshold is LOW. High is checked
    first. Users without thresholds are never alerted on.
    """
    if thresholds is None:
        return AlertClassification.NONE
    if value >= thresholds.high_threshold:
        return AlertClassification.HIGH
    if value <= thresholds.low_threshold:
        return AlertClassification.LOW
    return AlertClassification.NONE
