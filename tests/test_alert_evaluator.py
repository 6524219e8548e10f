"""Tests for glucose alert classification."""

from types import SimpleNamespace

import pytest

from geniesugar.schemas.glucose import MAX_GLUCOSE_MG_DL, MIN_GLUCOSE_MG_DL
from geniesugar.services.alert_evaluator import AlertClassification, evaluate


def make_thresholds(high: int = 180, low: int = 70) -> SimpleNamespace:
    return SimpleNamespace(high_threshold=high, low_threshold=low)


class TestEvaluate:
    """Tests for evaluate()."""

    def test_above_high_is_high(self):
        assert evaluate(250, make_thresholds()) is AlertClassification.HIGH

    def test_below_low_is_low(self):
        assert evaluate(55, make_thresholds()) is AlertClassification.LOW

    def test_in_range_is_none(self):
        assert evaluate(120, make_thresholds()) is AlertClassification.NONE

    # Boundary value tests
    def test_boundary_equal_to_high_is_high(self):
        assert evaluate(180, make_thresholds()) is AlertClassification.HIGH

    def test_boundary_equal_to_low_is_low(self):
        assert evaluate(70, make_thresholds()) is AlertClassification.LOW

    def test_boundary_just_inside_range(self):
        thresholds = make_thresholds()
        assert evaluate(179, thresholds) is AlertClassification.NONE
        assert evaluate(71, thresholds) is AlertClassification.NONE

    def test_no_settings_never_alerts(self):
        for value in (MIN_GLUCOSE_MG_DL, 120, MAX_GLUCOSE_MG_DL):
            assert evaluate(value, None) is AlertClassification.NONE

    def test_high_checked_before_low(self):
        # Only reachable with inverted thresholds, which the API rejects
        assert evaluate(100, make_thresholds(high=90, low=110)) is AlertClassification.HIGH

    def test_is_deterministic(self):
        thresholds = make_thresholds()
        assert evaluate(185, thresholds) is evaluate(185, thresholds)

    @pytest.mark.parametrize(("high", "low"), [(180, 70), (250, 55), (100, 99)])
    def test_every_valid_reading_matches_its_band(self, high, low):
        thresholds = make_thresholds(high=high, low=low)
        for value in range(MIN_GLUCOSE_MG_DL, MAX_GLUCOSE_MG_DL + 1):
            result = evaluate(value, thresholds)
            if value >= high:
                assert result is AlertClassification.HIGH
            elif value <= low:
                assert result is AlertClassification.LOW
            else:
                assert result is AlertClassification.NONE

    def test_classification_values(self):
        assert AlertClassification.HIGH.value == "high"
        assert AlertClassification.LOW.value == "low"
        assert AlertClassification.NONE.value == "none"
