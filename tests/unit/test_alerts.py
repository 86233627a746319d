"""Test the alerts module."""

import pytest

from vibrapy.core import models
from vibrapy.processing import alerts, features


def _features(rms: float = 0.0, crest_factor: float = 0.0) -> models.FeatureSet:
    axis = models.AxisFeatures(rms=rms, crest_factor=crest_factor)
    return models.FeatureSet(x=axis, y=axis, z=axis)


def test_no_alerts() -> None:
    """Test that a quiet machine raises nothing."""
    assert alerts.classify(_features(rms=1.0, crest_factor=4.0)) == []


def test_elevated_vibration() -> None:
    """Test the warning tier of the RMS rule."""
    result = alerts.classify(_features(rms=1.5))

    assert result == [
        models.AlertEvent(
            kind=models.AlertKind.warning,
            severity=models.AlertSeverity.medium,
            title="Elevated Vibration Levels",
            description="RMS vibration level (1.500) is above normal range",
            recommendation="Schedule inspection within the next week. "
            "Monitor for further degradation.",
        )
    ]


def test_excessive_vibration() -> None:
    """Test that the critical tier replaces the warning tier of the RMS rule."""
    result = alerts.classify(_features(rms=2.5))

    assert len(result) == 1
    assert result[0].kind == models.AlertKind.critical
    assert result[0].severity == models.AlertSeverity.high
    assert result[0].title == "Excessive Vibration Detected"
    assert result[0].description == (
        "RMS vibration level (2.500) exceeded critical threshold"
    )
    assert result[0].recommendation.startswith("Immediate inspection recommended.")


def test_high_crest_factor() -> None:
    """Test the crest factor rule on its own."""
    result = alerts.classify(_features(crest_factor=4.567))

    assert len(result) == 1
    assert result[0].kind == models.AlertKind.warning
    assert result[0].severity == models.AlertSeverity.medium
    assert result[0].title == "High Crest Factor Detected"
    assert result[0].description == (
        "Crest factor (4.57) indicates potential impulsive events"
    )


@pytest.mark.parametrize(
    "rms, expected_title",
    [(1.5, "Elevated Vibration Levels"), (3.0, "Excessive Vibration Detected")],
)
def test_rules_are_independent(rms: float, expected_title: str) -> None:
    """Test that the crest factor alert comes on top of the RMS alert."""
    result = alerts.classify(_features(rms=rms, crest_factor=5.0))

    assert [alert.title for alert in result] == [
        expected_title,
        "High Crest Factor Detected",
    ]


def test_classify_idempotent() -> None:
    """Test that classifying twice gives the same alerts in the same order."""
    feature_set = _features(rms=2.2, crest_factor=4.4)

    assert alerts.classify(feature_set) == alerts.classify(feature_set)


def test_classify_gravity_only(gravity_window: models.SampleWindow) -> None:
    """Test the alerts of a device at rest, rms average 9.8 / 3."""
    result = alerts.classify(features.extract(gravity_window))

    assert len(result) == 1
    assert result[0].kind == models.AlertKind.critical
    assert result[0].title == "Excessive Vibration Detected"
    assert "(3.267)" in result[0].description
