"""Test the health module."""

import pytest

from vibrapy.core import models
from vibrapy.processing import features, health, thresholds


def _features(
    rms: float = 0.0, crest_factor: float = 0.0, kurtosis: float = 0.0
) -> models.FeatureSet:
    """Feature set with the same values on all three axes."""
    axis = models.AxisFeatures(rms=rms, crest_factor=crest_factor, kurtosis=kurtosis)
    return models.FeatureSet(x=axis, y=axis, z=axis)


@pytest.mark.parametrize(
    "rms, expected_score",
    [(0.0, 100), (0.5, 100), (0.51, 95), (1.0, 95), (1.01, 85), (2.0, 85), (2.01, 70)],
)
def test_rms_penalty(rms: float, expected_score: int) -> None:
    """Test the RMS tiers, thresholds are exclusive."""
    assert health.score(_features(rms=rms)).score == expected_score


@pytest.mark.parametrize(
    "crest_factor, expected_score",
    [(2.0, 100), (2.01, 95), (3.01, 90), (4.0, 90), (4.01, 80)],
)
def test_crest_factor_penalty(crest_factor: float, expected_score: int) -> None:
    """Test the crest factor tiers."""
    assert health.score(_features(crest_factor=crest_factor)).score == expected_score


@pytest.mark.parametrize(
    "kurtosis, expected_score",
    [(-2.0, 100), (3.0, 100), (3.01, 95), (5.0, 95), (5.01, 85)],
)
def test_kurtosis_penalty(kurtosis: float, expected_score: int) -> None:
    """Test the kurtosis tiers."""
    assert health.score(_features(kurtosis=kurtosis)).score == expected_score


def test_penalties_add_up() -> None:
    """Test that all three rules deduct at once."""
    result = health.score(_features(rms=3.0, crest_factor=5.0, kurtosis=6.0))

    assert result.score == 35
    assert result.status == models.HealthStatus.critical


def test_averages_over_axes() -> None:
    """Test that the rules look at the mean over the axes, not at single axes."""
    feature_set = models.FeatureSet(
        x=models.AxisFeatures(rms=3.3),
        y=models.AxisFeatures(rms=0.0),
        z=models.AxisFeatures(rms=0.0),
    )

    assert health.score(feature_set).score == 85


@pytest.mark.parametrize(
    "score, expected_status",
    [
        (100, models.HealthStatus.healthy),
        (90, models.HealthStatus.healthy),
        (89, models.HealthStatus.warning),
        (70, models.HealthStatus.warning),
        (69, models.HealthStatus.critical),
        (0, models.HealthStatus.critical),
    ],
)
def test_status_for_score(score: int, expected_status: models.HealthStatus) -> None:
    """Test the status boundaries."""
    assert health.status_for_score(score) == expected_status


def test_score_monotonic_in_rms() -> None:
    """Test that more vibration never improves the score."""
    rms_values = [0.0, 0.25, 0.5, 0.75, 1.0, 1.5, 2.0, 2.5, 10.0, 1e9]

    scores = [health.score(_features(rms=rms)).score for rms in rms_values]

    assert scores == sorted(scores, reverse=True)


@pytest.mark.parametrize("value", [0.0, 1e3, 1e300])
def test_score_bounds(value: float) -> None:
    """Test that the score stays within [0, 100] for extreme inputs."""
    result = health.score(
        _features(rms=value, crest_factor=value, kurtosis=value)
    )

    assert 0 <= result.score <= 100


def test_score_clamped_at_zero() -> None:
    """Test that a table deducting more than 100 points clamps to 0."""
    table = thresholds.ThresholdTable(
        penalty_rules=(
            thresholds.PenaltyRule(
                metric="rms", tiers=(thresholds.PenaltyTier(above=1.0, penalty=80),)
            ),
            thresholds.PenaltyRule(
                metric="peak", tiers=(thresholds.PenaltyTier(above=1.0, penalty=80),)
            ),
        ),
        alert_rules=(),
    )
    feature_set = models.FeatureSet(
        x=models.AxisFeatures(rms=2.0, peak=2.0),
        y=models.AxisFeatures(rms=2.0, peak=2.0),
        z=models.AxisFeatures(rms=2.0, peak=2.0),
    )

    result = health.score(feature_set, table=table)

    assert result.score == 0
    assert result.status == models.HealthStatus.critical


def test_score_gravity_only(gravity_window: models.SampleWindow) -> None:
    """Test the score of a device at rest: rms average 9.8 / 3 is above 2.0."""
    result = health.score(features.extract(gravity_window))

    assert result.score == 70
    assert result.status == models.HealthStatus.warning


@pytest.mark.parametrize(
    "value, expected", [(84.5, 85), (84.49, 84), (70.0, 70), (-0.5, 0)]
)
def test_round_half_up(value: float, expected: int) -> None:
    """Test rounding of halves."""
    assert health.round_half_up(value) == expected
