"""Test the baseline module."""

import pytest

from vibrapy.core import models
from vibrapy.processing import baseline


def _features(rms: float, peak: float, crest_factor: float) -> models.FeatureSet:
    axis = models.AxisFeatures(rms=rms, peak=peak, crest_factor=crest_factor)
    return models.FeatureSet(x=axis, y=axis, z=axis)


def test_percent_deviation_example() -> None:
    """Test an RMS rising from 0.59 to 0.95."""
    result = baseline.percent_deviation(0.95, 0.59)

    assert result == pytest.approx(61.0, abs=0.05)


@pytest.mark.parametrize(
    "current, reference, expected",
    [
        (1.0, 2.0, -50.0),
        (5.0, 1.0, 400.0),
        (2.0, 2.0, 0.0),
        (0.0, 2.0, -100.0),
        (-1.0, 1.0, -200.0),
    ],
)
def test_percent_deviation_unclamped(
    current: float, reference: float, expected: float
) -> None:
    """Test that deviations are not clamped in either direction."""
    assert baseline.percent_deviation(current, reference) == pytest.approx(expected)


@pytest.mark.parametrize(
    "current, reference", [(1.0, 0.0), (1.0, -0.0), (None, 1.0), (1.0, None)]
)
def test_percent_deviation_undefined(current: float, reference: float) -> None:
    """Test that a missing value or a zero baseline is None, not 0."""
    assert baseline.percent_deviation(current, reference) is None


def test_compare() -> None:
    """Test the comparison of every tracked metric."""
    current = _features(rms=1.5, peak=3.0, crest_factor=2.0)
    reference = _features(rms=1.0, peak=4.0, crest_factor=2.0)

    report = baseline.compare(current, reference)

    for axis in models.AXES:
        assert getattr(report, f"rms_{axis}") == pytest.approx(50.0)
        assert getattr(report, f"peak_{axis}") == pytest.approx(-25.0)
        assert getattr(report, f"crest_factor_{axis}") == pytest.approx(0.0)


def test_compare_zero_baseline() -> None:
    """Test that a zero baseline axis yields None for that axis only."""
    current = _features(rms=1.0, peak=1.0, crest_factor=1.0)
    reference = models.FeatureSet(
        x=models.AxisFeatures(),
        y=models.AxisFeatures(rms=0.5, peak=0.5, crest_factor=1.0),
        z=models.AxisFeatures(rms=0.5, peak=0.0, crest_factor=1.0),
    )

    report = baseline.compare(current, reference)

    assert report.rms_x is None
    assert report.peak_x is None
    assert report.crest_factor_x is None
    assert report.rms_y == pytest.approx(100.0)
    assert report.peak_z is None
    assert report.rms_z == pytest.approx(100.0)


def test_compare_without_baseline() -> None:
    """Test that no baseline gives an all-None report."""
    report = baseline.compare(_features(1.0, 1.0, 1.0), None)

    assert all(value is None for value in report.as_dict().values())


def test_compare_metrics_missing_keys() -> None:
    """Test that missing stored metrics are None rather than zero-filled."""
    current = {"rmsX": 0.95, "rmsY": 0.4, "peakX": 2.0, "crestFactorX": None}
    reference = {"rmsX": 0.59, "peakX": 0.0, "rmsZ": 1.0, "crestFactorX": 2.0}

    report = baseline.compare_metrics(current, reference)

    assert report.rms_x == pytest.approx(61.0, abs=0.05)
    assert report.rms_y is None
    assert report.rms_z is None
    assert report.peak_x is None
    assert report.crest_factor_x is None


def test_compare_matches_compare_metrics() -> None:
    """Test that typed and stored map comparisons agree."""
    current = _features(rms=1.2, peak=2.5, crest_factor=2.1)
    reference = _features(rms=0.9, peak=2.0, crest_factor=2.2)

    typed = baseline.compare(current, reference)
    stored = baseline.compare_metrics(current.to_metrics(), reference.to_metrics())

    assert typed == stored
