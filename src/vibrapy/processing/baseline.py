"""Compare a recording against the baseline recording of a machine."""

from typing import Mapping, Optional

from vibrapy.core import models


def percent_deviation(
    current: Optional[float], baseline: Optional[float]
) -> Optional[float]:
    """Relative change from the baseline, in percent.

    Args:
        current: The current value.
        baseline: The reference value.

    Returns:
        (current - baseline) / baseline * 100, unclamped. None if either value is
        missing or the baseline is exactly 0.
    """
    if current is None or baseline is None or baseline == 0:
        return None
    return (current - baseline) / baseline * 100


def compare(
    current: models.FeatureSet, baseline: Optional[models.FeatureSet]
) -> models.DeviationReport:
    """Deviation of the RMS, peak and crest factor of every axis from the baseline.

    Args:
        current: The features of the recording under inspection.
        baseline: The features of the baseline recording, or None if the machine has
            no baseline yet.

    Returns:
        The deviation report. Without a baseline, every entry is None.
    """
    if baseline is None:
        return models.DeviationReport()

    return models.DeviationReport(
        **{
            f"{metric}_{axis}": percent_deviation(
                getattr(getattr(current, axis), metric),
                getattr(getattr(baseline, axis), metric),
            )
            for metric in models.COMPARED_METRICS
            for axis in models.AXES
        }
    )


def compare_metrics(
    current: Mapping[str, Optional[float]], baseline: Mapping[str, Optional[float]]
) -> models.DeviationReport:
    """Deviation report from two stored metrics maps that may have holes.

    Stored metrics are keyed by camel case names ('rmsX', 'crestFactorZ'). A metric
    missing from either map yields None for that entry rather than being treated as
    a zero reading.

    Args:
        current: The stored metrics of the recording under inspection.
        baseline: The stored metrics of the baseline.

    Returns:
        The deviation report.
    """
    return models.DeviationReport(
        **{
            f"{metric}_{axis}": percent_deviation(
                current.get(models.metric_key(metric, axis)),
                baseline.get(models.metric_key(metric, axis)),
            )
            for metric in models.COMPARED_METRICS
            for axis in models.AXES
        }
    )
