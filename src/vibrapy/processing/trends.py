"""Health statistics over a fleet of machines and over recent recordings."""

from typing import Literal, Optional, Sequence

from vibrapy.core import models
from vibrapy.processing import health

STABLE_MIN_SCORE = 85


def summarize_fleet(scores: Sequence[int]) -> models.FleetHealthSummary:
    """Count machines per health status and average their scores.

    Args:
        scores: The current health score of every machine.

    Returns:
        The summary. The average score is rounded half up, and is None for an
        empty fleet.
    """
    statuses = [health.status_for_score(machine_score) for machine_score in scores]
    average_score = None
    if scores:
        average_score = health.round_half_up(sum(scores) / len(scores))

    return models.FleetHealthSummary(
        total=len(scores),
        healthy=statuses.count(models.HealthStatus.healthy),
        warning=statuses.count(models.HealthStatus.warning),
        critical=statuses.count(models.HealthStatus.critical),
        average_score=average_score,
    )


def trend_label(score: int) -> Literal["stable", "declining", "critical"]:
    """Coarse trend of a machine from its health score.

    Args:
        score: The health score of the machine.

    Returns:
        'stable' above 85, 'declining' above 70 and 'critical' otherwise.
    """
    if score > STABLE_MIN_SCORE:
        return "stable"
    if score > health.WARNING_MIN_SCORE:
        return "declining"
    return "critical"


def rms_trend(
    recent_rms: Sequence[float],
) -> Optional[Literal["increasing", "stable"]]:
    """Vibration trend over the recent recordings of a machine.

    Args:
        recent_rms: The x-axis RMS of recent recordings, newest first.

    Returns:
        'increasing' if the newest recording vibrates more than the oldest one,
        'stable' otherwise, and None with fewer than two recordings.
    """
    if len(recent_rms) < 2:
        return None
    if recent_rms[0] > recent_rms[-1]:
        return "increasing"
    return "stable"
