"""Map vibration features to a health score and status."""

import math

from vibrapy.core import config, models
from vibrapy.processing import thresholds

logger = config.get_logger()

MAX_SCORE = 100
HEALTHY_MIN_SCORE = 90
WARNING_MIN_SCORE = 70


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up."""
    return math.floor(value + 0.5)


def status_for_score(score: int) -> models.HealthStatus:
    """Status label of a health score.

    Args:
        score: The health score, between 0 and 100.

    Returns:
        healthy for a score of at least 90, warning for at least 70, critical
        otherwise.
    """
    if score >= HEALTHY_MIN_SCORE:
        return models.HealthStatus.healthy
    if score >= WARNING_MIN_SCORE:
        return models.HealthStatus.warning
    return models.HealthStatus.critical


def score(
    features: models.FeatureSet,
    table: thresholds.ThresholdTable = thresholds.DEFAULT_THRESHOLDS,
) -> models.HealthAssessment:
    """Compute the health score of a recording.

    Starting from 100, every penalty rule of the table deducts the points of the
    highest tier its three-axis mean exceeds. Penalties of different rules add up.
    The result is clamped to [0, 100].

    Args:
        features: The features of the recording.
        table: The threshold table holding the penalty rules.

    Returns:
        The score and its status label.
    """
    total_penalty = sum(rule.penalty(features) for rule in table.penalty_rules)
    health_score = max(0, min(MAX_SCORE, round_half_up(MAX_SCORE - total_penalty)))
    status = status_for_score(health_score)

    logger.debug(
        "Health score %s (%s), total penalty %s.",
        health_score,
        status.value,
        total_penalty,
    )
    return models.HealthAssessment(score=health_score, status=status)
