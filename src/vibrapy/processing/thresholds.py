"""Threshold table shared by the health scorer and the alert classifier.

All numeric cutoffs of the pipeline are defined here. The RMS and crest factor
cutoffs appear in both the penalty rules and the alert rules, so they are declared
once as module constants and used to build both.
"""

from typing import Annotated, Optional, Tuple

import pydantic
from pydantic import AfterValidator, BaseModel

from vibrapy.core import models

RMS_CRITICAL = 2.0
RMS_ELEVATED = 1.0
RMS_NOTICEABLE = 0.5

CREST_FACTOR_HIGH = 4.0
CREST_FACTOR_ELEVATED = 3.0
CREST_FACTOR_NOTICEABLE = 2.0

KURTOSIS_HIGH = 5.0
KURTOSIS_ELEVATED = 3.0


class PenaltyTier(BaseModel):
    """Deduct `penalty` points when the averaged metric is strictly above `above`."""

    model_config = pydantic.ConfigDict(frozen=True)

    above: float
    penalty: int = pydantic.Field(ge=0)


class AlertTier(BaseModel):
    """Emit an alert when the averaged metric is strictly above `above`.

    The description is a format string receiving the averaged metric as `value`.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    above: float
    kind: models.AlertKind
    severity: models.AlertSeverity
    title: str
    description: str
    recommendation: str

    def build(self, value: float) -> models.AlertEvent:
        """Creates the alert event for an averaged metric value."""
        return models.AlertEvent(
            kind=self.kind,
            severity=self.severity,
            title=self.title,
            description=self.description.format(value=value),
            recommendation=self.recommendation,
        )


def _validate_descending(tiers: tuple) -> tuple:
    thresholds = [tier.above for tier in tiers]
    unique = len(set(thresholds)) == len(thresholds)
    if not unique or thresholds != sorted(thresholds, reverse=True):
        raise ValueError("Tiers must be unique and ordered from highest to lowest.")
    return tiers


class PenaltyRule(BaseModel):
    """Tiered penalty on the three-axis mean of one metric.

    Tiers are checked from the highest threshold down and only the first one
    exceeded applies.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    metric: models.AxisMetric
    tiers: Annotated[Tuple[PenaltyTier, ...], AfterValidator(_validate_descending)]

    def penalty(self, features: models.FeatureSet) -> int:
        """Points to deduct for the given features, 0 when no tier is exceeded."""
        value = features.axis_mean(self.metric)
        for tier in self.tiers:
            if value > tier.above:
                return tier.penalty
        return 0


class AlertRule(BaseModel):
    """Tiered alert on the three-axis mean of one metric.

    At most one tier fires per rule: the highest one exceeded.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    metric: models.AxisMetric
    tiers: Annotated[Tuple[AlertTier, ...], AfterValidator(_validate_descending)]

    def evaluate(self, features: models.FeatureSet) -> Optional[models.AlertEvent]:
        """The alert for the given features, None when no tier is exceeded."""
        value = features.axis_mean(self.metric)
        for tier in self.tiers:
            if value > tier.above:
                return tier.build(value)
        return None


class ThresholdTable(BaseModel):
    """Penalty rules for the health score and alert rules for the classifier."""

    model_config = pydantic.ConfigDict(frozen=True)

    penalty_rules: Tuple[PenaltyRule, ...]
    alert_rules: Tuple[AlertRule, ...]


DEFAULT_THRESHOLDS = ThresholdTable(
    penalty_rules=(
        PenaltyRule(
            metric="rms",
            tiers=(
                PenaltyTier(above=RMS_CRITICAL, penalty=30),
                PenaltyTier(above=RMS_ELEVATED, penalty=15),
                PenaltyTier(above=RMS_NOTICEABLE, penalty=5),
            ),
        ),
        PenaltyRule(
            metric="crest_factor",
            tiers=(
                PenaltyTier(above=CREST_FACTOR_HIGH, penalty=20),
                PenaltyTier(above=CREST_FACTOR_ELEVATED, penalty=10),
                PenaltyTier(above=CREST_FACTOR_NOTICEABLE, penalty=5),
            ),
        ),
        PenaltyRule(
            metric="kurtosis",
            tiers=(
                PenaltyTier(above=KURTOSIS_HIGH, penalty=15),
                PenaltyTier(above=KURTOSIS_ELEVATED, penalty=5),
            ),
        ),
    ),
    alert_rules=(
        AlertRule(
            metric="rms",
            tiers=(
                AlertTier(
                    above=RMS_CRITICAL,
                    kind=models.AlertKind.critical,
                    severity=models.AlertSeverity.high,
                    title="Excessive Vibration Detected",
                    description="RMS vibration level ({value:.3f}) exceeded critical "
                    "threshold",
                    recommendation="Immediate inspection recommended. Check for "
                    "bearing damage, misalignment, or loose components.",
                ),
                AlertTier(
                    above=RMS_ELEVATED,
                    kind=models.AlertKind.warning,
                    severity=models.AlertSeverity.medium,
                    title="Elevated Vibration Levels",
                    description="RMS vibration level ({value:.3f}) is above normal "
                    "range",
                    recommendation="Schedule inspection within the next week. "
                    "Monitor for further degradation.",
                ),
            ),
        ),
        AlertRule(
            metric="crest_factor",
            tiers=(
                AlertTier(
                    above=CREST_FACTOR_HIGH,
                    kind=models.AlertKind.warning,
                    severity=models.AlertSeverity.medium,
                    title="High Crest Factor Detected",
                    description="Crest factor ({value:.2f}) indicates potential "
                    "impulsive events",
                    recommendation="Check for bearing defects or gear tooth damage. "
                    "May indicate early stage failure.",
                ),
            ),
        ),
    ),
)
