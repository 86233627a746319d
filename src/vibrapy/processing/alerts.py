"""Threshold alerts on the vibration features of a recording."""

from typing import List

from vibrapy.core import config, models
from vibrapy.processing import thresholds

logger = config.get_logger()


def classify(
    features: models.FeatureSet,
    table: thresholds.ThresholdTable = thresholds.DEFAULT_THRESHOLDS,
) -> List[models.AlertEvent]:
    """Evaluate the alert rules on a recording.

    Each rule fires at most once, with the highest tier its three-axis mean
    exceeds, and rules are independent of each other. The alerts come out in rule
    order: the RMS alert first, then the crest factor alert.

    Deduplication against alerts raised for earlier recordings is up to the
    caller; the same features always produce the same alerts.

    Args:
        features: The features of the recording.
        table: The threshold table holding the alert rules.

    Returns:
        The alerts, possibly none.
    """
    alerts = []
    for rule in table.alert_rules:
        alert = rule.evaluate(features)
        if alert is not None:
            logger.debug("Alert rule on %s fired: %s", rule.metric, alert.title)
            alerts.append(alert)
    return alerts
