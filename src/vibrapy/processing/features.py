"""Calculate the time-domain vibration features of a recording.

All statistics are population statistics: divisors are n, never n - 1. Every
function returns exactly 0.0 for an empty input, and the moment based features
return 0.0 for a constant signal, so downstream consumers only ever see finite
values.

Powers are taken of values divided by the peak, or of standardized values, never
of the raw samples, so any finite input gives finite features.
"""

from typing import Optional, Tuple

import numpy as np

from vibrapy.core import config, models

logger = config.get_logger()


def _centered(values: np.ndarray) -> np.ndarray:
    """Deviations from the mean, exactly zero for a constant signal.

    Summation rounding can leave the mean of a constant signal a few ulps away from
    the signal value, which would turn the zero variance into noise of the order of
    1e-16 and the standardized moments into garbage.
    """
    if values.size == 0 or np.all(values == values[0]):
        return np.zeros_like(values)
    return values - values.mean()


def _scaled(values: np.ndarray) -> Tuple[np.ndarray, float]:
    """The values divided by their peak, and the peak.

    Scaled values lie in [-1, 1]. An all-zero input is returned unchanged with a
    peak of 0.
    """
    scale = peak(values)
    if scale == 0:
        return np.zeros_like(values), 0.0
    return values / scale, scale


def _standardized(values: np.ndarray) -> Optional[np.ndarray]:
    """Deviations from the mean in units of standard deviation.

    Returns:
        The standardized values, or None when the standard deviation is 0.
    """
    scaled, _ = _scaled(values)
    centered = _centered(scaled)
    spread = np.sqrt(np.mean(np.square(centered)))
    if spread <= 0:
        return None
    return centered / spread


def root_mean_square(values: np.ndarray) -> float:
    """Root mean square, sqrt(mean(v^2))."""
    if values.size == 0:
        return 0.0
    scaled, scale = _scaled(values)
    return float(scale * np.sqrt(np.mean(np.square(scaled))))


def peak(values: np.ndarray) -> float:
    """Largest absolute value."""
    if values.size == 0:
        return 0.0
    return float(np.max(np.abs(values)))


def standard_deviation(values: np.ndarray) -> float:
    """Population standard deviation, sqrt(mean((v - mean)^2))."""
    if values.size == 0:
        return 0.0
    scaled, scale = _scaled(values)
    return float(scale * np.sqrt(np.mean(np.square(_centered(scaled)))))


def crest_factor(values: np.ndarray) -> float:
    """Ratio of peak to RMS, 0 when the RMS is 0."""
    rms = root_mean_square(values)
    if rms <= 0:
        return 0.0
    return peak(values) / rms


def skewness(values: np.ndarray) -> float:
    """Third standardized moment, 0 when the standard deviation is 0."""
    if values.size == 0:
        return 0.0
    standardized = _standardized(values)
    if standardized is None:
        return 0.0
    return float(np.mean(standardized**3))


def kurtosis(values: np.ndarray) -> float:
    """Excess kurtosis, 0 for a normal distribution and for a constant signal.

    Args:
        values: The samples of one axis.

    Returns:
        The fourth standardized moment minus 3, or 0 if the standard deviation is 0.
    """
    if values.size == 0:
        return 0.0
    standardized = _standardized(values)
    if standardized is None:
        return 0.0
    return float(np.mean(standardized**4) - 3)


def axis_features(values: np.ndarray) -> models.AxisFeatures:
    """Compute all features of one axis.

    Args:
        values: The samples of one axis, in any order.

    Returns:
        The features of the axis. All zero for an empty input.
    """
    values = np.asarray(values, dtype=float)
    return models.AxisFeatures(
        rms=root_mean_square(values),
        peak=peak(values),
        std_dev=standard_deviation(values),
        crest_factor=crest_factor(values),
        skewness=skewness(values),
        kurtosis=kurtosis(values),
    )


def extract(window: models.SampleWindow) -> models.FeatureSet:
    """Compute the features of the three axes of a recording.

    Args:
        window: The recorded samples. An empty window is valid and yields an
            all-zero FeatureSet; callers that need to tell "no data" apart should
            check the window length first.

    Returns:
        The FeatureSet of the recording.
    """
    if len(window) == 0:
        logger.debug("Extracting features from an empty window.")
        return models.FeatureSet()

    logger.debug("Extracting features from %s samples.", len(window))
    return models.FeatureSet(
        x=axis_features(window.axis("x")),
        y=axis_features(window.axis("y")),
        z=axis_features(window.axis("z")),
    )
