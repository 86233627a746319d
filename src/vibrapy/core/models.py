"""Internal data model."""

import datetime
from enum import Enum
from typing import Dict, List, Literal, Mapping, Optional, get_args

import numpy as np
import polars as pl
import pydantic
from pydantic import BaseModel, field_validator

Axis = Literal["x", "y", "z"]
AxisMetric = Literal["rms", "peak", "std_dev", "crest_factor", "skewness", "kurtosis"]
ComparedMetric = Literal["rms", "peak", "crest_factor"]

AXES: tuple[Axis, ...] = get_args(Axis)
AXIS_METRICS: tuple[AxisMetric, ...] = get_args(AxisMetric)
COMPARED_METRICS: tuple[ComparedMetric, ...] = get_args(ComparedMetric)

_CAMEL_CASE_PREFIX: Dict[str, str] = {
    "rms": "rms",
    "peak": "peak",
    "std_dev": "stdDev",
    "crest_factor": "crestFactor",
    "skewness": "skewness",
    "kurtosis": "kurtosis",
}


def metric_key(metric: str, axis: Axis) -> str:
    """Name of a per-axis metric in the stored metrics map, e.g. 'crestFactorX'."""
    return f"{_CAMEL_CASE_PREFIX[metric]}{axis.upper()}"


class RawSample(BaseModel):
    """One instant of triaxial accelerometer data.

    Attributes:
        elapsed_seconds: Time since the start of the recording, in seconds.
        x: Acceleration along the x axis.
        y: Acceleration along the y axis.
        z: Acceleration along the z axis.
        captured_at: Wall clock time of the reading, when known.
    """

    model_config = pydantic.ConfigDict(frozen=True, allow_inf_nan=False)

    elapsed_seconds: float
    x: float
    y: float
    z: float
    captured_at: Optional[datetime.datetime] = None


class SampleWindow(BaseModel):
    """An ordered sequence of raw samples for one recording session."""

    model_config = pydantic.ConfigDict(frozen=True)

    samples: List[RawSample] = []

    @field_validator("samples")
    def validate_elapsed_time(cls, v: List[RawSample]) -> List[RawSample]:
        """Validate that the elapsed time never decreases.

        Args:
            cls: The class.
            v: The samples to validate.

        Returns:
            v: The samples if they are ordered.

        Raises:
            ValueError: If the elapsed time of a sample is smaller than the one of
                the sample before it.
        """
        for previous, current in zip(v, v[1:]):
            if current.elapsed_seconds < previous.elapsed_seconds:
                raise ValueError("elapsed_seconds must be monotonically non-decreasing")
        return v

    def __len__(self) -> int:
        """Number of samples in the window."""
        return len(self.samples)

    def axis(self, name: Axis) -> np.ndarray:
        """The values of one axis as a float array, in recording order."""
        return np.array([getattr(sample, name) for sample in self.samples], dtype=float)

    @property
    def duration_seconds(self) -> float:
        """Elapsed time of the last sample, 0 for an empty window."""
        if not self.samples:
            return 0.0
        return self.samples[-1].elapsed_seconds

    @classmethod
    def from_data_frame(cls, data_frame: pl.DataFrame) -> "SampleWindow":
        """Creates a window from a Polars DataFrame.

        Args:
            data_frame: The Polars DataFrame, must have 'time', 'x', 'y' and 'z'
                columns. An optional 'timestamp' column holds the capture time in
                epoch milliseconds.
        """
        has_timestamp = "timestamp" in data_frame.columns
        samples = []
        for row in data_frame.iter_rows(named=True):
            captured_at = None
            if has_timestamp and row["timestamp"] is not None:
                captured_at = datetime.datetime.fromtimestamp(
                    row["timestamp"] / 1000, tz=datetime.timezone.utc
                )
            samples.append(
                RawSample(
                    elapsed_seconds=row["time"],
                    x=row["x"],
                    y=row["y"],
                    z=row["z"],
                    captured_at=captured_at,
                )
            )
        return cls(samples=samples)

    def to_data_frame(self) -> pl.DataFrame:
        """Converts the window to a DataFrame.

        Returns:
            A DataFrame with columns 'time', 'x', 'y', 'z' and 'timestamp', the
                latter in epoch milliseconds or null where the capture time is
                unknown.
        """
        return pl.DataFrame(
            {
                "time": [sample.elapsed_seconds for sample in self.samples],
                "x": self.axis("x"),
                "y": self.axis("y"),
                "z": self.axis("z"),
                "timestamp": [
                    round(sample.captured_at.timestamp() * 1000)
                    if sample.captured_at is not None
                    else None
                    for sample in self.samples
                ],
            },
            schema={
                "time": pl.Float64,
                "x": pl.Float64,
                "y": pl.Float64,
                "z": pl.Float64,
                "timestamp": pl.Int64,
            },
        )


class AxisFeatures(BaseModel):
    """Time-domain descriptors of a single axis."""

    model_config = pydantic.ConfigDict(frozen=True, allow_inf_nan=False)

    rms: float = 0.0
    peak: float = 0.0
    std_dev: float = 0.0
    crest_factor: float = 0.0
    skewness: float = 0.0
    kurtosis: float = 0.0


class FeatureSet(BaseModel):
    """The features of all three axes of one recording.

    This is what gets stored as the 'metrics' of a sample or a baseline.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    x: AxisFeatures = AxisFeatures()
    y: AxisFeatures = AxisFeatures()
    z: AxisFeatures = AxisFeatures()

    def axis_mean(self, metric: AxisMetric) -> float:
        """Mean of one metric over the x, y and z axes."""
        return (
            getattr(self.x, metric) + getattr(self.y, metric) + getattr(self.z, metric)
        ) / 3

    def to_metrics(self) -> Dict[str, float]:
        """Flattens the features into the stored metrics map.

        Returns:
            A dictionary keyed by the camel case metric names, e.g. 'rmsX',
                'crestFactorZ', 'stdDevY'.
        """
        return {
            metric_key(metric, axis): getattr(getattr(self, axis), metric)
            for metric in AXIS_METRICS
            for axis in AXES
        }

    @classmethod
    def from_metrics(cls, metrics: Mapping[str, Optional[float]]) -> "FeatureSet":
        """Builds the features back from a stored metrics map.

        Args:
            metrics: Mapping of camel case metric names to values.

        Returns:
            The FeatureSet.

        Raises:
            ValueError: If any of the eighteen metrics is missing or None. A partial
                map is not zero-filled, since a missing value is not a zero reading.
        """
        missing = [
            metric_key(metric, axis)
            for axis in AXES
            for metric in AXIS_METRICS
            if metrics.get(metric_key(metric, axis)) is None
        ]
        if missing:
            raise ValueError(f"Metrics map is missing: {', '.join(missing)}")

        return cls(
            **{
                axis: AxisFeatures(
                    **{
                        metric: float(metrics[metric_key(metric, axis)])  # type: ignore[arg-type]
                        for metric in AXIS_METRICS
                    }
                )
                for axis in AXES
            }
        )


class HealthStatus(str, Enum):
    """Health label of a machine, derived from its health score."""

    healthy = "healthy"
    warning = "warning"
    critical = "critical"


class HealthAssessment(BaseModel):
    """Health score between 0 and 100 and the matching status label."""

    model_config = pydantic.ConfigDict(frozen=True)

    score: int = pydantic.Field(ge=0, le=100)
    status: HealthStatus


class DeviationReport(BaseModel):
    """Percentage deviation of a recording from its baseline, per metric.

    A value of None means the deviation is undefined because the baseline value is
    missing or zero. It is not the same as 0.0, which means no change.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    rms_x: Optional[float] = None
    rms_y: Optional[float] = None
    rms_z: Optional[float] = None
    peak_x: Optional[float] = None
    peak_y: Optional[float] = None
    peak_z: Optional[float] = None
    crest_factor_x: Optional[float] = None
    crest_factor_y: Optional[float] = None
    crest_factor_z: Optional[float] = None

    def as_dict(self) -> Dict[str, Optional[float]]:
        """The report keyed by the camel case metric names, e.g. 'rmsX'."""
        return {
            metric_key(metric, axis): getattr(self, f"{metric}_{axis}")
            for metric in COMPARED_METRICS
            for axis in AXES
        }


class AlertKind(str, Enum):
    """Type of an alert."""

    critical = "critical"
    warning = "warning"


class AlertSeverity(str, Enum):
    """Severity of an alert."""

    high = "high"
    medium = "medium"
    low = "low"


class AlertEvent(BaseModel):
    """An alert raised by the classifier. Alerts carry no identity until stored."""

    model_config = pydantic.ConfigDict(frozen=True)

    kind: AlertKind
    severity: AlertSeverity
    title: str
    description: str
    recommendation: str


class FleetHealthSummary(BaseModel):
    """Health statistics over a set of machines.

    Attributes:
        total: Number of machines.
        healthy: Machines with a healthy status.
        warning: Machines with a warning status.
        critical: Machines with a critical status.
        average_score: Mean health score rounded half up, None without machines.
    """

    total: int
    healthy: int
    warning: int
    critical: int
    average_score: Optional[int] = None
