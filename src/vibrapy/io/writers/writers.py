"""Module containing the output classes for writing data to files."""

import datetime
import json
import pathlib
from typing import Any, Dict, List, Optional

import numpy as np
import polars as pl
import pydantic

from vibrapy.core import config, exceptions, models

RECORDING_FILE_TYPES = (".csv", ".parquet")
RESULTS_FILE_TYPES = (".json",)

TIME_DECIMALS = 4
AXIS_DECIMALS = 6

logger = config.get_logger()


def _format_time(time: pl.Series) -> pl.Series:
    """Format the whole elapsed time column with a fixed number of decimals."""
    formatted = np.char.mod(f"%.{TIME_DECIMALS}f", time.to_numpy()).astype(str)
    return pl.Series(time.name, formatted, dtype=pl.String)


def write_recording(window: models.SampleWindow, output: pathlib.Path) -> None:
    """Export a recording as a .csv or .parquet file.

    The csv export writes the elapsed time with 4 decimals and the axes with 6
    decimals. Parquet keeps full precision.

    Args:
        window: The recording to export.
        output: The path of the file to write.

    Raises:
        InvalidFileTypeError: If the output is not a .csv or .parquet file.
    """
    if output.suffix not in RECORDING_FILE_TYPES:
        raise exceptions.InvalidFileTypeError(
            f"The extension: {output.suffix} is not supported. "
            "Please save the recording as .csv or .parquet",
        )
    output.parent.mkdir(parents=True, exist_ok=True)
    data_frame = window.to_data_frame()

    if output.suffix == ".csv":
        data_frame.with_columns(
            pl.col("time").map_batches(_format_time, return_dtype=pl.String)
        ).write_csv(output, separator=",", float_precision=AXIS_DECIMALS)
    else:
        data_frame.write_parquet(output)

    logger.info("Recording saved in: %s", output)


class AnalysisResults(pydantic.BaseModel):
    """Results of running the vibration pipeline on one recording."""

    features: models.FeatureSet
    health: models.HealthAssessment
    alerts: List[models.AlertEvent]
    deviation: Optional[models.DeviationReport] = None
    sample_count: int
    duration_seconds: float
    processing_params: Optional[Dict[str, Any]] = None

    def to_record(self) -> Dict[str, Any]:
        """The results in the shape stored with a sample.

        Returns:
            A dictionary with the camel case 'metrics' map, the health score and
                status, the alerts and, when a baseline was given, the camel case
                'comparison' map.
        """
        return {
            "dataPoints": self.sample_count,
            "durationSeconds": self.duration_seconds,
            "metrics": self.features.to_metrics(),
            "healthScore": self.health.score,
            "status": self.health.status.value,
            "alerts": [alert.model_dump(mode="json") for alert in self.alerts],
            "comparison": self.deviation.as_dict() if self.deviation else None,
        }

    def save_results(self, output: pathlib.Path) -> None:
        """Save the results and the processing parameters as a .json file.

        Args:
            output: The path and file name of the results, must end in .json.
        """
        logger.debug("Saving results.")
        self.validate_output(output=output)
        output.parent.mkdir(parents=True, exist_ok=True)

        results_data = {
            "processing_time": datetime.datetime.now().isoformat(timespec="seconds"),
            "vibrapy_version": config.get_version(),
            "processing_parameters": self.processing_params or {},
            "results": self.to_record(),
        }

        with open(output, "w") as f:
            json.dump(results_data, f, indent=4)

        logger.info("Results saved in: %s", output)

    @classmethod
    def validate_output(cls, output: pathlib.Path) -> None:
        """Validates that the output path is a valid format.

        Args:
            output: the name of the file to be saved, and the directory it will
                be saved in. Must be a .json file.

        Raises:
            InvalidFileTypeError: If the output file path ends with any extension
                other than .json.
        """
        if output.suffix not in RESULTS_FILE_TYPES:
            raise exceptions.InvalidFileTypeError(
                f"The extension: {output.suffix} is not supported. "
                "Please save the results as .json",
            )
