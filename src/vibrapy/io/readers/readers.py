"""Functions to read recordings and stored metrics from files."""

import json
import pathlib
from typing import Union

import polars as pl
import pydantic

from vibrapy.core import config, exceptions, models
from vibrapy.processing import features

logger = config.get_logger()

RECORDING_FILE_TYPES = (".csv", ".parquet")
METRICS_FILE_TYPES = (".json",)
REQUIRED_COLUMNS = ("time", "x", "y", "z")


def read_recording(file_name: Union[pathlib.Path, str]) -> models.SampleWindow:
    """Read a recording from a file.

    Supported formats are .csv and .parquet. The file must have 'time' (elapsed
    seconds), 'x', 'y' and 'z' columns; a 'timestamp' column with the capture time
    in epoch milliseconds is optional.

    Args:
        file_name: The file to read the recording from.

    Returns:
        The recording as a SampleWindow.

    Raises:
        InvalidFileTypeError: If the file extension is not supported.
        InvalidRecordingError: If columns are missing, values are not finite or the
            time column decreases.
    """
    file_name = pathlib.Path(file_name)
    if file_name.suffix == ".csv":
        data_frame = pl.read_csv(file_name)
    elif file_name.suffix == ".parquet":
        data_frame = pl.read_parquet(file_name)
    else:
        raise exceptions.InvalidFileTypeError(
            f"File type {file_name.suffix} is not supported. "
            f"Recordings must be one of {RECORDING_FILE_TYPES}."
        )

    missing = [
        column for column in REQUIRED_COLUMNS if column not in data_frame.columns
    ]
    if missing:
        raise exceptions.InvalidRecordingError(
            f"Recording {file_name} is missing columns: {', '.join(missing)}"
        )

    try:
        window = models.SampleWindow.from_data_frame(data_frame)
    except pydantic.ValidationError as e:
        raise exceptions.InvalidRecordingError(
            f"Recording {file_name} is not valid: {e}"
        ) from e

    logger.debug("Read %s samples from %s.", len(window), file_name)
    return window


def read_metrics(file_name: Union[pathlib.Path, str]) -> models.FeatureSet:
    """Read a stored metrics map from a .json file.

    The file holds either the metrics map itself or an object with the map under a
    'metrics' key, as stored with a sample or a baseline.

    Args:
        file_name: The file to read the metrics from.

    Returns:
        The stored features.

    Raises:
        InvalidFileTypeError: If the file is not a .json file.
        InvalidMetricsError: If the file is not valid json, or does not hold a
            complete and finite metrics map.
    """
    file_name = pathlib.Path(file_name)
    if file_name.suffix not in METRICS_FILE_TYPES:
        raise exceptions.InvalidFileTypeError(
            f"File type {file_name.suffix} is not supported for stored metrics."
        )

    with open(file_name) as f:
        try:
            content = json.load(f)
        except json.JSONDecodeError as e:
            raise exceptions.InvalidMetricsError(
                f"Metrics file {file_name} is not valid json: {e}"
            ) from e

    if isinstance(content, dict) and isinstance(content.get("metrics"), dict):
        content = content["metrics"]
    if not isinstance(content, dict):
        raise exceptions.InvalidMetricsError(
            f"Metrics file {file_name} does not hold a metrics map."
        )

    try:
        return models.FeatureSet.from_metrics(content)
    except (ValueError, TypeError) as e:
        raise exceptions.InvalidMetricsError(
            f"Metrics file {file_name} is not valid: {e}"
        ) from e


def read_baseline(file_name: Union[pathlib.Path, str]) -> models.FeatureSet:
    """Read the baseline features of a machine.

    Args:
        file_name: Either a stored metrics .json file, or a baseline recording in
            .csv or .parquet format from which the features are extracted.

    Returns:
        The baseline features.
    """
    file_name = pathlib.Path(file_name)
    if file_name.suffix in METRICS_FILE_TYPES:
        return read_metrics(file_name)
    return features.extract(read_recording(file_name))
