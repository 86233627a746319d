"""Fixtures used by pytest."""

import datetime
import json
import pathlib

import numpy as np
import polars as pl
import pytest

from vibrapy.core import models

TEST_LENGTH = 100


@pytest.fixture
def gravity_window() -> models.SampleWindow:
    """Window of a device lying still: gravity only, along the z axis."""
    start = datetime.datetime(2024, 5, 2, tzinfo=datetime.timezone.utc)
    return models.SampleWindow(
        samples=[
            models.RawSample(
                elapsed_seconds=i / 60,
                x=0.0,
                y=0.0,
                z=9.8,
                captured_at=start + datetime.timedelta(seconds=i / 60),
            )
            for i in range(TEST_LENGTH)
        ]
    )


@pytest.fixture
def create_recording() -> pl.DataFrame:
    """Fixture to create a dummy recording DataFrame to be used in multiple tests."""
    time = np.arange(TEST_LENGTH) / 60
    return pl.DataFrame(
        {
            "time": time,
            "x": np.sin(time * 50),
            "y": np.cos(time * 50) * 0.5,
            "z": np.ones(TEST_LENGTH) * 9.8,
            "timestamp": 1714608000000 + np.round(time * 1000).astype(np.int64),
        }
    )


@pytest.fixture
def recording_csv(
    create_recording: pl.DataFrame, tmp_path: pathlib.Path
) -> pathlib.Path:
    """Dummy recording saved as a .csv file."""
    path = tmp_path / "recording.csv"
    create_recording.write_csv(path)
    return path


@pytest.fixture
def metrics_json(tmp_path: pathlib.Path) -> pathlib.Path:
    """A stored baseline metrics map, as saved with a baseline sample."""
    features = models.FeatureSet(
        x=models.AxisFeatures(rms=0.59, peak=1.2, std_dev=0.5, crest_factor=2.0),
        y=models.AxisFeatures(rms=0.4, peak=0.8, std_dev=0.3, crest_factor=2.0),
        z=models.AxisFeatures(rms=9.8, peak=9.8, std_dev=0.0, crest_factor=1.0),
    )
    path = tmp_path / "baseline.json"
    path.write_text(json.dumps({"name": "baseline", "metrics": features.to_metrics()}))
    return path
