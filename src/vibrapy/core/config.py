"""Configuration module for vibrapy."""

import logging
from importlib import metadata

import pydantic_settings


class Settings(pydantic_settings.BaseSettings):
    """Runtime settings, read from VIBRAPY_ prefixed environment variables.

    Attributes:
        TARGET_SAMPLE_RATE: The rate, in Hz, the sample buffer throttles the sensor
            down to.
        SYNTHETIC_INTERVAL_MS: Spacing, in milliseconds, of the readings produced by
            the synthetic sensor source.
    """

    model_config = pydantic_settings.SettingsConfigDict(env_prefix="VIBRAPY_")

    TARGET_SAMPLE_RATE: float = 60.0
    SYNTHETIC_INTERVAL_MS: float = 100.0


def get_version() -> str:
    """Return vibrapy version."""
    try:
        return metadata.version("vibrapy")
    except metadata.PackageNotFoundError:
        return "Version unknown"


def get_logger() -> logging.Logger:
    """Gets the vibrapy logger."""
    logger = logging.getLogger("vibrapy")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)s - %(funcName)s - %(message)s",  # noqa: E501
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger
