"""Custom exceptions for vibrapy."""

from vibrapy.core import config

logger = config.get_logger()


class LoggedException(Exception):
    """Base class that automatically logs messages."""

    def __init__(self, message: str) -> None:
        """Initialize a new instance of the LoggedException class.

        Args:
            message: The message to display.
        """
        logger.exception(message)
        super().__init__(message)


class InvalidFileTypeError(LoggedException):
    """Vibrapy did not expect this file extension."""

    pass


class EmptyDirectoryError(LoggedException):
    """No recording files were found in the directory."""

    pass


class InvalidRecordingError(LoggedException):
    """A recording file is missing columns or holds non-finite values."""

    pass


class InvalidMetricsError(LoggedException):
    """A stored metrics file is not a complete metrics map."""

    pass
