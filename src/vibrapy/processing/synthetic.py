"""Synthetic sensor source, used when no accelerometer is available."""

import math
from typing import Iterator, Optional, Tuple

import numpy as np

from vibrapy.core import config, models
from vibrapy.processing import buffer

logger = config.get_logger()

Reading = Tuple[float, float, float, float]


class SyntheticSource:
    """Periodic generator of plausible triaxial vibration readings.

    Reading i is made of three sinusoids of different frequency and amplitude with
    uniform noise on top:

        x = 2.0 sin(0.10 i) + U(-0.25, 0.25)
        y = 1.5 cos(0.15 i) + U(-0.15, 0.15)
        z = 1.8 sin(0.08 i) + U(-0.20, 0.20)

    Attributes:
        interval_ms: Spacing between two readings, in milliseconds.
    """

    def __init__(
        self, seed: Optional[int] = None, interval_ms: Optional[float] = None
    ) -> None:
        """Initialize the source.

        Args:
            seed: Seed of the noise generator, for reproducible recordings.
            interval_ms: Spacing between two readings, in milliseconds. Defaults
                to the SYNTHETIC_INTERVAL_MS setting (100 ms).

        Raises:
            ValueError: If the interval is not positive.
        """
        if interval_ms is None:
            interval_ms = config.Settings().SYNTHETIC_INTERVAL_MS
        if interval_ms <= 0:
            raise ValueError("Interval must be greater than 0.")
        self.interval_ms = interval_ms
        self._rng = np.random.default_rng(seed)

    def reading(self, index: int) -> Tuple[float, float, float]:
        """The x, y and z values of reading `index`."""
        return (
            math.sin(index * 0.1) * 2 + self._rng.uniform(-0.25, 0.25),
            math.cos(index * 0.15) * 1.5 + self._rng.uniform(-0.15, 0.15),
            math.sin(index * 0.08) * 1.8 + self._rng.uniform(-0.2, 0.2),
        )

    def readings(self, count: int, start_ms: float = 0.0) -> Iterator[Reading]:
        """Yield `count` readings as (x, y, z, now_ms) tuples."""
        for index in range(count):
            x, y, z = self.reading(index)
            yield x, y, z, start_ms + index * self.interval_ms

    def record(
        self, sample_buffer: buffer.SampleBuffer, duration_seconds: float
    ) -> models.SampleWindow:
        """Record a synthetic session of the given duration into a buffer.

        The buffer is reset first, so the session starts from scratch.

        Args:
            sample_buffer: The buffer to drive.
            duration_seconds: Length of the session in seconds.

        Returns:
            The recorded samples.

        Raises:
            ValueError: If the duration is negative.
        """
        if duration_seconds < 0:
            raise ValueError("Duration must not be negative.")

        count = int(duration_seconds * 1000 // self.interval_ms) + 1
        logger.debug("Recording %s synthetic readings.", count)

        sample_buffer.reset()
        for x, y, z, now_ms in self.readings(count):
            sample_buffer.submit(x, y, z, now_ms)
        return sample_buffer.window()
