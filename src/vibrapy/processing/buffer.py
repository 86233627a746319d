"""Rate limited buffer for live accelerometer readings."""

import datetime
from typing import Callable, List, Optional

from vibrapy.core import config, models

logger = config.get_logger()


class SampleBuffer:
    """Collects the readings of one recording session at a bounded rate.

    Sensors report far faster than the feature extractor needs, so readings that
    arrive sooner than 1000 / target_rate milliseconds after the last accepted one
    are dropped. A reading with all three components exactly zero is a no-signal
    marker of the sensor and is dropped as well.

    A buffer holds a single session at a time: call reset() before every new
    recording, or use a fresh instance per session. It is not safe to submit from
    several sessions concurrently.

    Attributes:
        target_rate: The maximum accepted rate, in Hz.
        min_interval_ms: Minimum spacing between two accepted readings, in ms.
        on_sample: Optional callback invoked with every accepted sample.
    """

    def __init__(
        self,
        target_rate: Optional[float] = None,
        on_sample: Optional[Callable[[models.RawSample], None]] = None,
    ) -> None:
        """Initialize the buffer.

        Args:
            target_rate: The maximum accepted rate, in Hz. Defaults to the
                TARGET_SAMPLE_RATE setting (60 Hz).
            on_sample: Optional callback invoked with every accepted sample.

        Raises:
            ValueError: If the target rate is not positive.
        """
        if target_rate is None:
            target_rate = config.Settings().TARGET_SAMPLE_RATE
        if target_rate <= 0:
            raise ValueError("Target rate must be greater than 0.")

        self.target_rate = target_rate
        self.min_interval_ms = 1000 / target_rate
        self.on_sample = on_sample
        self._samples: List[models.RawSample] = []
        self._start_time: Optional[float] = None
        self._last_sample_time: Optional[float] = None

    def submit(
        self,
        x: float,
        y: float,
        z: float,
        now: float,
        captured_at: Optional[datetime.datetime] = None,
    ) -> Optional[models.RawSample]:
        """Offer one sensor reading to the buffer.

        The first reading after a reset starts the session clock, even when it is
        dropped as a no-signal marker.

        Args:
            x: Acceleration along the x axis.
            y: Acceleration along the y axis.
            z: Acceleration along the z axis.
            now: Time of the reading in milliseconds on a monotonic clock.
            captured_at: Wall clock time of the reading. Defaults to the current
                UTC time.

        Returns:
            The accepted sample, or None if the reading was throttled or was a
            no-signal marker.
        """
        if self._start_time is None:
            self._start_time = now

        if (
            self._last_sample_time is not None
            and now - self._last_sample_time < self.min_interval_ms
        ):
            return None

        if x == 0 and y == 0 and z == 0:
            logger.debug("Dropping all-zero reading at %s ms.", now)
            return None

        self._last_sample_time = now

        sample = models.RawSample(
            elapsed_seconds=(now - self._start_time) / 1000,
            x=x,
            y=y,
            z=z,
            captured_at=captured_at or datetime.datetime.now(datetime.timezone.utc),
        )
        self._samples.append(sample)

        if self.on_sample is not None:
            self.on_sample(sample)
        return sample

    def reset(self) -> None:
        """Discard all samples and timing state. Safe to call at any time."""
        if self._samples:
            logger.debug("Discarding %s buffered samples.", len(self._samples))
        self._samples = []
        self._start_time = None
        self._last_sample_time = None

    def window(self) -> models.SampleWindow:
        """The accepted samples of the current session as a SampleWindow."""
        return models.SampleWindow(samples=list(self._samples))

    @property
    def samples(self) -> List[models.RawSample]:
        """A copy of the accepted samples, in acceptance order."""
        return list(self._samples)

    @property
    def duration_seconds(self) -> float:
        """Elapsed time of the last accepted sample, 0 when empty."""
        if not self._samples:
            return 0.0
        return self._samples[-1].elapsed_seconds

    def __len__(self) -> int:
        """Number of accepted samples."""
        return len(self._samples)
