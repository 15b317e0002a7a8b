"""
Gapless playback scheduling for inbound model audio.

Frames are placed back-to-back on a running cursor. A frame arriving after
the cursor has passed starts "now"; a frame arriving early starts exactly
at the cursor, never earlier.

Dependencies: time
System role: Inbound audio ordering for the live session
"""

import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class PlaybackSlot:
    """Scheduled position of one frame on the session clock (seconds)."""

    start_at: float
    duration: float

    @property
    def end_at(self) -> float:
        return self.start_at + self.duration


class PlaybackScheduler:
    """
    Running next-start-time cursor.

    Attributes:
        sample_rate: Sample rate of scheduled frames
    """

    def __init__(
        self,
        sample_rate: int = 24000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.sample_rate = sample_rate
        self._clock = clock
        self._origin = clock()
        self._cursor = 0.0

    def now(self) -> float:
        """Seconds elapsed on the session clock."""
        return self._clock() - self._origin

    @property
    def cursor(self) -> float:
        return self._cursor

    def schedule(self, samples: int) -> PlaybackSlot:
        """
        Reserve the next slot for a frame of the given sample count.

        Args:
            samples: Number of samples in the frame

        Returns:
            PlaybackSlot starting at max(cursor, now)
        """
        duration = samples / float(self.sample_rate)
        start_at = max(self._cursor, self.now())
        self._cursor = start_at + duration
        return PlaybackSlot(start_at=start_at, duration=duration)

    def reset(self) -> None:
        """Drop pending schedule and restart the session clock."""
        self._origin = self._clock()
        self._cursor = 0.0
