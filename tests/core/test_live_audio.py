"""
Test suite for live audio conversion and playback scheduling.

System role: Verification of PCM16 encoding and gapless playback cursor
"""

import numpy as np
import pytest

from samastha_ai.core.live_session.audio_codec import (
    decode_base64,
    encode_base64,
    float_to_pcm16,
    sample_count,
)
from samastha_ai.core.live_session.playback import PlaybackScheduler


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value


class TestAudioCodec:
    """Test suite for PCM16 helpers."""

    def test_float_to_pcm16_should_scale_and_clip(self) -> None:
        # Act
        pcm = float_to_pcm16([0.0, 0.5, -1.0, 1.0, 2.0])

        # Assert
        samples = np.frombuffer(pcm, dtype="<i2").tolist()
        assert samples == [0, 16384, -32768, 32767, 32767]

    def test_sample_count_should_ignore_trailing_odd_byte(self) -> None:
        pcm = b"\x00\x00" * 2400 + b"\x01"

        assert sample_count(pcm) == 2400

    def test_decode_base64_should_reject_garbage(self) -> None:
        with pytest.raises(ValueError):
            decode_base64("not base64!!")

    def test_base64_helpers_round_trip(self) -> None:
        assert decode_base64(encode_base64(b"\x01\x02")) == b"\x01\x02"


class TestPlaybackScheduler:
    """Test suite for PlaybackScheduler."""

    def test_frames_arriving_early_play_back_to_back(self) -> None:
        # Arrange
        scheduler = PlaybackScheduler(sample_rate=24000, clock=FakeClock())

        # Act
        first = scheduler.schedule(2400)
        second = scheduler.schedule(2400)

        # Assert
        assert first.start_at == pytest.approx(0.0)
        assert second.start_at == pytest.approx(first.end_at)
        assert scheduler.cursor == pytest.approx(0.2)

    def test_late_frame_starts_now(self) -> None:
        """After an underrun the next frame starts at the current time."""
        # Arrange
        clock = FakeClock()
        scheduler = PlaybackScheduler(sample_rate=24000, clock=clock)
        scheduler.schedule(2400)
        clock.value += 1.0

        # Act
        slot = scheduler.schedule(2400)

        # Assert
        assert slot.start_at == pytest.approx(1.0)
        assert slot.duration == pytest.approx(0.1)

    def test_reset_should_restart_cursor(self) -> None:
        clock = FakeClock()
        scheduler = PlaybackScheduler(sample_rate=24000, clock=clock)
        scheduler.schedule(24000)
        clock.value += 0.5

        scheduler.reset()

        assert scheduler.cursor == 0.0
        assert scheduler.now() == pytest.approx(0.0)
