"""
PCM16 audio conversion helpers.

Microphone frames arrive as float samples in [-1, 1] and leave as 16-bit
signed little-endian PCM. Model audio stays PCM16 end to end; only its
sample count is needed to schedule playback.

Dependencies: numpy, base64
System role: Audio sample format conversion for the live session
"""

import base64
from collections.abc import Sequence

import numpy as np

PCM16_SCALE = 32768.0
BYTES_PER_SAMPLE = 2


def float_to_pcm16(samples: Sequence[float] | np.ndarray) -> bytes:
    """Scale float samples by 32768 and clip to the int16 range."""
    scaled = np.asarray(samples, dtype=np.float32) * PCM16_SCALE
    return np.clip(scaled, -32768, 32767).astype("<i2").tobytes()


def sample_count(data: bytes) -> int:
    return len(data) // BYTES_PER_SAMPLE


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode_base64(payload: str) -> bytes:
    return base64.b64decode(payload, validate=True)
