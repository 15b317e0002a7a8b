"""
WebSocket-backed audio ports.

The browser owns the microphone and speaker. Captured frames arrive over the
live WebSocket and are queued for the session manager; scheduled model audio
is sent back as playback instructions.

Dependencies: fastapi (WebSocket), asyncio, samastha_ai.core.live_session
System role: Production AudioInput / AudioOutput adapters
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence

from fastapi import WebSocket

from samastha_ai.core.live_session.audio_codec import decode_base64, encode_base64, float_to_pcm16
from samastha_ai.models.live import LiveEvent, LiveServerEventType, ScheduledAudio

logger = logging.getLogger(__name__)


class WebSocketAudioInput:
    """
    Queue of PCM16 frames fed by the WebSocket reader.

    Frames are yielded in the order they were fed; close() ends iteration
    after frames already queued.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[bytes | None] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def feed_pcm(self, pcm: bytes) -> None:
        if self._closed or not pcm:
            return
        await self._queue.put(pcm)

    async def feed_samples(self, samples: Sequence[float]) -> None:
        """Encode float microphone samples to PCM16 and queue them."""
        await self.feed_pcm(float_to_pcm16(samples))

    async def feed_event(self, data: dict) -> None:
        """
        Queue one client audio event payload.

        Accepts {"samples": [...]} or {"pcm": "<base64>"}.

        Raises:
            ValueError: If the payload carries neither
        """
        if data.get("samples") is not None:
            await self.feed_samples(data["samples"])
        elif data.get("pcm"):
            await self.feed_pcm(decode_base64(data["pcm"]))
        else:
            raise ValueError("audio event requires 'samples' or 'pcm'")

    async def frames(self) -> AsyncIterator[bytes]:
        while True:
            frame = await self._queue.get()
            if frame is None:
                return
            yield frame

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(None)


class WebSocketAudioOutput:
    """Sends scheduled model audio to the browser for playback."""

    def __init__(self, websocket: WebSocket, sample_rate: int = 24000) -> None:
        self._websocket = websocket
        self.sample_rate = sample_rate
        self._stopped = False

    async def play(self, pcm: bytes, start_at: float, duration: float) -> None:
        if self._stopped:
            return
        payload = ScheduledAudio(
            pcm=encode_base64(pcm),
            start_at=start_at,
            duration=duration,
            sample_rate=self.sample_rate,
        )
        await self._websocket.send_json(
            LiveEvent(event=LiveServerEventType.AUDIO, data=payload.model_dump()).to_dict()
        )

    async def stop(self) -> None:
        self._stopped = True
        logger.debug(f"{__name__}:stop - Playback stopped")
