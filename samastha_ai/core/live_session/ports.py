"""
Ports for the live session manager.

The manager talks to the microphone, the speaker and the provider only
through these protocols. Production adapters live in samastha_ai.boundary;
tests supply in-memory fakes.

Dependencies: typing
System role: Live session seams
"""

from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager
from typing import Protocol

from samastha_ai.core.live_session.events import LiveInboundEvent


class AudioInput(Protocol):
    """Microphone capture producing PCM16 frames in capture order."""

    def frames(self) -> AsyncIterator[bytes]:
        ...

    async def close(self) -> None:
        """Release the capture stream."""
        ...


class AudioOutput(Protocol):
    """Speaker sink receiving scheduled PCM16 frames."""

    async def play(self, pcm: bytes, start_at: float, duration: float) -> None:
        ...

    async def stop(self) -> None:
        """Flush pending playback and refuse further frames."""
        ...


class LiveConnection(Protocol):
    """One open duplex session with the model."""

    async def send_audio(self, pcm: bytes) -> None:
        ...

    async def send_tool_response(self, call_id: str | None, name: str, result: str) -> None:
        ...

    def receive(self) -> AsyncIterator[LiveInboundEvent]:
        ...


class LiveTransport(Protocol):
    """Factory for live connections."""

    def connect(self, system_instruction: str) -> AbstractAsyncContextManager[LiveConnection]:
        ...
