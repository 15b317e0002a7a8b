"""
Live duplex voice session.

Dependencies: asyncio, numpy
System role: Real-time voice conversation with knowledge-base tool calls
"""

from samastha_ai.core.live_session.events import (
    AudioFrame,
    LiveInboundEvent,
    LiveSessionState,
    SessionClosed,
    SessionError,
    ToolCall,
)
from samastha_ai.core.live_session.manager import NO_RESULTS_TEXT, LiveSessionManager
from samastha_ai.core.live_session.playback import PlaybackScheduler, PlaybackSlot

__all__ = [
    "AudioFrame",
    "LiveInboundEvent",
    "LiveSessionManager",
    "LiveSessionState",
    "NO_RESULTS_TEXT",
    "PlaybackScheduler",
    "PlaybackSlot",
    "SessionClosed",
    "SessionError",
    "ToolCall",
]
