"""Browser audio adapters."""

from samastha_ai.boundary.audio.websocket_audio import WebSocketAudioInput, WebSocketAudioOutput

__all__ = ["WebSocketAudioInput", "WebSocketAudioOutput"]
