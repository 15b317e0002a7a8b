"""
Gemini Live API transport.

Opens the duplex audio session declared with the search_knowledge_base tool
and decodes server messages into tagged live events.

Dependencies: google.genai
System role: Provider adapter for the live session manager
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from google.genai import types

from samastha_ai.boundary.genai.gemini_client import GeminiClient
from samastha_ai.configs.gemini import GeminiSettings
from samastha_ai.core.live_session.events import (
    AudioFrame,
    LiveInboundEvent,
    SessionClosed,
    SessionError,
    ToolCall,
)
from samastha_ai.core.prompts import SEARCH_TOOL_NAME

logger = logging.getLogger(__name__)

SEARCH_TOOL = types.FunctionDeclaration(
    name=SEARCH_TOOL_NAME,
    description="Search the knowledge base for relevant information.",
    parameters=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "query": types.Schema(type=types.Type.STRING, description="The search query."),
        },
        required=["query"],
    ),
)


def build_live_config(system_instruction: str, voice_name: str) -> types.LiveConnectConfig:
    """Audio-only session with the knowledge-base search tool."""
    return types.LiveConnectConfig(
        response_modalities=[types.Modality.AUDIO],
        system_instruction=system_instruction,
        tools=[types.Tool(function_declarations=[SEARCH_TOOL])],
        speech_config=types.SpeechConfig(
            voice_config=types.VoiceConfig(
                prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice_name)
            )
        ),
    )


def decode_server_message(message) -> list[LiveInboundEvent]:
    """
    Translate one LiveServerMessage into tagged events.

    Audio parts become AudioFrame, function calls become ToolCall. Messages
    carrying neither yield nothing.
    """
    events: list[LiveInboundEvent] = []

    server_content = getattr(message, "server_content", None)
    model_turn = getattr(server_content, "model_turn", None)
    for part in getattr(model_turn, "parts", None) or []:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and inline_data.data:
            events.append(AudioFrame(data=inline_data.data))

    tool_call = getattr(message, "tool_call", None)
    for call in getattr(tool_call, "function_calls", None) or []:
        events.append(ToolCall(id=call.id, name=call.name, args=dict(call.args or {})))

    return events


class GeminiLiveConnection:
    """LiveConnection over an open google-genai AsyncSession."""

    def __init__(self, session, input_sample_rate: int = 16000) -> None:
        self._session = session
        self._mime_type = f"audio/pcm;rate={input_sample_rate}"

    async def send_audio(self, pcm: bytes) -> None:
        await self._session.send_realtime_input(
            audio=types.Blob(data=pcm, mime_type=self._mime_type)
        )

    async def send_tool_response(self, call_id: str | None, name: str, result: str) -> None:
        await self._session.send_tool_response(
            function_responses=[
                types.FunctionResponse(id=call_id, name=name, response={"result": result})
            ]
        )

    async def receive(self) -> AsyncIterator[LiveInboundEvent]:
        """
        Yield events across model turns until the connection ends.

        session.receive() stops at every turn boundary, so it is re-entered
        until a pass yields no message at all.
        """
        try:
            while True:
                received = 0
                async for message in self._session.receive():
                    received += 1
                    for event in decode_server_message(message):
                        yield event
                if received == 0:
                    yield SessionClosed(reason="connection closed")
                    return
        except Exception as e:
            logger.error(f"{__name__}:receive - {type(e).__name__}: {e}")
            yield SessionError(message=f"{type(e).__name__}: {e}")


class GeminiLiveTransport:
    """
    LiveTransport backed by client.aio.live.connect.

    The SDK client is resolved on connect, so a missing API key surfaces as a
    connection failure.

    Attributes:
        settings: Live model and voice
        input_sample_rate: Sample rate of captured microphone PCM
    """

    def __init__(
        self,
        settings: GeminiSettings,
        gemini_client: GeminiClient,
        input_sample_rate: int = 16000,
    ) -> None:
        self.settings = settings
        self._gemini_client = gemini_client
        self.input_sample_rate = input_sample_rate

    @asynccontextmanager
    async def connect(self, system_instruction: str) -> AsyncIterator[GeminiLiveConnection]:
        config = build_live_config(system_instruction, self.settings.live_voice)
        logger.info(
            f"{__name__}:connect - Opening live session",
            extra={"model": self.settings.live_model},
        )
        async with self._gemini_client.client.aio.live.connect(
            model=self.settings.live_model,
            config=config,
        ) as session:
            yield GeminiLiveConnection(session, self.input_sample_rate)
        logger.info(f"{__name__}:connect - Live session closed")
