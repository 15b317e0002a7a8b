"""
WebSocket live voice endpoint.

Bridges the browser's microphone and speaker to a server-side live session
with the model.

Routes: WS /ws/live

Dependencies: samastha_ai.core.live_session, samastha_ai.boundary.audio
System role: Live voice streaming API
"""

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from samastha_ai.api.deps.dependencies import get_service_cache
from samastha_ai.boundary.audio import WebSocketAudioInput, WebSocketAudioOutput
from samastha_ai.core.live_session import LiveSessionManager, LiveSessionState, ToolCall
from samastha_ai.core.prompts import build_live_instruction
from samastha_ai.models.live import LiveClientEventType, LiveEvent, LiveServerEventType
from samastha_ai.observability.correlation import set_correlation_id
from samastha_ai.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)
router = APIRouter(tags=["live"])


async def _send(websocket: WebSocket, event: LiveServerEventType, data: dict | None = None) -> None:
    """Send an event, ignoring sockets that are already gone."""
    try:
        await websocket.send_json(LiveEvent(event=event, data=data or {}).to_dict())
    except (WebSocketDisconnect, RuntimeError) as e:
        logger.debug(f"{__name__}:_send - Socket unavailable for {event.value}: {type(e).__name__}")


async def _next_client_text(websocket: WebSocket, session_closed: asyncio.Task) -> str | None:
    """
    Read the next client message, or None once the session has closed.

    Raises:
        WebSocketDisconnect: If the client goes away first
    """
    reading = asyncio.create_task(websocket.receive_text())
    done, _ = await asyncio.wait({reading, session_closed}, return_when=asyncio.FIRST_COMPLETED)
    if reading in done:
        return reading.result()
    reading.cancel()
    try:
        await reading
    except (asyncio.CancelledError, WebSocketDisconnect):
        pass
    return None


@router.websocket("/ws/live")
async def websocket_live(websocket: WebSocket) -> None:
    """
    WebSocket endpoint for a live voice session.

    Client sends:
        {"event": "audio", "data": {"samples": [float, ...]}} or {"data": {"pcm": "<base64>"}}
        {"event": "stop"}
        {"event": "ping"}

    Server sends:
        {"event": "connected", "data": {"input_sample_rate": 16000, "output_sample_rate": 24000, ...}}
        {"event": "state", "data": {"state": "connecting" | "open" | "closed"}}
        {"event": "audio", "data": {"pcm": "...", "start_at": 0.0, "duration": 0.1, "sample_rate": 24000}}
        {"event": "tool_call", "data": {"id": "...", "name": "search_knowledge_base", "query": "..."}}
        {"event": "closed", "data": {"reason": "..."}}
        {"event": "error", "data": {"code": "...", "message": "..."}}
        {"event": "pong"}

    Args:
        websocket: WebSocket connection
    """
    await websocket.accept()
    set_correlation_id(websocket.headers.get("x-correlation-id"))
    cache = get_service_cache()
    audio_settings = cache.settings.live_audio
    app_settings = cache.store.get_settings()

    audio_input = WebSocketAudioInput()
    audio_output = WebSocketAudioOutput(websocket, sample_rate=audio_settings.output_sample_rate)

    async def on_state_change(state: LiveSessionState) -> None:
        await _send(websocket, LiveServerEventType.STATE, {"state": state.value})

    async def on_tool_call(call: ToolCall, result: str) -> None:
        await _send(
            websocket,
            LiveServerEventType.TOOL_CALL,
            {"id": call.id, "name": call.name, "query": call.args.get("query")},
        )

    async def on_close(reason: str | None) -> None:
        await _send(websocket, LiveServerEventType.CLOSED, {"reason": reason})

    manager = LiveSessionManager(
        transport=cache.live_transport,
        retriever=cache.retriever,
        audio_input=audio_input,
        audio_output=audio_output,
        system_instruction=build_live_instruction(app_settings.system_instruction),
        top_k=cache.settings.retrieval.live_top_k,
        output_sample_rate=audio_settings.output_sample_rate,
        on_close=on_close,
        on_tool_call=on_tool_call,
        on_state_change=on_state_change,
    )

    await _send(
        websocket,
        LiveServerEventType.CONNECTED,
        {
            "input_sample_rate": audio_settings.input_sample_rate,
            "output_sample_rate": audio_settings.output_sample_rate,
            "frame_size": audio_settings.frame_size,
        },
    )
    logger.info(f"{__name__}:websocket_live - Client connected", extra={"client_host": str(websocket.client)})

    await manager.open()

    session_closed = asyncio.create_task(manager.wait_closed(), name="live-closed")
    try:
        while manager.state == LiveSessionState.OPEN:
            raw_data = await _next_client_text(websocket, session_closed)
            if raw_data is None:
                logger.info(f"{__name__}:websocket_live - Session ended remotely")
                break
            try:
                data = json.loads(raw_data)
            except json.JSONDecodeError as e:
                logger.warning(
                    f"{__name__}:websocket_live - Invalid JSON",
                    extra={"error_msg": str(e), "raw_data_preview": safe_log_value(raw_data, 50)},
                )
                await _send(websocket, LiveServerEventType.ERROR, {"code": "INVALID_JSON", "message": "Invalid JSON format"})
                continue

            event_type = data.get("event") if isinstance(data, dict) else None

            if event_type == LiveClientEventType.PING.value:
                await _send(websocket, LiveServerEventType.PONG)
            elif event_type == LiveClientEventType.STOP.value:
                await manager.close(reason="client stopped")
            elif event_type == LiveClientEventType.AUDIO.value:
                try:
                    await audio_input.feed_event(data.get("data") or {})
                except ValueError as e:
                    await _send(websocket, LiveServerEventType.ERROR, {"code": "INVALID_AUDIO", "message": str(e)})
            else:
                await _send(
                    websocket,
                    LiveServerEventType.ERROR,
                    {"code": "UNKNOWN_EVENT", "message": f"Unknown event: {safe_log_value(event_type, 50)}"},
                )
    except WebSocketDisconnect:
        logger.info(f"{__name__}:websocket_live - Client disconnected")
        await manager.close(reason="client disconnected")
        return
    finally:
        session_closed.cancel()
        await manager.close(reason="socket closed")

    try:
        await websocket.close()
    except RuntimeError as e:
        logger.debug(f"{__name__}:websocket_live - Socket already closed: {e}")
