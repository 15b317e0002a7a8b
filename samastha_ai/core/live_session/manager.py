"""
Live voice session manager.

Owns one duplex audio session with the model: streams captured microphone
frames out, schedules inbound audio for gapless playback and answers
search_knowledge_base tool calls from the knowledge retriever while both
audio directions keep flowing.

State machine: CLOSED -> CONNECTING -> OPEN -> CLOSED. Connection failures,
remote close and server errors all end in the same close path; there is no
reconnect.

Dependencies: asyncio, samastha_ai.core.retrieval, samastha_ai.core.live_session
System role: Live voice session orchestration
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from contextlib import AsyncExitStack

from samastha_ai.core.exceptions import LiveSessionError
from samastha_ai.core.live_session.audio_codec import sample_count
from samastha_ai.core.live_session.events import (
    AudioFrame,
    LiveInboundEvent,
    LiveSessionState,
    SessionClosed,
    SessionError,
    ToolCall,
)
from samastha_ai.core.live_session.playback import PlaybackScheduler
from samastha_ai.core.live_session.ports import (
    AudioInput,
    AudioOutput,
    LiveConnection,
    LiveTransport,
)
from samastha_ai.core.prompts import SEARCH_TOOL_NAME
from samastha_ai.core.retrieval import KnowledgeRetriever
from samastha_ai.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

NO_RESULTS_TEXT = "No relevant documents found."

CloseCallback = Callable[[str | None], Awaitable[None]]
ToolCallCallback = Callable[[ToolCall, str], Awaitable[None]]
StateCallback = Callable[[LiveSessionState], Awaitable[None]]


class LiveSessionManager:
    """
    One live voice session.

    Attributes:
        transport: Provider connection factory
        retriever: Knowledge retriever used for tool calls
        audio_input: Microphone port
        audio_output: Speaker port
        system_instruction: Instruction sent when the session opens
        top_k: Chunks returned per tool call
        scheduler: Playback cursor for inbound frames
    """

    def __init__(
        self,
        transport: LiveTransport,
        retriever: KnowledgeRetriever,
        audio_input: AudioInput,
        audio_output: AudioOutput,
        system_instruction: str,
        top_k: int = 3,
        output_sample_rate: int = 24000,
        clock: Callable[[], float] = time.monotonic,
        on_close: CloseCallback | None = None,
        on_tool_call: ToolCallCallback | None = None,
        on_state_change: StateCallback | None = None,
    ) -> None:
        self.transport = transport
        self.retriever = retriever
        self.audio_input = audio_input
        self.audio_output = audio_output
        self.system_instruction = system_instruction
        self.top_k = top_k
        self.scheduler = PlaybackScheduler(sample_rate=output_sample_rate, clock=clock)

        self._on_close = on_close
        self._on_tool_call = on_tool_call
        self._on_state_change = on_state_change

        self._state = LiveSessionState.CLOSED
        self._connection: LiveConnection | None = None
        self._exit_stack: AsyncExitStack | None = None
        self._capture_task: asyncio.Task | None = None
        self._receive_task: asyncio.Task | None = None
        self._tool_tasks: set[asyncio.Task] = set()
        self._closing = False
        self._closed = asyncio.Event()

        self.frames_sent = 0
        self.frames_received = 0

    @property
    def state(self) -> LiveSessionState:
        return self._state

    async def _set_state(self, state: LiveSessionState) -> None:
        self._state = state
        logger.info(f"{__name__}:state - {state.value}")
        if self._on_state_change is not None:
            try:
                await self._on_state_change(state)
            except Exception as e:
                logger.warning(f"{__name__}:state - Callback failed: {type(e).__name__}: {e}")

    async def open(self) -> None:
        """
        Open the duplex session and start streaming.

        A connection failure is routed to close(); it is not raised.

        Raises:
            LiveSessionError: If the session is not CLOSED or was already used
        """
        if self._state != LiveSessionState.CLOSED or self._closing or self._closed.is_set():
            raise LiveSessionError("Live session can only be opened once", state=self._state.value)

        await self._set_state(LiveSessionState.CONNECTING)
        stack = AsyncExitStack()
        self._exit_stack = stack

        try:
            connection = await stack.enter_async_context(self.transport.connect(self.system_instruction))
        except Exception as e:
            logger.error(
                f"{__name__}:open - FAILED at connect - {type(e).__name__}: {e}",
                exc_info=True,
            )
            await self.close(reason=f"connect failed: {e}")
            return

        if self._closing:
            # close() ran while connecting; release the late connection.
            logger.info(f"{__name__}:open - Closed while connecting, releasing connection")
            await stack.aclose()
            return

        self._connection = connection
        self.scheduler.reset()
        await self._set_state(LiveSessionState.OPEN)
        if self._closing:
            return
        self._capture_task = asyncio.create_task(self._capture_loop(), name="live-capture")
        self._receive_task = asyncio.create_task(self._receive_loop(), name="live-receive")

    async def _capture_loop(self) -> None:
        """Forward microphone frames strictly in capture order."""
        try:
            async for frame in self.audio_input.frames():
                if self._state != LiveSessionState.OPEN:
                    break
                await self._connection.send_audio(frame)
                self.frames_sent += 1
                if self.frames_sent % 100 == 0:
                    logger.debug(f"{__name__}:capture - frames_sent={self.frames_sent}")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                f"{__name__}:capture - FAILED - {type(e).__name__}: {e}",
                exc_info=True,
            )
            await self.close(reason=f"capture failed: {e}")

    async def _receive_loop(self) -> None:
        """Dispatch inbound events until the remote side stops."""
        try:
            async for event in self._connection.receive():
                await self.dispatch(event)
                if self._closing:
                    return
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                f"{__name__}:receive - FAILED - {type(e).__name__}: {e}",
                exc_info=True,
            )
            await self.close(reason=f"receive failed: {e}")
            return

        await self.close(reason="remote stream ended")

    async def dispatch(self, event: LiveInboundEvent) -> None:
        """Route one tagged inbound event."""
        if isinstance(event, AudioFrame):
            await self._play(event)
        elif isinstance(event, ToolCall):
            task = asyncio.create_task(self._run_tool_call(event), name=f"live-tool-{event.id}")
            self._tool_tasks.add(task)
            task.add_done_callback(self._tool_tasks.discard)
        elif isinstance(event, SessionClosed):
            await self.close(reason=event.reason or "remote closed")
        elif isinstance(event, SessionError):
            logger.error(f"{__name__}:dispatch - Server error: {event.message}")
            await self.close(reason=f"server error: {event.message}")
        else:
            logger.warning(f"{__name__}:dispatch - Unknown event {type(event).__name__}")

    async def _play(self, frame: AudioFrame) -> None:
        if not frame.data:
            return
        slot = self.scheduler.schedule(sample_count(frame.data))
        self.frames_received += 1
        await self.audio_output.play(frame.data, slot.start_at, slot.duration)
        if self.frames_received % 100 == 0:
            logger.debug(f"{__name__}:playback - frames_received={self.frames_received}")

    async def search_knowledge_base(self, query: str) -> str:
        """Run retrieval and render matched chunk texts as the tool result."""
        matches = await self.retriever.retrieve(query, self.top_k)
        return "\n\n".join(chunk.text for chunk in matches) or NO_RESULTS_TEXT

    async def _run_tool_call(self, call: ToolCall) -> None:
        """
        Answer a tool call, correlated by its id.

        Failures are logged and no response is sent.
        """
        if call.name != SEARCH_TOOL_NAME:
            logger.warning(f"{__name__}:tool_call - Unknown tool {call.name}")
            return

        query = call.args.get("query")
        if not isinstance(query, str) or not query.strip():
            logger.warning(
                f"{__name__}:tool_call - Missing query argument",
                extra={"call_id": call.id},
            )
            return

        start = time.perf_counter()
        try:
            result = await self.search_knowledge_base(query)
            if self._state != LiveSessionState.OPEN:
                return
            await self._connection.send_tool_response(call.id, call.name, result)
            log_with_context(
                logger,
                logging.INFO,
                f"{__name__}:tool_call - END",
                call_id=call.id,
                query_length=len(query),
                matched=result != NO_RESULTS_TEXT,
                latency_ms=round((time.perf_counter() - start) * 1000, 1),
            )
            if self._on_tool_call is not None:
                await self._on_tool_call(call, result)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                f"{__name__}:tool_call - FAILED - {type(e).__name__}: {e}",
                extra={"call_id": call.id},
                exc_info=True,
            )

    async def close(self, reason: str | None = None) -> None:
        """
        Tear down the session.

        Idempotent and a no-op when the session was never opened. Cancels
        capture, reception and pending tool calls, releases the microphone,
        stops playback and fires on_close exactly once.
        """
        if self._closing or self._state == LiveSessionState.CLOSED:
            return
        self._closing = True
        logger.info(f"{__name__}:close - START", extra={"reason": reason})

        current = asyncio.current_task()
        pending = [
            task
            for task in (self._capture_task, self._receive_task, *self._tool_tasks)
            if task is not None and task is not current and not task.done()
        ]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        for step, action in (
            ("audio_input", self.audio_input.close),
            ("audio_output", self.audio_output.stop),
        ):
            try:
                await action()
            except Exception as e:
                logger.warning(f"{__name__}:close - {step} teardown failed: {type(e).__name__}: {e}")

        self.scheduler.reset()

        if self._exit_stack is not None:
            try:
                await self._exit_stack.aclose()
            except Exception as e:
                logger.warning(f"{__name__}:close - Connection teardown failed: {type(e).__name__}: {e}")
            self._exit_stack = None
        self._connection = None

        await self._set_state(LiveSessionState.CLOSED)
        self._closed.set()
        logger.info(
            f"{__name__}:close - END",
            extra={"frames_sent": self.frames_sent, "frames_received": self.frames_received},
        )

        if self._on_close is not None:
            try:
                await self._on_close(reason)
            except Exception as e:
                logger.warning(f"{__name__}:close - Callback failed: {type(e).__name__}: {e}")

    async def wait_closed(self) -> None:
        await self._closed.wait()
