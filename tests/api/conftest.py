"""
API test fixtures.

Provides: TestClient over an app whose ServiceCache is backed by the shared
in-memory store, fake Gemini client and a queue-driven live transport
"""

import asyncio
from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient

from samastha_ai.api.deps import dependencies
from samastha_ai.api.deps.dependencies import ServiceCache
from samastha_ai.configs import Settings
from samastha_ai.configs.gemini import GeminiSettings
from samastha_ai.main import create_app


class QueueLiveConnection:
    def __init__(self) -> None:
        self.sent_audio: list[bytes] = []
        self.tool_responses: list[tuple] = []
        self.initial_events: list = []
        self._inbound: asyncio.Queue | None = None

    async def send_audio(self, pcm: bytes) -> None:
        self.sent_audio.append(pcm)

    async def send_tool_response(self, call_id, name: str, result: str) -> None:
        self.tool_responses.append((call_id, name, result))

    async def receive(self):
        # Created lazily: the app runs on the TestClient's own event loop.
        self._inbound = asyncio.Queue()
        for event in self.initial_events:
            self._inbound.put_nowait(event)
        while True:
            event = await self._inbound.get()
            if event is None:
                return
            yield event


class QueueLiveTransport:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.connection = QueueLiveConnection()
        self.instructions: list[str] = []

    @asynccontextmanager
    async def connect(self, system_instruction: str):
        self.instructions.append(system_instruction)
        if self.error is not None:
            raise self.error
        yield self.connection


@pytest.fixture
def live_transport() -> QueueLiveTransport:
    return QueueLiveTransport()


@pytest.fixture
def service_cache(store, fake_gemini, live_transport, monkeypatch) -> ServiceCache:
    """ServiceCache wired to test doubles and installed as the app singleton."""
    cache = ServiceCache(
        settings=Settings(seed_demo_data=False, gemini=GeminiSettings(embedding_dimension=8)),
        store=store,
        gemini=fake_gemini,
        live_transport=live_transport,
    )
    monkeypatch.setattr(dependencies, "_service_cache", cache)
    return cache


@pytest.fixture
def client(service_cache: ServiceCache) -> TestClient:
    return TestClient(create_app())
