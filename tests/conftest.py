"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory knowledge store, deterministic embedding and generation
providers, a fake Gemini client and wired services
Dependencies: pytest, sqlalchemy
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock

import pytest

from samastha_ai.application.services.chat_service import ChatService
from samastha_ai.application.services.conversation_registry import ConversationRegistry
from samastha_ai.application.services.document_service import DocumentService
from samastha_ai.boundary.db.connection import get_engine, get_session_factory
from samastha_ai.boundary.db.knowledge_store import KnowledgeStore
from samastha_ai.configs.database import DatabaseSettings
from samastha_ai.configs.retrieval import RetrievalSettings
from samastha_ai.core.embeddings import EmbeddingClient
from samastha_ai.core.grounded_answer import GenerationOutput, GroundedAnswerGenerator
from samastha_ai.core.retrieval import KnowledgeRetriever

# Bag-of-keywords embedding space: one dimension per keyword.
KEYWORDS = ("samastha", "1926", "madrasa", "moon", "sighting", "crescent", "kerala", "education")
EMBEDDING_DIMENSION = len(KEYWORDS)


def keyword_vector(text: str) -> list[float]:
    lowered = text.lower()
    return [float(lowered.count(keyword)) for keyword in KEYWORDS]


class FakeGemini:
    """
    Deterministic stand-in for GeminiClient.

    embed_content maps text onto KEYWORDS counts; generate echoes the prompt
    head so tests can see what reached the model.
    """

    def __init__(self) -> None:
        self.is_configured = True
        self.embed_calls: list[str] = []
        self.generate_calls: list[dict] = []
        self.fail_embedding_for: set[str] = set()
        self.generation_error: Exception | None = None
        self.answer_text = "Samastha was founded in 1926."
        self.web_citations: list[str] = []
        self.transcribe = AsyncMock(return_value="When was Samastha founded?")
        self.synthesize_speech = AsyncMock(return_value="AAAA")

    async def embed_content(self, text: str) -> list[float]:
        self.embed_calls.append(text)
        if text in self.fail_embedding_for:
            raise RuntimeError("embedding backend unavailable")
        return keyword_vector(text)

    async def generate(self, prompt: str, system_instruction: str, use_search: bool = True) -> GenerationOutput:
        self.generate_calls.append(
            {"prompt": prompt, "system_instruction": system_instruction, "use_search": use_search}
        )
        if self.generation_error is not None:
            raise self.generation_error
        return GenerationOutput(text=self.answer_text, web_citations=list(self.web_citations))


@pytest.fixture
def store() -> KnowledgeStore:
    """Knowledge store over a fresh in-memory SQLite database."""
    engine = get_engine(DatabaseSettings(url="sqlite:///:memory:"))
    knowledge_store = KnowledgeStore(engine, get_session_factory(engine))
    knowledge_store.create_tables()
    yield knowledge_store
    engine.dispose()


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def embedder(fake_gemini: FakeGemini) -> EmbeddingClient:
    return EmbeddingClient(fake_gemini, expected_dimension=EMBEDDING_DIMENSION)


@pytest.fixture
def retriever(embedder: EmbeddingClient, store: KnowledgeStore) -> KnowledgeRetriever:
    return KnowledgeRetriever(embedder, store.chunk_snapshot)


@pytest.fixture
def generator(fake_gemini: FakeGemini, store: KnowledgeStore) -> GroundedAnswerGenerator:
    return GroundedAnswerGenerator(fake_gemini, store.get_settings)


@pytest.fixture
def document_service(store: KnowledgeStore, embedder: EmbeddingClient) -> DocumentService:
    return DocumentService(store=store, embedder=embedder, max_chunk_size=500)


@pytest.fixture
def chat_service(
    store: KnowledgeStore,
    retriever: KnowledgeRetriever,
    generator: GroundedAnswerGenerator,
    fake_gemini: FakeGemini,
) -> ChatService:
    return ChatService(
        store=store,
        retriever=retriever,
        generator=generator,
        gemini=fake_gemini,
        registry=ConversationRegistry(),
        retrieval_settings=RetrievalSettings(),
    )
