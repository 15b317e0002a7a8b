"""
Dependency injection container.

Factory functions for FastAPI dependencies. Expensive collaborators (engine,
knowledge store, Gemini client) are created once and cached.

Dependencies: samastha_ai.configs, samastha_ai.application, samastha_ai.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from samastha_ai.application.services import ChatService, ConversationRegistry, DocumentService
from samastha_ai.boundary.db import KnowledgeStore, get_engine, get_session_factory
from samastha_ai.boundary.genai import GeminiClient, GeminiLiveTransport
from samastha_ai.configs import Settings, get_settings
from samastha_ai.core.embeddings import EmbeddingClient
from samastha_ai.core.grounded_answer import GroundedAnswerGenerator
from samastha_ai.core.retrieval import KnowledgeRetriever


class ServiceCache:
    """Container for cached service instances."""

    def __init__(
        self,
        settings: Settings | None = None,
        store: KnowledgeStore | None = None,
        gemini: GeminiClient | None = None,
        live_transport: GeminiLiveTransport | None = None,
    ):
        self._settings = settings
        self._store = store
        self._gemini = gemini
        self._embedder = None
        self._retriever = None
        self._generator = None
        self._registry = None
        self._live_transport = live_transport

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def store(self) -> KnowledgeStore:
        """Get cached knowledge store (tables created on first access)."""
        if self._store is None:
            engine = get_engine(self.settings.database)
            self._store = KnowledgeStore(engine, get_session_factory(engine))
            self._store.create_tables()
        return self._store

    @property
    def gemini(self) -> GeminiClient:
        """Get cached Gemini client."""
        if self._gemini is None:
            self._gemini = GeminiClient(self.settings.gemini)
        return self._gemini

    @property
    def embedder(self) -> EmbeddingClient:
        if self._embedder is None:
            self._embedder = EmbeddingClient(
                self.gemini,
                expected_dimension=self.settings.gemini.embedding_dimension,
            )
        return self._embedder

    @property
    def retriever(self) -> KnowledgeRetriever:
        if self._retriever is None:
            self._retriever = KnowledgeRetriever(self.embedder, self.store.chunk_snapshot)
        return self._retriever

    @property
    def generator(self) -> GroundedAnswerGenerator:
        if self._generator is None:
            self._generator = GroundedAnswerGenerator(self.gemini, self.store.get_settings)
        return self._generator

    @property
    def registry(self) -> ConversationRegistry:
        if self._registry is None:
            self._registry = ConversationRegistry()
        return self._registry

    @property
    def live_transport(self) -> GeminiLiveTransport:
        if self._live_transport is None:
            self._live_transport = GeminiLiveTransport(
                self.settings.gemini,
                self.gemini,
                input_sample_rate=self.settings.live_audio.input_sample_rate,
            )
        return self._live_transport

    def clear(self) -> None:
        """Clear all cached instances."""
        if self._store is not None:
            self._store.engine.dispose()
        self._store = None
        self._gemini = None
        self._embedder = None
        self._retriever = None
        self._generator = None
        self._registry = None
        self._live_transport = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_document_service() -> DocumentService:
    """
    Get document service instance.

    Returns:
        DocumentService: Document service over the cached store and embedder
    """
    cache = get_service_cache()
    return DocumentService(
        store=cache.store,
        embedder=cache.embedder,
        max_chunk_size=cache.settings.retrieval.max_chunk_size,
    )


def get_chat_service() -> ChatService:
    """
    Get chat service instance.

    Returns:
        ChatService: Chat service sharing the cached conversation registry
    """
    cache = get_service_cache()
    return ChatService(
        store=cache.store,
        retriever=cache.retriever,
        generator=cache.generator,
        gemini=cache.gemini,
        registry=cache.registry,
        retrieval_settings=cache.settings.retrieval,
    )
