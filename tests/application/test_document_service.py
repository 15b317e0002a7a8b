"""
Test suite for DocumentService.

Ingestion (chunk, embed, store), uploads, seeding and chunk correction
against an in-memory knowledge store.

System role: Verification of document management orchestration
"""

import pytest

from samastha_ai.application.services.document_service import (
    SEED_CHUNK_TEXT,
    SEED_DOCUMENT_ID,
    SEED_DOCUMENT_SIZE,
    SEED_DOCUMENT_TITLE,
    DocumentService,
)
from samastha_ai.boundary.db.knowledge_store import KnowledgeStore
from samastha_ai.core.exceptions import (
    ChunkNotFoundError,
    EmbeddingError,
    UnsupportedDocumentTypeError,
    ValidationError,
)

MOON_TEXT = (
    "Moon sighting decides the start of each month. "
    "The crescent must be seen by reliable witnesses. "
    "Madrasa students learn the rules early."
)


class TestIngestText:
    """Test suite for DocumentService.ingest_text."""

    @pytest.mark.asyncio
    async def test_ingest_text_should_store_embedded_chunks(
        self, document_service: DocumentService, store: KnowledgeStore
    ) -> None:
        # Act
        result = await document_service.ingest_text(title="Moon Guide", text=MOON_TEXT, document_id="moon")

        # Assert
        assert result.chunk_count == 1
        assert result.unembedded_count == 0
        assert result.document.is_processed
        assert result.document.size == len(MOON_TEXT.encode("utf-8"))
        chunks = store.chunks_for_document("moon")
        assert [chunk.id for chunk in chunks] == ["moon-chunk-0"]
        assert chunks[0].doc_title == "Moon Guide"
        assert chunks[0].is_matchable

    @pytest.mark.asyncio
    async def test_ingest_text_should_split_on_chunk_size(self, store: KnowledgeStore, embedder) -> None:
        # Arrange
        service = DocumentService(store=store, embedder=embedder, max_chunk_size=60)

        # Act
        result = await service.ingest_text(title="Moon Guide", text=MOON_TEXT, document_id="moon")

        # Assert
        assert result.chunk_count == 3
        assert result.document.chunk_count == 3
        texts = [chunk.text for chunk in store.chunks_for_document("moon")]
        assert texts[0] == "Moon sighting decides the start of each month."

    @pytest.mark.asyncio
    async def test_failed_embedding_should_leave_chunk_unembedded(
        self, store: KnowledgeStore, embedder, fake_gemini
    ) -> None:
        """A chunk whose embedding fails is still stored, just not matchable."""
        # Arrange
        service = DocumentService(store=store, embedder=embedder, max_chunk_size=60)
        fake_gemini.fail_embedding_for.add("The crescent must be seen by reliable witnesses.")

        # Act
        result = await service.ingest_text(title="Moon Guide", text=MOON_TEXT, document_id="moon")

        # Assert
        assert result.unembedded_count == 1
        chunks = store.chunks_for_document("moon")
        assert [chunk.is_matchable for chunk in chunks] == [True, False, True]

    @pytest.mark.asyncio
    async def test_blank_title_should_raise(self, document_service: DocumentService) -> None:
        with pytest.raises(ValidationError):
            await document_service.ingest_text(title="  ", text=MOON_TEXT)

    @pytest.mark.asyncio
    async def test_text_without_content_should_raise(
        self, document_service: DocumentService, store: KnowledgeStore
    ) -> None:
        with pytest.raises(ValidationError):
            await document_service.ingest_text(title="Empty", text="  \n\n ")

        assert store.is_empty()


class TestIngestUpload:
    """Test suite for DocumentService.ingest_upload."""

    @pytest.mark.asyncio
    async def test_markdown_upload_should_use_file_stem_as_title(self, document_service: DocumentService) -> None:
        # Act
        result = await document_service.ingest_upload(
            filename="moon_sighting.md",
            content_type="text/markdown",
            data=MOON_TEXT.encode("utf-8"),
        )

        # Assert
        assert result.document.title == "moon_sighting"
        assert result.document.size == len(MOON_TEXT.encode("utf-8"))

    @pytest.mark.asyncio
    async def test_pdf_upload_should_be_rejected(self, document_service: DocumentService) -> None:
        with pytest.raises(UnsupportedDocumentTypeError):
            await document_service.ingest_upload(
                filename="report.pdf",
                content_type="application/pdf",
                data=b"%PDF-1.7",
            )

    @pytest.mark.asyncio
    async def test_non_utf8_upload_should_be_rejected(self, document_service: DocumentService) -> None:
        with pytest.raises(ValidationError):
            await document_service.ingest_upload(
                filename="notes.txt",
                content_type="text/plain",
                data=b"\xff\xfe\xfa",
            )


class TestSeed:
    """Test suite for DocumentService.seed_if_empty."""

    @pytest.mark.asyncio
    async def test_seed_should_insert_history_document_once(
        self, document_service: DocumentService, store: KnowledgeStore
    ) -> None:
        # Act
        first = await document_service.seed_if_empty()
        second = await document_service.seed_if_empty()

        # Assert
        assert first is True
        assert second is False
        documents = store.list_documents()
        assert [document.id for document in documents] == [SEED_DOCUMENT_ID]
        assert documents[0].title == SEED_DOCUMENT_TITLE
        assert documents[0].size == SEED_DOCUMENT_SIZE
        chunks = store.chunk_snapshot()
        assert len(chunks) == 1
        assert chunks[0].text == SEED_CHUNK_TEXT
        assert chunks[0].is_matchable

    @pytest.mark.asyncio
    async def test_seed_should_skip_non_empty_store(
        self, document_service: DocumentService, store: KnowledgeStore
    ) -> None:
        await document_service.ingest_text(title="Moon Guide", text=MOON_TEXT)

        assert await document_service.seed_if_empty() is False
        assert len(store.list_documents()) == 1


class TestChunkCorrection:
    """Test suite for chunk edits and re-embedding."""

    @pytest.mark.asyncio
    async def test_update_then_reembed_should_restore_embedding(
        self, document_service: DocumentService
    ) -> None:
        # Arrange
        await document_service.ingest_text(title="Moon Guide", text=MOON_TEXT, document_id="moon")

        # Act
        stale = document_service.update_chunk_text("moon-chunk-0", "Crescent sighting rules.")
        refreshed = await document_service.reembed_chunk("moon-chunk-0")

        # Assert
        assert stale.embedding is None
        assert refreshed.text == "Crescent sighting rules."
        assert refreshed.is_matchable

    @pytest.mark.asyncio
    async def test_reembed_failure_should_raise(self, document_service: DocumentService, fake_gemini) -> None:
        # Arrange
        await document_service.ingest_text(title="Moon Guide", text=MOON_TEXT, document_id="moon")
        document_service.update_chunk_text("moon-chunk-0", "Crescent sighting rules.")
        fake_gemini.fail_embedding_for.add("Crescent sighting rules.")

        # Act / Assert
        with pytest.raises(EmbeddingError):
            await document_service.reembed_chunk("moon-chunk-0")

    def test_update_blank_text_should_raise(self, document_service: DocumentService) -> None:
        with pytest.raises(ValidationError):
            document_service.update_chunk_text("moon-chunk-0", " ")

    def test_update_missing_chunk_should_raise(self, document_service: DocumentService) -> None:
        with pytest.raises(ChunkNotFoundError):
            document_service.update_chunk_text("missing", "text")
