"""
Document service orchestrator.

Coordinates ingestion (chunk, embed, store), corpus administration, leads
and runtime settings on top of the knowledge store.

Dependencies: samastha_ai.core, samastha_ai.boundary.db
System role: Document management orchestration
"""

import logging
import time
import uuid
from pathlib import PurePath

from samastha_ai.boundary.db.knowledge_store import KnowledgeStore
from samastha_ai.core.chunker import chunk_text
from samastha_ai.core.embeddings import EmbeddingClient
from samastha_ai.core.exceptions import (
    EmbeddingError,
    UnsupportedDocumentTypeError,
    ValidationError,
)
from samastha_ai.models.app_settings import AppSettings
from samastha_ai.models.chunk import Chunk
from samastha_ai.models.document import Document, IngestionResult
from samastha_ai.models.lead import Lead

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = {".txt", ".md", ".markdown"}
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown", "text/x-markdown"}

SEED_DOCUMENT_ID = "seed-1"
SEED_DOCUMENT_TITLE = "Samastha History Overview"
SEED_DOCUMENT_SIZE = 1024
SEED_CHUNK_TEXT = (
    "Samastha Kerala Jamiyyathul Ulama is the largest Muslim organization in Kerala, "
    "established in 1926. It was formed to propagate the true teachings of Islam and "
    "defend against innovations. The organization focuses on religious education, "
    "running thousands of madrasas across the state."
)


def chunk_id_for(document_id: str, index: int) -> str:
    return f"{document_id}-chunk-{index}"


class DocumentService:
    """
    Document service orchestrator.

    Handles document lifecycle: ingestion, inspection, chunk correction,
    re-embedding and deletion. Also fronts leads and runtime settings for
    the admin surface.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        embedder: EmbeddingClient,
        max_chunk_size: int = 500,
    ) -> None:
        """
        Initialize document service.

        Args:
            store: Knowledge store for documents, chunks, leads and settings
            embedder: Embedding client for chunk vectors
            max_chunk_size: Character budget per chunk
        """
        self.store = store
        self.embedder = embedder
        self.max_chunk_size = max_chunk_size

    async def ingest_text(
        self,
        title: str,
        text: str,
        size: int | None = None,
        trust: str | None = None,
        category: str | None = None,
        document_id: str | None = None,
    ) -> IngestionResult:
        """
        Chunk, embed and store one document atomically.

        Flow:
        1. Split text into sentence-respecting chunks
        2. Embed every chunk (failures leave that chunk unembedded)
        3. Store the document and its chunks in one write

        Args:
            title: Document title
            text: Extracted text
            size: Source size in bytes (defaults to UTF-8 length of text)
            trust: Optional trust tag
            category: Optional category tag
            document_id: Explicit identifier (generated when omitted)

        Returns:
            IngestionResult with chunk and failure counts

        Raises:
            ValidationError: If the title is blank or the text yields no chunks
        """
        start = time.perf_counter()
        if not title or not title.strip():
            raise ValidationError("Document title must not be empty", field="title")

        # Step 1: Chunk
        pieces = chunk_text(text or "", self.max_chunk_size)
        if not pieces:
            raise ValidationError("Document contains no extractable text", field="text")
        logger.info(
            f"{__name__}:ingest_text - Step 1 chunked",
            extra={"title": title, "chunk_count": len(pieces)},
        )

        # Step 2: Embed
        vectors = await self.embedder.embed(pieces)
        unembedded = sum(1 for vector in vectors if vector is None)
        logger.info(
            f"{__name__}:ingest_text - Step 2 embedded",
            extra={"chunk_count": len(pieces), "unembedded": unembedded},
        )

        # Step 3: Store
        document_id = document_id or uuid.uuid4().hex
        title = title.strip()
        document = Document(
            id=document_id,
            title=title,
            size=size if size is not None else len((text or "").encode("utf-8")),
            chunk_count=len(pieces),
            is_processed=True,
            trust=trust,
            category=category,
        )
        chunks = [
            Chunk(
                id=chunk_id_for(document_id, index),
                doc_id=document_id,
                doc_title=title,
                text=piece,
                embedding=tuple(vector) if vector else None,
            )
            for index, (piece, vector) in enumerate(zip(pieces, vectors))
        ]
        self.store.add_document_with_chunks(document, chunks)

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{__name__}:ingest_text - END",
            extra={"document_id": document_id, "processing_time_ms": round(elapsed_ms, 1)},
        )
        return IngestionResult(
            document=document,
            chunk_count=len(chunks),
            unembedded_count=unembedded,
            processing_time_ms=elapsed_ms,
        )

    async def ingest_upload(
        self,
        filename: str | None,
        content_type: str | None,
        data: bytes,
        title: str | None = None,
        trust: str | None = None,
        category: str | None = None,
    ) -> IngestionResult:
        """
        Ingest an uploaded plain-text or markdown file.

        Raises:
            UnsupportedDocumentTypeError: If the file is not text or markdown
            ValidationError: If the file is not valid UTF-8 or has no text
        """
        suffix = PurePath(filename or "").suffix.lower()
        media_type = (content_type or "").split(";")[0].strip().lower()
        if suffix not in TEXT_EXTENSIONS and media_type not in TEXT_CONTENT_TYPES:
            raise UnsupportedDocumentTypeError(filename, content_type)

        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ValidationError("Uploaded file is not valid UTF-8 text", field="file") from e

        default_title = PurePath(filename).stem if filename else "Untitled"
        return await self.ingest_text(
            title=title or default_title,
            text=text,
            size=len(data),
            trust=trust,
            category=category,
        )

    async def seed_if_empty(self) -> bool:
        """
        Insert the history overview document when the store has no documents.

        Returns:
            True if the seed document was inserted
        """
        if not self.store.is_empty():
            return False

        vector = await self.embedder.embed_one(SEED_CHUNK_TEXT)
        document = Document(
            id=SEED_DOCUMENT_ID,
            title=SEED_DOCUMENT_TITLE,
            size=SEED_DOCUMENT_SIZE,
            chunk_count=1,
            is_processed=True,
        )
        chunk = Chunk(
            id=chunk_id_for(SEED_DOCUMENT_ID, 0),
            doc_id=SEED_DOCUMENT_ID,
            doc_title=SEED_DOCUMENT_TITLE,
            text=SEED_CHUNK_TEXT,
            embedding=tuple(vector) if vector else None,
        )
        self.store.add_document_with_chunks(document, [chunk])
        logger.info(
            f"{__name__}:seed_if_empty - Seed document stored",
            extra={"embedded": vector is not None},
        )
        return True

    def list_documents(self) -> list[Document]:
        return self.store.list_documents()

    def get_document_chunks(self, document_id: str) -> list[Chunk]:
        return self.store.chunks_for_document(document_id)

    def delete_document(self, document_id: str) -> None:
        self.store.delete_document(document_id)

    def update_document_tags(
        self,
        document_id: str,
        trust: str | None,
        category: str | None,
    ) -> Document:
        return self.store.update_document_tags(document_id, trust=trust, category=category)

    def update_chunk_text(self, chunk_id: str, text: str) -> Chunk:
        """
        Correct a chunk's text; its embedding becomes stale until re-embedded.

        Raises:
            ValidationError: If text is blank
            ChunkNotFoundError: If the chunk does not exist
        """
        if not text or not text.strip():
            raise ValidationError("Chunk text must not be empty", field="text")
        return self.store.update_chunk(chunk_id, text)

    async def reembed_chunk(self, chunk_id: str) -> Chunk:
        """
        Recompute a chunk's embedding from its current text.

        Raises:
            ChunkNotFoundError: If the chunk does not exist
            EmbeddingError: If the provider returns no vector
        """
        chunk = self.store.get_chunk(chunk_id)
        vector = await self.embedder.embed_one(chunk.text)
        if vector is None:
            raise EmbeddingError("Embedding failed; chunk remains stale", {"chunk_id": chunk_id})
        return self.store.set_chunk_embedding(chunk_id, vector)

    def list_leads(self) -> list[Lead]:
        return self.store.list_leads()

    def get_settings(self) -> AppSettings:
        return self.store.get_settings()

    def save_settings(self, settings: AppSettings) -> int:
        return self.store.save_settings(settings)

    def settings_version(self) -> int:
        return self.store.settings_version()
