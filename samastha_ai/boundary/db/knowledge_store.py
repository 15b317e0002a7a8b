"""
Knowledge store facade.

Synchronous, whole-collection persistence for documents, chunks, leads and
runtime settings. Writes are serialized by a writer lock; readers take an
immutable chunk snapshot that is rebuilt lazily after each write, so live
tool calls and chat turns read a consistent corpus while ingestion runs.

Dependencies: sqlalchemy, samastha_ai.boundary.db, samastha_ai.models
System role: Durable corpus behind the matcher
"""

import logging
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from samastha_ai.boundary.db.base import Base
from samastha_ai.boundary.db.CRUD import chunk_crud, document_crud, lead_crud, settings_crud
from samastha_ai.boundary.db.models import ChunkModel, DocumentModel, LeadModel
from samastha_ai.core.exceptions import ChunkNotFoundError, DocumentNotFoundError
from samastha_ai.models.app_settings import AppSettings
from samastha_ai.models.chunk import Chunk
from samastha_ai.models.document import Document
from samastha_ai.models.lead import Lead

logger = logging.getLogger(__name__)


def _to_document(row: DocumentModel) -> Document:
    return Document(
        id=row.id,
        title=row.title,
        upload_date=row.upload_date,
        size=row.size,
        chunk_count=row.chunk_count,
        is_processed=row.is_processed,
        trust=row.trust,
        category=row.category,
    )


def _to_chunk(row: ChunkModel) -> Chunk:
    return Chunk(
        id=row.id,
        doc_id=row.doc_id,
        doc_title=row.doc_title,
        text=row.text,
        embedding=tuple(row.embedding) if row.embedding else None,
    )


def _to_lead(row: LeadModel) -> Lead:
    return Lead(
        id=row.id,
        phone_number=row.phone_number,
        query_context=row.query_context,
        timestamp=row.timestamp,
    )


def _chunk_row(chunk: Chunk) -> dict:
    return {
        "id": chunk.id,
        "doc_id": chunk.doc_id,
        "doc_title": chunk.doc_title,
        "text": chunk.text,
        "embedding": list(chunk.embedding) if chunk.embedding else None,
    }


class KnowledgeStore:
    """
    Documents, chunks, leads and settings behind one facade.

    Attributes:
        engine: SQLAlchemy engine
    """

    def __init__(self, engine: Engine, session_factory: sessionmaker | None = None) -> None:
        self.engine = engine
        self._session_factory = session_factory or sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )
        self._write_lock = threading.RLock()
        self._snapshot: tuple[Chunk, ...] | None = None
        self._generation = 0

    def create_tables(self) -> None:
        """Create all tables that do not exist yet."""
        Base.metadata.create_all(self.engine)
        logger.info(f"{__name__}:create_tables - Tables ready")

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        finally:
            session.close()

    @contextmanager
    def _write(self) -> Iterator[Session]:
        """Serialized transaction; invalidates the chunk snapshot on commit."""
        with self._write_lock:
            session = self._session_factory()
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()
                self._generation += 1
                self._snapshot = None

    # Documents

    def list_documents(self) -> list[Document]:
        with self._session() as session:
            return [_to_document(row) for row in document_crud.get_all(session)]

    def get_document(self, document_id: str) -> Document:
        """
        Raises:
            DocumentNotFoundError: If no document has this id
        """
        with self._session() as session:
            row = document_crud.get_by_id(session, document_id)
            if row is None:
                raise DocumentNotFoundError(document_id)
            return _to_document(row)

    def add_document(self, document: Document) -> Document:
        with self._write() as session:
            document_crud.create(session, **document.model_dump())
        return document

    def add_document_with_chunks(self, document: Document, chunks: Sequence[Chunk]) -> Document:
        """Insert a document and its chunk batch in one transaction."""
        with self._write() as session:
            document_crud.create(session, **document.model_dump())
            chunk_crud.bulk_create(session, [_chunk_row(chunk) for chunk in chunks])
        logger.info(
            f"{__name__}:add_document_with_chunks - Stored",
            extra={"document_id": document.id, "chunk_count": len(chunks)},
        )
        return document

    def delete_document(self, document_id: str) -> None:
        """
        Delete a document and all of its chunks.

        Raises:
            DocumentNotFoundError: If no document has this id
        """
        with self._write() as session:
            if not document_crud.delete_with_chunks(session, document_id):
                raise DocumentNotFoundError(document_id)
        logger.info(f"{__name__}:delete_document - Deleted", extra={"document_id": document_id})

    def update_document_tags(
        self,
        document_id: str,
        trust: str | None = None,
        category: str | None = None,
    ) -> Document:
        """
        Replace a document's trust/category tags.

        Raises:
            DocumentNotFoundError: If no document has this id
        """
        with self._write() as session:
            if not document_crud.update_by_id(session, document_id, trust=trust, category=category):
                raise DocumentNotFoundError(document_id)
        return self.get_document(document_id)

    # Chunks

    def list_chunks(self) -> list[Chunk]:
        return list(self.chunk_snapshot())

    def chunk_snapshot(self) -> tuple[Chunk, ...]:
        """Immutable view of every chunk in corpus order."""
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot
        generation = self._generation
        with self._session() as session:
            snapshot = tuple(_to_chunk(row) for row in chunk_crud.get_all(session))
        # A write that landed mid-read must not be hidden behind a stale cache.
        if generation == self._generation:
            self._snapshot = snapshot
        return snapshot

    def chunks_for_document(self, document_id: str) -> list[Chunk]:
        """
        Raises:
            DocumentNotFoundError: If no document has this id
        """
        with self._session() as session:
            if not document_crud.exists(session, document_id):
                raise DocumentNotFoundError(document_id)
            return [_to_chunk(row) for row in chunk_crud.get_by_document(session, document_id)]

    def get_chunk(self, chunk_id: str) -> Chunk:
        """
        Raises:
            ChunkNotFoundError: If no chunk has this id
        """
        with self._session() as session:
            row = chunk_crud.get_by_id(session, chunk_id)
            if row is None:
                raise ChunkNotFoundError(chunk_id)
            return _to_chunk(row)

    def add_chunks(self, chunks: Sequence[Chunk]) -> None:
        """Insert a batch of chunks atomically."""
        with self._write() as session:
            chunk_crud.bulk_create(session, [_chunk_row(chunk) for chunk in chunks])

    def update_chunk(self, chunk_id: str, text: str) -> Chunk:
        """
        Replace a chunk's text and mark its embedding stale.

        Stale chunks are excluded from matching until re-embedded.

        Raises:
            ChunkNotFoundError: If no chunk has this id
        """
        with self._write() as session:
            if not chunk_crud.update_by_id(session, chunk_id, text=text, embedding=None):
                raise ChunkNotFoundError(chunk_id)
        logger.info(f"{__name__}:update_chunk - Embedding marked stale", extra={"chunk_id": chunk_id})
        return self.get_chunk(chunk_id)

    def set_chunk_embedding(self, chunk_id: str, embedding: Sequence[float] | None) -> Chunk:
        """
        Store a freshly computed embedding (None leaves the chunk unmatchable).

        Raises:
            ChunkNotFoundError: If no chunk has this id
        """
        values = list(embedding) if embedding else None
        with self._write() as session:
            if not chunk_crud.update_by_id(session, chunk_id, embedding=values):
                raise ChunkNotFoundError(chunk_id)
        return self.get_chunk(chunk_id)

    # Settings

    def get_settings(self) -> AppSettings:
        with self._session() as session:
            row = settings_crud.get_row(session)
            return AppSettings.merged(row.values if row else None)

    def save_settings(self, settings: AppSettings) -> int:
        """
        Persist settings.

        Returns:
            Settings version after the save; unchanged when nothing differs
        """
        with self._write() as session:
            row = settings_crud.upsert(session, settings.model_dump(mode="json"))
            version = row.version
        logger.info(f"{__name__}:save_settings - Saved", extra={"version": version})
        return version

    def settings_version(self) -> int:
        """0 until settings are first saved."""
        with self._session() as session:
            row = settings_crud.get_row(session)
            return row.version if row else 0

    def settings_changed_since(self, version: int) -> bool:
        return self.settings_version() != version

    # Leads

    def list_leads(self) -> list[Lead]:
        """All leads, newest first."""
        with self._session() as session:
            return [_to_lead(row) for row in lead_crud.get_newest_first(session)]

    def add_lead(self, lead: Lead) -> Lead:
        with self._write() as session:
            lead_crud.create(session, **lead.model_dump())
        logger.info(f"{__name__}:add_lead - Stored", extra={"lead_id": lead.id})
        return lead

    def is_empty(self) -> bool:
        with self._session() as session:
            return document_crud.count(session) == 0
