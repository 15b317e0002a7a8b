"""
Document and chunk CRUD operations.

Dependencies: sqlalchemy, samastha_ai.boundary.db.models
System role: Knowledge corpus persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from samastha_ai.boundary.db.CRUD.base_crud import BaseCRUD
from samastha_ai.boundary.db.models.document_model import ChunkModel, DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel."""

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    def delete_with_chunks(self, session: Session, id: str) -> bool:
        """
        Delete a document and cascade to its chunks.

        Loads the row so the ORM cascade runs alongside the FK cascade.

        Args:
            session: Database session
            id: Document identifier

        Returns:
            True if the document existed
        """
        document = self.get_by_id(session, id)
        if document is None:
            return False
        session.delete(document)
        session.flush()
        return True


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkModel."""
        super().__init__(ChunkModel)

    def bulk_create(self, session: Session, rows: Sequence[dict]) -> list[ChunkModel]:
        """
        Insert a batch of chunks in order.

        Args:
            session: Database session
            rows: Field values per chunk

        Returns:
            Created chunk rows
        """
        instances = [ChunkModel(**row) for row in rows]
        session.add_all(instances)
        session.flush()
        return instances

    def get_by_document(self, session: Session, doc_id: str) -> Sequence[ChunkModel]:
        """
        Retrieve all chunks for a document in insertion order.

        Args:
            session: Database session
            doc_id: Owning document identifier

        Returns:
            Sequence of chunk rows
        """
        stmt = select(ChunkModel).where(ChunkModel.doc_id == doc_id).order_by(ChunkModel.pk)
        return session.execute(stmt).scalars().all()


document_crud = DocumentCRUD()
chunk_crud = ChunkCRUD()
