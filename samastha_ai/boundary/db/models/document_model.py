"""
Document and chunk ORM models.

A document owns its chunks; deleting a document deletes every chunk through
both the ORM cascade and the ON DELETE CASCADE foreign key.

Dependencies: sqlalchemy, samastha_ai.boundary.db.base
System role: Knowledge corpus persistence
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from samastha_ai.boundary.db.base import Base, TimestampMixin


class DocumentModel(Base, TimestampMixin):
    """
    Document ORM model.

    Attributes:
        pk: Surrogate key; preserves insertion order
        id: Public document identifier
        title: Display title
        upload_date: Ingestion completion time (UTC)
        size: Source size in bytes
        chunk_count: Number of chunks
        is_processed: Chunked and embedded
        trust: Optional trust tag
        category: Optional category tag
        chunks: Owned chunks, in insertion order
    """

    __tablename__ = "documents"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        doc="Public document identifier",
    )

    title: Mapped[str] = mapped_column(String(1024), nullable=False)

    upload_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_processed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    trust: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)

    category: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)

    # Relationships
    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ChunkModel.pk",
    )


class ChunkModel(Base, TimestampMixin):
    """
    Chunk ORM model.

    Attributes:
        pk: Surrogate key; defines corpus order for tie-breaking
        id: Public chunk identifier
        doc_id: Owning document identifier (FK, cascades on delete)
        doc_title: Denormalized document title for citations
        text: Chunk text
        embedding: Vector as a JSON list; NULL when absent or stale
    """

    __tablename__ = "chunks"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        doc="Public chunk identifier",
    )

    doc_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    doc_title: Mapped[str] = mapped_column(String(1024), nullable=False)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    embedding: Mapped[list[float] | None] = mapped_column(
        JSON,
        nullable=True,
        default=None,
        doc="Embedding vector, NULL when absent or invalidated by a text edit",
    )

    # Relationships
    document = relationship("DocumentModel", back_populates="chunks")
