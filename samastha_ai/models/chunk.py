"""
Chunk domain model.

Represents a bounded span of a document's text with its optional embedding.

Dependencies: pydantic
System role: Document chunk data structure
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Document chunk model."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Chunk identifier")
    doc_id: str = Field(description="Owning document identifier")
    doc_title: str = Field(description="Owning document title (for citation display)")
    text: str = Field(description="Chunk text content")
    embedding: tuple[float, ...] | None = Field(
        default=None,
        description="Embedding vector; None when absent or invalidated",
    )

    @property
    def is_matchable(self) -> bool:
        """Whether the chunk can take part in similarity ranking."""
        return bool(self.embedding)


class ChunkTextUpdate(BaseModel):
    """Request schema for correcting a chunk's text."""

    text: str = Field(min_length=1, description="Corrected chunk text")


class ChunkResponse(BaseModel):
    """Chunk as shown in the inspection view (vector omitted)."""

    id: str
    doc_id: str
    doc_title: str
    text: str
    has_embedding: bool

    @classmethod
    def from_chunk(cls, chunk: Chunk) -> "ChunkResponse":
        return cls(
            id=chunk.id,
            doc_id=chunk.doc_id,
            doc_title=chunk.doc_title,
            text=chunk.text,
            has_embedding=chunk.is_matchable,
        )
