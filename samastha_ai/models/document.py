"""
Document domain models and schemas.

Uploaded document metadata plus request/response schemas for ingestion
and admin operations.

Dependencies: pydantic
System role: Document API contracts
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class Document(BaseModel):
    """An ingested document; owns its chunks."""

    id: str = Field(description="Document identifier")
    title: str = Field(description="Display title, denormalized onto chunks for citations")
    upload_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Ingestion completion time (UTC)",
    )
    size: int = Field(default=0, ge=0, description="Source size in bytes")
    chunk_count: int = Field(default=0, ge=0, description="Number of chunks")
    is_processed: bool = Field(default=False, description="Chunked and embedded")
    trust: str | None = Field(default=None, description="Optional trust tag")
    category: str | None = Field(default=None, description="Optional category tag")


class IngestTextRequest(BaseModel):
    """Request schema for ingesting already-extracted text."""

    title: str = Field(min_length=1, description="Document title")
    text: str = Field(description="Extracted document text")
    trust: str | None = None
    category: str | None = None


class DocumentTagsUpdate(BaseModel):
    """Editable document tags."""

    trust: str | None = None
    category: str | None = None


class IngestionResult(BaseModel):
    """Outcome of ingesting one document."""

    document: Document
    chunk_count: int = Field(description="Number of chunks stored")
    unembedded_count: int = Field(description="Chunks whose embedding failed")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")


class DocumentListResponse(BaseModel):
    """Document list response."""

    documents: list[Document]
    total: int
