"""
Document and chunk administration endpoints.

Routes:
- GET /documents - List documents
- POST /documents - Ingest extracted text
- POST /documents/upload - Ingest a .txt/.md upload
- PATCH /documents/{id} - Edit trust/category tags
- DELETE /documents/{id} - Delete document and its chunks
- GET /documents/{id}/chunks - Inspect chunks
- PATCH /chunks/{id} - Correct chunk text (embedding becomes stale)
- POST /chunks/{id}/reembed - Recompute chunk embedding

Dependencies: samastha_ai.application.services.document_service
System role: Knowledge corpus HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from samastha_ai.api.deps.dependencies import get_document_service
from samastha_ai.api.routers.error_handling import handle_domain_errors
from samastha_ai.application.services.document_service import DocumentService
from samastha_ai.models.chunk import ChunkResponse, ChunkTextUpdate
from samastha_ai.models.document import (
    Document,
    DocumentListResponse,
    DocumentTagsUpdate,
    IngestionResult,
    IngestTextRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])


@router.get("/documents", response_model=DocumentListResponse)
@handle_domain_errors
async def list_documents(
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List all documents in upload order."""
    documents = document_service.list_documents()
    return DocumentListResponse(documents=documents, total=len(documents))


@router.post("/documents", response_model=IngestionResult, status_code=201)
@handle_domain_errors
async def ingest_document(
    request: IngestTextRequest,
    document_service: DocumentService = Depends(get_document_service),
) -> IngestionResult:
    """Chunk, embed and store already-extracted text."""
    return await document_service.ingest_text(
        title=request.title,
        text=request.text,
        trust=request.trust,
        category=request.category,
    )


@router.post("/documents/upload", response_model=IngestionResult, status_code=201)
@handle_domain_errors
async def upload_document(
    file: UploadFile = File(...),
    title: str | None = Form(default=None),
    trust: str | None = Form(default=None),
    category: str | None = Form(default=None),
    document_service: DocumentService = Depends(get_document_service),
) -> IngestionResult:
    """Ingest an uploaded plain-text or markdown file."""
    data = await file.read()
    logger.info(
        f"{__name__}:upload_document - Received upload",
        extra={"upload_name": file.filename, "size_bytes": len(data)},
    )
    return await document_service.ingest_upload(
        filename=file.filename,
        content_type=file.content_type,
        data=data,
        title=title,
        trust=trust,
        category=category,
    )


@router.patch("/documents/{document_id}", response_model=Document)
@handle_domain_errors
async def update_document_tags(
    document_id: str,
    request: DocumentTagsUpdate,
    document_service: DocumentService = Depends(get_document_service),
) -> Document:
    """Replace a document's trust and category tags."""
    return document_service.update_document_tags(document_id, request.trust, request.category)


@router.delete("/documents/{document_id}", status_code=204)
@handle_domain_errors
async def delete_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> None:
    """Delete a document and cascade to its chunks."""
    document_service.delete_document(document_id)


@router.get("/documents/{document_id}/chunks", response_model=list[ChunkResponse])
@handle_domain_errors
async def list_document_chunks(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> list[ChunkResponse]:
    """Inspect a document's chunks (vectors omitted)."""
    return [ChunkResponse.from_chunk(chunk) for chunk in document_service.get_document_chunks(document_id)]


@router.patch("/chunks/{chunk_id}", response_model=ChunkResponse)
@handle_domain_errors
async def update_chunk(
    chunk_id: str,
    request: ChunkTextUpdate,
    document_service: DocumentService = Depends(get_document_service),
) -> ChunkResponse:
    """Correct a chunk's text; it is excluded from matching until re-embedded."""
    return ChunkResponse.from_chunk(document_service.update_chunk_text(chunk_id, request.text))


@router.post("/chunks/{chunk_id}/reembed", response_model=ChunkResponse)
@handle_domain_errors
async def reembed_chunk(
    chunk_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> ChunkResponse:
    """Recompute a chunk's embedding from its current text."""
    return ChunkResponse.from_chunk(await document_service.reembed_chunk(chunk_id))
