"""CRUD operations for database models."""

from samastha_ai.boundary.db.CRUD.base_crud import BaseCRUD
from samastha_ai.boundary.db.CRUD.document_crud import (
    ChunkCRUD,
    DocumentCRUD,
    chunk_crud,
    document_crud,
)
from samastha_ai.boundary.db.CRUD.lead_crud import (
    LeadCRUD,
    SettingsCRUD,
    lead_crud,
    settings_crud,
)

__all__ = [
    "BaseCRUD",
    "ChunkCRUD",
    "DocumentCRUD",
    "LeadCRUD",
    "SettingsCRUD",
    "chunk_crud",
    "document_crud",
    "lead_crud",
    "settings_crud",
]
