"""
Database boundary layer: ORM models, CRUD operations, connection management
and the knowledge store facade.

Exports:
  - Base, TimestampMixin: Model building blocks
  - get_engine(), get_session_factory(): Connection management
  - DocumentModel, ChunkModel, LeadModel, SettingsModel: Persisted entities
  - KnowledgeStore: Synchronous whole-collection store used by services

Dependencies: sqlalchemy, samastha_ai.configs
System role: Persistent storage for the knowledge corpus, leads and settings
"""

from samastha_ai.boundary.db.base import Base, TimestampMixin
from samastha_ai.boundary.db.connection import get_engine, get_session_factory
from samastha_ai.boundary.db.knowledge_store import KnowledgeStore
from samastha_ai.boundary.db.models import ChunkModel, DocumentModel, LeadModel, SettingsModel

__all__ = [
    "Base",
    "ChunkModel",
    "DocumentModel",
    "KnowledgeStore",
    "LeadModel",
    "SettingsModel",
    "TimestampMixin",
    "get_engine",
    "get_session_factory",
]
