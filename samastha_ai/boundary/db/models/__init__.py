"""ORM models."""

from samastha_ai.boundary.db.models.document_model import ChunkModel, DocumentModel
from samastha_ai.boundary.db.models.lead_model import LeadModel
from samastha_ai.boundary.db.models.settings_model import SETTINGS_ROW_ID, SettingsModel

__all__ = [
    "ChunkModel",
    "DocumentModel",
    "LeadModel",
    "SETTINGS_ROW_ID",
    "SettingsModel",
]
