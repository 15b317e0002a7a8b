"""
Lead and settings CRUD operations.

Dependencies: sqlalchemy, samastha_ai.boundary.db.models
System role: Lead and runtime settings persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from samastha_ai.boundary.db.CRUD.base_crud import BaseCRUD
from samastha_ai.boundary.db.models.lead_model import LeadModel
from samastha_ai.boundary.db.models.settings_model import SETTINGS_ROW_ID, SettingsModel


class LeadCRUD(BaseCRUD[LeadModel]):
    """CRUD operations for LeadModel."""

    def __init__(self) -> None:
        """Initialize LeadCRUD with LeadModel."""
        super().__init__(LeadModel)

    def get_newest_first(self, session: Session) -> Sequence[LeadModel]:
        """Retrieve all leads, most recent capture first."""
        stmt = select(LeadModel).order_by(LeadModel.timestamp.desc(), LeadModel.pk.desc())
        return session.execute(stmt).scalars().all()


class SettingsCRUD(BaseCRUD[SettingsModel]):
    """CRUD operations for the single SettingsModel row."""

    def __init__(self) -> None:
        """Initialize SettingsCRUD with SettingsModel."""
        super().__init__(SettingsModel)

    def get_row(self, session: Session) -> SettingsModel | None:
        return self.get_by_id(session, SETTINGS_ROW_ID)

    def upsert(self, session: Session, values: dict) -> SettingsModel:
        """
        Store values and bump the version when they differ from the saved ones.

        Args:
            session: Database session
            values: Full settings payload

        Returns:
            The settings row after the write
        """
        row = self.get_row(session)
        if row is None:
            return self.create(session, id=SETTINGS_ROW_ID, values=dict(values), version=1)
        if row.values != values:
            row.values = dict(values)
            row.version = row.version + 1
            session.flush()
        return row


lead_crud = LeadCRUD()
settings_crud = SettingsCRUD()
