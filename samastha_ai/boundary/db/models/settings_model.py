"""
Application settings ORM model.

A single row holds the saved settings as JSON plus a version counter used by
consumers to detect changes cheaply.

Dependencies: sqlalchemy, samastha_ai.boundary.db.base
System role: Runtime settings persistence
"""

from sqlalchemy import JSON, Integer
from sqlalchemy.orm import Mapped, mapped_column

from samastha_ai.boundary.db.base import Base, TimestampMixin

SETTINGS_ROW_ID = 1


class SettingsModel(Base, TimestampMixin):
    """
    Settings ORM model.

    Attributes:
        id: Always SETTINGS_ROW_ID
        values: Saved settings fields
        version: Incremented on every effective change
    """

    __tablename__ = "app_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SETTINGS_ROW_ID)

    values: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
