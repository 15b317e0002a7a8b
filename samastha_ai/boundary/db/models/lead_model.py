"""
Lead ORM model.

Dependencies: sqlalchemy, samastha_ai.boundary.db.base
System role: Captured contact persistence
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from samastha_ai.boundary.db.base import Base


class LeadModel(Base):
    """
    Lead ORM model; rows are inserted once and never updated.

    Attributes:
        pk: Surrogate key
        id: Capture-time identifier (milliseconds since epoch)
        phone_number: Contact identifier exactly as entered
        query_context: Truncated context snapshot
        timestamp: Capture time (UTC)
    """

    __tablename__ = "leads"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    phone_number: Mapped[str] = mapped_column(String(64), nullable=False)

    query_context: Mapped[str] = mapped_column(String(1024), nullable=False)

    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
