"""
Lead domain model.

A captured contact identifier tied to the conversational context that
triggered the detailed-report offer.

Dependencies: pydantic
System role: Lead data structure
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class Lead(BaseModel):
    """Captured contact; written once, never updated."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Identifier derived from the capture timestamp")
    phone_number: str = Field(description="Contact identifier exactly as entered")
    query_context: str = Field(description="Truncated snapshot of the answer being expanded")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class LeadListResponse(BaseModel):
    """Lead list response, newest first."""

    leads: list[Lead]
    total: int
