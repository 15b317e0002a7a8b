"""
Lead-capture dialogue state machine.

Two states: NormalMode and AwaitingContact. While awaiting contact, the next
typed turn is intercepted and validated as a phone number before the
detailed-report flow runs.

Dependencies: None (pure domain layer)
System role: Lead-capture gating for detailed reports
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone

from samastha_ai.models.lead import Lead

MIN_CONTACT_DIGITS = 10
MAX_CONTACT_DIGITS = 15
LEAD_CONTEXT_LIMIT = 100
LEAD_CONTEXT_FALLBACK = "User asked for details"

CONTACT_PROMPT_TEXT = (
    "To generate a **Detailed Report** for you, please verify your **Mobile Number**."
)
INVALID_CONTACT_TEXT = "Please enter a valid phone number (e.g., +91 95265 69313)."

_NON_DIGITS = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class NormalMode:
    """Typed turns go through the normal retrieval pipeline."""


@dataclass(frozen=True)
class AwaitingContact:
    """
    Next typed turn is a contact identifier.

    Attributes:
        offered_for: Content of the model answer the report was offered for
    """

    offered_for: str


LeadCaptureState = NormalMode | AwaitingContact


def contact_digits(raw: str) -> str:
    """Strip everything except ASCII digits."""
    return _NON_DIGITS.sub("", raw)


def is_valid_contact(raw: str) -> bool:
    """Whether raw holds between 10 and 15 digits once non-digits are removed."""
    return MIN_CONTACT_DIGITS <= len(contact_digits(raw)) <= MAX_CONTACT_DIGITS


def summarize_context(content: str | None) -> str:
    """Truncate the context snapshot stored with a lead."""
    context = content or LEAD_CONTEXT_FALLBACK
    return context[:LEAD_CONTEXT_LIMIT] + "..."


def build_lead(phone_number: str, context: str | None, now: datetime | None = None) -> Lead:
    """
    Build a lead record keyed by capture time.

    The context is the answer the report was offered for
    (AwaitingContact.offered_for), not the contact prompt that is the most
    recent model message when the contact arrives.

    Args:
        phone_number: Contact identifier exactly as entered
        context: Content of the answer the report was requested for
        now: Capture time (defaults to current UTC time)

    Returns:
        Lead with a millisecond timestamp id
    """
    now = now or datetime.now(timezone.utc)
    return Lead(
        id=str(int(now.timestamp() * 1000)),
        phone_number=phone_number,
        query_context=summarize_context(context),
        timestamp=now,
    )
