"""
Conversation aggregate.

Holds an append-only message history and the lead-capture state. History is
stored as a tuple and replaced on every append, never mutated in place.

Dependencies: samastha_ai.core.lead_capture, samastha_ai.models
System role: Conversation state for chat turns
"""

import uuid

from samastha_ai.core.exceptions import ValidationError
from samastha_ai.core.lead_capture import (
    CONTACT_PROMPT_TEXT,
    AwaitingContact,
    LeadCaptureState,
    NormalMode,
)
from samastha_ai.models.app_settings import AppSettings
from samastha_ai.models.message import Message, MessageRole


def welcome_text(settings: AppSettings) -> str:
    return f"**Assalamu Alaikum.**\n\nI am {settings.app_name}, {settings.app_description}"


class Conversation:
    """
    Ordered message history plus lead-capture state.

    Attributes:
        id: Conversation identifier
        state: NormalMode or AwaitingContact
    """

    def __init__(self, conversation_id: str | None = None) -> None:
        self.id = conversation_id or uuid.uuid4().hex
        self.state: LeadCaptureState = NormalMode()
        self._messages: tuple[Message, ...] = ()

    @classmethod
    def start(cls, settings: AppSettings) -> "Conversation":
        """New conversation opened with the configured welcome message."""
        conversation = cls()
        conversation.append(Message.model(welcome_text(settings)))
        return conversation

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._messages

    @property
    def awaiting_contact(self) -> bool:
        return isinstance(self.state, AwaitingContact)

    def append(self, message: Message) -> Message:
        self._messages = self._messages + (message,)
        return message

    def last_message(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def last_user_query(self) -> str | None:
        """Content of the most recent user message, if any."""
        for message in reversed(self._messages):
            if message.role == MessageRole.USER:
                return message.content
        return None

    def can_offer_report(self) -> bool:
        """
        Whether a detailed-report offer may follow the latest message.

        Exactly one offer per model turn: the latest message must be a model
        answer that is neither the contact prompt nor an already delivered report.
        """
        if self.awaiting_contact:
            return False
        last = self.last_message()
        if last is None or last.role != MessageRole.MODEL:
            return False
        if last.content == CONTACT_PROMPT_TEXT:
            return False
        return last.share_content is None

    def offer_report(self) -> Message:
        """
        Transition NormalMode -> AwaitingContact and append the contact prompt.

        Returns:
            The appended contact prompt message

        Raises:
            ValidationError: If no offer is allowed for the latest message
        """
        if not self.can_offer_report():
            raise ValidationError(
                "Detailed report cannot be offered for the current message",
                field="conversation_state",
                details={"conversation_id": self.id},
            )
        offered_for = self.last_message().content
        prompt = self.append(Message.model(CONTACT_PROMPT_TEXT))
        self.state = AwaitingContact(offered_for=offered_for)
        return prompt

    def complete_contact(self) -> AwaitingContact:
        """Leave AwaitingContact, returning the state that was left."""
        if not isinstance(self.state, AwaitingContact):
            raise ValidationError(
                "Conversation is not awaiting contact details",
                field="conversation_state",
            )
        previous = self.state
        self.state = NormalMode()
        return previous
