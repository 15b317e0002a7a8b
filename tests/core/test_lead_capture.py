"""
Test suite for the lead-capture state machine and Conversation aggregate.

System role: Verification of detailed-report gating
"""

from datetime import datetime, timezone

import pytest

from samastha_ai.core.conversation import Conversation, welcome_text
from samastha_ai.core.exceptions import ValidationError
from samastha_ai.core.lead_capture import (
    CONTACT_PROMPT_TEXT,
    LEAD_CONTEXT_FALLBACK,
    AwaitingContact,
    NormalMode,
    build_lead,
    contact_digits,
    is_valid_contact,
    summarize_context,
)
from samastha_ai.models.app_settings import AppSettings
from samastha_ai.models.message import Message, MessageRole


class TestContactValidation:
    """Test suite for contact validation helpers."""

    @pytest.mark.parametrize(
        "raw",
        ["+91 95265 69313", "9526569313", "(952) 656-9313", "+1 234 567 890 123 45"],
    )
    def test_valid_contacts(self, raw: str) -> None:
        assert is_valid_contact(raw)

    @pytest.mark.parametrize("raw", ["12345", "", "call me maybe", "1234567890123456"])
    def test_invalid_contacts(self, raw: str) -> None:
        assert not is_valid_contact(raw)

    def test_contact_digits_should_strip_non_digits(self) -> None:
        assert contact_digits("+91 95265-69313") == "919526569313"


class TestLeadBuilding:
    """Test suite for summarize_context and build_lead."""

    def test_summarize_context_should_truncate_and_mark(self) -> None:
        summary = summarize_context("x" * 250)

        assert summary == "x" * 100 + "..."

    def test_summarize_context_should_mark_short_context(self) -> None:
        assert summarize_context("Short answer") == "Short answer..."

    def test_summarize_context_should_fall_back_when_missing(self) -> None:
        assert summarize_context(None) == LEAD_CONTEXT_FALLBACK + "..."

    def test_build_lead_should_keep_phone_literal_and_use_ms_id(self) -> None:
        # Arrange
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        # Act
        lead = build_lead("+91 95265 69313", "Founded in 1926.", now=now)

        # Assert
        assert lead.phone_number == "+91 95265 69313"
        assert lead.id == str(int(now.timestamp() * 1000))
        assert lead.query_context == "Founded in 1926...."
        assert lead.timestamp == now


class TestConversation:
    """Test suite for Conversation state transitions."""

    @pytest.fixture
    def conversation(self) -> Conversation:
        return Conversation.start(AppSettings())

    def test_start_should_open_with_welcome_message(self, conversation: Conversation) -> None:
        # Assert
        assert len(conversation.messages) == 1
        first = conversation.messages[0]
        assert first.role == MessageRole.MODEL
        assert first.content == welcome_text(AppSettings())
        assert isinstance(conversation.state, NormalMode)

    def test_append_should_not_mutate_previous_history(self, conversation: Conversation) -> None:
        # Arrange
        before = conversation.messages

        # Act
        conversation.append(Message.user("Hello"))

        # Assert
        assert len(before) == 1
        assert len(conversation.messages) == 2

    def test_offer_report_should_enter_awaiting_contact(self, conversation: Conversation) -> None:
        # Arrange
        conversation.append(Message.user("When was Samastha founded?"))
        conversation.append(Message.model("In 1926."))

        # Act
        prompt = conversation.offer_report()

        # Assert
        assert prompt.content == CONTACT_PROMPT_TEXT
        assert conversation.last_message() is prompt
        assert conversation.state == AwaitingContact(offered_for="In 1926.")
        assert conversation.awaiting_contact

    def test_offer_report_should_reject_second_offer(self, conversation: Conversation) -> None:
        conversation.append(Message.model("In 1926."))
        conversation.offer_report()

        with pytest.raises(ValidationError):
            conversation.offer_report()

    def test_offer_report_should_reject_after_user_message(self, conversation: Conversation) -> None:
        conversation.append(Message.user("Hello"))

        assert not conversation.can_offer_report()
        with pytest.raises(ValidationError):
            conversation.offer_report()

    def test_offer_report_should_reject_delivered_report(self, conversation: Conversation) -> None:
        conversation.append(Message.model("Report body", share_content="Report body"))

        assert not conversation.can_offer_report()

    def test_complete_contact_should_return_to_normal_mode(self, conversation: Conversation) -> None:
        # Arrange
        conversation.append(Message.model("In 1926."))
        conversation.offer_report()

        # Act
        previous = conversation.complete_contact()

        # Assert
        assert previous.offered_for == "In 1926."
        assert isinstance(conversation.state, NormalMode)

    def test_complete_contact_should_fail_in_normal_mode(self, conversation: Conversation) -> None:
        with pytest.raises(ValidationError):
            conversation.complete_contact()

    def test_last_user_query_should_find_latest_user_message(self, conversation: Conversation) -> None:
        conversation.append(Message.user("first"))
        conversation.append(Message.model("answer"))
        conversation.append(Message.user("second"))
        conversation.append(Message.model("answer"))

        assert conversation.last_user_query() == "second"
