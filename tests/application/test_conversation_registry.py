"""
Test suite for ConversationRegistry.
"""

import pytest

from samastha_ai.application.services.conversation_registry import ConversationRegistry
from samastha_ai.core.exceptions import ConversationNotFoundError
from samastha_ai.models.app_settings import AppSettings


class TestConversationRegistry:
    """Test suite for ConversationRegistry."""

    def test_create_then_get(self) -> None:
        registry = ConversationRegistry()

        conversation = registry.create(AppSettings())

        assert registry.get(conversation.id) is conversation

    def test_should_evict_oldest_beyond_capacity(self) -> None:
        # Arrange
        registry = ConversationRegistry(max_conversations=2)
        first = registry.create(AppSettings())
        second = registry.create(AppSettings())

        # Act
        third = registry.create(AppSettings())

        # Assert
        assert len(registry) == 2
        assert registry.get(second.id) is second
        assert registry.get(third.id) is third
        with pytest.raises(ConversationNotFoundError):
            registry.get(first.id)

    def test_welcome_should_use_configured_name(self) -> None:
        registry = ConversationRegistry()

        conversation = registry.create(AppSettings(app_name="Samastha Helper"))

        assert "I am Samastha Helper" in conversation.messages[0].content

    def test_clear(self) -> None:
        registry = ConversationRegistry()
        conversation = registry.create(AppSettings())

        registry.clear()

        with pytest.raises(ConversationNotFoundError):
            registry.get(conversation.id)
