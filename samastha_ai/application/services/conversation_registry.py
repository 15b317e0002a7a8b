"""
In-process conversation registry.

Conversations live only in memory, keyed by id. The oldest conversation is
evicted once the registry is full.

Dependencies: samastha_ai.core.conversation
System role: Conversation lookup for the chat service
"""

import threading
from collections import OrderedDict

from samastha_ai.core.conversation import Conversation
from samastha_ai.core.exceptions import ConversationNotFoundError
from samastha_ai.models.app_settings import AppSettings


class ConversationRegistry:
    """Bounded map of conversation id to Conversation."""

    def __init__(self, max_conversations: int = 1000) -> None:
        self.max_conversations = max_conversations
        self._conversations: OrderedDict[str, Conversation] = OrderedDict()
        self._lock = threading.Lock()

    def create(self, settings: AppSettings) -> Conversation:
        conversation = Conversation.start(settings)
        with self._lock:
            self._conversations[conversation.id] = conversation
            while len(self._conversations) > self.max_conversations:
                self._conversations.popitem(last=False)
        return conversation

    def get(self, conversation_id: str) -> Conversation:
        """
        Raises:
            ConversationNotFoundError: If the id is unknown or was evicted
        """
        with self._lock:
            conversation = self._conversations.get(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        return conversation

    def __len__(self) -> int:
        return len(self._conversations)

    def clear(self) -> None:
        with self._lock:
            self._conversations.clear()
