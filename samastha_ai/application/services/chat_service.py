"""
Chat service for grounded conversational Q&A.

Orchestrates a full user turn: lead-capture interception first, then the
normal retrieval-augmented answer. Voice turns are transcribed before they
enter the same path. Every failure resolves to a message in the conversation.

Dependencies: samastha_ai.core, samastha_ai.boundary.genai, samastha_ai.boundary.db
System role: Chat service orchestration layer
"""

import logging
from dataclasses import dataclass

from samastha_ai.application.services.conversation_registry import ConversationRegistry
from samastha_ai.boundary.db.knowledge_store import KnowledgeStore
from samastha_ai.boundary.genai.gemini_client import GeminiClient
from samastha_ai.configs.retrieval import RetrievalSettings
from samastha_ai.core.conversation import Conversation
from samastha_ai.core.exceptions import GenerationError, TranscriptionError, ValidationError
from samastha_ai.core.grounded_answer import ERROR_LANGUAGE, GroundedAnswerGenerator
from samastha_ai.core.lead_capture import (
    INVALID_CONTACT_TEXT,
    AwaitingContact,
    NormalMode,
    build_lead,
    is_valid_contact,
)
from samastha_ai.core.prompts import build_report_query
from samastha_ai.core.retrieval import KnowledgeRetriever
from samastha_ai.models.message import Message

logger = logging.getLogger(__name__)

CHAT_ERROR_TEXT = "I apologize, but I encountered an error. Please try again."
REPORT_ERROR_TEXT = "Error generating detailed report."
VOICE_ERROR_TEXT = "Sorry, I could not understand the audio. Please try again."
DEFAULT_REPORT_TOPIC = "Samastha Kerala Jamiyyathul Ulama"


def report_message_text(topic: str, report: str) -> str:
    return (
        "✅ **Lead Verified.**\n\n"
        f'Here is your detailed report on **"{topic}"**:\n\n---\n\n{report}'
    )


def shareable_text(report: str, app_name: str) -> str:
    """Plain-text report variant: bold markers removed, generated-by footer added."""
    return f"{report.replace('**', '')}\n\nGenerated by {app_name}"


@dataclass
class TurnResult:
    """
    Outcome of one user turn.

    Attributes:
        conversation: Conversation after the turn
        reply: Assistant message emitted by the turn, if any
        suggested_input: Transcription to place in the input box instead of submitting
    """

    conversation: Conversation
    reply: Message | None = None
    suggested_input: str | None = None


class ChatService:
    """
    Chat service for grounded Q&A with lead-gated detailed reports.

    Coordinates the conversation state machine, retrieval, grounded
    generation, lead persistence, transcription and speech synthesis.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        retriever: KnowledgeRetriever,
        generator: GroundedAnswerGenerator,
        gemini: GeminiClient,
        registry: ConversationRegistry,
        retrieval_settings: RetrievalSettings | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            store: Knowledge store (settings and leads)
            retriever: Query retriever over the chunk snapshot
            generator: Grounded-answer generator
            gemini: Provider client for transcription and speech
            registry: In-process conversation registry
            retrieval_settings: Top-K values per flow
        """
        self.store = store
        self.retriever = retriever
        self.generator = generator
        self.gemini = gemini
        self.registry = registry
        self.retrieval = retrieval_settings or RetrievalSettings()

    def start_conversation(self) -> Conversation:
        """Open a conversation with the configured welcome message."""
        return self.registry.create(self.store.get_settings())

    def get_conversation(self, conversation_id: str) -> Conversation:
        return self.registry.get(conversation_id)

    async def submit_text(self, conversation_id: str, text: str) -> TurnResult:
        """
        Handle a typed user turn.

        The lead-capture state is checked before anything else; only in
        NormalMode does the text reach the retrieval pipeline.

        Raises:
            ConversationNotFoundError: If the conversation is unknown
            ValidationError: If text is blank
        """
        conversation = self.registry.get(conversation_id)
        if not text or not text.strip():
            raise ValidationError("Message text must not be empty", field="text")

        state = conversation.state
        if isinstance(state, AwaitingContact):
            return await self._handle_contact(conversation, text)
        if isinstance(state, NormalMode):
            return await self._answer(conversation, text)
        raise ValidationError(f"Unknown conversation state {type(state).__name__}")

    async def submit_voice(
        self,
        conversation_id: str,
        audio_base64: str,
        mime_type: str,
    ) -> TurnResult:
        """
        Handle a recorded voice turn.

        While awaiting contact details the transcription is returned as a
        suggested input and nothing is submitted.
        """
        conversation = self.registry.get(conversation_id)

        try:
            text = await self.gemini.transcribe(audio_base64, mime_type)
        except TranscriptionError as e:
            logger.warning(f"{__name__}:submit_voice - Transcription failed: {e.message}")
            return TurnResult(
                conversation=conversation,
                reply=Message.model(VOICE_ERROR_TEXT, language=ERROR_LANGUAGE),
            )

        if conversation.awaiting_contact:
            return TurnResult(conversation=conversation, suggested_input=text)
        return await self._answer(conversation, text, is_audio=True)

    def request_detailed_report(self, conversation_id: str) -> Message:
        """
        Offer a detailed report for the latest model answer.

        Raises:
            ConversationNotFoundError: If the conversation is unknown
            ValidationError: If no offer is allowed right now
        """
        conversation = self.registry.get(conversation_id)
        prompt = conversation.offer_report()
        logger.info(
            f"{__name__}:request_detailed_report - Awaiting contact",
            extra={"conversation_id": conversation_id},
        )
        return prompt

    async def speak(self, text: str) -> str | None:
        """Base64 PCM speech for text, or None when synthesis fails."""
        return await self.gemini.synthesize_speech(text)

    async def _answer(self, conversation: Conversation, text: str, is_audio: bool = False) -> TurnResult:
        """Normal turn: retrieve top-K chunks, generate, append with citations."""
        conversation.append(Message.user(text, is_audio=is_audio))

        try:
            chunks = await self.retriever.retrieve(text, self.retrieval.top_k)
            answer = await self.generator.generate(text, chunks)
            reply = Message.model(
                answer.text,
                language=answer.language,
                citations=tuple(answer.citations) if answer.citations else None,
            )
        except Exception as e:
            logger.error(
                f"{__name__}:_answer - FAILED - {type(e).__name__}: {e}",
                exc_info=True,
            )
            reply = Message.model(CHAT_ERROR_TEXT)

        conversation.append(reply)
        return TurnResult(conversation=conversation, reply=reply)

    async def _handle_contact(self, conversation: Conversation, text: str) -> TurnResult:
        """
        AwaitingContact turn: validate, record the lead, deliver the report.

        An invalid contact keeps the state and records nothing.
        """
        if not is_valid_contact(text):
            reply = conversation.append(Message.model(INVALID_CONTACT_TEXT))
            logger.info(f"{__name__}:_handle_contact - Invalid contact rejected")
            return TurnResult(conversation=conversation, reply=reply)

        topic = conversation.last_user_query() or DEFAULT_REPORT_TOPIC
        awaiting = conversation.complete_contact()
        conversation.append(Message.user(text))

        try:
            self.store.add_lead(build_lead(text, awaiting.offered_for))
        except Exception as e:
            logger.error(
                f"{__name__}:_handle_contact - FAILED to store lead - {type(e).__name__}: {e}",
                exc_info=True,
            )

        try:
            chunks = await self.retriever.retrieve(topic, self.retrieval.report_top_k)
            answer = await self.generator.generate(build_report_query(topic), chunks)
            if answer.is_error:
                raise GenerationError(answer.text)

            settings = self.store.get_settings()
            reply = Message.model(
                report_message_text(topic, answer.text),
                language=answer.language,
                citations=tuple(answer.citations) if answer.citations else None,
                share_content=shareable_text(answer.text, settings.app_name),
            )
        except Exception as e:
            logger.error(
                f"{__name__}:_handle_contact - FAILED at report - {type(e).__name__}: {e}",
                exc_info=True,
            )
            reply = Message.model(REPORT_ERROR_TEXT)

        conversation.append(reply)
        return TurnResult(conversation=conversation, reply=reply)
