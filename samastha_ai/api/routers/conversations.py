"""
Conversation API endpoints.

Routes:
- POST /conversations - Start conversation with welcome message
- GET /conversations/{id} - Conversation snapshot
- POST /conversations/{id}/messages - Typed user turn
- POST /conversations/{id}/voice - Recorded voice turn
- POST /conversations/{id}/report-offer - Offer a detailed report (lead capture)
- POST /speech - Speech synthesis

Dependencies: samastha_ai.application.services.chat_service
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from samastha_ai.api.deps.dependencies import get_chat_service
from samastha_ai.api.routers.error_handling import handle_domain_errors
from samastha_ai.application.services.chat_service import ChatService, TurnResult
from samastha_ai.core.conversation import Conversation
from samastha_ai.models.chat import (
    ConversationResponse,
    SendMessageRequest,
    SpeechRequest,
    SpeechResponse,
    TurnResponse,
    VoiceMessageRequest,
)
from samastha_ai.models.message import Message

logger = logging.getLogger(__name__)

router = APIRouter(tags=["conversations"])


def map_conversation(conversation: Conversation) -> ConversationResponse:
    return ConversationResponse(
        id=conversation.id,
        messages=list(conversation.messages),
        awaiting_contact=conversation.awaiting_contact,
    )


def map_turn(result: TurnResult) -> TurnResponse:
    return TurnResponse(
        reply=result.reply,
        suggested_input=result.suggested_input,
        conversation=map_conversation(result.conversation),
    )


@router.post("/conversations", response_model=ConversationResponse, status_code=201)
@handle_domain_errors
async def start_conversation(
    chat_service: ChatService = Depends(get_chat_service),
) -> ConversationResponse:
    """Start a conversation opened with the welcome message."""
    return map_conversation(chat_service.start_conversation())


@router.get("/conversations/{conversation_id}", response_model=ConversationResponse)
@handle_domain_errors
async def get_conversation(
    conversation_id: str,
    chat_service: ChatService = Depends(get_chat_service),
) -> ConversationResponse:
    """Get conversation history and lead-capture state."""
    return map_conversation(chat_service.get_conversation(conversation_id))


@router.post("/conversations/{conversation_id}/messages", response_model=TurnResponse)
@handle_domain_errors
async def send_message(
    conversation_id: str,
    request: SendMessageRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> TurnResponse:
    """
    Submit a typed turn.

    While awaiting contact details the text is treated as a phone number.
    """
    result = await chat_service.submit_text(conversation_id, request.text)
    return map_turn(result)


@router.post("/conversations/{conversation_id}/voice", response_model=TurnResponse)
@handle_domain_errors
async def send_voice(
    conversation_id: str,
    request: VoiceMessageRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> TurnResponse:
    """Submit a recorded voice turn (transcribed verbatim first)."""
    result = await chat_service.submit_voice(conversation_id, request.audio_base64, request.mime_type)
    return map_turn(result)


@router.post("/conversations/{conversation_id}/report-offer", response_model=Message)
@handle_domain_errors
async def offer_detailed_report(
    conversation_id: str,
    chat_service: ChatService = Depends(get_chat_service),
) -> Message:
    """Ask for a phone number before generating a detailed report."""
    return chat_service.request_detailed_report(conversation_id)


@router.post("/speech", response_model=SpeechResponse)
@handle_domain_errors
async def synthesize_speech(
    request: SpeechRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> SpeechResponse:
    """Synthesize speech; audio is null when synthesis fails."""
    return SpeechResponse(audio_base64=await chat_service.speak(request.text))
