"""
Gemini API client.

Wraps the google-genai SDK for embedding, grounded generation with Google
Search, verbatim transcription and speech synthesis. Blocking SDK calls run
in a worker thread so the event loop keeps serving live audio.

Dependencies: google.genai, asyncio, base64
System role: Generative provider adapter
"""

import asyncio
import base64
import binascii
import logging
import os

from google import genai
from google.genai import types

from samastha_ai.configs.gemini import GeminiSettings
from samastha_ai.core.exceptions import (
    EmbeddingError,
    GenerationError,
    TranscriptionError,
)
from samastha_ai.core.grounded_answer import GenerationOutput

logger = logging.getLogger(__name__)

TRANSCRIPTION_INSTRUCTION = (
    "Transcribe this audio exactly as spoken. Do not translate. Output only the transcription."
)


def extract_web_citations(response) -> list[str]:
    """
    Collect search-grounding citation labels from a generation response.

    Each grounding chunk with a web URI contributes its title, or the URI
    when the title is missing.
    """
    citations: list[str] = []
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return citations
    metadata = getattr(candidates[0], "grounding_metadata", None)
    for chunk in getattr(metadata, "grounding_chunks", None) or []:
        web = getattr(chunk, "web", None)
        if web is not None and web.uri:
            citations.append(web.title or web.uri)
    return citations


def extract_inline_audio(response) -> bytes | None:
    """First inline audio payload of a response, if any."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates or candidates[0].content is None:
        return None
    for part in candidates[0].content.parts or []:
        if part.inline_data is not None and part.inline_data.data:
            return part.inline_data.data
    return None


class GeminiClient:
    """
    Gemini request/response calls.

    Attributes:
        settings: Model identifiers and voices
    """

    def __init__(self, settings: GeminiSettings, client: "genai.Client | None" = None) -> None:
        self.settings = settings
        self._client = client

    @property
    def api_key(self) -> str | None:
        return self.settings.api_key or os.getenv("GOOGLE_API_KEY")

    @property
    def is_configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    @property
    def client(self) -> "genai.Client":
        """Lazily created SDK client; raises when no API key is available."""
        if self._client is None:
            if not self.api_key:
                raise GenerationError("Gemini API key is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def embed_content(self, text: str) -> list[float]:
        """
        Embed one text.

        Raises:
            EmbeddingError: If the call fails or returns no vector
        """
        try:
            response = await asyncio.to_thread(
                self.client.models.embed_content,
                model=self.settings.embedding_model,
                contents=text,
            )
        except Exception as e:
            raise EmbeddingError(
                f"Embedding call failed: {type(e).__name__}: {e}",
                details={"model": self.settings.embedding_model},
            ) from e

        if not response.embeddings or not response.embeddings[0].values:
            raise EmbeddingError("Embedding response contained no values")
        return list(response.embeddings[0].values)

    async def generate(
        self,
        prompt: str,
        system_instruction: str,
        use_search: bool = True,
    ) -> GenerationOutput:
        """
        Generate a response, optionally grounded with Google Search.

        Raises:
            GenerationError: If the call fails
        """
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            tools=[types.Tool(google_search=types.GoogleSearch())] if use_search else None,
        )
        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.settings.text_model,
                contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                config=config,
            )
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(
                f"Generation call failed: {type(e).__name__}: {e}",
                details={"model": self.settings.text_model},
            ) from e

        return GenerationOutput(text=response.text, web_citations=extract_web_citations(response))

    async def transcribe(self, audio_base64: str, mime_type: str) -> str:
        """
        Transcribe recorded audio verbatim, without translation.

        Raises:
            TranscriptionError: If the audio is malformed, the call fails or nothing was understood
        """
        try:
            audio = base64.b64decode(audio_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise TranscriptionError("Audio payload is not valid base64") from e

        contents = [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_bytes(data=audio, mime_type=mime_type),
                    types.Part(text=TRANSCRIPTION_INSTRUCTION),
                ],
            )
        ]
        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.settings.transcription_model,
                contents=contents,
            )
        except Exception as e:
            logger.error(
                f"{__name__}:transcribe - FAILED - {type(e).__name__}: {e}",
                exc_info=True,
            )
            raise TranscriptionError("Failed to transcribe audio.") from e

        text = (response.text or "").strip()
        if not text:
            raise TranscriptionError("Could not understand audio")
        return text

    async def synthesize_speech(self, text: str) -> str | None:
        """
        Synthesize speech for text.

        Returns:
            Base64 PCM16 audio at 24 kHz, or None on failure
        """
        config = types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(
                        voice_name=self.settings.tts_voice,
                    )
                )
            ),
        )
        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.settings.tts_model,
                contents=[types.Content(role="user", parts=[types.Part(text=text)])],
                config=config,
            )
            audio = extract_inline_audio(response)
        except Exception as e:
            logger.error(
                f"{__name__}:synthesize_speech - FAILED - {type(e).__name__}: {e}",
                exc_info=True,
            )
            return None

        if audio is None:
            logger.warning(f"{__name__}:synthesize_speech - No audio in response")
            return None
        return base64.b64encode(audio).decode("ascii")
