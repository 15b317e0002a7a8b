"""
Grounded-answer generator.

Builds a context-augmented prompt from retrieved chunks, calls the generative
model with web-search grounding enabled and merges retrieval citations with
the model's search citations. Provider failures resolve to a fixed error
answer so the conversation loop always receives a message.

Dependencies: samastha_ai.core.prompts, samastha_ai.boundary.genai (via GenerationProvider)
System role: Answer generation for chat turns and detailed reports
"""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from samastha_ai.core.prompts import build_rag_prompt, build_system_instruction
from samastha_ai.models.app_settings import AppSettings
from samastha_ai.models.chunk import Chunk

logger = logging.getLogger(__name__)

GENERATION_ERROR_TEXT = "Error generating response. Please try again."
ERROR_LANGUAGE = "Error"
DETECTED_LANGUAGE = "Detected"
EMPTY_RESPONSE_TEXT = "No response generated."


@dataclass
class GenerationOutput:
    """
    Raw provider output.

    Attributes:
        text: Response text, None when the model produced none
        web_citations: Search-grounding labels (title, falling back to URI)
    """

    text: str | None
    web_citations: list[str] = field(default_factory=list)


class GenerationProvider(Protocol):
    """Remote generative model call."""

    async def generate(
        self,
        prompt: str,
        system_instruction: str,
        use_search: bool = True,
    ) -> GenerationOutput:
        ...


@dataclass
class GroundedAnswer:
    """
    Answer delivered to the conversation.

    Attributes:
        text: Answer text (or the fixed error text)
        language: Detected language tag, "Error" on failure
        citations: Retrieval titles then search citations, None when empty
    """

    text: str
    language: str
    citations: list[str] | None = None

    @property
    def is_error(self) -> bool:
        return self.language == ERROR_LANGUAGE


class GroundedAnswerGenerator:
    """
    Prompt assembly plus grounded generation.

    Attributes:
        provider: Generative model provider
        settings_provider: Callable returning current application settings
    """

    def __init__(
        self,
        provider: GenerationProvider,
        settings_provider: Callable[[], AppSettings],
    ) -> None:
        self.provider = provider
        self.settings_provider = settings_provider

    async def generate(self, query: str, context_chunks: Sequence[Chunk]) -> GroundedAnswer:
        """
        Generate an answer to query grounded in context_chunks and web search.

        Args:
            query: User query or structured report request
            context_chunks: Retrieved chunks, most relevant first

        Returns:
            GroundedAnswer; never raises for provider failures
        """
        start = time.perf_counter()
        settings = self.settings_provider()
        system_instruction = build_system_instruction(
            settings.system_instruction, settings.app_name
        )
        prompt = build_rag_prompt(query, context_chunks)

        logger.info(
            f"{__name__}:generate - START",
            extra={"query_length": len(query), "context_chunks": len(context_chunks)},
        )

        try:
            output = await self.provider.generate(
                prompt=prompt,
                system_instruction=system_instruction,
                use_search=True,
            )
        except Exception as e:
            logger.error(
                f"{__name__}:generate - FAILED at model call - {type(e).__name__}: {e}",
                exc_info=True,
            )
            return GroundedAnswer(text=GENERATION_ERROR_TEXT, language=ERROR_LANGUAGE)

        retrieval_citations = [chunk.doc_title for chunk in context_chunks]
        citations = retrieval_citations + list(output.web_citations)

        logger.info(
            f"{__name__}:generate - END",
            extra={
                "citation_count": len(citations),
                "latency_ms": round((time.perf_counter() - start) * 1000, 1),
            },
        )
        return GroundedAnswer(
            text=output.text or EMPTY_RESPONSE_TEXT,
            language=DETECTED_LANGUAGE,
            citations=citations or None,
        )
