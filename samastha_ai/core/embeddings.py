"""
Embedding client.

Converts chunk texts and queries into vectors through an external embedding
provider. One remote call per text; a failed item yields None without
affecting the rest of the batch.

Dependencies: samastha_ai.boundary.genai (via EmbeddingProvider protocol)
System role: Vectorization for ingestion and retrieval
"""

import logging
from collections.abc import Sequence
from typing import Protocol

logger = logging.getLogger(__name__)


class EmbeddingProvider(Protocol):
    """Remote call that embeds one text."""

    async def embed_content(self, text: str) -> Sequence[float]:
        ...


class EmbeddingClient:
    """
    Order-preserving batch embedder with per-item failure isolation.

    Attributes:
        provider: Remote embedding provider
        expected_dimension: When set, vectors of any other length count as failures
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        expected_dimension: int | None = None,
    ) -> None:
        self.provider = provider
        self.expected_dimension = expected_dimension

    async def embed(self, texts: Sequence[str]) -> list[list[float] | None]:
        """
        Embed each text in order.

        Args:
            texts: Texts to embed

        Returns:
            One entry per input; None for blank texts and failed calls
        """
        vectors: list[list[float] | None] = []
        failures = 0

        for text in texts:
            vector = await self.embed_one(text)
            if vector is None and text and text.strip():
                failures += 1
            vectors.append(vector)

        logger.info(
            f"{__name__}:embed - END",
            extra={"count": len(texts), "failures": failures},
        )
        return vectors

    async def embed_one(self, text: str) -> list[float] | None:
        """
        Embed a single text.

        Blank text is unembeddable and never reaches the provider.

        Args:
            text: Text to embed

        Returns:
            Vector, or None when the text is blank or the call fails
        """
        if not text or not text.strip():
            return None

        try:
            values = await self.provider.embed_content(text)
        except Exception as e:
            logger.warning(
                f"{__name__}:embed_one - Provider call failed: {type(e).__name__}: {e}",
                extra={"text_length": len(text)},
            )
            return None

        vector = [float(v) for v in values or ()]
        if not vector:
            logger.warning(
                f"{__name__}:embed_one - Provider returned no values",
                extra={"text_length": len(text)},
            )
            return None

        if self.expected_dimension is not None and len(vector) != self.expected_dimension:
            logger.warning(
                f"{__name__}:embed_one - Unexpected dimension",
                extra={"expected": self.expected_dimension, "actual": len(vector)},
            )
            return None

        return vector
