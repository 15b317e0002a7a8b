"""
Knowledge retriever.

Embeds a query and ranks the current knowledge-store snapshot against it.
Shared by normal chat turns, detailed reports and live tool calls.

Dependencies: samastha_ai.core.embeddings, samastha_ai.core.matcher
System role: Query-side retrieval pipeline
"""

import logging
import time
from collections.abc import Callable, Sequence

from samastha_ai.core.embeddings import EmbeddingClient
from samastha_ai.core.matcher import find_best_matches
from samastha_ai.models.chunk import Chunk

logger = logging.getLogger(__name__)


class KnowledgeRetriever:
    """
    Query embedder plus exact matcher over a corpus snapshot.

    Attributes:
        embedder: Embedding client used for the query
        corpus: Callable returning the current immutable chunk snapshot
    """

    def __init__(
        self,
        embedder: EmbeddingClient,
        corpus: Callable[[], Sequence[Chunk]],
    ) -> None:
        self.embedder = embedder
        self.corpus = corpus

    async def retrieve(self, query: str, top_k: int) -> list[Chunk]:
        """
        Return the top_k chunks most similar to query.

        A failed or blank query embedding and an empty corpus both yield no
        matches.

        Args:
            query: Natural-language query
            top_k: Maximum number of chunks

        Returns:
            Ranked chunks, possibly empty
        """
        start = time.perf_counter()

        query_vector = await self.embedder.embed_one(query)
        if query_vector is None:
            logger.info(
                f"{__name__}:retrieve - No query embedding, returning no matches",
                extra={"query_length": len(query or "")},
            )
            return []

        snapshot = self.corpus()
        matches = find_best_matches(query_vector, snapshot, top_k)

        logger.info(
            f"{__name__}:retrieve - END",
            extra={
                "corpus_size": len(snapshot),
                "match_count": len(matches),
                "latency_ms": round((time.perf_counter() - start) * 1000, 1),
            },
        )
        return matches
