"""
Exact nearest-neighbour matcher over chunk embeddings.

Ranks every chunk in the corpus by cosine similarity to a query vector.
Chunks without an embedding sort after every valid match.

Dependencies: numpy
System role: Vector index for retrieval
"""

from collections.abc import Sequence

import numpy as np

from samastha_ai.core.exceptions import DimensionMismatchError
from samastha_ai.models.chunk import Chunk

# Strictly below any cosine value in [-1, 1].
UNMATCHABLE_SCORE = float("-inf")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Compute cosine similarity between two vectors.

    Args:
        a: First vector
        b: Second vector

    Returns:
        Similarity in [-1, 1]; 0.0 when either vector has zero magnitude

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    norm = np.linalg.norm(va) * np.linalg.norm(vb)
    if norm == 0:
        return 0.0
    return float(np.dot(va, vb) / norm)


def score_chunk(query_vector: Sequence[float], chunk: Chunk) -> float:
    """Score one chunk; unembedded chunks get UNMATCHABLE_SCORE."""
    if not chunk.is_matchable:
        return UNMATCHABLE_SCORE
    return cosine_similarity(query_vector, chunk.embedding)


def find_best_matches(
    query_vector: Sequence[float],
    corpus: Sequence[Chunk],
    top_k: int,
) -> list[Chunk]:
    """
    Return up to top_k chunks ordered by descending similarity.

    Ties keep corpus order. Unembedded chunks are only returned when fewer
    than top_k chunks carry an embedding.

    Args:
        query_vector: Non-empty query embedding
        corpus: Chunks to rank
        top_k: Maximum number of chunks to return

    Returns:
        Ranked chunks (scores are not surfaced)

    Raises:
        ValueError: If query_vector is empty
        DimensionMismatchError: If a chunk embedding differs in length
    """
    if not query_vector:
        raise ValueError("query_vector must be non-empty")
    if top_k <= 0 or not corpus:
        return []

    scored = [(score_chunk(query_vector, chunk), chunk) for chunk in corpus]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [chunk for _, chunk in scored[:top_k]]
