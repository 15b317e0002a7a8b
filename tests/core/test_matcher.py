"""
Test suite for the exact cosine matcher.

System role: Verification of retrieval ranking
"""

import math

import pytest

from samastha_ai.core.exceptions import DimensionMismatchError
from samastha_ai.core.matcher import (
    UNMATCHABLE_SCORE,
    cosine_similarity,
    find_best_matches,
    score_chunk,
)
from samastha_ai.models.chunk import Chunk


def make_chunk(chunk_id: str, embedding: tuple[float, ...] | None) -> Chunk:
    return Chunk(id=chunk_id, doc_id="doc-1", doc_title="Doc", text=f"text {chunk_id}", embedding=embedding)


class TestCosineSimilarity:
    """Test suite for cosine_similarity."""

    def test_identical_vectors_score_one(self) -> None:
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors_score_zero(self) -> None:
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors_score_minus_one(self) -> None:
        assert cosine_similarity([1.0, 1.0], [-1.0, -1.0]) == pytest.approx(-1.0)

    def test_zero_vector_scores_zero(self) -> None:
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0

    def test_length_mismatch_raises(self) -> None:
        with pytest.raises(DimensionMismatchError) as exc_info:
            cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])

        assert exc_info.value.details["expected"] == 2
        assert exc_info.value.details["actual"] == 3


class TestScoreChunk:
    """Test suite for score_chunk."""

    def test_unembedded_chunk_gets_sentinel_below_any_cosine(self) -> None:
        # Act
        score = score_chunk([1.0, 0.0], make_chunk("c1", None))

        # Assert
        assert score == UNMATCHABLE_SCORE
        assert math.isinf(score) and score < -1.0


class TestFindBestMatches:
    """Test suite for find_best_matches."""

    def test_should_rank_by_descending_similarity(self) -> None:
        # Arrange
        corpus = [
            make_chunk("far", (0.0, 1.0)),
            make_chunk("near", (1.0, 0.1)),
            make_chunk("mid", (1.0, 1.0)),
        ]

        # Act
        matches = find_best_matches([1.0, 0.0], corpus, top_k=3)

        # Assert
        assert [chunk.id for chunk in matches] == ["near", "mid", "far"]

    def test_should_truncate_to_top_k(self) -> None:
        corpus = [make_chunk(str(i), (1.0, float(i))) for i in range(5)]

        matches = find_best_matches([1.0, 0.0], corpus, top_k=2)

        assert [chunk.id for chunk in matches] == ["0", "1"]

    def test_should_keep_corpus_order_on_ties(self) -> None:
        corpus = [make_chunk("a", (1.0, 0.0)), make_chunk("b", (2.0, 0.0)), make_chunk("c", (3.0, 0.0))]

        matches = find_best_matches([1.0, 0.0], corpus, top_k=3)

        assert [chunk.id for chunk in matches] == ["a", "b", "c"]

    def test_should_place_unembedded_chunks_last(self) -> None:
        """Unembedded chunks only fill slots that valid matches cannot."""
        # Arrange
        corpus = [
            make_chunk("stale", None),
            make_chunk("negative", (-1.0, 0.0)),
            make_chunk("positive", (1.0, 0.0)),
        ]

        # Act
        top_two = find_best_matches([1.0, 0.0], corpus, top_k=2)
        top_three = find_best_matches([1.0, 0.0], corpus, top_k=3)

        # Assert
        assert [chunk.id for chunk in top_two] == ["positive", "negative"]
        assert top_three[-1].id == "stale"

    @pytest.mark.parametrize("top_k", [0, -1])
    def test_should_return_empty_for_non_positive_top_k(self, top_k: int) -> None:
        assert find_best_matches([1.0], [make_chunk("a", (1.0,))], top_k=top_k) == []

    def test_should_return_empty_for_empty_corpus(self) -> None:
        assert find_best_matches([1.0, 0.0], [], top_k=5) == []

    def test_should_reject_empty_query_vector(self) -> None:
        with pytest.raises(ValueError):
            find_best_matches([], [make_chunk("a", (1.0,))], top_k=1)

    def test_should_raise_on_dimension_mismatch(self) -> None:
        with pytest.raises(DimensionMismatchError):
            find_best_matches([1.0, 0.0], [make_chunk("a", (1.0, 0.0, 0.0))], top_k=1)
