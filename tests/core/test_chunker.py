"""
Test suite for the sentence-respecting chunker.

System role: Verification of the first ingestion stage
"""

import pytest

from samastha_ai.core.chunker import chunk_text, split_units


class TestSplitUnits:
    """Test suite for split_units."""

    def test_split_units_should_reproduce_input_when_joined(self) -> None:
        """Units keep their whitespace so nothing is lost."""
        # Arrange
        text = "First sentence. Second one! Third?\n\nNew paragraph"

        # Act
        units = split_units(text)

        # Assert
        assert "".join(units) == text

    def test_split_units_should_keep_unpunctuated_tail(self) -> None:
        # Act
        units = split_units("Ends properly. trailing words")

        # Assert
        assert units == ["Ends properly.", " trailing words"]


class TestChunkText:
    """Test suite for chunk_text."""

    def test_chunk_text_should_return_single_chunk_for_short_text(self) -> None:
        # Act
        chunks = chunk_text("Samastha was founded in 1926. It runs madrasas.", max_chunk_size=500)

        # Assert
        assert chunks == ["Samastha was founded in 1926. It runs madrasas."]

    def test_chunk_text_should_pack_sentences_greedily(self) -> None:
        # Act
        chunks = chunk_text("One. Two. Three.", max_chunk_size=10)

        # Assert
        assert chunks == ["One. Two.", "Three."]

    def test_chunk_text_should_not_split_oversized_sentence(self) -> None:
        """A single unit longer than the limit becomes its own chunk."""
        # Act
        chunks = chunk_text("Hi. This sentence is quite long indeed.", max_chunk_size=10)

        # Assert
        assert chunks == ["Hi.", "This sentence is quite long indeed."]

    def test_chunk_text_should_respect_limit_when_units_fit(self) -> None:
        # Arrange
        text = " ".join(f"Sentence number {i} is here." for i in range(40))

        # Act
        chunks = chunk_text(text, max_chunk_size=100)

        # Assert
        assert len(chunks) > 1
        assert all(len(chunk) <= 100 for chunk in chunks)
        assert all(chunk.endswith(".") for chunk in chunks)
        assert " ".join(chunks) == text

    def test_chunk_text_should_break_on_paragraph_boundaries(self) -> None:
        # Act
        chunks = chunk_text("Intro line\n\nSecond paragraph here", max_chunk_size=15)

        # Assert
        assert chunks == ["Intro line", "Second paragraph here"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\n"])
    def test_chunk_text_should_return_empty_for_blank_text(self, text: str) -> None:
        assert chunk_text(text) == []

    @pytest.mark.parametrize("size", [0, -5])
    def test_chunk_text_should_reject_non_positive_size(self, size: int) -> None:
        with pytest.raises(ValueError):
            chunk_text("Some text.", max_chunk_size=size)
