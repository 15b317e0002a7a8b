"""
Sentence-respecting text chunker.

Splits extracted document text into bounded-size segments without cutting
sentences. Blank-line breaks are kept as their own units so paragraph
boundaries survive.

Dependencies: re
System role: First stage of the ingestion pipeline
"""

import re

# One sentence-like unit: text up to terminal punctuation, a blank line, or end of input.
_UNIT_PATTERN = re.compile(r"[^.!?]*?(?:[.!?]+|\n\s*\n|\Z)", re.S)


def split_units(text: str) -> list[str]:
    """
    Split text into sentence-like units.

    Units keep their surrounding whitespace so that joining them reproduces
    the input exactly.

    Args:
        text: Raw extracted text

    Returns:
        Ordered list of non-empty units
    """
    return [unit for unit in _UNIT_PATTERN.findall(text) if unit]


def chunk_text(text: str, max_chunk_size: int = 500) -> list[str]:
    """
    Greedily pack sentence units into chunks of at most max_chunk_size characters.

    A chunk only exceeds the limit when a single unit is longer than the
    limit on its own.

    Args:
        text: Raw extracted text
        max_chunk_size: Character budget per chunk

    Returns:
        Ordered list of trimmed, non-empty chunks

    Raises:
        ValueError: If max_chunk_size is not positive
    """
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")

    chunks: list[str] = []
    buffer = ""

    for unit in split_units(text):
        if buffer and len(buffer) + len(unit) > max_chunk_size:
            flushed = buffer.strip()
            if flushed:
                chunks.append(flushed)
            buffer = unit
        else:
            buffer += unit

    tail = buffer.strip()
    if tail:
        chunks.append(tail)

    return chunks
