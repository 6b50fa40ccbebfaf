"""Split large text into bounded-size chunks for per-chunk model calls.

Packing is greedy at three granularities: paragraphs (joined by a blank
line), then sentences (joined by ". "), then words (joined by a space).
A piece that is too large on its own is descended into at the next
granularity. Words are never cut, so a single word longer than the limit
becomes its own oversized chunk.
"""

from __future__ import annotations

import re

from stratlens.utils.logging import get_logger

logger = get_logger(__name__)

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_END = re.compile(r"[.!?]+")
_WHITESPACE = re.compile(r"\s+")

# (splitter, joiner) from coarsest to finest
_LEVELS: tuple[tuple[re.Pattern[str], str], ...] = (
    (_PARAGRAPH_BREAK, "\n\n"),
    (_SENTENCE_END, ". "),
    (_WHITESPACE, " "),
)
_WORD_LEVEL = len(_LEVELS) - 1


def _check_size(max_chunk_size: int) -> None:
    if max_chunk_size < 1:
        raise ValueError(f"max_chunk_size must be >= 1, got {max_chunk_size}")


def _pack(text: str, max_chunk_size: int, level: int) -> list[str]:
    splitter, joiner = _LEVELS[level]
    pieces = [p.strip() for p in splitter.split(text)]

    chunks: list[str] = []
    current = ""
    for piece in pieces:
        if not piece:
            continue
        if len(piece) > max_chunk_size:
            if current:
                chunks.append(current)
                current = ""
            if level == _WORD_LEVEL:
                chunks.append(piece)
            else:
                chunks.extend(_pack(piece, max_chunk_size, level + 1))
            continue

        candidate = f"{current}{joiner}{piece}" if current else piece
        if len(candidate) <= max_chunk_size:
            current = candidate
        else:
            chunks.append(current)
            current = piece

    if current:
        chunks.append(current)
    return chunks


def chunk_words(text: str, max_chunk_size: int) -> list[str]:
    """Greedily pack whitespace-separated words into chunks.

    Words are joined by a single space. A word longer than the limit is
    emitted alone.
    """
    _check_size(max_chunk_size)
    return _pack(text, max_chunk_size, _WORD_LEVEL)


def split_into_chunks(text: str, max_chunk_size: int) -> list[str]:
    """Split text into ordered chunks of at most `max_chunk_size` characters.

    Text that already fits is returned unchanged as a single chunk (the empty
    string included). Otherwise paragraphs are packed first, oversized
    paragraphs are packed by sentence, and oversized sentences by word.

    Args:
        text: Arbitrary text, typically extracted from a document.
        max_chunk_size: Character budget per chunk.

    Returns:
        Chunks in source order. Only a single word longer than
        `max_chunk_size` can produce a chunk over the limit.
    """
    _check_size(max_chunk_size)
    if len(text) <= max_chunk_size:
        return [text]

    chunks = _pack(text, max_chunk_size, 0)
    if not chunks:
        # oversized but whitespace-only
        return [""]

    logger.debug(
        "text_chunked",
        text_length=len(text),
        chunks=len(chunks),
        max_chunk_size=max_chunk_size,
        oversized=sum(1 for c in chunks if len(c) > max_chunk_size),
    )
    return chunks
