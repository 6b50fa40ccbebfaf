"""Text layer: chunking of extracted document text."""

from stratlens.text.chunker import chunk_words, split_into_chunks

__all__ = [
    "chunk_words",
    "split_into_chunks",
]
