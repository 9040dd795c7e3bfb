"""
Text Chunker - Character-budget chunking for the RAG pipeline

Splits raw text into sentence-aligned chunks bounded by a character budget,
carrying a word-safe overlap from each chunk into the next.

Algorithm:
1. Split the text into sentences (every sentence re-terminated with ".").
2. Accumulate sentences while len(accumulator) + len(sentence) stays within
   `chunk_size` (strict ">" comparison: a sentence landing exactly on the
   budget stays in the current chunk). The joining space and the overlap
   are not counted, so content may run a little past `chunk_size`.
3. When the next sentence would overflow, seal the accumulator as a chunk
   and seed the next one with the last whole words (up to `overlap`
   characters) of the sealed text, followed by the sentence.
4. Seal the trailing accumulator and back-fill `total_chunks`.

A single sentence longer than `chunk_size` is never cut: it becomes an
oversized chunk of its own.

Usage:
    from text_chunking import TextChunker, ChunkingConfig

    chunker = TextChunker(ChunkingConfig(chunk_size=500, overlap=50))
    chunks = chunker.chunk(article_text, "https://example.com/article")
"""

import logging
from typing import Optional

from .exceptions import ConfigurationError
from .identity import make_chunk_id
from .models import Chunk, ChunkingConfig, ChunkMetadata, ExtraValue
from .sentence_splitter import split_sentences
from .word_boundary import last_words

logger = logging.getLogger(__name__)


class TextChunker:
    """
    Splits text into overlapping, sentence-aligned chunks bounded by characters.
    """

    def __init__(self, config: Optional[ChunkingConfig] = None):
        self.config = config or ChunkingConfig()

    def chunk(
        self,
        text: str,
        source: str = "unknown",
        chunk_size: Optional[int] = None,
        overlap: Optional[int] = None,
        extra: Optional[dict[str, ExtraValue]] = None,
    ) -> list[Chunk]:
        """
        Chunk a document.

        Args:
            text: Raw document text.
            source: Origin of the document; also the chunk ID prefix.
            chunk_size: Per-call override of the character budget.
            overlap: Per-call override of the overlap budget.
            extra: Source-specific metadata copied onto every chunk.

        Returns:
            Chunks with contiguous indices. Empty text yields an empty list.

        Raises:
            ConfigurationError: If a budget override is negative or zero.
        """
        max_chars = self.config.chunk_size if chunk_size is None else chunk_size
        overlap_chars = self.config.overlap if overlap is None else overlap
        if max_chars < 1:
            raise ConfigurationError("chunk_size", max_chars, "must be at least 1")
        if overlap_chars < 0:
            raise ConfigurationError("overlap", overlap_chars, "must not be negative")

        sentences = split_sentences(text)
        if not sentences:
            return []

        chunks: list[Chunk] = []
        current = ""
        chunk_start = 0

        for sentence in sentences:
            if current and len(current) + len(sentence) > max_chars:
                sealed = self._seal(current, source, len(chunks), chunk_start, extra)
                chunks.append(sealed)

                # Seed the next chunk with whole words from the end of this one
                overlap_text = last_words(current, overlap_chars) if overlap_chars else ""
                current = f"{overlap_text} {sentence}" if overlap_text else sentence
                chunk_start = max(sealed.metadata.end_char - len(overlap_text), 0)
            else:
                current = f"{current} {sentence}" if current else sentence

        if current.strip():
            chunks.append(self._seal(current, source, len(chunks), chunk_start, extra))

        total = len(chunks)
        for chunk in chunks:
            chunk.metadata.total_chunks = total

        logger.debug(
            f"Chunked {source}: {len(sentences)} sentences -> {total} chunks "
            f"(chunk_size={max_chars}, overlap={overlap_chars})"
        )
        return chunks

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _seal(
        self,
        text: str,
        source: str,
        index: int,
        start: int,
        extra: Optional[dict[str, ExtraValue]],
    ) -> Chunk:
        return Chunk(
            id=make_chunk_id(source, index),
            content=text.strip(),
            metadata=ChunkMetadata(
                source=source,
                chunk_index=index,
                start_char=start,
                end_char=start + len(text),
                extra=dict(extra or {}),
            ),
        )


def chunk_text(
    text: str,
    chunk_size: int = 500,
    overlap: int = 50,
    source: str = "unknown",
) -> list[Chunk]:
    """
    Chunk `text` with a character budget.

    Convenience wrapper around TextChunker for one-off calls.
    """
    return TextChunker().chunk(text, source, chunk_size=chunk_size, overlap=overlap)
