"""
Token Chunker - Token-budget chunking with hard limit enforcement

Variant of the text chunker that bounds chunks by model tokens instead of
characters and names them after a content hash of the document.

Algorithm:
1. Split the text into sentences (every sentence re-terminated with ".").
2. For each sentence, count the tokens of the candidate accumulator
   (accumulator + sentence). If the candidate exceeds `max_tokens` and the
   accumulator is non-empty, seal the accumulator and seed the next one
   with the overlap followed by the sentence; otherwise keep the candidate.
3. Seal the trailing accumulator.
4. Finalize each sealed piece: trim a trailing partial word, and split any
   piece still above `max_tokens` (a lone oversized sentence) at word
   boundaries so that no chunk ever exceeds the budget.
5. Name chunks `{document_id}-chunk-{index}` and record the token count of
   the final content.

The overlap is configured in tokens but measured in characters
(`overlap * chars_per_token`, about 4 characters per token for English).
For corpora where that ratio does not hold, lower `chars_per_token`.

Usage:
    from text_chunking import TokenChunker, TokenChunkingConfig

    chunker = TokenChunker(TokenChunkingConfig(max_tokens=512, overlap=50))
    chunks = chunker.chunk(markdown_text, "react-intro.md")
"""

import logging
from datetime import datetime
from typing import Optional

from .exceptions import ConfigurationError
from .identity import document_id_for, make_chunk_id
from .models import Chunk, ExtraValue, TokenChunkingConfig, TokenChunkMetadata, utc_now
from .sentence_splitter import split_sentences
from .token_counter import TiktokenCounter, TokenCounter
from .word_boundary import ensure_complete_words, last_words

logger = logging.getLogger(__name__)

_SAMPLE_DOCUMENTS = (
    ("This is document one with some content.", "test1.md"),
    ("This is document two with different content.", "test2.md"),
)


class TokenChunker:
    """
    Splits text into sentence-aligned chunks that never exceed a token budget.

    The token counter is built once and reused for every call.
    """

    def __init__(
        self,
        config: Optional[TokenChunkingConfig] = None,
        token_counter: Optional[TokenCounter] = None,
    ):
        self.config = config or TokenChunkingConfig()
        self.token_counter = token_counter or TiktokenCounter()

    def chunk(
        self,
        text: str,
        source: str,
        max_tokens: Optional[int] = None,
        overlap: Optional[int] = None,
        document_id: Optional[str] = None,
        extra: Optional[dict[str, ExtraValue]] = None,
    ) -> list[Chunk]:
        """
        Chunk a document under a token budget.

        Args:
            text: Raw document text.
            source: Origin of the document.
            max_tokens: Per-call override of the token budget.
            overlap: Per-call override of the overlap (in tokens).
            document_id: Caller-supplied document ID; defaults to
                `doc-<sha256(text + source)[:8]>`.
            extra: Source-specific metadata copied onto every chunk.

        Returns:
            Chunks whose `token_count` never exceeds `max_tokens`.
            Empty text yields an empty list.

        Raises:
            ConfigurationError: If a budget override is invalid.
        """
        budget = self.config.max_tokens if max_tokens is None else max_tokens
        overlap_tokens = self.config.overlap if overlap is None else overlap
        if budget < 1:
            raise ConfigurationError("max_tokens", budget, "must be at least 1")
        if overlap_tokens < 0:
            raise ConfigurationError("overlap", overlap_tokens, "must not be negative")

        sentences = split_sentences(text)
        if not sentences:
            return []

        doc_id = document_id or document_id_for(text, source)
        overlap_chars = overlap_tokens * self.config.chars_per_token

        # Step 1: Accumulate sentences into raw pieces (text, start offset)
        pieces: list[tuple[str, int]] = []
        current = ""
        chunk_start = 0

        for sentence in sentences:
            candidate = f"{current} {sentence}" if current else sentence
            if current and self.token_counter.count(candidate) > budget:
                pieces.append((current, chunk_start))
                chunk_end = chunk_start + len(current)

                overlap_text = last_words(current, overlap_chars) if overlap_chars else ""
                seeded = f"{overlap_text} {sentence}" if overlap_text else sentence
                if overlap_text and self.token_counter.count(seeded) > budget:
                    # Overlap would push the sentence over budget on its own
                    overlap_text = ""
                    seeded = sentence
                current = seeded
                chunk_start = max(chunk_end - len(overlap_text), 0)
            else:
                current = candidate

        if current.strip():
            pieces.append((current, chunk_start))

        # Step 2: Enforce complete words and the hard token limit
        finalized: list[tuple[str, int]] = []
        for piece, start in pieces:
            content = ensure_complete_words(
                piece.strip(), self.config.complete_word_tail_ratio
            )
            if self.token_counter.count(content) <= budget:
                finalized.append((content, start))
                continue
            offset = start
            for part in self._split_oversized(content, budget):
                finalized.append((part, offset))
                offset += len(part) + 1

        # Step 3: Build chunk objects
        stored_at = utc_now()
        total = len(finalized)
        chunks = [
            self._create_chunk(
                content, doc_id, index, source, start, total, stored_at, extra
            )
            for index, (content, start) in enumerate(finalized)
        ]

        logger.debug(
            f"Chunked {source} as {doc_id}: {len(sentences)} sentences -> "
            f"{total} chunks (max_tokens={budget}, overlap={overlap_tokens})"
        )
        return chunks

    def check_uniform_ids(self) -> bool:
        """Check that two different sample documents get different document IDs."""
        ids = []
        for text, source in _SAMPLE_DOCUMENTS:
            chunks = self.chunk(text, source)
            if not chunks:
                return False
            ids.append(chunks[0].metadata.document_id)
        return len(set(ids)) == len(ids)

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _create_chunk(
        self,
        content: str,
        document_id: str,
        index: int,
        source: str,
        start: int,
        total: int,
        stored_at: datetime,
        extra: Optional[dict[str, ExtraValue]],
    ) -> Chunk:
        return Chunk(
            id=make_chunk_id(document_id, index),
            content=content,
            metadata=TokenChunkMetadata(
                source=source,
                chunk_index=index,
                total_chunks=total,
                start_char=start,
                end_char=start + len(content),
                document_id=document_id,
                token_count=self.token_counter.count(content),
                last_stored=stored_at,
                extra=dict(extra or {}),
            ),
        )

    def _split_oversized(self, content: str, budget: int) -> list[str]:
        """Split content into word-aligned parts of at most `budget` tokens."""
        parts: list[str] = []
        words = content.split()

        while words:
            count = self._fit_words(words, budget)
            if count == 0:
                # A single word above budget: cut it by characters
                head = self._fit_chars(words[0], budget)
                parts.append(head)
                words[0] = words[0][len(head):]
                if not words[0]:
                    words.pop(0)
                continue
            parts.append(" ".join(words[:count]))
            words = words[count:]

        return parts

    def _fit_words(self, words: list[str], budget: int) -> int:
        """Largest number of leading words whose joined text fits the budget."""
        low, high = 0, len(words)
        while low < high:
            mid = (low + high + 1) // 2
            if self.token_counter.count(" ".join(words[:mid])) <= budget:
                low = mid
            else:
                high = mid - 1
        return low

    def _fit_chars(self, word: str, budget: int) -> str:
        low, high = 1, len(word)
        while low < high:
            mid = (low + high + 1) // 2
            if self.token_counter.count(word[:mid]) <= budget:
                low = mid
            else:
                high = mid - 1
        return word[:low]
