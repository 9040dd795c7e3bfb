import logging
from pathlib import Path
from typing import Iterable, Optional

from .chunker import TextChunker
from .config import ChunkingServiceConfig
from .csv_extractor import extract_records
from .models import (
    Chunk,
    ChunkingResult,
    ChunkingStats,
    DocumentRecord,
    Strategy,
    ValidationReport,
)
from .sentence_splitter import split_sentences
from .storage import ChunkingStorage
from .token_chunker import TokenChunker
from .token_counter import TokenCounter
from .validation import ChunkValidator

logger = logging.getLogger(__name__)


class ChunkingService:
    """
    Entry point wiring the chunkers, the CSV extractor, the validator and
    result storage together. Holds no per-document state.
    """

    def __init__(
        self,
        config: ChunkingServiceConfig | None = None,
        token_counter: TokenCounter | None = None,
    ):
        self.config = config or ChunkingServiceConfig()
        self.chunker = TextChunker(self.config.chunking)
        self.token_chunker = TokenChunker(self.config.token_chunking, token_counter)
        self.validator = ChunkValidator(max_age_hours=self.config.max_record_age_hours)
        self.storage = ChunkingStorage(self.config.data_dir)

    def chunk_text(
        self,
        text: str,
        source: str,
        strategy: Strategy = "chars",
        chunk_size: Optional[int] = None,
        overlap: Optional[int] = None,
        max_tokens: Optional[int] = None,
        document_id: Optional[str] = None,
    ) -> ChunkingResult:
        """
        Chunk one document with the selected strategy.

        `chunk_size` applies to the "chars" strategy, `max_tokens` and
        `document_id` to the "tokens" strategy; `overlap` to both (characters
        or tokens respectively).
        """
        if strategy == "tokens":
            chunks = self.token_chunker.chunk(
                text,
                source,
                max_tokens=max_tokens,
                overlap=overlap,
                document_id=document_id,
            )
            doc_id = chunks[0].metadata.document_id if chunks else (document_id or source)
        else:
            chunks = self.chunker.chunk(text, source, chunk_size=chunk_size, overlap=overlap)
            doc_id = source

        return self._build_result(text, source, doc_id, strategy, chunks)

    def chunk_records(self, records: Iterable[DocumentRecord]) -> list[ChunkingResult]:
        """
        Chunk extracted posts, one document per post.

        Posts whose trimmed text is shorter than `min_post_chars` are skipped.
        Post fields are attached to every chunk as extra metadata.
        """
        results: list[ChunkingResult] = []
        skipped = 0

        for record in records:
            text = record.text.strip()
            if len(text) < self.config.min_post_chars:
                skipped += 1
                continue

            source = record.source
            extra = {
                "post_id": source,
                "date": record.date,
                "url": record.url,
                "likes": record.likes,
                "full_text_length": len(record.text),
            }
            chunks = self.chunker.chunk(text, source, extra=extra)
            if not chunks:
                skipped += 1
                continue
            results.append(self._build_result(text, source, source, "chars", chunks))

        logger.info(f"Chunked {len(results)} posts ({skipped} skipped)")
        return results

    def chunk_csv(self, csv_text: str) -> list[ChunkingResult]:
        return self.chunk_records(extract_records(csv_text))

    def chunk_csv_file(self, csv_path: str) -> list[ChunkingResult]:
        csv_text = Path(csv_path).read_text(encoding="utf-8")
        logger.info(f"Processing CSV export: {csv_path}")
        return self.chunk_csv(csv_text)

    def validate(self, chunks: list[Chunk], max_tokens: Optional[int] = None) -> ValidationReport:
        budget = max_tokens or self.config.token_chunking.max_tokens
        return self.validator.validate(chunks, budget)

    def chunk_and_save(
        self,
        text: str,
        source: str,
        strategy: Strategy = "chars",
    ) -> tuple[ChunkingResult, str]:
        result = self.chunk_text(text, source, strategy)
        paths = self.storage.save(result)
        return result, str(paths.chunk_file)

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _build_result(
        self,
        text: str,
        source: str,
        document_id: str,
        strategy: Strategy,
        chunks: list[Chunk],
    ) -> ChunkingResult:
        return ChunkingResult(
            source=source,
            document_id=document_id,
            strategy=strategy,
            chunks=chunks,
            stats=self._compute_stats(chunks, len(split_sentences(text))),
        )

    def _compute_stats(self, chunks: list[Chunk], total_sentences: int) -> ChunkingStats:
        """Compute statistics about the chunking result."""
        if not chunks:
            return ChunkingStats(total_sentences=total_sentences)

        lengths = [len(c.content) for c in chunks]
        token_counts = [c.token_count for c in chunks if c.token_count is not None]
        return ChunkingStats(
            total_chunks=len(chunks),
            total_chars=sum(lengths),
            avg_chunk_chars=sum(lengths) / len(lengths),
            min_chunk_chars=min(lengths),
            max_chunk_chars=max(lengths),
            total_tokens=sum(token_counts) if token_counts else None,
            max_chunk_tokens=max(token_counts) if token_counts else None,
            total_sentences=total_sentences,
        )
