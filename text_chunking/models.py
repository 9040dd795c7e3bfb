"""
Data Models for the Chunking Pipeline

Defines:
1. ChunkingConfig / TokenChunkingConfig - Budgets for both chunking strategies
2. ChunkMetadata / TokenChunkMetadata - Typed metadata plus an extension map
3. Chunk - A single text chunk with metadata
4. ChunkingResult - Complete chunking output with statistics
5. DocumentRecord - A short-form post extracted from a CSV export
6. ValidationReport - Advisory output of the chunk validator
7. Request/response models for the HTTP surface

Design Principles:
- Pydantic v2 for validation and serialization
- Core chunk metadata strongly typed; source-specific fields live in `extra`
- Save/load pattern for persisted results

Usage:
    config = ChunkingConfig(chunk_size=500, overlap=50)
    chunks = TextChunker(config).chunk(text, "https://example.com/post")
    result = ChunkingResult(source="...", document_id="...", chunks=chunks)
    result.save("chunks.json")
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from .exceptions import ConfigurationError

ExtraValue = Union[str, int, float, bool, list[str]]
Strategy = Literal["chars", "tokens"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ChunkingConfig(BaseModel):
    """
    Configuration for the character-budget chunker.
    """
    chunk_size: int = Field(
        500,
        description="Character budget for accumulating sentences into a chunk",
        ge=1,
    )
    overlap: int = Field(
        50,
        description="Maximum characters of whole words carried into the next chunk",
        ge=0,
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> "ChunkingConfig":
        if self.overlap >= self.chunk_size:
            raise ConfigurationError(
                "overlap",
                self.overlap,
                f"must be less than chunk_size ({self.chunk_size})",
            )
        return self


class TokenChunkingConfig(BaseModel):
    """
    Configuration for the token-budget chunker.

    Overlap is given in tokens but applied as a character budget of
    `overlap * chars_per_token` (roughly 4 characters per token for English).
    """
    max_tokens: int = Field(
        512,
        description="Hard maximum tokens per chunk",
        ge=1,
    )
    overlap: int = Field(
        50,
        description="Target overlap in tokens between consecutive chunks",
        ge=0,
    )
    chars_per_token: int = Field(
        4,
        description="Characters-per-token ratio used to size the overlap",
        ge=1,
    )
    complete_word_tail_ratio: float = Field(
        0.2,
        description="Share of a chunk's tail searched for a space when trimming a partial word",
        gt=0.0,
        le=1.0,
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> "TokenChunkingConfig":
        if self.overlap >= self.max_tokens:
            raise ConfigurationError(
                "overlap",
                self.overlap,
                f"must be less than max_tokens ({self.max_tokens})",
            )
        return self


class ChunkMetadata(BaseModel):
    """
    Metadata attached to every chunk.

    Offsets are approximate: overlap makes adjacent ranges intersect.
    """
    source: str = Field(
        ...,
        description="Origin of the document (URL, filename or logical key)",
    )
    chunk_index: int = Field(
        ...,
        description="Position of this chunk within the document (0-indexed)",
        ge=0,
    )
    total_chunks: int = Field(
        0,
        description="Total number of chunks in the document",
        ge=0,
    )
    start_char: int = Field(
        0,
        description="Approximate start offset in the source text",
        ge=0,
    )
    end_char: int = Field(
        0,
        description="Approximate end offset in the source text",
        ge=0,
    )
    extra: dict[str, ExtraValue] = Field(
        default_factory=dict,
        description="Source-specific fields (likes, post_id, date, ...)",
    )


class TokenChunkMetadata(ChunkMetadata):
    """Metadata for chunks produced by the token-budget chunker."""
    document_id: str = Field(
        ...,
        description="Content-addressed document identifier (doc-<8 hex>)",
    )
    token_count: int = Field(
        ...,
        description="Tokens in the final chunk content",
        ge=0,
    )
    last_stored: datetime = Field(
        default_factory=utc_now,
        description="When the chunk was created",
    )


class Chunk(BaseModel):
    """
    A single text chunk with metadata, ready for embedding and storage.
    """
    id: str = Field(
        ...,
        description="Deterministic identifier (format: {document_id}-chunk-{index})",
    )
    content: str = Field(
        ...,
        description="Trimmed chunk text",
        min_length=1,
    )
    metadata: Union[TokenChunkMetadata, ChunkMetadata] = Field(
        ...,
        union_mode="left_to_right",
    )

    @property
    def token_count(self) -> Optional[int]:
        return getattr(self.metadata, "token_count", None)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_payload(self) -> dict[str, Any]:
        """
        Flatten the chunk into the payload stored next to its vector.

        Extra metadata keys are merged at the top level; typed fields win
        on name clashes.
        """
        metadata = self.metadata.model_dump(mode="json")
        extra = metadata.pop("extra")
        return {**extra, **metadata, "text": self.content}


class ChunkingStats(BaseModel):
    """Statistics about the chunking process."""
    total_chunks: int = 0
    total_chars: int = 0
    avg_chunk_chars: float = 0.0
    min_chunk_chars: int = 0
    max_chunk_chars: int = 0
    total_tokens: Optional[int] = None
    max_chunk_tokens: Optional[int] = None
    total_sentences: int = 0


class ChunkingResult(BaseModel):
    """
    Complete result of chunking one document.
    """
    source: str = Field(
        ...,
        description="Source identifier the chunks were built from",
    )
    document_id: str = Field(
        ...,
        description="Identifier shared by every chunk of the document",
    )
    strategy: Strategy = Field(
        "chars",
        description="Chunking strategy used",
    )
    chunks: list[Chunk] = Field(
        default_factory=list,
        description="All chunks with metadata",
    )
    stats: ChunkingStats = Field(
        default_factory=ChunkingStats,
        description="Chunking statistics",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        description="When chunking was performed",
    )

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    def get_chunk_by_id(self, chunk_id: str) -> Optional[Chunk]:
        """Find a chunk by its ID."""
        for chunk in self.chunks:
            if chunk.id == chunk_id:
                return chunk
        return None

    def get_neighbors(self, chunk_id: str) -> tuple[Optional[Chunk], Optional[Chunk]]:
        """Get the previous and next chunks for context expansion."""
        for position, chunk in enumerate(self.chunks):
            if chunk.id == chunk_id:
                prev_chunk = self.chunks[position - 1] if position > 0 else None
                next_chunk = (
                    self.chunks[position + 1]
                    if position + 1 < len(self.chunks)
                    else None
                )
                return prev_chunk, next_chunk
        return None, None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def save(self, path: str) -> None:
        """Save chunking result to a JSON file."""
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: str) -> "ChunkingResult":
        """Load chunking result from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)


class DocumentRecord(BaseModel):
    """A short-form social post pulled out of a CSV export."""
    text: str = ""
    date: str = ""
    url: str = ""
    likes: int = 0

    @property
    def source(self) -> str:
        return self.url.strip() or "linkedin_post"


class ValidationReport(BaseModel):
    is_valid: bool
    issues: list[str] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# HTTP request/response models
# -----------------------------------------------------------------------------


class ChunkTextRequest(BaseModel):
    text: str
    source: str = "unknown"
    strategy: Strategy = "chars"
    chunk_size: Optional[int] = Field(None, ge=1)
    overlap: Optional[int] = Field(None, ge=0)
    max_tokens: Optional[int] = Field(None, ge=1)
    document_id: Optional[str] = None


class ChunkCsvRequest(BaseModel):
    csv: str


class ChunkResponse(BaseModel):
    document_id: str
    source: str
    total_chunks: int
    chunks: list[Chunk]


class ChunkCsvResponse(BaseModel):
    total_records: int
    documents: list[ChunkResponse]


class ValidateRequest(BaseModel):
    chunks: list[Chunk]
    max_tokens: int = Field(512, ge=1)
