"""
Text Chunking - Sentence-aware chunking for RAG ingestion

Splits raw documents (articles, markdown notes, LinkedIn CSV exports) into
bounded, overlapping chunks with deterministic IDs, ready for an external
embedding and vector-store step.

Quick Start:
    from text_chunking import TextChunker, TokenChunker, validate_chunks

    chunks = TextChunker().chunk(article_text, "https://example.com/post")

    token_chunks = TokenChunker().chunk(markdown_text, "react-intro.md")
    report = validate_chunks(token_chunks, max_tokens=512)
"""

__version__ = "1.0.0"

from .chunker import TextChunker, chunk_text
from .config import ChunkingServiceConfig
from .csv_extractor import extract_records
from .exceptions import (
    ChunkingError,
    ConfigurationError,
    StorageError,
    format_error_chain,
)
from .identity import document_hash, document_id_for, make_chunk_id
from .models import (
    Chunk,
    ChunkingConfig,
    ChunkingResult,
    ChunkingStats,
    ChunkMetadata,
    DocumentRecord,
    TokenChunkingConfig,
    TokenChunkMetadata,
    ValidationReport,
)
from .sentence_splitter import split_sentences
from .service import ChunkingService
from .token_chunker import TokenChunker
from .token_counter import TiktokenCounter, TokenCounter, count_tokens, count_tokens_batch
from .validation import ChunkValidator, validate_chunks
from .word_boundary import ensure_complete_words, last_words

__all__ = [
    "__version__",
    "TextChunker",
    "chunk_text",
    "TokenChunker",
    "ChunkingService",
    "ChunkingServiceConfig",
    "ChunkValidator",
    "validate_chunks",
    "extract_records",
    "Chunk",
    "ChunkingConfig",
    "ChunkingResult",
    "ChunkingStats",
    "ChunkMetadata",
    "DocumentRecord",
    "TokenChunkingConfig",
    "TokenChunkMetadata",
    "ValidationReport",
    "ChunkingError",
    "ConfigurationError",
    "StorageError",
    "format_error_chain",
    "document_hash",
    "document_id_for",
    "make_chunk_id",
    "split_sentences",
    "last_words",
    "ensure_complete_words",
    "count_tokens",
    "count_tokens_batch",
    "TokenCounter",
    "TiktokenCounter",
]
