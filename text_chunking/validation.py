"""
Advisory quality checks for produced chunks.

The validator never mutates or rejects chunks. It collects human-readable
issue strings for tests and operational health checks to inspect.

Checks per chunk:
- token count within budget (token-budget chunks only)
- content does not end in a bare letter unless it ends with a period
- `last_stored` is not older than `max_age_hours`
- ID matches the format of the chunking scheme that produced it
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Optional, Pattern

from .identity import CHUNK_ID_PATTERN, TOKEN_CHUNK_ID_PATTERN
from .models import Chunk, TokenChunkMetadata, ValidationReport

logger = logging.getLogger(__name__)

_ENDS_WITH_LETTER = re.compile(r"[a-zA-Z]$")


class ChunkValidator:
    def __init__(
        self,
        max_age_hours: float = 1.0,
        id_pattern: Optional[Pattern[str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            max_age_hours: Age after which `last_stored` is reported as old.
            id_pattern: Force one ID pattern for every chunk. By default the
                pattern follows the scheme: `doc-<8 hex>-chunk-<n>` for
                token-budget chunks, `<source>-chunk-<n>` otherwise.
            clock: Returns the current time; injectable for tests.
        """
        self.max_age = timedelta(hours=max_age_hours)
        self.id_pattern = id_pattern
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def validate(self, chunks: Iterable[Chunk], max_tokens: int = 512) -> ValidationReport:
        """
        Check chunks against the declared constraints.

        Args:
            chunks: Chunks to inspect.
            max_tokens: Token budget the chunks were produced under.

        Returns:
            ValidationReport; `is_valid` is True when no issue was found.
        """
        issues: list[str] = []
        now = self.clock()
        checked = 0

        for chunk in chunks:
            checked += 1
            issues.extend(self._check_chunk(chunk, max_tokens, now))

        for issue in issues:
            logger.debug(issue)
        logger.info(f"Validated {checked} chunks: {len(issues)} issues")

        return ValidationReport(is_valid=not issues, issues=issues)

    def _check_chunk(self, chunk: Chunk, max_tokens: int, now: datetime) -> list[str]:
        issues = []
        metadata = chunk.metadata
        is_token_chunk = isinstance(metadata, TokenChunkMetadata)

        if is_token_chunk and metadata.token_count > max_tokens:
            issues.append(
                f"Chunk {chunk.id} exceeds token limit: {metadata.token_count} > {max_tokens}"
            )

        if _ENDS_WITH_LETTER.search(chunk.content) and not chunk.content.endswith("."):
            issues.append(
                f'Chunk {chunk.id} ends with incomplete word: "{chunk.content[-20:]}"'
            )

        if is_token_chunk:
            stored = metadata.last_stored
            if stored.tzinfo is None:
                stored = stored.replace(tzinfo=timezone.utc)
            if now - stored > self.max_age:
                issues.append(
                    f"Chunk {chunk.id} lastStored date seems old: {stored.isoformat()}"
                )

        pattern = self.id_pattern
        if pattern is None:
            pattern = TOKEN_CHUNK_ID_PATTERN if is_token_chunk else CHUNK_ID_PATTERN
        if not pattern.match(chunk.id):
            issues.append(f"Chunk {chunk.id} has invalid ID format")

        return issues


def validate_chunks(
    chunks: Iterable[Chunk],
    max_tokens: int = 512,
    max_age_hours: float = 1.0,
) -> ValidationReport:
    return ChunkValidator(max_age_hours=max_age_hours).validate(chunks, max_tokens)
