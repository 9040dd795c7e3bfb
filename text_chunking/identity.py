"""
Deterministic document and chunk identifiers.

A document is identified by the first 8 hex digits of
sha256(content + source); its chunks are named `{document_id}-chunk-{index}`.
"""

import hashlib
import re

DOCUMENT_ID_PREFIX = "doc-"
HASH_LENGTH = 8

TOKEN_CHUNK_ID_PATTERN = re.compile(r"^doc-[a-f0-9]{8}-chunk-\d+$")
CHUNK_ID_PATTERN = re.compile(r"^.+-chunk-\d+$")


def document_hash(content: str, source: str) -> str:
    """Return the 8-hex-digit content hash of a (content, source) pair."""
    digest = hashlib.sha256((content + source).encode("utf-8")).hexdigest()
    return digest[:HASH_LENGTH]


def document_id_for(content: str, source: str) -> str:
    """Return the `doc-<hash>` identifier used by the token-budget chunker."""
    return f"{DOCUMENT_ID_PREFIX}{document_hash(content, source)}"


def make_chunk_id(document_id: str, index: int) -> str:
    return f"{document_id}-chunk-{index}"
