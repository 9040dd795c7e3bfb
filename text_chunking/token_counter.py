"""
Token Counter for the Chunking Pipeline

Uses tiktoken with the cl100k_base encoding (GPT-3.5/GPT-4 vocabulary).
The encoder is expensive to build, so it is created once and shared.

The token-budget chunker depends on the TokenCounter protocol rather than
on tiktoken directly, so tests can inject a cheap deterministic counter.

Usage:
    from text_chunking.token_counter import count_tokens, count_tokens_batch

    n = count_tokens("This is an example sentence.")
    counts = count_tokens_batch(["Sentence one.", "Sentence two."])
"""

from typing import Protocol

import tiktoken

DEFAULT_ENCODING = "cl100k_base"

# Singleton encoders - initialized once per encoding name, reused across calls.
_encoders: dict[str, tiktoken.Encoding] = {}


def _get_encoder(encoding_name: str = DEFAULT_ENCODING) -> tiktoken.Encoding:
    """Get or initialize the tiktoken encoder (singleton per encoding)."""
    encoder = _encoders.get(encoding_name)
    if encoder is None:
        encoder = tiktoken.get_encoding(encoding_name)
        _encoders[encoding_name] = encoder
    return encoder


def count_tokens(text: str) -> int:
    """
    Count the number of tokens in a text string.

    Args:
        text: The text to tokenize.

    Returns:
        Number of tokens.
    """
    if not text:
        return 0
    return len(_get_encoder().encode(text))


def count_tokens_batch(texts: list[str]) -> list[int]:
    """
    Count tokens for a list of texts.

    Args:
        texts: List of text strings.

    Returns:
        List of token counts, one per input text.
    """
    encoder = _get_encoder()
    return [len(encoder.encode(t)) if t else 0 for t in texts]


class TokenCounter(Protocol):
    def count(self, text: str) -> int: ...


class TiktokenCounter:
    """
    TokenCounter backed by a shared tiktoken encoding.

    The encoding is loaded on the first count, not at construction.
    """

    def __init__(self, encoding_name: str = DEFAULT_ENCODING):
        self.encoding_name = encoding_name

    def count(self, text: str) -> int:
        if not text:
            return 0
        return len(_get_encoder(self.encoding_name).encode(text))
