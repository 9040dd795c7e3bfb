"""
Sentence Splitter for the Chunking Pipeline

Punctuation-based sentence boundary detection. Any run of sentence
terminators (".", "!", "?") counts as a single boundary.

Design:
- No abbreviation handling and no external NLP libraries
- Every returned sentence is stripped and re-terminated with a single "."
  (question and exclamation marks are normalized to periods; callers
  must not rely on the original terminator)

Usage:
    from text_chunking.sentence_splitter import split_sentences

    sentences = split_sentences("Is it done? Yes!! It is.")
    # ["Is it done.", "Yes.", "It is."]
"""

import re

_TERMINATOR_RUN = re.compile(r"[.!?]+")


def split_sentences(text: str) -> list[str]:
    """
    Split text into period-terminated sentences.

    Args:
        text: Input text to split into sentences.

    Returns:
        Sentences in original order. Empty or whitespace-only input (or
        input made only of terminators) returns an empty list.
    """
    if not text:
        return []

    sentences = []
    for fragment in _TERMINATOR_RUN.split(text):
        fragment = fragment.strip()
        if fragment:
            sentences.append(f"{fragment}.")

    return sentences
