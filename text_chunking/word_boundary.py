"""
Word-boundary helpers shared by both chunkers.

- last_words: the longest run of whole trailing words within a length
  budget, used to build the overlap carried into the next chunk.
- ensure_complete_words: drops a trailing partial word when a space sits
  close enough to the end of a chunk.
"""

import re

_BOUNDARY_END = re.compile(r"[\s.!?]$")


def last_words(text: str, max_length: int) -> str:
    """
    Return the last complete words of `text` that fit in `max_length` characters.

    Words are whitespace-delimited and re-joined with single spaces. The
    result never contains a word fragment; it is empty when even the last
    word is longer than `max_length`.

    Example:
        last_words("React Hooks are awesome", 11)  # "are awesome"
    """
    if len(text) <= max_length:
        return text

    result = ""
    for word in reversed(text.split()):
        candidate = f"{word} {result}" if result else word
        if len(candidate) > max_length:
            break
        result = candidate
    return result


def ensure_complete_words(content: str, tail_ratio: float = 0.2) -> str:
    """
    Trim a trailing partial word from `content`.

    Content already ending in whitespace or sentence punctuation is
    returned unchanged. Otherwise the text after the last space is dropped,
    but only when that space lies within the final `tail_ratio` of the
    string; if it does not, the content is returned as-is and a partial
    word ending is accepted rather than discarding most of the chunk.
    """
    if not content or _BOUNDARY_END.search(content):
        return content

    last_space = content.rfind(" ")
    if last_space > len(content) * (1 - tail_ratio):
        return content[: last_space + 1].rstrip()

    return content
