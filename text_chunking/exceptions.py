"""
Custom Exceptions for the Chunking Pipeline.

Expected input-shape problems (empty documents, CSV exports with
unresolvable headers, unparseable like counts) never raise: they produce
empty or degraded-but-valid results. The exceptions below are reserved for
programmer errors and I/O failures around persisted results.

Exception Hierarchy:
    ChunkingError (base)
    ├── ConfigurationError
    └── StorageError

Usage:
    from text_chunking.exceptions import ChunkingError, ConfigurationError

    try:
        chunks = chunker.chunk(text, "notes.md", max_tokens=-1)
    except ConfigurationError as e:
        print(f"Bad chunking parameters: {e}")
"""

from __future__ import annotations

from typing import Optional


class ChunkingError(Exception):
    """
    Base exception for all chunking-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A chunking error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class ConfigurationError(ChunkingError, ValueError):
    """
    Raised when chunking parameters are invalid.

    Subclasses ValueError so pydantic validators surface it as a
    regular ValidationError.

    Attributes:
        parameter: Name of the offending parameter
        value: The rejected value
    """

    def __init__(
        self,
        parameter: str,
        value: object,
        reason: str,
    ):
        self.parameter = parameter
        self.value = value
        super().__init__(
            message=f"Invalid value for {parameter}: {value!r}",
            details=reason,
        )


class StorageError(ChunkingError):
    """
    Raised when a chunking result cannot be written or read.

    Attributes:
        path: File the operation targeted
        original_error: The underlying OS or parsing error
    """

    def __init__(
        self,
        path: str,
        message: str = "Chunking result storage failed",
        original_error: Optional[Exception] = None,
    ):
        self.path = path
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(f"{message} [{path}]", details)


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current: Optional[BaseException] = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        original = getattr(current, "original_error", None)
        if original is not None:
            current = original
        else:
            current = current.__cause__
        depth += 1

    return "\n".join(lines)
