"""
CSV Record Extractor - Pull short-form posts out of a spreadsheet export

Parses LinkedIn-style CSV exports (text, creation date, link, reaction
count) into DocumentRecord objects ready for chunking.

Design:
- Quote-aware scanning for both rows and fields: newlines and commas inside
  quoted fields are content, `""` is an escaped literal quote
- Only unquoted fields are whitespace-trimmed; quoted content is kept verbatim
- Header names are matched case-insensitively, exact candidates first,
  then by substring
- Unresolvable required columns yield an empty list, never an exception

Usage:
    from text_chunking.csv_extractor import extract_records

    records = extract_records(Path("posts.csv").read_text(encoding="utf-8"))
"""

import logging
import re
from typing import Optional

from .models import DocumentRecord

logger = logging.getLogger(__name__)

# Exact header candidates per logical column (compared after normalization).
_EXACT_HEADERS: dict[str, tuple[re.Pattern[str], ...]] = {
    "text": (
        re.compile(r"text"),
        re.compile(r"post text"),
        re.compile(r"content"),
    ),
    "date": (
        re.compile(r"createdat \(tz=.*\)"),
        re.compile(r"createdat"),
        re.compile(r"created at"),
    ),
    "url": (
        re.compile(r"link"),
        re.compile(r"url"),
    ),
    "likes": (
        re.compile(r"numreactions"),
        re.compile(r"reactions"),
        re.compile(r"likes"),
    ),
}

# Fallback substrings when no exact candidate matched.
_HEADER_KEYWORDS: dict[str, tuple[str, ...]] = {
    "text": ("text", "content"),
    "date": ("createdat", "created", "date"),
    "url": ("link", "url"),
    "likes": ("reaction", "like"),
}


def normalize_header(name: str) -> str:
    return name.replace("\ufeff", "").strip().lower()


def split_rows(csv_text: str) -> list[str]:
    """
    Split CSV text into raw rows, keeping quoted newlines inside their row.

    Line endings are normalized to "\\n" first. Quote characters are kept
    in the returned rows for field splitting.
    """
    text = csv_text.replace("\r\n", "\n").replace("\r", "\n")

    rows: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0

    while i < len(text):
        char = text[i]
        if char == '"':
            if in_quotes and i + 1 < len(text) and text[i + 1] == '"':
                # Escaped quote stays escaped for the field parser
                current.append('""')
                i += 2
                continue
            in_quotes = not in_quotes
            current.append(char)
        elif char == "\n" and not in_quotes:
            rows.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    if current:
        rows.append("".join(current))

    return rows


def split_fields(row: str) -> list[str]:
    """
    Split one CSV row into field values.

    Quoted fields are unescaped and returned verbatim (including leading or
    trailing spaces inside the quotes); unquoted fields are trimmed. A quote
    in the middle of an unquoted field only toggles comma protection; the
    text around it is kept.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    was_quoted = False
    i = 0

    while i < len(row):
        char = row[i]
        if in_quotes:
            if char == '"':
                if i + 1 < len(row) and row[i + 1] == '"':
                    current.append('"')
                    i += 2
                    continue
                in_quotes = False
            else:
                current.append(char)
        elif char == '"':
            if not was_quoted and not "".join(current).strip():
                # Quote opens the field: drop the whitespace before it
                current = []
                was_quoted = True
            in_quotes = True
        elif char == ",":
            fields.append(_finish_field(current, was_quoted))
            current = []
            was_quoted = False
        elif not (was_quoted and char.isspace()):
            current.append(char)
        i += 1

    fields.append(_finish_field(current, was_quoted))
    return fields


def _finish_field(chars: list[str], was_quoted: bool) -> str:
    value = "".join(chars)
    return value if was_quoted else value.strip()


def resolve_columns(headers: list[str]) -> Optional[dict[str, int]]:
    """
    Map the logical columns (text, date, url, likes) to header positions.

    Returns:
        Column indices, or None if any logical column cannot be resolved.
    """
    normalized = [normalize_header(h) for h in headers]
    columns: dict[str, int] = {}

    for column, patterns in _EXACT_HEADERS.items():
        index = _find_exact(normalized, patterns)
        if index is None:
            index = _find_containing(normalized, _HEADER_KEYWORDS[column])
        if index is None:
            return None
        columns[column] = index

    return columns


def _find_exact(headers: list[str], patterns: tuple[re.Pattern[str], ...]) -> Optional[int]:
    for pattern in patterns:
        for index, header in enumerate(headers):
            if pattern.fullmatch(header):
                return index
    return None


def _find_containing(headers: list[str], keywords: tuple[str, ...]) -> Optional[int]:
    for keyword in keywords:
        for index, header in enumerate(headers):
            if keyword in header:
                return index
    return None


def _field(fields: list[str], columns: dict[str, int], column: str) -> str:
    index = columns[column]
    return fields[index] if index < len(fields) else ""


def parse_likes(value: str) -> int:
    """Coerce a reaction count to int, defaulting to 0 on any failure."""
    value = value.strip()
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return 0


def extract_records(csv_text: str) -> list[DocumentRecord]:
    """
    Extract post records from a CSV export.

    Args:
        csv_text: Full CSV content, header row first.

    Returns:
        One DocumentRecord per data row with a text or a URL. Empty input,
        a header-only file, or missing required columns return [].
    """
    rows = [row for row in split_rows(csv_text) if row.strip()]
    if len(rows) < 2:
        return []

    columns = resolve_columns(split_fields(rows[0]))
    if columns is None:
        logger.warning(f"Required CSV columns not found in header: {rows[0][:200]!r}")
        return []

    records: list[DocumentRecord] = []
    for row in rows[1:]:
        fields = split_fields(row)
        text = _field(fields, columns, "text")
        url = _field(fields, columns, "url")
        if not text.strip() and not url.strip():
            continue

        records.append(DocumentRecord(
            text=text,
            date=_field(fields, columns, "date"),
            url=url,
            likes=parse_likes(_field(fields, columns, "likes")),
        ))

    logger.debug(f"Extracted {len(records)} records from {len(rows) - 1} CSV rows")
    return records
