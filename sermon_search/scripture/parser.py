"""
Scripture Query Parser.

Recognises a free-text search query as a scripture reference:

    "Romans 8:1"            -> Romans 8:1
    "1 Cor 13"              -> 1 Corinthians 13
    "1Cor13:4"              -> 1 Corinthians 13:4
    "rom chapter 12 verse 2"-> Romans 12:2
    "John 3:16-18"          -> John 3:16 (range end is accepted, not kept)
    "John 3:16 love"        -> John 3:16 (text after a verse is ignored)
    "Romans 8 grace"        -> None (chapter-only forms must stand alone)
    "James"                 -> James
    "xyz 8:1"               -> None

The parser never raises. None means "not a reference"; the caller falls back
to a plain keyword search.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from sermon_search.scripture.normalizer import normalize_book_name

# Leading book-like segment (optional 1/2/3 prefix, letters, inner spaces)
# and an optional locator that starts with a digit or the word "chapter".
_QUERY_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?P<book>\d?\s*[a-z][a-z\s]*?)\s*(?P<locator>(?:chapter\s+)?\d.*)?",
    re.IGNORECASE | re.DOTALL,
)

_RANGE_END = r"(?:\s*-\s*\d+)?"

# Locator forms in priority order; the first match wins. Forms that name a
# verse only need to match a prefix ("3:16 love" is John 3:16); chapter-only
# forms must cover the whole locator ("8 grace" is not Romans 8).
_LOCATOR_PATTERNS: Final[tuple[tuple[re.Pattern[str], bool], ...]] = (
    (re.compile(r"chapter\s+(\d+)[\s,]+verse\s+(\d+)" + _RANGE_END, re.IGNORECASE), True),
    (re.compile(r"chapter\s+(\d+)\s*:\s*(\d+)" + _RANGE_END, re.IGNORECASE), True),
    (re.compile(r"chapter\s+(\d+)", re.IGNORECASE), False),
    (re.compile(r"(\d+)\s*:\s*(\d+)" + _RANGE_END), True),
    (re.compile(r"(\d+)"), False),
)


@dataclass(frozen=True, slots=True)
class ScriptureReference:
    """
    A parsed scripture reference.

    Attributes:
        book: One of the 66 canonical book names.
        chapter: Positive chapter number, or None for a book-only reference.
        verse: Positive verse number; only set together with chapter.
    """

    book: str
    chapter: int | None = None
    verse: int | None = None

    def __post_init__(self) -> None:
        if self.verse is not None and self.chapter is None:
            raise ValueError("A verse requires a chapter")
        for number in (self.chapter, self.verse):
            if number is not None and number < 1:
                raise ValueError("Chapter and verse must be positive")

    @property
    def search_text(self) -> str:
        """Literal text used to look for the passage inside transcripts."""
        if self.chapter is None:
            return self.book
        return f"{self.book} {self.chapter}"

    def __str__(self) -> str:
        if self.chapter is None:
            return self.book
        if self.verse is None:
            return f"{self.book} {self.chapter}"
        return f"{self.book} {self.chapter}:{self.verse}"


def _parse_locator(locator: str) -> tuple[int, int | None] | None:
    for pattern, prefix_only in _LOCATOR_PATTERNS:
        match = pattern.match(locator) if prefix_only else pattern.fullmatch(locator)
        if match is None:
            continue
        chapter = int(match.group(1))
        verse = int(match.group(2)) if pattern.groups >= 2 else None
        if chapter < 1 or (verse is not None and verse < 1):
            return None
        return chapter, verse
    return None


def parse_scripture_query(query: str) -> ScriptureReference | None:
    """
    Parse a search query as a scripture reference.

    Args:
        query: Raw user query.

    Returns:
        ScriptureReference (book-only, book+chapter, or book+chapter+verse),
        or None when the query is not a reference.
    """
    trimmed = query.strip()
    if not trimmed:
        return None

    match = _QUERY_PATTERN.fullmatch(trimmed)
    if match is None:
        book = normalize_book_name(trimmed)
        return ScriptureReference(book=book) if book else None

    book = normalize_book_name(match.group("book"))
    if book is None:
        return None

    locator = (match.group("locator") or "").strip()
    if not locator:
        return ScriptureReference(book=book)

    parsed = _parse_locator(locator)
    if parsed is None:
        return None

    chapter, verse = parsed
    return ScriptureReference(book=book, chapter=chapter, verse=verse)
