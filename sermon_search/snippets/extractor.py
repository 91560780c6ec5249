"""
Snippet Extractor

Picks a few spaced, word-aligned excerpts of a long transcript around the
matches of a query and wraps every query term in a highlight marker:

    >>> extract_snippets(transcript, "grace of God", max_snippets=2)
    [Snippet(text='...the <mark>grace</mark> <mark>of</mark> <mark>God</mark> ...', position=1532), ...]

Matching:
1. The whole query (case-insensitive) is searched first.
2. Only when it never occurs are the individual terms searched.
At most MAX_POSITIONS match positions are collected. Selected positions are
at least 1.5 x snippet_length apart so excerpts never overlap.

Deterministic: no randomness, no I/O.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Final

DEFAULT_MAX_SNIPPETS: Final[int] = 3
DEFAULT_SNIPPET_LENGTH: Final[int] = 150
MIN_TERM_LENGTH: Final[int] = 2
MAX_POSITIONS: Final[int] = 20
SPACING_FACTOR: Final[float] = 1.5
START_BOUNDARY_REACH: Final[int] = 20
END_BOUNDARY_REACH: Final[int] = 30
ELLIPSIS: Final[str] = "..."
MARK_OPEN: Final[str] = "<mark>"
MARK_CLOSE: Final[str] = "</mark>"


@dataclass(frozen=True, slots=True)
class Snippet:
    """A highlighted excerpt.

    Attributes:
        text: Excerpt with highlight markers and "..." where it was cut
        position: Offset in the source text of the match it was centred on
    """

    text: str
    position: int


def query_tokens(query: str) -> list[str]:
    """Lower-cased whitespace tokens of at least two characters."""
    return [t for t in query.lower().split() if len(t) >= MIN_TERM_LENGTH]


def _match_positions(text: str, needle: str, found: list[int]) -> None:
    if not needle:
        return
    # Lookahead finds overlapping occurrences, like repeated indexOf(needle, i + 1).
    pattern = re.compile(f"(?={re.escape(needle)})", re.IGNORECASE)
    for match in pattern.finditer(text):
        if len(found) >= MAX_POSITIONS:
            return
        found.append(match.start())


def find_match_positions(text: str, query: str) -> list[int]:
    """Whole-query positions, or per-term positions when the query never occurs."""
    positions: list[int] = []
    _match_positions(text, query.strip(), positions)
    if not positions:
        for term in query_tokens(query):
            _match_positions(text, term, positions)
    return sorted(positions)


def select_spaced_positions(
    positions: list[int],
    max_snippets: int,
    snippet_length: int,
) -> list[int]:
    """Greedily keep ascending positions at least 1.5 x snippet_length apart."""
    if not positions or max_snippets < 1:
        return []
    min_gap = snippet_length * SPACING_FACTOR
    selected = [positions[0]]
    for position in positions[1:]:
        if len(selected) >= max_snippets:
            break
        if all(abs(position - s) >= min_gap for s in selected):
            selected.append(position)
    return selected


def _window(text: str, position: int, snippet_length: int) -> tuple[int, int]:
    length = len(text)

    start = max(0, position - snippet_length // 2)
    if start > 0:
        for i in range(start, min(length, start + START_BOUNDARY_REACH)):
            if text[i].isspace():
                start = i + 1
                break

    end = min(length, start + snippet_length)
    if end < length:
        floor = start + snippet_length - END_BOUNDARY_REACH
        for i in range(end, max(floor, start - 1), -1):
            if text[i].isspace():
                end = i
                break

    return start, end


def highlight_terms(
    text: str,
    terms: list[str],
    open_marker: str = MARK_OPEN,
    close_marker: str = MARK_CLOSE,
    escape: bool = False,
) -> str:
    """Wrap every case-insensitive occurrence of any term in markers.

    Terms are tried longest first in a single pass, so a short term never
    splits a longer overlapping match and markers are never re-matched.

    Args:
        text: Text to highlight
        terms: Terms to mark
        open_marker: Inserted before each match
        close_marker: Inserted after each match
        escape: HTML-escape the text around and inside the markers
    """
    unique = sorted({t for t in terms if t}, key=lambda t: (-len(t), t))
    if not unique:
        return html.escape(text) if escape else text

    pattern = re.compile("|".join(re.escape(t) for t in unique), re.IGNORECASE)
    pieces: list[str] = []
    last = 0
    for match in pattern.finditer(text):
        before, matched = text[last : match.start()], match.group(0)
        if escape:
            before, matched = html.escape(before), html.escape(matched)
        pieces.append(f"{before}{open_marker}{matched}{close_marker}")
        last = match.end()
    tail = text[last:]
    pieces.append(html.escape(tail) if escape else tail)
    return "".join(pieces)


def extract_snippets(
    text: str | None,
    query: str | None,
    max_snippets: int = DEFAULT_MAX_SNIPPETS,
    snippet_length: int = DEFAULT_SNIPPET_LENGTH,
    open_marker: str = MARK_OPEN,
    close_marker: str = MARK_CLOSE,
    escape: bool = False,
) -> list[Snippet]:
    """Extract highlighted excerpts of text around matches of query.

    Args:
        text: Source text (usually a transcript)
        query: Search query
        max_snippets: Maximum number of excerpts
        snippet_length: Target excerpt length in characters

    Returns:
        Snippets in source order; empty when text or query is empty, the
        query has no term of two or more characters, or nothing matches.
    """
    if not text or not query or snippet_length < 1:
        return []

    terms = query_tokens(query)
    if not terms:
        return []

    selected = select_spaced_positions(
        find_match_positions(text, query), max_snippets, snippet_length
    )

    snippets: list[Snippet] = []
    for position in selected:
        start, end = _window(text, position, snippet_length)
        excerpt = highlight_terms(
            text[start:end].strip(), terms, open_marker, close_marker, escape
        )
        if start > 0:
            excerpt = ELLIPSIS + excerpt
        if end < len(text):
            excerpt = excerpt + ELLIPSIS
        snippets.append(Snippet(text=excerpt, position=position))
    return snippets


class SnippetExtractor:
    """Snippet extraction with fixed count, length and markers.

    Attributes:
        max_snippets: Maximum excerpts per text
        snippet_length: Target excerpt length in characters
    """

    __slots__ = ("max_snippets", "snippet_length", "open_marker", "close_marker", "escape")

    def __init__(
        self,
        max_snippets: int = DEFAULT_MAX_SNIPPETS,
        snippet_length: int = DEFAULT_SNIPPET_LENGTH,
        open_marker: str = MARK_OPEN,
        close_marker: str = MARK_CLOSE,
        escape: bool = False,
    ) -> None:
        self.max_snippets = max_snippets
        self.snippet_length = snippet_length
        self.open_marker = open_marker
        self.close_marker = close_marker
        self.escape = escape

    def extract(self, text: str | None, query: str | None) -> list[Snippet]:
        return extract_snippets(
            text,
            query,
            max_snippets=self.max_snippets,
            snippet_length=self.snippet_length,
            open_marker=self.open_marker,
            close_marker=self.close_marker,
            escape=self.escape,
        )
