"""
Transcript helpers for study views and exports.

Transcripts scraped from the archive site carry page chrome ("WATCH NOW",
"VIDEO SERMON" banners, stray index letters) ahead of the spoken text.
clean_transcript_text() strips it; transcript_paragraphs() then keeps the
paragraphs that mention a query term.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

from sermon_search.snippets.extractor import MIN_TERM_LENGTH

_JUNK_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"^.*?(VIDEO SERMON|AUDIO SERMON).*$", re.IGNORECASE | re.MULTILINE),
    re.compile(
        r"^(WATCH NOW|ADD TO WATCHLIST|SHARE|DOWNLOAD|TRANSCRIPT|PRINT|SERMONS ARCHIVE"
        r"|RESET|CD|DVD|MP3|MP4)[^\S\n]*$",
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(r"^[A-Z][^\S\n]*$", re.MULTILINE),
)
_EXCESS_BLANK_LINES: Final[re.Pattern[str]] = re.compile(r"\n{3,}")
_LOWERCASE: Final[re.Pattern[str]] = re.compile(r"[a-z]")
_PUNCTUATION: Final[re.Pattern[str]] = re.compile(r"[.,:;]")

# The body starts at the first "real" sentence line among the first few lines.
HEADER_SCAN_LINES: Final[int] = 20
MIN_BODY_LINE_LENGTH: Final[int] = 60


def clean_transcript_text(transcript: str | None) -> str:
    """Strip site boilerplate and header lines from a scraped transcript."""
    if not transcript:
        return ""

    text = transcript
    for pattern in _JUNK_PATTERNS:
        text = pattern.sub("", text)

    lines = text.split("\n")
    # Indices of non-blank lines; blank lines are kept as paragraph breaks.
    content = [index for index, line in enumerate(lines) if line.strip()]
    start = content[0] if content else 0
    for index in content[:HEADER_SCAN_LINES]:
        line = lines[index].strip()
        if (
            len(line) > MIN_BODY_LINE_LENGTH
            and _LOWERCASE.search(line)
            and _PUNCTUATION.search(line)
        ):
            start = index
            break

    text = "\n".join(line.rstrip() for line in lines[start:])
    return _EXCESS_BLANK_LINES.sub("\n\n", text).strip()


def query_terms(query: str | None) -> list[str]:
    """Unique lower-cased query terms of two or more characters, first-seen order."""
    if not query:
        return []
    return list(dict.fromkeys(t for t in query.lower().split() if len(t) >= MIN_TERM_LENGTH))


@dataclass(frozen=True, slots=True)
class TranscriptParagraphs:
    """Paragraphs of a cleaned transcript, optionally filtered by a query."""

    paragraphs: list[str] = field(default_factory=list)
    terms: list[str] = field(default_factory=list)
    is_highlighted: bool = False


def transcript_paragraphs(cleaned: str, query: str | None = None) -> TranscriptParagraphs:
    """Split a cleaned transcript into paragraphs.

    With a query, only paragraphs containing one of its terms as a whole
    word are kept and is_highlighted is True.
    """
    if not cleaned:
        return TranscriptParagraphs()

    paragraphs = [
        p.replace("\n", " ").strip() for p in cleaned.split("\n\n") if p.strip()
    ]

    terms = query_terms(query)
    if not terms:
        return TranscriptParagraphs(paragraphs=paragraphs)

    pattern = re.compile(
        r"\b(" + "|".join(re.escape(t) for t in terms) + r")\b", re.IGNORECASE
    )
    return TranscriptParagraphs(
        paragraphs=[p for p in paragraphs if pattern.search(p)],
        terms=terms,
        is_highlighted=True,
    )
