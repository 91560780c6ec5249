"""
Search Filters and Pagination

Filter values usually come from bookmarked or stale query strings, so invalid
values are normalized to safe defaults instead of being rejected:
- unknown sort key -> relevance
- unknown content type -> sermons and series
- non-numeric decade -> no decade filter
- negative limit/offset -> clamped
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Final

# Decades whose ten-year window starts and ends on representable dates.
MIN_DECADE_YEAR: Final[int] = 10
MAX_DECADE_YEAR: Final[int] = date.max.year - 10


class SortMode(str, Enum):
    """Ordering of ranked sermons."""

    RELEVANCE = "relevance"
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"

    @classmethod
    def parse(cls, value: str | None) -> SortMode:
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.RELEVANCE


class ContentType(str, Enum):
    """Which result kinds a search returns."""

    ALL = "all"
    SERMONS = "sermons"
    SERIES = "series"

    @classmethod
    def parse(cls, value: str | None) -> ContentType:
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ALL


def parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _parse_decade(value: Any) -> int | None:
    if value is None:
        return None
    try:
        year = int(str(value).strip())
    except ValueError:
        return None
    if year < MIN_DECADE_YEAR or year > MAX_DECADE_YEAR:
        return None
    return year - year % 10


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True, slots=True)
class SearchFilters:
    """Hard inclusion predicates plus the sort mode.

    Filters never influence a score; they decide which documents are scored.
    """

    sort: SortMode = SortMode.RELEVANCE
    content: ContentType = ContentType.ALL
    has_transcript: bool = False
    sermon_type: str | None = None
    category: str | None = None
    decade: int | None = None
    has_outline: bool = False

    @classmethod
    def from_raw(
        cls,
        sort: str | None = None,
        content: str | None = None,
        has_transcript: Any = None,
        sermon_type: str | None = None,
        category: str | None = None,
        decade: Any = None,
        has_outline: Any = None,
    ) -> SearchFilters:
        """Build filters from untrusted query-string values."""
        return cls(
            sort=SortMode.parse(sort),
            content=ContentType.parse(content),
            has_transcript=parse_flag(has_transcript),
            sermon_type=_clean_text(sermon_type),
            category=_clean_text(category),
            decade=_parse_decade(decade),
            has_outline=parse_flag(has_outline),
        )

    @property
    def decade_range(self) -> tuple[date, date] | None:
        """Half-open [start, end) date range of the decade filter."""
        if self.decade is None:
            return None
        return date(self.decade, 1, 1), date(self.decade + 10, 1, 1)

    def to_payload(self) -> dict[str, Any]:
        return {
            "sort": self.sort.value,
            "content": self.content.value,
            "has_transcript": self.has_transcript,
            "sermon_type": self.sermon_type,
            "category": self.category,
            "decade": self.decade,
            "has_outline": self.has_outline,
        }


@dataclass(frozen=True, slots=True)
class Pagination:
    """Limit/offset pair, always non-negative."""

    limit: int
    offset: int = 0

    @classmethod
    def normalize(
        cls,
        limit: int | None,
        offset: int | None,
        default_limit: int = 50,
        max_limit: int = 100,
    ) -> Pagination:
        """Clamp raw values: missing or negative limit -> default, cap at max_limit."""
        if limit is None or limit < 0:
            limit = default_limit
        limit = min(limit, max_limit)
        offset = max(0, offset or 0)
        return cls(limit=limit, offset=offset)
