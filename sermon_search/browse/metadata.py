"""
Browse by metadata dimension.

Lists the distinct values of a dimension with the number of sermons carrying
each one, and lists the sermons carrying a given value. Values are grouped
case-insensitively on their trimmed form; the first spelling seen is the one
displayed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from sermon_search.browse.dimensions import MetadataDimension, get_dimension
from sermon_search.core.exceptions import UnknownDimensionError
from sermon_search.ranking.models import Document


class BrowseSort(str, Enum):
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    TITLE_AZ = "title-az"

    @classmethod
    def parse(cls, value: str | None) -> BrowseSort:
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.DATE_DESC


@dataclass(frozen=True, slots=True)
class MetadataValue:
    value: str
    sermon_count: int


def require_dimension(slug: str) -> MetadataDimension:
    """Look up a dimension by slug.

    Raises:
        UnknownDimensionError: If the slug is not registered.
    """
    dimension = get_dimension(slug)
    if dimension is None:
        raise UnknownDimensionError(slug)
    return dimension


def _tally(
    documents: Iterable[Document],
    dimension: MetadataDimension,
    search: str | None,
) -> list[MetadataValue]:
    needle = (search or "").strip().lower()
    display: dict[str, str] = {}
    counts: dict[str, int] = {}

    for document in documents:
        seen: set[str] = set()
        for value in dimension.values_in(document.metadata):
            key = value.lower()
            if needle and needle not in key:
                continue
            if key in seen:
                continue
            seen.add(key)
            display.setdefault(key, value)
            counts[key] = counts.get(key, 0) + 1

    values = [MetadataValue(value=display[k], sermon_count=c) for k, c in counts.items()]
    values.sort(key=lambda v: (-v.sermon_count, v.value.lower()))
    return values


def dimension_values(
    documents: Iterable[Document],
    dimension: MetadataDimension,
    search: str | None = None,
    min_count: int | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[MetadataValue]:
    """Distinct values of a dimension, most common first."""
    values = _tally(documents, dimension, search)
    if min_count:
        values = [v for v in values if v.sermon_count >= min_count]
    offset = max(0, offset)
    return values[offset : offset + max(0, limit)]


def count_dimension_values(
    documents: Iterable[Document],
    dimension: MetadataDimension,
    search: str | None = None,
) -> int:
    return len(_tally(documents, dimension, search))


def _has_value(document: Document, dimension: MetadataDimension, value: str) -> bool:
    wanted = value.strip().lower()
    return any(v.lower() == wanted for v in dimension.values_in(document.metadata))


def documents_with_value(
    documents: Iterable[Document],
    dimension: MetadataDimension,
    value: str,
    has_transcript: bool = False,
) -> list[Document]:
    return [
        d
        for d in documents
        if _has_value(d, dimension, value) and (d.has_transcript or not has_transcript)
    ]


def documents_by_dimension_value(
    documents: Iterable[Document],
    dimension: MetadataDimension,
    value: str,
    sort: BrowseSort = BrowseSort.DATE_DESC,
    has_transcript: bool = False,
    limit: int = 20,
    offset: int = 0,
) -> list[Document]:
    """Sermons carrying value in the given dimension, in browse order."""
    matching = documents_with_value(documents, dimension, value, has_transcript)

    if sort is BrowseSort.TITLE_AZ:
        matching.sort(key=lambda d: (d.title.lower(), d.id))
    else:
        descending = sort is BrowseSort.DATE_DESC
        dated = sorted(
            (d for d in matching if d.date_preached is not None),
            key=lambda d: (d.date_preached, d.id),
            reverse=descending,
        )
        matching = dated + [d for d in matching if d.date_preached is None]

    offset = max(0, offset)
    return matching[offset : offset + max(0, limit)]
