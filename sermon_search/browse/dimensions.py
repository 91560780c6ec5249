"""
Metadata Dimension Registry

Static table of the sermon metadata attributes that can be browsed on their
own ("doctrines", "keywords", ...). Each dimension names a JSON path into the
sermon metadata and how to read it:

- scalar: the path holds one string (e.g. $.summary.sermon_type)
- extract_key: the path holds an array of objects; the value is that key
  of each object (e.g. $.external_references.authors_quoted[*].name)
- neither: the path holds an array of strings
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final, Mapping


def resolve_json_path(data: Any, path: str) -> Any:
    """Resolve a "$.a.b" path against nested mappings.

    Returns None when any step is missing or not a mapping.
    """
    current = data
    for key in path.removeprefix("$").split("."):
        if not key:
            continue
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


@dataclass(frozen=True, slots=True)
class MetadataDimension:
    """A browsable metadata attribute."""

    slug: str
    label: str
    label_plural: str
    json_path: str
    description: str
    extract_key: str | None = None
    scalar: bool = False

    def values_in(self, metadata: Any) -> Iterator[str]:
        """Yield the trimmed, non-empty values of this dimension in metadata."""
        raw = resolve_json_path(metadata, self.json_path)
        if raw is None:
            return
        if self.scalar:
            items: list[Any] = [raw]
        elif isinstance(raw, list):
            items = raw
        else:
            return

        for item in items:
            if self.extract_key is not None:
                item = resolve_json_path(item, self.extract_key)
            if isinstance(item, str) and item.strip():
                yield item.strip()


METADATA_DIMENSIONS: Final[Mapping[str, MetadataDimension]] = MappingProxyType(
    {
        dimension.slug: dimension
        for dimension in (
            MetadataDimension(
                slug="keywords",
                label="Keyword",
                label_plural="Keywords",
                json_path="$.keywords",
                description="20,000+ terms across all sermons",
            ),
            MetadataDimension(
                slug="themes",
                label="Theme",
                label_plural="Themes",
                json_path="$.themes.primary",
                scalar=True,
                description="Primary teaching themes",
            ),
            MetadataDimension(
                slug="doctrines",
                label="Doctrine Defended",
                label_plural="Doctrines Defended",
                json_path="$.doctrine.key_doctrines_defended",
                description="Key doctrines taught and defended",
            ),
            MetadataDimension(
                slug="heresies",
                label="Heresy Refuted",
                label_plural="Heresies Refuted",
                json_path="$.doctrine.heresies_refuted",
                description="False teachings addressed",
            ),
            MetadataDimension(
                slug="categories",
                label="Theological Category",
                label_plural="Theological Categories",
                json_path="$.themes.theological_categories",
                description="Soteriology, Christology, Eschatology...",
            ),
            MetadataDimension(
                slug="sermon-types",
                label="Sermon Type",
                label_plural="Sermon Types",
                json_path="$.summary.sermon_type",
                scalar=True,
                description="Expository, Topical, Q&A...",
            ),
            MetadataDimension(
                slug="authors",
                label="Author Quoted",
                label_plural="Authors Quoted",
                json_path="$.external_references.authors_quoted",
                extract_key="$.name",
                description="Cited scholars, pastors & writers",
            ),
            MetadataDimension(
                slug="hymns",
                label="Hymn Mentioned",
                label_plural="Hymns Mentioned",
                json_path="$.external_references.hymns_mentioned",
                extract_key="$.title",
                description="Hymns referenced in sermons",
            ),
            MetadataDimension(
                slug="books-referenced",
                label="Book Referenced",
                label_plural="Books Referenced",
                json_path="$.external_references.books_referenced",
                extract_key="$.title",
                description="Books cited in sermons",
            ),
            MetadataDimension(
                slug="characters",
                label="Biblical Character",
                label_plural="Biblical Characters",
                json_path="$.biblical_content.characters_discussed",
                extract_key="$.name",
                description="People discussed in Scripture",
            ),
            MetadataDimension(
                slug="places",
                label="Place Mentioned",
                label_plural="Places Mentioned",
                json_path="$.biblical_content.places_mentioned",
                description="Biblical locations",
            ),
        )
    }
)

ALL_DIMENSIONS: Final[tuple[MetadataDimension, ...]] = tuple(METADATA_DIMENSIONS.values())


def get_dimension(slug: str) -> MetadataDimension | None:
    """Get a dimension by slug, or None if it is not registered."""
    return METADATA_DIMENSIONS.get(slug)
