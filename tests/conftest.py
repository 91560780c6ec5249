"""
Shared fixtures: factories for sermons, tags and series.

Tags are given as (book, chapter, verse_start, verse_end) tuples; the first
tag of a sermon is its primary reference.
"""

from collections.abc import Callable, Sequence
from datetime import date
from types import MappingProxyType
from typing import Any

import pytest

from sermon_search.ranking.models import Document, ScriptureTag, Series

TagSpec = tuple[Any, ...]


def _tag(spec: TagSpec) -> ScriptureTag:
    book, chapter, *verses = spec
    verse_start = verses[0] if len(verses) > 0 else None
    verse_end = verses[1] if len(verses) > 1 else None
    text = f"{book} {chapter}" + (f":{verse_start}" if verse_start else "")
    return ScriptureTag(
        book=book,
        chapter=chapter,
        verse_start=verse_start,
        verse_end=verse_end,
        reference_text=text,
    )


@pytest.fixture
def make_document() -> Callable[..., Document]:
    """Factory for Document instances with sensible defaults."""

    def _make(
        id: int = 1,
        title: str = "Untitled",
        description: str | None = None,
        transcript: str | None = None,
        preached: date | None = date(2020, 1, 1),
        tags: Sequence[TagSpec] = (),
        metadata: dict[str, Any] | None = None,
        series_id: int | None = None,
        series_name: str | None = None,
    ) -> Document:
        return Document(
            id=id,
            title=title,
            code=f"S-{id}",
            description=description,
            transcript_text=transcript,
            date_preached=preached,
            series_id=series_id,
            series_name=series_name,
            scripture_tags=tuple(_tag(t) for t in tags),
            metadata=MappingProxyType(metadata or {}),
        )

    return _make


@pytest.fixture
def make_series() -> Callable[..., Series]:
    def _make(id: int, name: str, sermons: Sequence[Document] = (), description: str | None = None) -> Series:
        return Series(id=id, name=name, description=description, sermons=tuple(sermons))

    return _make


@pytest.fixture
def make_tag() -> Callable[..., ScriptureTag]:
    def _make(*spec: Any) -> ScriptureTag:
        return _tag(spec)

    return _make
