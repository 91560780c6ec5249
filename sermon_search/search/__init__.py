"""Search orchestration: store fetch, ranking, snippets and browse flows."""
from sermon_search.search.service import (
    DimensionDocumentsPage,
    DimensionValuesPage,
    SearchPage,
    SearchService,
    TranscriptHit,
    TranscriptPage,
)

__all__ = [
    "DimensionDocumentsPage",
    "DimensionValuesPage",
    "SearchPage",
    "SearchService",
    "TranscriptHit",
    "TranscriptPage",
]
