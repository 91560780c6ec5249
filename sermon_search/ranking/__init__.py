"""
Relevance ranking of sermons and series.

Weighted substring matching over title/description/transcript, boosted by
tiered scripture-tag matches, with series aggregation and paging.
"""

from sermon_search.ranking.boost import scripture_boost
from sermon_search.ranking.candidates import CandidateCriteria
from sermon_search.ranking.filters import ContentType, Pagination, SearchFilters, SortMode
from sermon_search.ranking.models import (
    Document,
    MatchCounts,
    RankedPage,
    RankedResult,
    ScriptureTag,
    Series,
    SeriesResult,
)
from sermon_search.ranking.scorer import RelevanceScorer, ScoringWeights

__all__ = [
    "CandidateCriteria",
    "ContentType",
    "Document",
    "MatchCounts",
    "Pagination",
    "RankedPage",
    "RankedResult",
    "RelevanceScorer",
    "ScoringWeights",
    "ScriptureTag",
    "SearchFilters",
    "Series",
    "SeriesResult",
    "SortMode",
    "scripture_boost",
]
