"""
Relevance Scorer

Ranks sermons and series for a query.

Sermon score:
    title_matches * 50 + description_matches * 5 + transcript_matches * 1
    + scripture boost (see ranking.boost)

Series score:
    (name_bonus + sum of member weighted matches)
    * (1 + matching_members / total_members)
    / (1 + 0.5 * log10(total_members))   when total_members > 20

The scorer is pure: it holds only immutable weights, performs no I/O and
ranks identical input identically.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Final

from sermon_search.core.exceptions import ConfigurationError
from sermon_search.ranking.boost import scripture_boost
from sermon_search.ranking.candidates import CandidateCriteria, match_counts, text_matches
from sermon_search.ranking.filters import Pagination, SearchFilters, SortMode
from sermon_search.ranking.models import (
    Document,
    MatchCounts,
    RankedPage,
    RankedResult,
    Series,
    SeriesResult,
)
from sermon_search.scripture.parser import ScriptureReference

# =============================================================================
# Constants
# =============================================================================

TITLE_WEIGHT: Final[float] = 50.0
DESCRIPTION_WEIGHT: Final[float] = 5.0
TRANSCRIPT_WEIGHT: Final[float] = 1.0

SERIES_NAME_BONUS: Final[float] = 500.0
MEMBER_PROPORTION_WEIGHT: Final[float] = 1.0
SIZE_DAMPING_THRESHOLD: Final[int] = 20
LOG_DAMPING_FACTOR: Final[float] = 0.5


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    """Per-field weights; title must outweigh description, which must outweigh transcript."""

    title: float = TITLE_WEIGHT
    description: float = DESCRIPTION_WEIGHT
    transcript: float = TRANSCRIPT_WEIGHT

    def __post_init__(self) -> None:
        if not self.title > self.description > self.transcript > 0:
            raise ConfigurationError(
                "Scoring weights must satisfy title > description > transcript > 0"
            )

    def apply(self, counts: MatchCounts) -> float:
        return (
            counts.title * self.title
            + counts.description * self.description
            + counts.transcript * self.transcript
        )


def _date_sort_key(value: date | None, descending: bool) -> tuple[int, int]:
    # Undated sermons sort last in either direction.
    if value is None:
        return (1, 0)
    ordinal = value.toordinal()
    return (0, -ordinal if descending else ordinal)


class RelevanceScorer:
    """Weighted substring relevance with scripture-aware boosting.

    Attributes:
        weights: Field weights for title/description/transcript matches
    """

    __slots__ = ("weights",)

    def __init__(self, weights: ScoringWeights | None = None) -> None:
        self.weights = weights or ScoringWeights()

    # -------------------------------------------------------------------------
    # Sermons
    # -------------------------------------------------------------------------

    def score_document(
        self,
        document: Document,
        query: str,
        reference: ScriptureReference | None = None,
    ) -> RankedResult:
        """Score a single sermon for a (non-empty) query."""
        counts = match_counts(document, query)
        boost = scripture_boost(reference, document.scripture_tags)
        return RankedResult(
            document=document,
            relevance_score=self.weights.apply(counts) + boost,
            match_counts=counts,
            scripture_boost=boost,
        )

    def rank(
        self,
        query: str,
        reference: ScriptureReference | None,
        candidates: Iterable[Document],
        filters: SearchFilters | None = None,
    ) -> list[RankedResult]:
        """Score and order every eligible candidate.

        Candidates failing the filters, or matching neither the query text
        nor the parsed reference, are dropped before scoring.

        Returns:
            All eligible sermons in result order; empty for a blank query.
        """
        query = query.strip()
        if not query:
            return []

        filters = filters or SearchFilters()
        criteria = CandidateCriteria(text=query, reference=reference, filters=filters)

        scored = [
            self.score_document(document, query, reference)
            for document in candidates
            if criteria.matches(document)
        ]
        return self._order(scored, filters.sort)

    def rank_sermons(
        self,
        query: str,
        reference: ScriptureReference | None,
        candidates: Iterable[Document],
        filters: SearchFilters | None = None,
        pagination: Pagination | None = None,
    ) -> RankedPage:
        """Rank and return one page of sermons.

        Takes limit + 1 results past the offset; the extra item only sets
        has_more and is not returned.
        """
        pagination = pagination or Pagination(limit=50)
        ranked = self.rank(query, reference, candidates, filters)

        window = ranked[pagination.offset : pagination.offset + pagination.limit + 1]
        has_more = len(window) > pagination.limit
        return RankedPage(
            results=window[: pagination.limit],
            has_more=has_more,
            offset=pagination.offset,
        )

    @staticmethod
    def _order(results: list[RankedResult], sort: SortMode) -> list[RankedResult]:
        """Order results; relevance ties go newest first, then by id."""

        def key(result: RankedResult) -> tuple:
            preached = result.document.date_preached
            if sort is SortMode.DATE_DESC:
                return (_date_sort_key(preached, True), result.document.id)
            if sort is SortMode.DATE_ASC:
                return (_date_sort_key(preached, False), result.document.id)
            return (-result.relevance_score, _date_sort_key(preached, True), result.document.id)

        return sorted(results, key=key)

    # -------------------------------------------------------------------------
    # Series
    # -------------------------------------------------------------------------

    def score_series(self, series: Series, query: str) -> SeriesResult | None:
        """Aggregate member matches into a series score.

        Returns:
            SeriesResult, or None when neither the name nor any member matches.
        """
        query = query.strip()
        if not query:
            return None

        name_matches = query.lower() in series.name.lower()
        matching = [m for m in series.sermons if text_matches(m, query)]
        if not matching and not name_matches:
            return None

        member_counts = [match_counts(m, query) for m in matching]
        weighted = sum(self.weights.apply(c) for c in member_counts)
        total = series.sermon_count

        score = (SERIES_NAME_BONUS if name_matches else 0.0) + weighted
        score *= 1.0 + MEMBER_PROPORTION_WEIGHT * len(matching) / max(total, 1)
        score /= size_damping(total)

        return SeriesResult(
            series=series,
            relevance_score=score,
            sermon_count=total,
            matching_sermons=len(matching),
            match_count=sum(c.total for c in member_counts),
        )

    def rank_series(
        self,
        query: str,
        candidates: Iterable[Series],
        limit: int = 10,
    ) -> list[SeriesResult]:
        """Rank series by aggregated score, then by matching member count."""
        results = [
            result
            for result in (self.score_series(series, query) for series in candidates)
            if result is not None
        ]
        results.sort(key=lambda r: (-r.relevance_score, -r.matching_sermons, r.series.id))
        return results[: max(0, limit)]


def size_damping(member_count: int) -> float:
    """Divisor that keeps very large series from winning on volume alone."""
    if member_count > SIZE_DAMPING_THRESHOLD:
        return 1.0 + LOG_DAMPING_FACTOR * math.log10(member_count)
    return 1.0
