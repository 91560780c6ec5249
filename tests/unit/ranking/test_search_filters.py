"""
Tests for SearchFilters, Pagination and CandidateCriteria.

Invalid filter values are normalised, never rejected.
"""

from datetime import date

import pytest

from sermon_search.ranking.candidates import CandidateCriteria, passes_filters
from sermon_search.ranking.filters import ContentType, Pagination, SearchFilters, SortMode
from sermon_search.scripture.parser import ScriptureReference

# =============================================================================
# SearchFilters.from_raw
# =============================================================================


class TestSearchFiltersFromRaw:
    """Normalisation of raw query-string values."""

    def test_defaults(self) -> None:
        filters = SearchFilters.from_raw()
        assert filters.sort is SortMode.RELEVANCE
        assert filters.content is ContentType.ALL
        assert filters.has_transcript is False
        assert filters.decade is None

    def test_known_values(self) -> None:
        filters = SearchFilters.from_raw(
            sort="date-desc", content="series", has_transcript="1", decade="1990", has_outline="true"
        )
        assert filters.sort is SortMode.DATE_DESC
        assert filters.content is ContentType.SERIES
        assert filters.has_transcript is True
        assert filters.decade == 1990
        assert filters.has_outline is True

    def test_unknown_sort_falls_back_to_relevance(self) -> None:
        assert SearchFilters.from_raw(sort="loudest").sort is SortMode.RELEVANCE

    def test_unknown_content_means_both(self) -> None:
        assert SearchFilters.from_raw(content="videos").content is ContentType.ALL

    @pytest.mark.parametrize("raw", ["abc", "", "-1990", "0", "5", "9990", "12000"])
    def test_bad_decade_is_ignored(self, raw: str) -> None:
        assert SearchFilters.from_raw(decade=raw).decade is None

    def test_decade_rounds_down(self) -> None:
        assert SearchFilters.from_raw(decade="1994").decade == 1990

    def test_blank_text_filters_are_dropped(self) -> None:
        filters = SearchFilters.from_raw(sermon_type="  ", category="")
        assert filters.sermon_type is None
        assert filters.category is None

    def test_decade_range_is_half_open(self) -> None:
        assert SearchFilters(decade=2000).decade_range == (date(2000, 1, 1), date(2010, 1, 1))


class TestPagination:
    @pytest.mark.parametrize(
        "limit,offset,expected",
        [
            (None, None, Pagination(50, 0)),
            (-5, -3, Pagination(50, 0)),
            (10, 20, Pagination(10, 20)),
            (1000, 0, Pagination(100, 0)),
            (0, 0, Pagination(0, 0)),
        ],
    )
    def test_normalize(self, limit, offset, expected) -> None:
        assert Pagination.normalize(limit, offset) == expected


# =============================================================================
# Filter predicates
# =============================================================================


class TestPassesFilters:
    """Hard inclusion predicates."""

    def test_sermon_type(self, make_document) -> None:
        document = make_document(metadata={"summary": {"sermon_type": "Expository"}})
        assert passes_filters(document, SearchFilters(sermon_type="Expository"))
        assert not passes_filters(document, SearchFilters(sermon_type="Topical"))

    def test_category_is_case_insensitive_prefix(self, make_document) -> None:
        document = make_document(
            metadata={"themes": {"theological_categories": ["Soteriology (salvation)"]}}
        )
        assert passes_filters(document, SearchFilters(category="soteriology"))
        assert not passes_filters(document, SearchFilters(category="Christology"))

    def test_decade(self, make_document) -> None:
        in_decade = make_document(preached=date(1999, 12, 31))
        next_decade = make_document(preached=date(2000, 1, 1))
        undated = make_document(preached=None)
        filters = SearchFilters(decade=1990)

        assert passes_filters(in_decade, filters)
        assert not passes_filters(next_decade, filters)
        assert not passes_filters(undated, filters)

    def test_outline(self, make_document) -> None:
        with_outline = make_document(metadata={"structure": {"main_points": ["One"]}})
        empty_outline = make_document(metadata={"structure": {"main_points": []}})
        filters = SearchFilters(has_outline=True)

        assert passes_filters(with_outline, filters)
        assert not passes_filters(empty_outline, filters)

    def test_transcript(self, make_document) -> None:
        filters = SearchFilters(has_transcript=True)
        assert passes_filters(make_document(transcript=""), filters)
        assert not passes_filters(make_document(transcript=None), filters)


# =============================================================================
# CandidateCriteria
# =============================================================================


class TestCandidateCriteria:
    def test_text_match_in_any_field(self, make_document) -> None:
        criteria = CandidateCriteria(text="mercy")
        assert criteria.matches(make_document(title="Mercy"))
        assert criteria.matches(make_document(description="new mercy every morning"))
        assert criteria.matches(make_document(transcript="his MERCY endures"))
        assert not criteria.matches(make_document(title="Justice"))

    def test_reference_match(self, make_document) -> None:
        criteria = CandidateCriteria(text="Romans 8", reference=ScriptureReference("Romans", 8))
        assert criteria.matches(make_document(tags=[("John", 1), ("Romans", 8, 28)]))
        assert not criteria.matches(make_document(tags=[("Romans", 9)]))

    def test_no_text_and_no_reference_matches_everything(self, make_document) -> None:
        assert CandidateCriteria().matches(make_document())

    def test_filters_apply_first(self, make_document) -> None:
        criteria = CandidateCriteria(text="mercy", filters=SearchFilters(has_transcript=True))
        assert not criteria.matches(make_document(title="Mercy", transcript=None))

    def test_require_transcript_text(self, make_document) -> None:
        criteria = CandidateCriteria(text="Romans 12", require_transcript_text=True)
        assert criteria.matches(make_document(transcript="as romans 12 tells us"))
        assert not criteria.matches(make_document(title="Romans 12", transcript="nothing here"))
        assert not criteria.matches(make_document(title="Romans 12", transcript=None))

    def test_payload(self) -> None:
        criteria = CandidateCriteria(text="grace", reference=ScriptureReference("Romans", 8, 1))
        payload = criteria.to_payload()

        assert payload["text"] == "grace"
        assert payload["reference"] == {"book": "Romans", "chapter": 8, "verse": 1}
        assert payload["filters"]["sort"] == "relevance"
        assert payload["require_transcript_text"] is False
        assert payload["document_id"] is None

    def test_document_id_selects_one_sermon(self, make_document) -> None:
        criteria = CandidateCriteria(document_id=7)
        assert criteria.matches(make_document(id=7))
        assert not criteria.matches(make_document(id=8))
        assert criteria.to_payload()["document_id"] == 7
