"""
Tests for series aggregation: name bonus, member proportion, size damping.
"""

import math

import pytest

from sermon_search.ranking.scorer import RelevanceScorer, size_damping


@pytest.fixture
def scorer() -> RelevanceScorer:
    return RelevanceScorer()


class TestSizeDamping:
    def test_no_damping_up_to_threshold(self) -> None:
        assert size_damping(1) == 1.0
        assert size_damping(20) == 1.0

    def test_log10_damping_above_threshold(self) -> None:
        assert size_damping(100) == pytest.approx(1.0 + 0.5 * 2)
        assert size_damping(21) == pytest.approx(1.0 + 0.5 * math.log10(21))


class TestScoreSeries:
    """Tests for a single series score."""

    def test_name_match_with_no_members_matching(self, scorer, make_document, make_series) -> None:
        series = make_series(1, "Romans: Gospel of Grace", [make_document(id=1, title="Law")])

        result = scorer.score_series(series, "grace")

        assert result is not None
        assert result.relevance_score == 500
        assert result.matching_sermons == 0

    def test_member_matches_and_proportion(self, scorer, make_document, make_series) -> None:
        members = [
            make_document(id=1, title="Hope"),
            make_document(id=2, description="hope"),
            make_document(id=3, title="Law"),
            make_document(id=4, title="Faith"),
        ]
        result = scorer.score_series(make_series(1, "Letters", members), "hope")

        assert result is not None
        assert result.matching_sermons == 2
        assert result.sermon_count == 4
        assert result.match_count == 2
        assert result.relevance_score == pytest.approx((50 + 5) * (1 + 2 / 4))

    def test_no_match_returns_none(self, scorer, make_document, make_series) -> None:
        series = make_series(1, "Letters", [make_document(title="Law")])
        assert scorer.score_series(series, "hope") is None

    def test_blank_query_returns_none(self, scorer, make_document, make_series) -> None:
        series = make_series(1, "Hope", [make_document(title="Hope")])
        assert scorer.score_series(series, "  ") is None

    def test_large_series_is_damped(self, scorer, make_document, make_series) -> None:
        members = [make_document(id=i, title="Hope") for i in range(1, 41)]
        result = scorer.score_series(make_series(1, "Big", members), "hope")

        assert result is not None
        expected = (40 * 50) * 2 / (1 + 0.5 * math.log10(40))
        assert result.relevance_score == pytest.approx(expected)


class TestRankSeries:
    def test_orders_by_score_and_limits(self, scorer, make_document, make_series) -> None:
        candidates = [
            make_series(1, "Letters", [make_document(id=1, title="hope")]),
            make_series(2, "Hope Series", [make_document(id=2, title="hope")]),
            make_series(3, "Other", [make_document(id=3, title="law")]),
        ]
        ranked = scorer.rank_series("hope", candidates, limit=5)
        assert [r.series.id for r in ranked] == [2, 1]

        assert len(scorer.rank_series("hope", candidates, limit=1)) == 1

    def test_ties_break_on_matching_members(self, scorer, make_document, make_series) -> None:
        # Both score 100: (50) * 2 and (25 + 25) * 2.
        one = make_series(1, "A", [make_document(id=1, title="hope")])
        two = make_series(
            2,
            "B",
            [
                make_document(id=2, description="hope " * 5),
                make_document(id=3, description="hope " * 5),
            ],
        )
        ranked = scorer.rank_series("hope", [one, two])

        assert [r.relevance_score for r in ranked] == [100, 100]
        assert [r.series.id for r in ranked] == [2, 1]
