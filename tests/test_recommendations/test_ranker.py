"""
Tests for ladder_recs/recommendations/ranker.py.

What we test
------------
read_candidates():
  - Mappings and Opportunity instances are accepted.
  - Non-mappings are skipped with a warning; mappings without an id or
    with an unreadable date are still read.
rank_opportunities():
  - Non-list input (None, str, dict, int) -> [] and a warning, no exception.
  - Every listing keeps its keys and gains a "score" OpportunityScore.
  - Output sorted non-increasing by score; ties keep input order.
  - No truncation: every mapping comes back, malformed dates and ids included.
"""

from __future__ import annotations

import logging

import pytest

from ladder_recs.models.opportunity import Opportunity, OpportunityScore, ScoreFactors
from ladder_recs.recommendations.ranker import SCORE_KEY, rank_opportunities, read_candidates


def _score_by_table(table: dict[str, float]):
    """score_fn returning a preset score per opportunity id."""

    def _score(opp: Opportunity) -> OpportunityScore:
        factors = ScoreFactors(
            category_match=0.1, location_match=0.3, field_match=0.4, recency=0.0, popularity=0.5
        )
        return OpportunityScore(opportunity_id=opp.id, score=table[opp.id], factors=factors)

    return _score


class TestReadCandidates:
    def test_mappings_and_models(self):
        candidates = read_candidates([{"id": "a"}, Opportunity(id="b")])
        assert [c.opportunity.id for c in candidates] == ["a", "b"]
        assert candidates[1].payload["id"] == "b"

    def test_skips_non_mappings(self, caplog):
        with caplog.at_level(logging.WARNING):
            candidates = read_candidates([{"id": "a"}, 42, {"title": "no id"}])
        assert [c.opportunity.id for c in candidates] == ["a", ""]
        assert candidates[1].payload == {"title": "no id"}
        assert "#1" in caplog.text
        assert "#2" not in caplog.text

    def test_malformed_date_kept(self, caplog):
        with caplog.at_level(logging.WARNING):
            candidates = read_candidates([{"id": "a", "postedDate": "garbage"}])
        assert candidates[0].opportunity.posted_date is None
        assert candidates[0].payload["postedDate"] == "garbage"
        assert caplog.text == ""


class TestRankOpportunitiesInput:
    @pytest.mark.parametrize("bad", [None, "not an array", {"id": "a"}, 17])
    def test_non_list_returns_empty(self, bad, caplog):
        with caplog.at_level(logging.WARNING):
            assert rank_opportunities(bad, _score_by_table({})) == []
        assert "expected a list" in caplog.text

    def test_empty_list(self):
        assert rank_opportunities([], _score_by_table({})) == []

    def test_tuple_accepted(self):
        ranked = rank_opportunities(({"id": "a"},), _score_by_table({"a": 0.5}))
        assert len(ranked) == 1


class TestRankOpportunitiesOutput:
    def test_sorted_descending(self):
        table = {"a": 0.2, "b": 0.9, "c": 0.5}
        ranked = rank_opportunities([{"id": k} for k in table], _score_by_table(table))
        scores = [item[SCORE_KEY].score for item in ranked]
        assert [item["id"] for item in ranked] == ["b", "c", "a"]
        assert all(x >= y for x, y in zip(scores, scores[1:]))

    def test_ties_keep_input_order(self):
        table = {"a": 0.5, "b": 0.5, "c": 0.5}
        ranked = rank_opportunities([{"id": k} for k in table], _score_by_table(table))
        assert [item["id"] for item in ranked] == ["a", "b", "c"]

    def test_payload_preserved_and_score_embedded(self):
        listing = {"id": "a", "title": "Summer intern", "image_url": "x.png"}
        ranked = rank_opportunities([listing], _score_by_table({"a": 0.7}))
        item = ranked[0]
        assert item["title"] == "Summer intern"
        assert item["image_url"] == "x.png"
        assert isinstance(item[SCORE_KEY], OpportunityScore)
        assert item[SCORE_KEY].factors.popularity == 0.5

    def test_input_not_mutated(self):
        listing = {"id": "a"}
        rank_opportunities([listing], _score_by_table({"a": 0.7}))
        assert SCORE_KEY not in listing

    def test_no_truncation(self):
        table = {str(i): i / 100 for i in range(50)}
        ranked = rank_opportunities([{"id": k} for k in table], _score_by_table(table))
        assert len(ranked) == 50

    def test_malformed_mappings_all_returned(self):
        listings = [
            {"id": "a", "postedDate": "2026-03-01T12:00:00Z"},
            {"id": "b", "postedDate": ""},
            {"id": "c", "postedDate": "garbage"},
            {"id": None, "title": "no id"},
        ]
        table = {"a": 0.9, "b": 0.5, "c": 0.4, "": 0.1}
        ranked = rank_opportunities(listings, _score_by_table(table))
        assert len(ranked) == len(listings)
        assert [item["id"] for item in ranked] == ["a", "b", "c", None]
        assert ranked[-1][SCORE_KEY].opportunity_id == ""
