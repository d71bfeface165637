"""Tests for the ranking JSON report writer."""

from __future__ import annotations

import json

from ladder_recs.recommendations.reporter import ranking_to_records, write_ranking_json


class TestRankingToRecords:
    def test_rank_added_and_score_serialized(self, engine, make_opportunity):
        ranked = engine.get_personalized_opportunities(
            [make_opportunity(id="x", category="Volunteering"), make_opportunity(id="y")]
        )
        records = ranking_to_records(ranked)

        assert [r["rank"] for r in records] == [1, 2]
        assert records[0]["id"] == "y"
        assert records[0]["score"]["opportunity_id"] == "y"
        assert set(records[0]["score"]["factors"]) == {
            "category_match", "location_match", "field_match", "recency", "popularity",
        }
        json.dumps(records)

    def test_extra_keys_kept(self, engine, make_opportunity):
        ranked = engine.get_personalized_opportunities(
            [make_opportunity(title="Data Intern", deadline="2026-04-01")]
        )
        record = ranking_to_records(ranked)[0]
        assert record["title"] == "Data Intern"
        assert record["deadline"] == "2026-04-01"

    def test_ranked_list_not_mutated(self, engine, make_opportunity):
        ranked = engine.get_personalized_opportunities([make_opportunity()])
        ranking_to_records(ranked)
        assert "rank" not in ranked[0]

    def test_empty(self):
        assert ranking_to_records([]) == []


class TestWriteRankingJson:
    def test_writes_report(self, engine, make_opportunity, now, tmp_path):
        ranked = engine.get_personalized_opportunities(
            [make_opportunity(id="1"), make_opportunity(id="2", location="Remote")]
        )
        out = tmp_path / "reports" / "ranking.json"

        returned = write_ranking_json(ranked, out, generated_at=now)

        assert returned == out
        payload = json.loads(out.read_text(encoding="utf-8"))
        assert payload["generated_at"] == now.isoformat()
        assert payload["count"] == 2
        assert [o["id"] for o in payload["opportunities"]] == ["1", "2"]
        assert payload["opportunities"][0]["score"]["score"] >= payload["opportunities"][1]["score"]["score"]

    def test_empty_ranking(self, tmp_path):
        out = write_ranking_json([], tmp_path / "empty.json")
        payload = json.loads(out.read_text(encoding="utf-8"))
        assert payload["count"] == 0
        assert payload["opportunities"] == []
