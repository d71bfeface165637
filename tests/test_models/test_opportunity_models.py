"""Tests for Opportunity / ScoreFactors / OpportunityScore models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from ladder_recs.models.opportunity import Opportunity, OpportunityScore, ScoreFactors


class TestOpportunityParsing:
    def test_client_payload(self):
        opp = Opportunity.model_validate(
            {
                "id": "o1",
                "category": "Internships",
                "location": "Athens, Greece",
                "field": "Technology",
                "postedDate": "2026-03-01T12:00:00Z",
            }
        )
        assert opp.id == "o1"
        assert opp.posted_date == datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def test_api_row_uses_created_at_and_int_id(self):
        opp = Opportunity.model_validate(
            {"id": 42, "title": "Summer intern", "created_at": "2026-02-20T08:30:00+00:00"}
        )
        assert opp.id == "42"
        assert opp.title == "Summer intern"
        assert opp.posted_date == datetime(2026, 2, 20, 8, 30, tzinfo=timezone.utc)

    def test_snake_case_posted_date(self):
        opp = Opportunity(id="x", posted_date=datetime(2026, 1, 1, tzinfo=timezone.utc))
        assert opp.posted_date.year == 2026

    def test_naive_datetime_is_treated_as_utc(self):
        opp = Opportunity.model_validate({"id": "x", "postedDate": "2026-01-01T10:00:00"})
        assert opp.posted_date.tzinfo is not None
        assert opp.posted_date.utcoffset().total_seconds() == 0

    def test_offset_datetime_converted_to_utc(self):
        opp = Opportunity.model_validate({"id": "x", "postedDate": "2026-01-01T12:00:00+02:00"})
        assert opp.posted_date == datetime(2026, 1, 1, 10, 0, tzinfo=timezone.utc)

    def test_unknown_keys_ignored(self):
        opp = Opportunity.model_validate({"id": "x", "image_url": "https://example.com/a.png"})
        assert not hasattr(opp, "image_url")

    def test_missing_attributes_default_to_none(self):
        opp = Opportunity.model_validate({"id": "x"})
        assert opp.category is None
        assert opp.location is None
        assert opp.field is None
        assert opp.posted_date is None

    def test_missing_id_defaults_to_empty(self):
        opp = Opportunity.model_validate({"category": "Internships"})
        assert opp.id == ""
        assert opp.category == "Internships"

    def test_null_id_defaults_to_empty(self):
        assert Opportunity.model_validate({"id": None}).id == ""

    def test_non_string_text_attributes_coerced(self):
        opp = Opportunity.model_validate({"id": 7, "category": 12, "title": 3.5})
        assert opp.category == "12"
        assert opp.title == "3.5"

    @pytest.mark.parametrize("raw", ["", "garbage", "2026-13-45", None, [1, 2]])
    def test_unreadable_date_becomes_none(self, raw):
        opp = Opportunity.model_validate({"id": "x", "postedDate": raw})
        assert opp.posted_date is None

    def test_unreadable_created_at_becomes_none(self):
        assert Opportunity.model_validate({"id": "x", "created_at": "yesterday"}).posted_date is None

    def test_frozen(self):
        opp = Opportunity(id="x")
        with pytest.raises(ValidationError):
            opp.category = "Hackathons"


class TestOpportunityScore:
    def test_construction_and_dump(self):
        factors = ScoreFactors(
            category_match=0.8,
            location_match=0.8,
            field_match=0.7,
            recency=1.0,
            popularity=0.5,
        )
        score = OpportunityScore(opportunity_id="o1", score=0.785, factors=factors)
        dumped = score.model_dump()
        assert dumped["opportunity_id"] == "o1"
        assert dumped["factors"]["field_match"] == 0.7
