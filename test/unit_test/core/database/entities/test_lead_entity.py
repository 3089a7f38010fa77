"""Unit tests for the Lead entity model."""

from __future__ import annotations

from sqlalchemy import DateTime

from leadsync.core.database.entities import Lead


class TestLead:
    """Tests for Lead entity defaults and tag helpers."""

    def test_defaults(self):
        lead = Lead(name="Hope Center")

        assert lead.has_website is False
        assert lead.status == "NEW"
        assert lead.source == "MANUAL"
        assert lead.lead_score == 0
        assert lead.emails_sent == 0
        assert lead.tags == "[]"

    def test_tags_round_trip(self):
        lead = Lead(name="Hope Center")
        lead.set_tags_list(["score-80", "hot"])

        assert lead.tags == '["score-80", "hot"]'
        assert lead.get_tags_list() == ["score-80", "hot"]

    def test_invalid_tags_read_as_empty(self):
        assert Lead(name="x", tags="not json").get_tags_list() == []
        assert Lead(name="x", tags="").get_tags_list() == []

    def test_repr(self):
        lead = Lead(id="abc", name="Hope Center", lead_score=72)
        assert repr(lead) == "Lead(id=abc, name=Hope Center, status=NEW, score=72)"

    def test_timestamps_are_naive_datetime_columns(self):
        for column in ("created_at", "updated_at", "converted_at", "website_checked_at"):
            column_type = Lead.__table__.c[column].type
            assert isinstance(column_type, DateTime)
            assert column_type.timezone is False
