"""Unit tests for the benefits catalog."""

from __future__ import annotations


class TestResolveBenefit:
    """Test benefit lookup."""

    def test_by_id(self):
        from job_filter.scoring.benefits import resolve_benefit

        assert resolve_benefit("health_medical").label == "Medical insurance"

    def test_by_label(self):
        """Labels match case- and punctuation-insensitively."""
        from job_filter.scoring.benefits import resolve_benefit

        assert resolve_benefit("401(k) Match").id == "financial_401k_match"

    def test_by_keyword(self):
        from job_filter.scoring.benefits import resolve_benefit

        assert resolve_benefit("Generous parental leave").id == "timeoff_parental"

    def test_unknown(self):
        from job_filter.scoring.benefits import benefit_label, resolve_benefit

        assert resolve_benefit("Free snacks") is None
        assert benefit_label(" Free snacks ") == "Free snacks"


class TestJobMentionsBenefit:
    """Test benefit detection in job text."""

    def test_detects_catalog_benefit(self):
        from job_filter.scoring.benefits import job_mentions_benefit

        text = "We offer medical, dental and a 401(k) match."

        assert job_mentions_benefit(text, "health_medical") is True
        assert job_mentions_benefit(text, "financial_401k_match") is True
        assert job_mentions_benefit(text, "timeoff_parental") is False

    def test_word_boundaries(self):
        """'stocked kitchen' is not stock compensation."""
        from job_filter.scoring.benefits import job_mentions_benefit

        assert job_mentions_benefit("A stocked kitchen", "financial_equity") is False

    def test_unknown_benefit_searched_verbatim(self):
        from job_filter.scoring.benefits import job_mentions_benefit

        assert job_mentions_benefit("Includes a sabbatical after 5 years", "sabbatical") is True

    def test_count_benefit_signals(self):
        """Each distinct signal counts once."""
        from job_filter.scoring.benefits import count_benefit_signals

        assert count_benefit_signals("medical, dental, equity and an annual bonus") == 4
        assert count_benefit_signals("") == 0
