"""
Unit tests for webaudit/core/schemas.py — result models and JSON payload.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from webaudit.core.schemas import (
    AIAuditInsights,
    AuditCategory,
    AuditItem,
    KeywordAnalysis,
    round_half_up,
)


class TestAuditItem:
    def test_frozen(self):
        item = AuditItem(label="Favicon", status="pass", detail="ok")
        with pytest.raises(ValidationError):
            item.status = "fail"

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            AuditItem(label="Favicon", status="maybe", detail="?")


class TestKeywordAnalysis:
    def test_at_most_eight_found_keywords(self):
        with pytest.raises(ValidationError):
            KeywordAnalysis(found_keywords=[f"k{i}" for i in range(9)])


class TestAIAuditInsights:
    def test_accepts_camel_case(self):
        m = AIAuditInsights.model_validate({
            "businessImpact": {},
            "businessSummaryItems": [{"title": "t", "detail": "d"}],
            "quickWins": "q",
            "topRecommendationsIntro": "i",
        })
        assert m.quick_wins == "q"

    def test_summary_items_required(self):
        with pytest.raises(ValidationError):
            AIAuditInsights(
                business_impact={}, business_summary_items=[],
                quick_wins="q", top_recommendations_intro="i",
            )


class TestAuditResultPayload:
    def test_camel_case_keys(self, bare_audit):
        payload = bare_audit.to_payload()
        assert {
            "url", "timestamp", "overallScore", "grade", "gradeLabel", "gradeSummary",
            "categories", "summary", "topRecommendations", "keywordAnalysis",
            "backlinkInsights",
        } <= set(payload)
        assert "maxScore" in payload["categories"][0]
        assert "foundKeywords" in payload["keywordAnalysis"]
        assert "suggestedKeywords" in payload["keywordAnalysis"]

    def test_absent_recommendation_omitted(self, ideal_audit):
        item = ideal_audit.to_payload()["categories"][0]["items"][0]
        assert item["status"] == "pass"
        assert "recommendation" not in item

    def test_counts(self, bare_audit):
        total = sum(len(c.items) for c in bare_audit.categories)
        assert (
            bare_audit.count("pass") + bare_audit.count("warning") + bare_audit.count("fail")
        ) == total
        assert len(list(bare_audit.iter_items())) == total

    def test_overall_score_bounds(self, bare_audit):
        with pytest.raises(ValidationError):
            bare_audit.model_validate({**bare_audit.model_dump(), "overall_score": 101})


class TestRounding:
    @pytest.mark.parametrize("value,expected", [(12.5, 13), (62.5, 63), (0.5, 1), (2.5, 3), (2.49, 2)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    @pytest.mark.parametrize("score,percent", [(1, 13), (5, 63), (7, 88)])
    def test_category_percent(self, score, percent):
        cat = AuditCategory(name="Content Quality", icon="fileText", score=score, max_score=8)
        assert cat.percent == percent

    def test_score_clamped_to_max(self):
        cat = AuditCategory(name="SEO", icon="search", score=20, max_score=14)
        assert cat.score == 14
        assert cat.percent == 100
