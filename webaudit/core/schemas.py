"""
Result models produced by the audit engine.

Python attributes are snake_case; JSON payloads use the camelCase aliases
expected by API consumers (``overallScore``, ``maxScore``, …).
"""

from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

Status = Literal["pass", "warning", "fail"]
Priority = Literal["high", "medium", "low"]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13)."""
    return math.floor(value + 0.5)


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Rule check results ────────────────────────────────────────────────────────

class AuditItem(_Schema):
    """One pass/warning/fail check result.  Never mutated after creation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    label: str
    status: Status
    detail: str
    recommendation: str | None = None


class AuditCategory(_Schema):
    name: str
    icon: str
    score: float = Field(ge=0)
    max_score: float = Field(gt=0)
    items: list[AuditItem] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def clamp_score(cls, data: Any) -> Any:
        """Clamp ``score`` into ``[0, max_score]``."""
        if isinstance(data, dict):
            max_score = data.get("max_score", data.get("maxScore"))
            score = data.get("score")
            if score is not None and max_score is not None:
                data = dict(data)
                data["score"] = max(0.0, min(float(score), float(max_score)))
        return data

    @property
    def percent(self) -> int:
        return round_half_up(self.score / self.max_score * 100)

    def count(self, status: Status) -> int:
        return sum(1 for item in self.items if item.status == status)


# ── Keyword & link profile ────────────────────────────────────────────────────

class KeywordSuggestion(_Schema):
    keyword: str
    reason: str
    priority: Priority


class KeywordAnalysis(_Schema):
    found_keywords: list[str] = Field(default_factory=list, max_length=8)
    suggested_keywords: list[KeywordSuggestion] = Field(default_factory=list, max_length=8)
    density: str = "Unable to calculate"


class BacklinkInsight(_Schema):
    """Advisory link-profile finding; carries no points."""

    label: str
    status: Status
    detail: str
    recommendation: str | None = None


# ── Full result ───────────────────────────────────────────────────────────────

class AuditResult(_Schema):
    url: str
    timestamp: str
    overall_score: int = Field(ge=0, le=100)
    grade: str
    grade_label: str
    grade_summary: str
    categories: list[AuditCategory]
    summary: str
    top_recommendations: list[str] = Field(default_factory=list, max_length=8)
    keyword_analysis: KeywordAnalysis = Field(default_factory=KeywordAnalysis)
    backlink_insights: list[BacklinkInsight] = Field(default_factory=list)

    def iter_items(self):
        """Yield ``(category, item)`` pairs in declaration order."""
        for category in self.categories:
            for item in category.items:
                yield category, item

    def count(self, status: Status) -> int:
        return sum(category.count(status) for category in self.categories)

    def to_payload(self) -> dict[str, Any]:
        """Serialise to the camelCase JSON body returned by the API."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ── Narrative enrichment ──────────────────────────────────────────────────────

class BusinessSummaryItem(_Schema):
    title: str
    detail: str


class AIAuditInsights(_Schema):
    business_impact: dict[str, str]
    business_summary_items: list[BusinessSummaryItem] = Field(min_length=1)
    quick_wins: str
    top_recommendations_intro: str


class InsightsOutcome(BaseModel):
    """Which path produced the narrative.  Consumers only read ``insights``."""

    source: Literal["model", "fallback"]
    insights: AIAuditInsights
