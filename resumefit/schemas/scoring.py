from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

RadarLabel = Literal["Strong Match", "Good Match", "Moderate Match"]
RadarCategory = Literal[
    "hard_skills",
    "soft_skills",
    "measurable_results",
    "keyword_optimization",
    "formatting_best_practices",
]
QuickMatchLabel = Literal["Strong", "Good", "Fair", "Low"]


class RadarBreakdown(BaseModel):
    hard_skills: int = Field(ge=0, le=100)
    soft_skills: int = Field(ge=0, le=100)
    measurable_results: int = Field(ge=0, le=100)
    keyword_optimization: int = Field(ge=0, le=100)
    formatting_best_practices: int = Field(ge=0, le=100)


class BeforeAfter(BaseModel):
    before: str
    after: str


class Blocker(BaseModel):
    category: RadarCategory
    title: str
    why: str
    how: str
    before_after: BeforeAfter | None = None


class KeywordCluster(BaseModel):
    cluster: str
    keywords: list[str] = Field(default_factory=list)


class Diagnostics(BaseModel):
    missing_metrics: list[str] = Field(default_factory=list)
    weak_verbs: list[str] = Field(default_factory=list)
    missing_keyword_clusters: list[KeywordCluster] = Field(default_factory=list)


class ScoreResult(BaseModel):
    score: int = Field(ge=0, le=100)
    label: RadarLabel
    breakdown: RadarBreakdown
    blockers: list[Blocker] = Field(default_factory=list)
    diagnostics: Diagnostics = Field(default_factory=Diagnostics)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class RelevanceResult(BaseModel):
    relevant: bool
    score: int = Field(ge=0, le=100)
    reason: str | None = None


class QuickMatchResult(BaseModel):
    score: int = Field(ge=0, le=100)
    label: QuickMatchLabel
    needs_more_input: bool = False
