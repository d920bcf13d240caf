from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .draft import TailoredDraft
from .scoring import ScoreResult

IssueType = Literal[
    "banned_phrase",
    "dangling_ending",
    "empty_bullet",
    "skill_sentence",
    "empty_skill",
    "duplicate_bullet",
    "category_cap",
    "cover_letter",
    "checklist_flip",
    "contradiction",
    "forbidden_phrase",
]


class QualityIssue(BaseModel):
    type: IssueType
    location: str
    detail: str = ""
    auto_fixed: bool = True


class QualityResult(BaseModel):
    output: TailoredDraft
    issues: list[QualityIssue] = Field(default_factory=list)
    passed: bool = True


class BoostResult(BaseModel):
    output: TailoredDraft
    boosted: bool = False
    radar_before: ScoreResult
    radar_after: ScoreResult
    boost_actions: list[str] = Field(default_factory=list)


class PipelineResult(BaseModel):
    output: TailoredDraft
    issues: list[QualityIssue] = Field(default_factory=list)
    boosted: bool = False
    radar_before: ScoreResult
    radar_after: ScoreResult
    boost_actions: list[str] = Field(default_factory=list)
    input_warnings: list[str] = Field(default_factory=list)
