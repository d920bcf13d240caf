from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .profile import CandidateProfile, JobProfile
from .scoring import ScoreResult


class ResumeParseRequest(BaseModel):
    text: str = Field(default="", max_length=200000)
    hidden_links: list[str] = Field(default_factory=list, max_length=200)


class JobParseRequest(BaseModel):
    text: str = Field(default="", max_length=200000)


class QuickMatchRequest(BaseModel):
    resume_text: str = Field(default="", max_length=200000)
    jd_text: str = Field(default="", max_length=200000)


class ScoreRequest(BaseModel):
    resume_text: str = Field(default="", max_length=200000)
    jd_text: str = Field(default="", max_length=200000)
    hidden_links: list[str] = Field(default_factory=list, max_length=200)


class ScoreResponse(BaseModel):
    candidate: CandidateProfile
    job: JobProfile
    radar: ScoreResult
    input_warnings: list[str] = Field(default_factory=list)


class PipelineRequest(BaseModel):
    resume_text: str = Field(default="", max_length=200000)
    jd_text: str = Field(default="", max_length=200000)
    hidden_links: list[str] = Field(default_factory=list, max_length=200)
    draft: dict[str, Any] | None = None
