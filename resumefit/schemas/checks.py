from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ResumeDetection(BaseModel):
    is_likely_resume: bool
    confidence: Literal["high", "medium", "low"]
    signals_found: int = 0
    message: str | None = None


class JobDescriptionCheck(BaseModel):
    valid: bool
    reason: str | None = None
    warnings: list[str] = Field(default_factory=list)
