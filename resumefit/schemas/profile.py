from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

SeniorityLevel = Literal["junior", "mid", "senior", "lead", "executive", "unspecified"]

_SENIORITY_LEVELS = {"junior", "mid", "senior", "lead", "executive", "unspecified"}


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _dedupe_casefold(values: list[Any]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for value in values:
        text = str(value or "").strip()
        key = text.lower()
        if not text or key in seen:
            continue
        seen.add(key)
        output.append(text)
    return output


class ExperienceEntry(BaseModel):
    title: str | None = None
    company: str | None = None
    start: str | None = None
    end: str | None = None
    bullets: list[str] = Field(default_factory=list)

    @field_validator("bullets", mode="before")
    @classmethod
    def _coerce_bullets(cls, value: Any) -> list[str]:
        return [str(item).strip() for item in _as_list(value) if str(item or "").strip()]


class EducationEntry(BaseModel):
    school: str | None = None
    degree: str | None = None
    field: str | None = None
    start: str | None = None
    end: str | None = None


class ProjectEntry(BaseModel):
    name: str | None = None
    bullets: list[str] = Field(default_factory=list)

    @field_validator("bullets", mode="before")
    @classmethod
    def _coerce_bullets(cls, value: Any) -> list[str]:
        return [str(item).strip() for item in _as_list(value) if str(item or "").strip()]


class CandidateProfile(BaseModel):
    name: str | None = None
    headline: str | None = None
    summary: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    links: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)

    @field_validator("links", "skills", mode="before")
    @classmethod
    def _coerce_string_lists(cls, value: Any) -> list[str]:
        return _dedupe_casefold(_as_list(value))

    @field_validator("experience", "education", "projects", mode="before")
    @classmethod
    def _coerce_entry_lists(cls, value: Any) -> list[Any]:
        return [item for item in _as_list(value) if item is not None]


class JobProfile(BaseModel):
    title: str = ""
    company: str | None = None
    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    seniority_level: SeniorityLevel = "unspecified"

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value: Any) -> str:
        return str(value or "").strip()

    @field_validator("required_skills", "preferred_skills", "keywords", mode="before")
    @classmethod
    def _coerce_sets(cls, value: Any) -> list[str]:
        return _dedupe_casefold(_as_list(value))

    @field_validator("responsibilities", mode="before")
    @classmethod
    def _coerce_responsibilities(cls, value: Any) -> list[str]:
        return [str(item).strip() for item in _as_list(value) if str(item or "").strip()]

    @field_validator("seniority_level", mode="before")
    @classmethod
    def _coerce_seniority(cls, value: Any) -> str:
        normalized = str(value or "").strip().lower()
        if normalized in _SENIORITY_LEVELS:
            return normalized
        return "unspecified"
