from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

GapSeverity = Literal["low", "medium", "high"]


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        return []
    return [_text(item) for item in value if _text(item).strip()]


def _mapping_list(value: Any) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, (dict, BaseModel))]


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "found"}
    return False


class SkillGroup(BaseModel):
    category: str = ""
    items: list[str] = Field(default_factory=list)

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> str:
        return _text(value)

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> list[str]:
        return _text_list(value)


class TailoredExperience(BaseModel):
    company: str = ""
    title: str = ""
    period: str = ""
    bullets: list[str] = Field(default_factory=list)

    @field_validator("company", "title", "period", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("bullets", mode="before")
    @classmethod
    def _coerce_bullets(cls, value: Any) -> list[str]:
        return _text_list(value)


class TailoredEducation(BaseModel):
    school: str = ""
    degree: str = ""
    year: str | None = None

    @field_validator("school", "degree", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("year", mode="before")
    @classmethod
    def _coerce_year(cls, value: Any) -> str | None:
        return _text(value) or None


class TailoredProject(BaseModel):
    name: str = ""
    bullets: list[str] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return _text(value)

    @field_validator("bullets", mode="before")
    @classmethod
    def _coerce_bullets(cls, value: Any) -> list[str]:
        return _text_list(value)


class TailoredResume(BaseModel):
    name: str = ""
    headline: str = ""
    summary: str = ""
    skills: list[SkillGroup] = Field(default_factory=list)
    experience: list[TailoredExperience] = Field(default_factory=list)
    education: list[TailoredEducation] = Field(default_factory=list)
    projects: list[TailoredProject] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    links: list[str] = Field(default_factory=list)

    @field_validator("name", "headline", "summary", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("skills", "experience", "education", "projects", mode="before")
    @classmethod
    def _coerce_sections(cls, value: Any) -> list[Any]:
        return _mapping_list(value)

    @field_validator("certifications", "links", mode="before")
    @classmethod
    def _coerce_string_lists(cls, value: Any) -> list[str]:
        return _text_list(value)


class CoverLetter(BaseModel):
    paragraphs: list[str] = Field(default_factory=list)

    @field_validator("paragraphs", mode="before")
    @classmethod
    def _coerce_paragraphs(cls, value: Any) -> list[str]:
        return _text_list(value)


class KeywordChecklistItem(BaseModel):
    keyword: str = ""
    found: bool = False
    section: str | None = None
    suggestion: str | None = None

    @field_validator("keyword", mode="before")
    @classmethod
    def _coerce_keyword(cls, value: Any) -> str:
        return _text(value)

    @field_validator("found", mode="before")
    @classmethod
    def _coerce_found(cls, value: Any) -> bool:
        return _as_bool(value)

    @field_validator("section", "suggestion", mode="before")
    @classmethod
    def _coerce_optional(cls, value: Any) -> str | None:
        return _text(value) or None


class BulletRewrite(BaseModel):
    original: str = ""
    rewritten: str = ""
    notes: str = ""
    section: str = ""

    @field_validator("original", "rewritten", "notes", "section", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)


class ExperienceGap(BaseModel):
    gap: str = ""
    suggestion: str = ""
    severity: GapSeverity = "medium"

    @field_validator("gap", "suggestion", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value: Any) -> str:
        normalized = _text(value).strip().lower()
        return normalized if normalized in {"low", "medium", "high"} else "medium"


class TailoredDraft(BaseModel):
    summary: str = ""
    tailored_resume: TailoredResume = Field(default_factory=TailoredResume)
    cover_letter: CoverLetter = Field(default_factory=CoverLetter)
    keyword_checklist: list[KeywordChecklistItem] = Field(default_factory=list)
    recruiter_feedback: list[str] = Field(default_factory=list)
    bullet_rewrites: list[BulletRewrite] = Field(default_factory=list)
    experience_gaps: list[ExperienceGap] = Field(default_factory=list)
    next_actions: list[str] = Field(default_factory=list)

    @field_validator("summary", mode="before")
    @classmethod
    def _coerce_summary(cls, value: Any) -> str:
        return _text(value)

    @field_validator("tailored_resume", "cover_letter", mode="before")
    @classmethod
    def _coerce_nested(cls, value: Any) -> Any:
        if isinstance(value, (dict, BaseModel)):
            return value
        return {}

    @field_validator("keyword_checklist", "bullet_rewrites", "experience_gaps", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> list[Any]:
        return _mapping_list(value)

    @field_validator("recruiter_feedback", "next_actions", mode="before")
    @classmethod
    def _coerce_lines(cls, value: Any) -> list[str]:
        return _text_list(value)


def coerce_draft(raw: Any) -> TailoredDraft:
    """Build a TailoredDraft from an untrusted generator payload without raising.

    Fields that fail validation on their own are dropped and fall back to defaults.
    """
    if isinstance(raw, TailoredDraft):
        return raw.model_copy(deep=True)
    if not isinstance(raw, dict):
        return TailoredDraft()
    try:
        return TailoredDraft.model_validate(raw)
    except ValidationError as exc:
        logger.warning("draft_coercion_partial errors=%s", exc.error_count())

    salvaged: dict[str, Any] = {}
    for name in TailoredDraft.model_fields:
        if name not in raw:
            continue
        try:
            TailoredDraft.model_validate({name: raw[name]})
        except ValidationError:
            continue
        salvaged[name] = raw[name]
    return TailoredDraft.model_validate(salvaged)
