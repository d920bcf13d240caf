from __future__ import annotations

import logging
import re

from resumefit.core.config import get_scoring_value
from resumefit.schemas import QualityIssue, QualityResult, SkillGroup, TailoredDraft

from .phrases import BANNED_PHRASES, DANGLING_ENDINGS

logger = logging.getLogger(__name__)

_BANNED_PATTERNS = tuple(
    (phrase, re.compile(rf",?\s*{re.escape(phrase)}", re.IGNORECASE)) for phrase in BANNED_PHRASES
)
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,;:!?])")
_REPEATED_PUNCT_RE = re.compile(r"([.,;:])(?:\s*[.,;:])+")
_LEADING_PUNCT_RE = re.compile(r"^[\s.,;:]+")


def _tidy(text: str, original: str) -> str:
    cleaned = re.sub(r"\s+", " ", text)
    cleaned = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", cleaned)
    cleaned = _REPEATED_PUNCT_RE.sub(r"\1", cleaned)
    cleaned = _LEADING_PUNCT_RE.sub("", cleaned).strip()
    if cleaned and cleaned[0].islower() and original.strip()[:1].isupper():
        cleaned = cleaned[0].upper() + cleaned[1:]
    return cleaned


def strip_banned_phrases(text: str) -> tuple[str, list[str]]:
    """Remove every banned phrase from text; returns the cleaned text and the phrases removed."""
    removed: list[str] = []
    cleaned = text
    for phrase, pattern in _BANNED_PATTERNS:
        if pattern.search(cleaned):
            cleaned = pattern.sub("", cleaned)
            removed.append(phrase)
    if not removed:
        return text, removed
    return _tidy(cleaned, text), removed


def fix_dangling_ending(bullet: str) -> str:
    for pattern in DANGLING_ENDINGS:
        if pattern.search(bullet):
            return _tidy(pattern.sub(".", bullet), bullet)
    return bullet


def is_sentence_like_skill(item: str) -> bool:
    max_words = int(get_scoring_value("quality.skills.max_item_words", 6))
    max_chars = int(get_scoring_value("quality.skills.max_item_chars", 50))
    stripped = item.strip()
    return len(stripped) > max_chars or len(stripped.split()) > max_words


class _Gate:
    """Accumulates issues while rewriting one draft."""

    def __init__(self) -> None:
        self.issues: list[QualityIssue] = []

    def record(self, issue_type: str, location: str, detail: str) -> None:
        self.issues.append(QualityIssue(type=issue_type, location=location, detail=detail))

    def text(self, value: str, location: str) -> str:
        cleaned, removed = strip_banned_phrases(value)
        for phrase in removed:
            self.record("banned_phrase", location, f'Removed banned phrase: "{phrase}"')
        return cleaned

    def lines(self, values: list[str], location: str) -> list[str]:
        output: list[str] = []
        for index, value in enumerate(values):
            cleaned = self.text(value, f"{location}[{index}]")
            if cleaned:
                output.append(cleaned)
            else:
                self.record("empty_bullet", f"{location}[{index}]", "Dropped line left empty after cleanup")
        return output

    def bullets(self, values: list[str], location: str) -> list[str]:
        output: list[str] = []
        for index, value in enumerate(values):
            spot = f"{location}.bullets[{index}]"
            cleaned = self.text(value, spot)
            fixed = fix_dangling_ending(cleaned)
            if fixed != cleaned:
                self.record("dangling_ending", spot, f'Fixed dangling ending in: "{cleaned[-40:]}"')
            if fixed.strip(" .,;:"):
                output.append(fixed)
            else:
                self.record("empty_bullet", spot, "Dropped bullet left empty after cleanup")
        return output

    def skills(self, draft: TailoredDraft) -> list[SkillGroup]:
        groups: list[SkillGroup] = []
        for group in draft.tailored_resume.skills:
            items: list[str] = []
            for item in group.items:
                if not item.strip():
                    self.record("empty_skill", f"skills.{group.category}", "Dropped blank skill item")
                    continue
                if is_sentence_like_skill(item):
                    self.record("skill_sentence", f"skills.{group.category}", f'Removed sentence from skills: "{item.strip()[:40]}"')
                    continue
                # Kept items are passed through verbatim.
                items.append(item)
            groups.append(group.model_copy(update={"items": items}))
        return groups


def run_quality_gate(draft: TailoredDraft) -> QualityResult:
    """Strip filler phrases, repair dangling bullets and drop sentence-length skill items.

    Every change is reported as a QualityIssue; a draft that needed no fixes passes.
    """
    gate = _Gate()
    resume = draft.tailored_resume

    experience = [
        entry.model_copy(update={"bullets": gate.bullets(entry.bullets, f"experience[{index}]")})
        for index, entry in enumerate(resume.experience)
    ]
    projects = [
        project.model_copy(update={"bullets": gate.bullets(project.bullets, f"projects[{index}]")})
        for index, project in enumerate(resume.projects)
    ]
    tailored = resume.model_copy(
        update={
            "headline": gate.text(resume.headline, "tailored_resume.headline"),
            "summary": gate.text(resume.summary, "tailored_resume.summary"),
            "skills": gate.skills(draft),
            "experience": experience,
            "projects": projects,
        }
    )

    rewrites = [
        rewrite.model_copy(update={"rewritten": gate.text(rewrite.rewritten, f"bullet_rewrites[{index}]")})
        for index, rewrite in enumerate(draft.bullet_rewrites)
    ]
    gaps = [
        gap.model_copy(update={"suggestion": gate.text(gap.suggestion, f"experience_gaps[{index}].suggestion")})
        for index, gap in enumerate(draft.experience_gaps)
    ]

    output = draft.model_copy(
        update={
            "summary": gate.text(draft.summary, "summary"),
            "tailored_resume": tailored,
            "cover_letter": draft.cover_letter.model_copy(
                update={"paragraphs": gate.lines(draft.cover_letter.paragraphs, "cover_letter.paragraphs")}
            ),
            "recruiter_feedback": gate.lines(draft.recruiter_feedback, "recruiter_feedback"),
            "bullet_rewrites": rewrites,
            "experience_gaps": gaps,
            "next_actions": gate.lines(draft.next_actions, "next_actions"),
        },
        deep=True,
    )
    logger.debug("quality_gate_complete issues=%s", len(gate.issues))
    return QualityResult(output=output, issues=gate.issues, passed=not gate.issues)
