from __future__ import annotations

import logging
import re

from resumefit.schemas import KeywordChecklistItem, QualityIssue, QualityResult, TailoredDraft, TailoredResume
from resumefit.scoring.terms import contains_term, find_dictionary_terms

from .phrases import (
    ADD_SKILLS_RE,
    CONTRADICTION_PATTERNS,
    FORBIDDEN_REPLACEMENTS,
    FORBIDDEN_SENTENCES,
    GENERIC_ABSENCE_TERMS,
)

logger = logging.getLogger(__name__)

FOUND_SECTION = "Tailored resume"

_COMPACT_RE = re.compile(r"[/.\-\s]")
_QUOTED_RE = re.compile(r"[\"“”]([^\"“”]+)[\"“”]")
_LEADING_FILLER_RE = re.compile(r"^(?:any|a|an|the|clear|direct|explicit|strong|specific|hands-on)\s+", re.IGNORECASE)
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")


def _resume_parts(resume: TailoredResume) -> list[str]:
    parts = [resume.name, resume.headline, resume.summary]
    for group in resume.skills:
        parts.append(group.category)
        parts.extend(group.items)
    for entry in resume.experience:
        parts.extend([entry.company, entry.title])
        parts.extend(entry.bullets)
    parts.extend(f"{item.degree} {item.school}" for item in resume.education)
    for project in resume.projects:
        parts.append(project.name)
        parts.extend(project.bullets)
    parts.extend(resume.certifications)
    return [part for part in parts if part]


def resume_text_for_scoring(resume: TailoredResume) -> str:
    """Lowercased single-string view of the tailored resume used for keyword checks."""
    return " ".join(_resume_parts(resume)).lower()


def keyword_in_text(keyword: str, text: str) -> bool:
    """Literal (case-insensitive) presence, tolerant of punctuation variants such as CI/CD vs CICD."""
    needle = keyword.strip().lower()
    if not needle:
        return False
    haystack = text.lower()
    if needle in haystack:
        return True
    compact = _COMPACT_RE.sub("", needle)
    return bool(compact) and compact in _COMPACT_RE.sub("", haystack)


def claimed_term_present(term: str, raw_text: str) -> bool:
    """True when a term the draft calls absent is actually in the resume."""
    cleaned = _LEADING_FILLER_RE.sub("", term.strip().strip(".,;:")).strip()
    if not cleaned or cleaned.lower() in GENERIC_ABSENCE_TERMS:
        return False
    if keyword_in_text(cleaned, raw_text):
        return True
    known = find_dictionary_terms(cleaned)
    return bool(known) and all(contains_term(raw_text, name) for name in known)


def claims_present_term(line: str, raw_text: str) -> bool:
    for pattern in CONTRADICTION_PATTERNS:
        match = pattern.search(line)
        if match and claimed_term_present(match.group("term"), raw_text):
            return True
    return False


def fix_tone(text: str) -> str:
    """Swap discouraging wording for supportive phrasing; drop sentences with no safe rewrite."""
    result = text
    if any(pattern.search(text) for pattern in FORBIDDEN_SENTENCES):
        result = " ".join(
            sentence
            for sentence in _SENTENCE_SPLIT_RE.split(text.strip())
            if not any(pattern.search(sentence) for pattern in FORBIDDEN_SENTENCES)
        )
    for pattern, replacement in FORBIDDEN_REPLACEMENTS:
        result = pattern.sub(replacement, result)
    if result != text and result and result[0].islower() and text.strip()[:1].isupper():
        result = result[0].upper() + result[1:]
    return result


def _flip_checklist(
    items: list[KeywordChecklistItem], text: str, issues: list[QualityIssue]
) -> list[KeywordChecklistItem]:
    flipped: list[str] = []
    output: list[KeywordChecklistItem] = []
    for item in items:
        if not item.found and keyword_in_text(item.keyword, text):
            item = item.model_copy(update={"found": True, "section": FOUND_SECTION, "suggestion": None})
            flipped.append(item.keyword)
        output.append(item)
    if flipped:
        issues.append(
            QualityIssue(
                type="checklist_flip",
                location="keyword_checklist",
                detail=f"Marked {len(flipped)} keyword(s) as found in the tailored resume: {', '.join(flipped)}",
            )
        )
    return output


def _gap_contradicted(gap: str, raw_text: str, skills: list[str]) -> bool:
    for quoted in _QUOTED_RE.findall(gap):
        if keyword_in_text(quoted, raw_text):
            return True
    if any(len(skill) >= 3 and contains_term(gap, skill) for skill in skills):
        return True
    return claims_present_term(gap, raw_text)


def _next_action_done(action: str, text: str) -> bool:
    match = ADD_SKILLS_RE.search(action)
    if not match:
        return False
    items = [item.strip(" .") for item in re.split(r"[,;]|\band\b", match.group("items"))]
    items = [item for item in items if item]
    return bool(items) and all(keyword_in_text(item, text) for item in items)


def _toned(values: list[str], location: str, issues: list[QualityIssue]) -> list[str]:
    output: list[str] = []
    for index, value in enumerate(values):
        toned = fix_tone(value)
        if toned != value:
            issues.append(
                QualityIssue(type="forbidden_phrase", location=f"{location}[{index}]", detail="Rephrased discouraging wording")
            )
        if toned.strip():
            output.append(toned)
    return output


def consistency_with_issues(draft: TailoredDraft) -> QualityResult:
    issues: list[QualityIssue] = []
    resume = draft.tailored_resume
    raw_text = " ".join(_resume_parts(resume))
    text = raw_text.lower()
    skills = [item for group in resume.skills for item in group.items]

    checklist = _flip_checklist(draft.keyword_checklist, text, issues)

    gaps = [gap for gap in draft.experience_gaps if not _gap_contradicted(gap.gap, raw_text, skills)]
    if len(gaps) < len(draft.experience_gaps):
        issues.append(
            QualityIssue(
                type="contradiction",
                location="experience_gaps",
                detail=f"Removed {len(draft.experience_gaps) - len(gaps)} gap(s) contradicted by the tailored resume",
            )
        )

    feedback = [line for line in draft.recruiter_feedback if not claims_present_term(line, raw_text)]
    if len(feedback) < len(draft.recruiter_feedback):
        issues.append(
            QualityIssue(
                type="contradiction",
                location="recruiter_feedback",
                detail=f"Removed {len(draft.recruiter_feedback) - len(feedback)} contradictory feedback line(s)",
            )
        )

    actions = [action for action in draft.next_actions if not _next_action_done(action, text)]
    if len(actions) < len(draft.next_actions):
        issues.append(
            QualityIssue(
                type="contradiction",
                location="next_actions",
                detail=f"Removed {len(draft.next_actions) - len(actions)} action(s) already done in the tailored resume",
            )
        )

    toned_gaps = []
    for index, gap in enumerate(gaps):
        toned = gap.model_copy(update={"gap": fix_tone(gap.gap), "suggestion": fix_tone(gap.suggestion)})
        if toned != gap:
            issues.append(
                QualityIssue(type="forbidden_phrase", location=f"experience_gaps[{index}]", detail="Rephrased discouraging wording")
            )
        if toned.gap.strip():
            toned_gaps.append(toned)

    summary = fix_tone(draft.summary)
    if summary != draft.summary:
        issues.append(QualityIssue(type="forbidden_phrase", location="summary", detail="Rephrased discouraging wording"))

    output = draft.model_copy(
        update={
            "summary": summary,
            "keyword_checklist": checklist,
            "experience_gaps": toned_gaps,
            "recruiter_feedback": _toned(feedback, "recruiter_feedback", issues),
            "next_actions": _toned(actions, "next_actions", issues),
        },
        deep=True,
    )
    logger.debug("consistency_complete issues=%s", len(issues))
    return QualityResult(output=output, issues=issues, passed=not issues)


def validate_consistency(draft: TailoredDraft) -> TailoredDraft:
    """Reconcile checklist, feedback, gaps and actions with what the tailored resume actually says."""
    return consistency_with_issues(draft).output
