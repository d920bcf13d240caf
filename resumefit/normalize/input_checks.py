from __future__ import annotations

import logging
import re

from resumefit.core.config import get_scoring_value
from resumefit.schemas import JobDescriptionCheck, ResumeDetection

logger = logging.getLogger(__name__)

RESUME_SIGNALS = (
    # section headers
    re.compile(r"\b(experience|work\s+experience|professional\s+experience|employment)\b", re.IGNORECASE),
    re.compile(r"\b(education|academic|university|college|degree|bachelor|master|phd)\b", re.IGNORECASE),
    re.compile(r"\b(skills|technical\s+skills|core\s+competencies|proficiencies)\b", re.IGNORECASE),
    re.compile(r"\b(summary|objective|profile|about\s+me)\b", re.IGNORECASE),
    re.compile(r"\b(certifications?|licenses?|licences?|awards?|honou?rs?)\b", re.IGNORECASE),
    re.compile(r"\b(projects?|portfolio|publications?)\b", re.IGNORECASE),
    # contact details
    re.compile(r"[\w.-]+@[\w.-]+\.\w{2,}"),
    re.compile(r"\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}"),
    re.compile(r"linkedin\.com", re.IGNORECASE),
    # work vocabulary
    re.compile(r"\b(managed|developed|implemented|designed|led|created|built|improved|reduced|increased)\b", re.IGNORECASE),
    re.compile(r"\b(responsible\s+for|collaborated|coordinated|delivered|achieved)\b", re.IGNORECASE),
    re.compile(r"\b(intern|engineer|developer|manager|analyst|designer|consultant|director|associate)\b", re.IGNORECASE),
)

TOO_SHORT_RESUME = "The uploaded content is too short to be a resume."
NOT_A_RESUME = "This doesn't look like a resume. Please upload your resume (PDF, DOCX, or TXT)."

# Only letters and digits count; divider lines such as "----------" are common in real listings.
_REPEATED_CHAR_RE = re.compile(r"(\w)\1{10,}")
_PLACEHOLDER_RE = re.compile(r"lorem\s+ipsum", re.IGNORECASE)
_BULLET_ITEM_RE = re.compile(r"[•·●▪◦\-–—*]\s*.{10,}")
_REQUIREMENT_WORD_RE = re.compile(
    r"\b(skills?|requirements?|qualifications?|experience|responsibilities)\b", re.IGNORECASE
)


def detect_resume(text: str) -> ResumeDetection:
    """Count resume-like signals in text. Three or more is a likely resume, six or more a confident one."""
    text = text or ""
    if len(text) < int(get_scoring_value("inputs.resume.min_chars", 50)):
        return ResumeDetection(is_likely_resume=False, confidence="low", signals_found=0, message=TOO_SHORT_RESUME)

    found = sum(1 for pattern in RESUME_SIGNALS if pattern.search(text))
    logger.debug("resume_detection signals=%s", found)
    if found >= int(get_scoring_value("inputs.resume.high_signals", 6)):
        return ResumeDetection(is_likely_resume=True, confidence="high", signals_found=found)
    if found >= int(get_scoring_value("inputs.resume.min_signals", 3)):
        return ResumeDetection(is_likely_resume=True, confidence="medium", signals_found=found)
    return ResumeDetection(is_likely_resume=False, confidence="low", signals_found=found, message=NOT_A_RESUME)


def _invalid(reason: str, warnings: list[str]) -> JobDescriptionCheck:
    logger.debug("job_description_rejected reason=%s", reason)
    return JobDescriptionCheck(valid=False, reason=reason, warnings=warnings)


def validate_job_description(text: str) -> JobDescriptionCheck:
    """Reject empty, placeholder or junk job text; anything else passes, possibly with warnings."""
    trimmed = (text or "").strip()
    warnings: list[str] = []

    if not trimmed:
        return _invalid("Job description is empty. Please paste the full job listing.", warnings)
    if _REPEATED_CHAR_RE.search(trimmed):
        return _invalid(
            "Job description appears to contain repeated characters. Please paste a real job listing.", warnings
        )
    if _PLACEHOLDER_RE.search(trimmed):
        return _invalid("Job description appears to be placeholder text. Please paste a real job listing.", warnings)

    has_requirement_words = bool(_REQUIREMENT_WORD_RE.search(trimmed))
    has_structure = has_requirement_words or bool(_BULLET_ITEM_RE.search(trimmed))
    length = len(trimmed)

    if has_structure and length < int(get_scoring_value("inputs.job.short_chars", 80)):
        warnings.append("Job description is very short. Results may be limited.")
    elif not has_structure and length < int(get_scoring_value("inputs.job.unstructured_min_chars", 200)):
        return _invalid(
            f"Job description is too short ({length} characters). "
            "Please include the full job listing with responsibilities and requirements.",
            warnings,
        )

    if length < int(get_scoring_value("inputs.job.min_chars", 50)):
        return _invalid("Job description is too short. Please paste the full job listing.", warnings)

    if not has_requirement_words:
        warnings.append("No clear requirements or qualifications section detected. Results may be less targeted.")

    distinct = {word for word in trimmed.lower().split() if len(word) > 2}
    min_distinct = int(get_scoring_value("inputs.job.min_distinct_words", 15))
    if len(distinct) < min_distinct and length > int(get_scoring_value("inputs.job.variety_check_chars", 100)):
        warnings.append("Job description has very low word variety. Please check it is a complete listing.")

    return JobDescriptionCheck(valid=True, warnings=warnings)
