from __future__ import annotations

import logging
import re

from resumefit.schemas import JobProfile
from resumefit.scoring.terms import find_dictionary_terms

from .utils import is_bullet_like, is_likely_title, normalize_line, normalize_text, strip_bullet_prefix

logger = logging.getLogger(__name__)

MAX_HEADER_CHARS = 80
MAX_PLAIN_ITEM_CHARS = 160

_PREFERRED_HEADER_RE = re.compile(r"\b(nice to have|preferred|bonus|ideal|plus|desired|desirable|optional)\b", re.IGNORECASE)
_REQUIRED_HEADER_RE = re.compile(
    r"\b(requirements?|qualifications?|must have|required|essential|what you.?ll need|what we.?re looking for|minimum)\b",
    re.IGNORECASE,
)
_RESPONSIBILITY_HEADER_RE = re.compile(
    r"\b(responsibilities|what you.?ll do|the role|role|duties|key tasks|day to day)\b", re.IGNORECASE
)
_OTHER_HEADER_RE = re.compile(
    r"\b(about the|about us|about|overview|benefits|perks|compensation|we offer|salary|how to apply)\b",
    re.IGNORECASE,
)
_TITLE_SUFFIX_RE = re.compile(r"\s*(?:[—–|]|\s-\s|@\s+|\s+at\s+).+$")
_TITLE_COMPANY_RE = re.compile(r"(?:[—–|]|\s-\s|@\s+|\s+at\s+)\s*(.+?)(?:\s*\(|$)")
_ABOUT_RE = re.compile(r"^About\s+(?!(?:the|us|you|this)\b)([A-Z][\w&.' ]+?)\s*:?$", re.MULTILINE)
_AT_COMPANY_RE = re.compile(r"\b(?:at|@)\s+([A-Z][\w&.']*(?: [A-Z][\w&.']*){0,4})")

_SENIORITY_CUES = (
    ("executive", re.compile(r"\b(chief|vp|vice president|head of|director|cto|ceo|cfo|coo)\b", re.IGNORECASE)),
    ("lead", re.compile(r"\b(principal|staff|lead|distinguished|manager)\b", re.IGNORECASE)),
    ("senior", re.compile(r"\b(senior|sr\.?)(?![a-z])", re.IGNORECASE)),
    ("mid", re.compile(r"\b(mid[- ]?level|intermediate)\b", re.IGNORECASE)),
    ("junior", re.compile(r"\b(junior|jr\.?|entry[- ]?level|graduate|associate|intern|trainee)(?![a-z])", re.IGNORECASE)),
)
_YEARS_RE = re.compile(r"\b(\d{1,2})\+?\s*(?:years?|yrs?)\b", re.IGNORECASE)


def _is_header(line: str) -> bool:
    if is_bullet_like(line) or len(line) >= MAX_HEADER_CHARS:
        return False
    head = line.split(":", 1)[0]
    return line.endswith(":") or ":" in line or len(head.split()) <= 6


def _leads_with(pattern: re.Pattern[str], head: str, anywhere: bool) -> bool:
    match = pattern.search(head)
    if match is None:
        return False
    # Without a colon the cue must open the line, so "Python experience required" stays an item.
    return anywhere or len(head[: match.start()].split()) <= 1


def _classify_header(line: str) -> str | None:
    if not _is_header(line):
        return None
    has_colon = ":" in line
    head = line.split(":", 1)[0] if has_colon else line
    for label, pattern in (
        ("preferred", _PREFERRED_HEADER_RE),
        ("required", _REQUIRED_HEADER_RE),
        ("responsibilities", _RESPONSIBILITY_HEADER_RE),
        ("other", _OTHER_HEADER_RE),
    ):
        if _leads_with(pattern, head, has_colon):
            return label
    return None


def _inline_items(line: str) -> list[str]:
    if ":" not in line:
        return []
    tail = line.split(":", 1)[1]
    return [item.strip(" .") for item in re.split(r"[,;]", tail) if len(item.strip(" .")) > 1]


def _sectioned_items(lines: list[str]) -> dict[str, list[str]]:
    buckets: dict[str, list[str]] = {"required": [], "preferred": [], "responsibilities": []}
    current: str | None = None
    for line in lines:
        header = _classify_header(line)
        if header is not None:
            current = header if header in buckets else None
            if current is not None:
                buckets[current].extend(_inline_items(line))
            continue
        if current is None:
            continue
        content = strip_bullet_prefix(line)
        if len(content) <= 3:
            continue
        if is_bullet_like(line) or len(content) <= MAX_PLAIN_ITEM_CHARS:
            buckets[current].append(content)
    return buckets


def extract_title(lines: list[str]) -> str:
    for line in lines[:3]:
        if is_likely_title(line):
            title = _TITLE_SUFFIX_RE.sub("", line)
            return re.sub(r"\s*\(.+\)$", "", title).strip()
    return lines[0][:120] if lines else ""


def extract_company(lines: list[str], text: str) -> str | None:
    if lines:
        match = _TITLE_COMPANY_RE.search(lines[0])
        if match and match.group(1).strip():
            return match.group(1).strip()
    match = _ABOUT_RE.search(text)
    if match:
        return match.group(1).strip()
    match = _AT_COMPANY_RE.search(text)
    if match:
        return match.group(1).strip()
    return None


def detect_seniority(title: str, text: str) -> str:
    for source in (title, text):
        for level, pattern in _SENIORITY_CUES:
            if pattern.search(source or ""):
                return level

    years = [int(value) for value in _YEARS_RE.findall(text or "")]
    if years:
        most = max(years)
        if most >= 5:
            return "senior"
        if most >= 3:
            return "mid"
        return "junior"
    return "unspecified"


def parse_job_description(text: str) -> JobProfile:
    """Build a JobProfile from job-description text. Empty input yields an empty profile."""
    cleaned = normalize_text(text or "")
    lines = [line for line in (normalize_line(raw) for raw in cleaned.split("\n")) if line]
    if not lines:
        return JobProfile()

    buckets = _sectioned_items(lines)
    required, preferred = buckets["required"], buckets["preferred"]
    if not required and not preferred:
        required = [strip_bullet_prefix(line) for line in lines if is_bullet_like(line) and len(strip_bullet_prefix(line)) > 3]

    title = extract_title(lines)
    profile = JobProfile(
        title=title,
        company=extract_company(lines, cleaned),
        required_skills=required,
        preferred_skills=preferred,
        responsibilities=buckets["responsibilities"],
        keywords=find_dictionary_terms(cleaned),
        seniority_level=detect_seniority(title, cleaned),
    )
    logger.debug(
        "job_parsed required=%s preferred=%s keywords=%s seniority=%s",
        len(profile.required_skills),
        len(profile.preferred_skills),
        len(profile.keywords),
        profile.seniority_level,
    )
    return profile
