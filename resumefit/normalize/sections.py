from __future__ import annotations

import re
from typing import Callable

from .utils import has_year_or_present, is_bullet_like, is_contact_or_url, is_likely_title, normalize_line

HEADER_BUCKET = "_header"

SECTION_VOCABULARY = (
    "experience",
    "work experience",
    "professional experience",
    "relevant experience",
    "employment",
    "employment history",
    "work history",
    "career history",
    "education",
    "academic background",
    "skills",
    "technical skills",
    "key skills",
    "core skills",
    "core competencies",
    "competencies",
    "technologies",
    "projects",
    "personal projects",
    "summary",
    "professional summary",
    "career summary",
    "objective",
    "career objective",
    "profile",
    "professional profile",
    "about",
    "about me",
    "certifications",
    "certificates",
    "licenses",
    "awards",
    "achievements",
    "publications",
    "volunteer",
    "volunteering",
    "languages",
    "interests",
    "references",
)

# Experience sub-headings that must stay inside the block they belong to.
SUBHEADING_DENYLIST = frozenset({"roles and responsibilities", "key responsibilities", "responsibilities"})

_VOCABULARY_LOOKUP = {term: term for term in SECTION_VOCABULARY} | {f"{term}s": term for term in SECTION_VOCABULARY}

SectionMap = dict[str, list[str]]
HeaderRule = Callable[[str, str], str | None]


def normalize_header(line: str) -> str:
    lowered = re.sub(r"[^a-z\s]", " ", line.lower())
    return re.sub(r"\s+", " ", lowered).strip()


def _vocabulary_rule(line: str, normalized: str) -> str | None:
    return _VOCABULARY_LOOKUP.get(normalized)


def _markdown_rule(line: str, normalized: str) -> str | None:
    if re.match(r"^#{1,3}\s+\S", line):
        return normalized or None
    return None


def _all_caps_rule(line: str, normalized: str) -> str | None:
    if 2 < len(line) < 40 and re.fullmatch(r"[A-Z\s&/]+", line) and not is_likely_title(line):
        return normalized or None
    return None


def _colon_rule(line: str, normalized: str) -> str | None:
    if line.endswith(":") and len(line) < 35 and not is_likely_title(line):
        return normalized or None
    return None


def _short_alpha_rule(line: str, normalized: str) -> str | None:
    if len(line) >= 30 or len(line.split()) > 3:
        return None
    if not re.fullmatch(r"[A-Za-z][A-Za-z ]*", line) or is_likely_title(line):
        return None
    return normalized or None


HEADER_RULES: tuple[HeaderRule, ...] = (
    _vocabulary_rule,
    _markdown_rule,
    _all_caps_rule,
    _colon_rule,
    _short_alpha_rule,
)


def _never_header(line: str, normalized: str) -> bool:
    if not normalized or normalized in SUBHEADING_DENYLIST:
        return True
    if has_year_or_present(line):
        return True
    return is_bullet_like(line) or is_contact_or_url(line)


def classify_header(line: str) -> str | None:
    """Return the section label for a header line, or None for content."""
    stripped = normalize_line(line)
    normalized = normalize_header(stripped)
    if _never_header(stripped, normalized):
        return None
    for rule in HEADER_RULES:
        label = rule(stripped, normalized)
        if label:
            return label
    return None


def detect_sections(lines: list[str]) -> SectionMap:
    sections: SectionMap = {HEADER_BUCKET: []}
    current = HEADER_BUCKET
    seen_first_line = False

    for raw_line in lines:
        line = normalize_line(raw_line)
        if not line:
            continue
        label = classify_header(line) if seen_first_line else None
        seen_first_line = True
        if label:
            current = label
            sections.setdefault(current, [])
            continue
        sections.setdefault(current, []).append(line)

    return sections


def section_lines(sections: SectionMap, terms: tuple[str, ...], exclude: tuple[str, ...] = ()) -> list[str]:
    """Collect lines from every section whose label contains one of the terms."""
    collected: list[str] = []
    for label, lines in sections.items():
        if label == HEADER_BUCKET:
            continue
        if any(term in label for term in terms) and not any(term in label for term in exclude):
            collected.extend(lines)
    return collected
