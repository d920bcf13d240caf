from __future__ import annotations

import re

from resumefit.schemas import EducationEntry, ProjectEntry

from .sections import SectionMap, section_lines
from .utils import SEPARATOR, extract_dates, is_bullet_like, strip_bullet_prefix, strip_dates

EDUCATION_SECTION_TERMS = ("education", "academic")
PROJECT_SECTION_TERMS = ("project",)
MAX_PROJECT_NAME_CHARS = 80

_DEGREE_RE = re.compile(
    r"(?<![A-Za-z])(B\.?Sc?\.?|B\.?A\.?|B\.?Eng\.?|M\.?Sc?\.?|M\.?A\.?|M\.?Eng\.?|MPharm|Ph\.?D\.?|MBA"
    r"|Bachelor(?:'?s)?|Master(?:'?s)?|Doctor(?:ate)?|Associate(?:'?s)?|Diploma|Certificate"
    r"|A[- ]Levels?|GCSEs?|High School)(?![A-Za-z])",
    re.IGNORECASE,
)
_INSTITUTION_RE = re.compile(r"\b(university|college|institute|school|academy|polytechnic)\b", re.IGNORECASE)
_FIELD_RE = re.compile(r"\b(?:of|in)\s+(?P<field>[A-Za-z][A-Za-z &/-]+)")
_PART_SPLIT_RE = re.compile(rf"{SEPARATOR}|,\s*|\s+(?:at|from)\s+")


def _parts(line: str) -> list[str]:
    return [part.strip() for part in _PART_SPLIT_RE.split(strip_dates(line)) if part and part.strip()]


def parse_education_line(line: str) -> EducationEntry | None:
    text = strip_bullet_prefix(line)
    has_degree = bool(_DEGREE_RE.search(text))
    if not has_degree and not _INSTITUTION_RE.search(text):
        return None

    parts = _parts(text)
    degree = next((part for part in parts if _DEGREE_RE.search(part)), None)
    school = next((part for part in parts if part != degree and _INSTITUTION_RE.search(part)), None)
    if school is None and not has_degree and parts:
        school = parts[0]

    field = None
    if degree:
        match = _FIELD_RE.search(re.sub(r"\([^)]*\)", "", degree))
        if match:
            field = match.group("field").strip()

    start, end = extract_dates(text)
    if start and not end:
        start, end = None, start
    return EducationEntry(school=school, degree=degree, field=field, start=start, end=end)


def extract_education(sections: SectionMap) -> list[EducationEntry]:
    entries: list[EducationEntry] = []
    for line in section_lines(sections, EDUCATION_SECTION_TERMS):
        entry = parse_education_line(line)
        if entry is None:
            continue
        previous = entries[-1] if entries else None
        # A school line directly after a degree-only line completes that entry.
        if previous is not None and previous.degree and not previous.school and entry.school and not entry.degree:
            entries[-1] = previous.model_copy(
                update={
                    "school": entry.school,
                    "start": previous.start or entry.start,
                    "end": previous.end or entry.end,
                }
            )
            continue
        entries.append(entry)
    return entries


def extract_projects(sections: SectionMap) -> list[ProjectEntry]:
    projects: list[ProjectEntry] = []
    for line in section_lines(sections, PROJECT_SECTION_TERMS):
        bullet = is_bullet_like(line)
        if not bullet and len(line) < MAX_PROJECT_NAME_CHARS:
            name = re.split(SEPARATOR, line, maxsplit=1)[0].strip()
            projects.append(ProjectEntry(name=name or line))
            continue
        if not projects:
            continue
        text = strip_bullet_prefix(line)
        if text:
            current = projects[-1]
            projects[-1] = current.model_copy(update={"bullets": [*current.bullets, text]})
    return projects
