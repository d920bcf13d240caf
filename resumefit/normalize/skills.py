from __future__ import annotations

import re

from .sections import SectionMap, section_lines
from .utils import strip_bullet_prefix

SKILL_SECTION_TERMS = ("skill", "competenc", "technolog", "expertise", "tools")
MAX_SKILL_CHARS = 50

_ITEM_SPLIT = re.compile(r"[,;|•·●▪◦]")

COMMON_SKILLS = (
    "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "Go", "Rust", "Ruby", "PHP",
    "React", "Angular", "Vue", "Next.js", "Node.js", "Express", "Django", "Flask", "FastAPI",
    "Spring", "AWS", "GCP", "Azure", "Docker", "Kubernetes", "Terraform",
    "PostgreSQL", "MongoDB", "MySQL", "Redis", "GraphQL", "REST",
    "Git", "CI/CD", "Agile", "Scrum", "HTML", "CSS", "Tailwind", "SASS",
    "Machine Learning", "Deep Learning", "NLP", "SQL", "NoSQL", "Firebase",
    "Excel", "Salesforce", "Tableau", "Power BI", "Project Management",
)


def _skill_pattern(skill: str) -> re.Pattern[str]:
    flags = 0 if len(skill) <= 2 else re.IGNORECASE
    return re.compile(rf"(?<![A-Za-z0-9]){re.escape(skill)}(?![A-Za-z0-9+#])", flags)


_COMMON_SKILL_PATTERNS = tuple((skill, _skill_pattern(skill)) for skill in COMMON_SKILLS)


def _clean_item(item: str) -> str:
    cleaned = strip_bullet_prefix(item.strip())
    cleaned = re.sub(r"^[-–—*]\s*", "", cleaned)
    return cleaned.strip().rstrip(".").strip()


def split_skill_line(line: str) -> list[str]:
    """Split one skills-section line into items, keeping only the part after a "Category:" label."""
    body = strip_bullet_prefix(line)
    if ":" in body:
        body = body.split(":", 1)[1]
    items: list[str] = []
    for raw_item in _ITEM_SPLIT.split(body):
        item = _clean_item(raw_item)
        if item and len(item) < MAX_SKILL_CHARS:
            items.append(item)
    return items


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for item in items:
        key = item.lower()
        if key in seen:
            continue
        seen.add(key)
        output.append(item)
    return output


def extract_skills(sections: SectionMap, full_text: str) -> list[str]:
    skills: list[str] = []
    for line in section_lines(sections, SKILL_SECTION_TERMS):
        skills.extend(split_skill_line(line))
    if skills:
        return _dedupe(skills)

    return [skill for skill, pattern in _COMMON_SKILL_PATTERNS if pattern.search(full_text or "")]
