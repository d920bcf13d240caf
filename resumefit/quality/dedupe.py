from __future__ import annotations

import logging
import re

from resumefit.core.config import get_scoring_value
from resumefit.schemas import QualityIssue, QualityResult, TailoredDraft

from .phrases import GREETING_RE, SIGNOFF_RE

logger = logging.getLogger(__name__)

_NON_WORD_RE = re.compile(r"[^a-z0-9%$+#]+")
_PERCENT_RE = re.compile(r"\d+(?:\.\d+)?\s*%")
_SCALE_RE = re.compile(r"[$£€]\s?\d|\b\d[\d,.]*\s*(?:k|m|bn|million|billion|users|customers|clients|patients)\b", re.IGNORECASE)
_MULTIPLIER_RE = re.compile(r"\b\d+(?:\.\d+)?\s*x\b", re.IGNORECASE)

BULLET_CATEGORIES = (
    (
        "backend",
        frozenset(
            {
                "api", "apis", "backend", "back-end", "server", "database", "databases", "sql", "postgresql",
                "mysql", "mongodb", "redis", "microservices", "graphql", "rest", "node.js", "django",
                "flask", "fastapi", "spring", "endpoint", "endpoints",
            }
        ),
    ),
    (
        "frontend",
        frozenset(
            {
                "frontend", "front-end", "react", "angular", "vue", "svelte", "css", "html", "ui", "ux",
                "component", "components", "next.js", "tailwind", "accessibility",
            }
        ),
    ),
    (
        "infrastructure",
        frozenset(
            {
                "infrastructure", "devops", "docker", "kubernetes", "terraform", "ci/cd", "pipeline",
                "pipelines", "aws", "azure", "gcp", "deployment", "deployments", "monitoring", "cloud",
            }
        ),
    ),
)
_CATEGORY_TOKEN_RE = re.compile(r"[a-z0-9][a-z0-9./+#-]*[a-z0-9+#]|[a-z0-9]")


def normalize_bullet(text: str) -> str:
    return _NON_WORD_RE.sub(" ", text.lower()).strip()


def _tokens(text: str) -> frozenset[str]:
    return frozenset(token for token in normalize_bullet(text).split() if len(token) > 2)


def similarity(first: str, second: str) -> float:
    """Jaccard overlap of the two bullets' significant tokens."""
    left, right = _tokens(first), _tokens(second)
    if not left or not right:
        return 0.0
    return len(left & right) / len(left | right)


def is_near_duplicate(first: str, second: str, threshold: float | None = None) -> bool:
    if threshold is None:
        threshold = float(get_scoring_value("quality.dedupe.similarity_threshold", 0.8))
    if normalize_bullet(first) == normalize_bullet(second):
        return True
    return similarity(first, second) >= threshold


def bullet_strength(bullet: str) -> int:
    score = len(bullet)
    if _PERCENT_RE.search(bullet):
        score += 50
    if _SCALE_RE.search(bullet):
        score += 40
    if _MULTIPLIER_RE.search(bullet):
        score += 30
    return score


def _single_pass(bullets: list[str], threshold: float) -> list[str]:
    kept: list[str] = []
    for bullet in bullets:
        for index, existing in enumerate(kept):
            if is_near_duplicate(existing, bullet, threshold):
                if bullet_strength(bullet) > bullet_strength(existing):
                    kept[index] = bullet
                break
        else:
            kept.append(bullet)
    return kept


def dedupe_bullets(bullets: list[str]) -> list[str]:
    """Collapse near-duplicate bullets, keeping the stronger of each pair.

    A pass that swaps in a stronger bullet can create a new near-duplicate pair,
    so passes repeat until nothing changes. The result is a fixpoint.
    """
    threshold = float(get_scoring_value("quality.dedupe.similarity_threshold", 0.8))
    current = [bullet for bullet in bullets if bullet.strip()]
    while True:
        reduced = _single_pass(current, threshold)
        if reduced == current:
            return reduced
        current = reduced


def bullet_category(bullet: str) -> str | None:
    tokens = set(_CATEGORY_TOKEN_RE.findall(bullet.lower()))
    for name, vocabulary in BULLET_CATEGORIES:
        if tokens & vocabulary:
            return name
    return None


def cap_category_bullets(bullets: list[str], limit: int | None = None) -> list[str]:
    """Keep at most `limit` bullets per category, preferring the strongest, in original order."""
    if limit is None:
        limit = int(get_scoring_value("quality.dedupe.max_category_bullets", 3))
    by_category: dict[str, list[int]] = {}
    for index, bullet in enumerate(bullets):
        category = bullet_category(bullet)
        if category is not None:
            by_category.setdefault(category, []).append(index)

    dropped: set[int] = set()
    for indexes in by_category.values():
        if len(indexes) <= limit:
            continue
        ranked = sorted(indexes, key=lambda index: (-bullet_strength(bullets[index]), index))
        dropped.update(ranked[limit:])
    return [bullet for index, bullet in enumerate(bullets) if index not in dropped]


def dedupe_paragraphs(paragraphs: list[str], max_paragraphs: int | None = None) -> list[str]:
    """One greeting (the first), one signoff (the last), no empty paragraphs, capped in length."""
    if max_paragraphs is None:
        max_paragraphs = int(get_scoring_value("quality.cover_letter.max_paragraphs", 5))
    kept = [paragraph for paragraph in paragraphs if paragraph.strip()]

    greetings = [index for index, paragraph in enumerate(kept) if GREETING_RE.match(paragraph.strip())]
    signoffs = [index for index, paragraph in enumerate(kept) if SIGNOFF_RE.match(paragraph.strip())]
    greeting = greetings[0] if greetings else None
    signoff = next((index for index in reversed(signoffs) if index != greeting), None)
    dropped = (set(greetings) | set(signoffs)) - {greeting, signoff}

    special = {index for index in (greeting, signoff) if index is not None}
    body = [index for index in range(len(kept)) if index not in special and index not in dropped]
    body_budget = max(0, max_paragraphs - len(special))
    dropped.update(body[body_budget:])
    return [paragraph for index, paragraph in enumerate(kept) if index not in dropped]


def _location(kind: str, index: int, label: str) -> str:
    return f"{kind}[{index}] ({label})" if label else f"{kind}[{index}]"


def _dedupe_entry_bullets(
    bullets: list[str], location: str, issues: list[QualityIssue]
) -> list[str]:
    unique = dedupe_bullets(bullets)
    if len(unique) < len(bullets):
        issues.append(
            QualityIssue(
                type="duplicate_bullet",
                location=location,
                detail=f"Removed {len(bullets) - len(unique)} duplicate or near-duplicate bullet(s)",
            )
        )
    capped = cap_category_bullets(unique)
    if len(capped) < len(unique):
        issues.append(
            QualityIssue(
                type="category_cap",
                location=location,
                detail=f"Removed {len(unique) - len(capped)} bullet(s) over the per-category limit",
            )
        )
    return capped


def dedupe_with_issues(draft: TailoredDraft) -> QualityResult:
    issues: list[QualityIssue] = []
    resume = draft.tailored_resume

    experience = [
        entry.model_copy(
            update={
                "bullets": _dedupe_entry_bullets(
                    entry.bullets, _location("experience", index, entry.company), issues
                )
            }
        )
        for index, entry in enumerate(resume.experience)
    ]
    projects = [
        project.model_copy(
            update={
                "bullets": _dedupe_entry_bullets(project.bullets, _location("projects", index, project.name), issues)
            }
        )
        for index, project in enumerate(resume.projects)
    ]

    paragraphs = dedupe_paragraphs(draft.cover_letter.paragraphs)
    if len(paragraphs) < len(draft.cover_letter.paragraphs):
        issues.append(
            QualityIssue(
                type="cover_letter",
                location="cover_letter",
                detail=(
                    f"Trimmed cover letter from {len(draft.cover_letter.paragraphs)} "
                    f"to {len(paragraphs)} paragraphs"
                ),
            )
        )

    output = draft.model_copy(
        update={
            "tailored_resume": resume.model_copy(update={"experience": experience, "projects": projects}),
            "cover_letter": draft.cover_letter.model_copy(update={"paragraphs": paragraphs}),
        },
        deep=True,
    )
    logger.debug("dedupe_complete issues=%s", len(issues))
    return QualityResult(output=output, issues=issues, passed=not issues)


def dedupe_draft(draft: TailoredDraft) -> TailoredDraft:
    """Remove near-duplicate bullets, cap same-category bullets and tidy the cover letter."""
    return dedupe_with_issues(draft).output
