from __future__ import annotations

import logging
import math
import re

from resumefit.core.config import get_scoring_value
from resumefit.schemas import (
    BeforeAfter,
    Blocker,
    CandidateProfile,
    Diagnostics,
    JobProfile,
    KeywordCluster,
    RadarBreakdown,
    RelevanceResult,
    ScoreResult,
)

from .terms import candidate_text, contains_term, dedupe_terms, requirement_terms

logger = logging.getLogger(__name__)

CATEGORIES = (
    "hard_skills",
    "soft_skills",
    "measurable_results",
    "keyword_optimization",
    "formatting_best_practices",
)

DEFAULT_WEIGHTS = {
    "hard_skills": 0.25,
    "soft_skills": 0.15,
    "measurable_results": 0.25,
    "keyword_optimization": 0.20,
    "formatting_best_practices": 0.15,
}

METRIC_RE = re.compile(
    r"\d+\s*[%xX]|[$£€]\s?[\d,]+|\d+[KkMm]\b|\d+\s*ms\b|\d+\+|"
    r"\b(?:reduced|increased|improved|grew|saved|cut|boosted)\b",
    re.IGNORECASE,
)
VAGUE_OPENING_RE = re.compile(
    r"^(utilized|various|responsible for|helped|worked on|assisted|participated in|involved in"
    r"|was part of|tasked with|handled|dealt with)\b",
    re.IGNORECASE,
)
SOFT_SKILL_RE = re.compile(
    r"\b(led|managed|mentored|coached|directed|supervised|coordinated|headed|oversaw|guided|trained"
    r"|recruited|hired|communicated|collaborated|facilitated|negotiated|presented|influenced"
    r"|motivated|empowered|delegated|resolved|mediated)\b",
    re.IGNORECASE,
)

_VAGUE_REWRITES = (
    (re.compile(r"^responsible for\s+", re.IGNORECASE), "Led "),
    (re.compile(r"^helped\s+", re.IGNORECASE), "Drove "),
    (re.compile(r"^worked on\s+", re.IGNORECASE), "Developed "),
    (re.compile(r"^assisted\s+(?:with\s+)?", re.IGNORECASE), "Delivered "),
    (re.compile(r"^participated in\s+", re.IGNORECASE), "Contributed to "),
    (re.compile(r"^involved in\s+", re.IGNORECASE), "Drove "),
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float) -> int:
    return max(0, min(100, _round_half_up(value)))


def _neutral() -> int:
    return int(get_scoring_value("radar.neutral_score", 50))


def all_bullets(candidate: CandidateProfile) -> list[str]:
    bullets = [bullet for entry in candidate.experience for bullet in entry.bullets]
    bullets.extend(bullet for project in candidate.projects for bullet in project.bullets)
    return bullets


def _skill_set(candidate: CandidateProfile) -> set[str]:
    return {skill.lower() for skill in candidate.skills}


def job_terms(job: JobProfile) -> list[str]:
    """Every distinct term the job asks for: required, preferred, then extracted keywords."""
    return dedupe_terms(
        requirement_terms(job.required_skills) + requirement_terms(job.preferred_skills) + list(job.keywords)
    )


def _has(term: str, skills: set[str], text: str) -> bool:
    return term.lower() in skills or contains_term(text, term)


def hard_skills_score(candidate: CandidateProfile, job: JobProfile, text: str | None = None) -> float:
    text = candidate_text(candidate) if text is None else text
    skills = _skill_set(candidate)

    total = 0
    matched = 0
    seen: set[str] = set()
    for term in requirement_terms(job.required_skills) + list(job.keywords):
        if term.lower() in seen:
            continue
        seen.add(term.lower())
        total += 2
        if _has(term, skills, text):
            matched += 2
    for term in requirement_terms(job.preferred_skills):
        if term.lower() in seen:
            continue
        seen.add(term.lower())
        total += 1
        if _has(term, skills, text):
            matched += 1

    if total == 0:
        return float(_neutral())
    return matched / total * 100


def soft_skills_score(bullets: list[str]) -> float:
    if not bullets:
        return float(get_scoring_value("radar.empty_bullets.soft_skills", 30))
    density = sum(1 for bullet in bullets if SOFT_SKILL_RE.search(bullet)) / len(bullets)
    target = float(get_scoring_value("radar.soft_skill_density_target", 0.3))
    if density >= target:
        return 100.0
    return float(_round_half_up(density / target * 100))


def measurable_results_score(bullets: list[str]) -> float:
    if not bullets:
        return float(get_scoring_value("radar.empty_bullets.measurable_results", 20))
    return sum(1 for bullet in bullets if METRIC_RE.search(bullet)) / len(bullets) * 100


def keyword_optimization_score(candidate: CandidateProfile, job: JobProfile, text: str | None = None) -> float:
    text = candidate_text(candidate) if text is None else text
    skills = _skill_set(candidate)
    terms = job_terms(job)
    if not terms:
        return float(_neutral())

    matched = 0
    placed = 0
    for term in terms:
        if contains_term(text, term) or term.lower() in skills:
            matched += 1
            if term.lower() in skills:
                placed += 1
    return min(100.0, matched / len(terms) * 80 + placed / len(terms) * 20)


def formatting_score(candidate: CandidateProfile, bullets: list[str]) -> float:
    long_chars = int(get_scoring_value("radar.formatting.long_bullet_chars", 150))
    short_chars = int(get_scoring_value("radar.formatting.short_bullet_chars", 30))
    score = 100

    long_bullets = sum(1 for bullet in bullets if len(bullet) > long_chars)
    score -= min(15, long_bullets * 3)
    vague_bullets = sum(1 for bullet in bullets if VAGUE_OPENING_RE.search(bullet))
    score -= min(15, vague_bullets * 5)
    if not candidate.summary:
        score -= 15
    if not candidate.education:
        score -= 10
    short_bullets = sum(1 for bullet in bullets if 0 < len(bullet) < short_chars)
    score -= min(10, short_bullets * 3)
    if len(candidate.skills) > int(get_scoring_value("radar.formatting.max_skills", 25)):
        score -= 10

    return float(max(int(get_scoring_value("radar.formatting.floor", 10)), score))


def score_to_label(score: int) -> str:
    """Three bands only; nothing ranks below Moderate Match."""
    if score >= int(get_scoring_value("radar.labels.strong", 75)):
        return "Strong Match"
    if score >= int(get_scoring_value("radar.labels.good", 60)):
        return "Good Match"
    return "Moderate Match"


def _weights() -> dict[str, float]:
    configured = get_scoring_value("radar.weights", {}) or {}
    return {name: float(configured.get(name, default)) for name, default in DEFAULT_WEIGHTS.items()}


def _hard_skills_blocker(candidate: CandidateProfile, job: JobProfile, text: str) -> Blocker:
    skills = _skill_set(candidate)
    missing = [term for term in requirement_terms(job.required_skills) if not _has(term, skills, text)][:3]
    focus = ", ".join(missing) if missing else "several key skills"
    return Blocker(
        category="hard_skills",
        title="Opportunity to strengthen hard skills",
        why=f"Could further emphasize: {focus}. The job description highlights these.",
        how="List these in your Skills section and mention them in the experience bullets where you used them.",
    )


def _soft_skills_blocker(bullets: list[str]) -> Blocker:
    soft = sum(1 for bullet in bullets if SOFT_SKILL_RE.search(bullet))
    return Blocker(
        category="soft_skills",
        title="Could highlight more soft skills",
        why=f"{soft} of {len(bullets)} bullets show leadership, communication or teamwork.",
        how="Add bullets about mentoring, running meetings, cross-team work or stakeholder communication.",
    )


def _measurable_blocker(bullets: list[str]) -> Blocker:
    with_metrics = [bullet for bullet in bullets if METRIC_RE.search(bullet)]
    without_metrics = [bullet for bullet in bullets if not METRIC_RE.search(bullet)]
    before_after = None
    if without_metrics:
        sample = without_metrics[0]
        before_after = BeforeAfter(
            before=sample,
            after=f"{sample.rstrip('.')}, cutting turnaround time by 30% and lifting team throughput",
        )
    return Blocker(
        category="measurable_results",
        title="Opportunity to add measurable results",
        why=f"{len(with_metrics)} of {len(bullets)} bullets include a metric. More numbers make impact concrete.",
        how="Add percentages, money, time saved, team size or user counts. Estimates are fine.",
        before_after=before_after,
    )


def _keyword_blocker(candidate: CandidateProfile, job: JobProfile, text: str) -> Blocker:
    skills = _skill_set(candidate)
    missing = sum(1 for term in job_terms(job) if not _has(term, skills, text))
    return Blocker(
        category="keyword_optimization",
        title="Could strengthen keyword alignment",
        why=f"{missing} job description keywords could be better represented. Screening tools look for exact matches.",
        how="Mirror the exact phrases from the job description in your skills section and experience bullets.",
    )


def _formatting_blocker(candidate: CandidateProfile, bullets: list[str]) -> Blocker:
    long_chars = int(get_scoring_value("radar.formatting.long_bullet_chars", 150))
    long_bullets = [bullet for bullet in bullets if len(bullet) > long_chars]
    vague = [bullet for bullet in bullets if VAGUE_OPENING_RE.search(bullet)]
    issues: list[str] = []
    if long_bullets:
        issues.append(f"{len(long_bullets)} bullets over {long_chars} chars")
    if vague:
        issues.append(f"{len(vague)} vague verb openings")
    if not candidate.summary:
        issues.append("missing professional summary")
    if not candidate.education:
        issues.append("no education section")

    before_after = None
    if vague:
        rewritten = vague[0]
        for pattern, replacement in _VAGUE_REWRITES:
            rewritten = pattern.sub(replacement, rewritten)
        before_after = BeforeAfter(before=vague[0], after=rewritten)
    return Blocker(
        category="formatting_best_practices",
        title="Optional formatting enhancements",
        why=f"Areas to refine: {', '.join(issues) if issues else 'a few formatting details'}.",
        how="Keep bullets short, open with strong verbs, add a professional summary and list education.",
        before_after=before_after,
    )


def build_blockers(
    breakdown: RadarBreakdown,
    candidate: CandidateProfile,
    job: JobProfile,
    bullets: list[str],
    text: str,
) -> list[Blocker]:
    max_count = int(get_scoring_value("radar.blockers.max_count", 3))
    strong_floor = int(get_scoring_value("radar.blockers.strong_category_floor", 80))
    ranked = sorted(CATEGORIES, key=lambda name: getattr(breakdown, name))

    builders = {
        "hard_skills": lambda: _hard_skills_blocker(candidate, job, text),
        "soft_skills": lambda: _soft_skills_blocker(bullets),
        "measurable_results": lambda: _measurable_blocker(bullets),
        "keyword_optimization": lambda: _keyword_blocker(candidate, job, text),
        "formatting_best_practices": lambda: _formatting_blocker(candidate, bullets),
    }
    return [builders[name]() for name in ranked[:max_count] if getattr(breakdown, name) < strong_floor]


def build_diagnostics(candidate: CandidateProfile, job: JobProfile, bullets: list[str], text: str) -> Diagnostics:
    missing_metrics = [bullet for bullet in bullets if not METRIC_RE.search(bullet) and len(bullet) > 20][:5]

    weak_verbs: list[str] = []
    for bullet in bullets:
        match = VAGUE_OPENING_RE.search(bullet)
        if match and match.group(0).strip() not in weak_verbs:
            weak_verbs.append(match.group(0).strip())

    required = {term.lower() for term in requirement_terms(job.required_skills)}
    preferred = {term.lower() for term in requirement_terms(job.preferred_skills)}
    skills = _skill_set(candidate)
    groups: dict[str, list[str]] = {"Required Skills": [], "Preferred Skills": [], "Additional Keywords": []}
    for term in job_terms(job):
        if _has(term, skills, text):
            continue
        if term.lower() in required:
            groups["Required Skills"].append(term)
        elif term.lower() in preferred:
            groups["Preferred Skills"].append(term)
        else:
            groups["Additional Keywords"].append(term)

    return Diagnostics(
        missing_metrics=missing_metrics,
        weak_verbs=weak_verbs,
        missing_keyword_clusters=[
            KeywordCluster(cluster=name, keywords=keywords) for name, keywords in groups.items() if keywords
        ],
    )


def build_warnings(candidate: CandidateProfile) -> list[str]:
    warnings: list[str] = []
    if not candidate.summary:
        warnings.append("Missing professional summary: reviewers read the top of the resume first")
    if len(candidate.skills) < 3:
        warnings.append("Very few skills detected: make sure the Skills section is clearly labelled")
    if any(len(bullet) > 200 for entry in candidate.experience for bullet in entry.bullets):
        warnings.append("Some bullets exceed 200 characters: keep bullets concise")
    if not candidate.experience:
        warnings.append("No experience section detected: label your work history clearly")
    if not candidate.education:
        warnings.append("No education section detected")
    return warnings


def score_radar(candidate: CandidateProfile, job: JobProfile) -> ScoreResult:
    """Score a candidate against a job on five weighted 0-100 dimensions."""
    text = candidate_text(candidate)
    bullets = all_bullets(candidate)

    breakdown = RadarBreakdown(
        hard_skills=_clamp(hard_skills_score(candidate, job, text)),
        soft_skills=_clamp(soft_skills_score(bullets)),
        measurable_results=_clamp(measurable_results_score(bullets)),
        keyword_optimization=_clamp(keyword_optimization_score(candidate, job, text)),
        formatting_best_practices=_clamp(formatting_score(candidate, bullets)),
    )
    weights = _weights()
    score = _clamp(sum(getattr(breakdown, name) * weights[name] for name in CATEGORIES))

    skills = _skill_set(candidate)
    terms = job_terms(job)
    result = ScoreResult(
        score=score,
        label=score_to_label(score),
        breakdown=breakdown,
        blockers=build_blockers(breakdown, candidate, job, bullets, text),
        diagnostics=build_diagnostics(candidate, job, bullets, text),
        matched_keywords=[term for term in terms if _has(term, skills, text)],
        missing_keywords=[term for term in terms if not _has(term, skills, text)],
        warnings=build_warnings(candidate),
    )
    logger.debug("radar_scored score=%s label=%s", result.score, result.label)
    return result


def check_relevance(candidate: CandidateProfile, job: JobProfile) -> RelevanceResult:
    """Gate tailoring on a minimum of skill and keyword overlap with the job."""
    text = candidate_text(candidate)
    hard_weight = float(get_scoring_value("radar.relevance.hard_skills_weight", 0.6))
    keyword_weight = float(get_scoring_value("radar.relevance.keyword_weight", 0.4))
    threshold = int(get_scoring_value("radar.relevance.threshold", 10))

    score = _clamp(
        hard_skills_score(candidate, job, text) * hard_weight
        + keyword_optimization_score(candidate, job, text) * keyword_weight
    )
    if score < threshold:
        return RelevanceResult(
            relevant=False,
            score=score,
            reason=(
                "The resume shows too little relevant experience or skills for this role. "
                "Tailoring needs some matching background and will not invent experience."
            ),
        )
    return RelevanceResult(relevant=True, score=score)
