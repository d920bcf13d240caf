from __future__ import annotations

import logging
import re
from typing import Callable

from resumefit.core.config import get_scoring_value
from resumefit.schemas import BoostResult, CandidateProfile, JobProfile, ScoreResult, SkillGroup, TailoredDraft
from resumefit.scoring.convert import DEFAULT_SKILL_GROUP, candidate_to_tailored_resume, tailored_to_candidate_profile
from resumefit.scoring.radar import score_radar
from resumefit.scoring.terms import candidate_has_term, candidate_text, dedupe_terms, requirement_terms

logger = logging.getLogger(__name__)

ADDITIONAL_SKILL_GROUP = "Additional Skills"
SKILL_BULLET_TEMPLATE = "Applied {skill} to deliver results aligned with project goals and team standards."

_CORE_GROUP_RE = re.compile(r"core|technical|primary|key", re.IGNORECASE)

# A step returns the changed draft and a description, or None when it had nothing to add.
BoostStep = Callable[[TailoredDraft, JobProfile], tuple[TailoredDraft, str | None]]


def score_draft(draft: TailoredDraft, job: JobProfile) -> ScoreResult:
    return score_radar(tailored_to_candidate_profile(draft.tailored_resume), job)


def boost_target(before: int) -> int:
    improvement = int(get_scoring_value("booster.min_improvement", 15))
    floor = int(get_scoring_value("booster.score_floor", 45))
    return min(100, max(before + improvement, floor))


def _missing(draft: TailoredDraft, terms: list[str]) -> list[str]:
    view = tailored_to_candidate_profile(draft.tailored_resume)
    text = candidate_text(view)
    max_chars = int(get_scoring_value("quality.skills.max_item_chars", 50))
    return [term for term in dedupe_terms(terms) if len(term) <= max_chars and not candidate_has_term(view, term, text)]


def missing_priority_terms(draft: TailoredDraft, job: JobProfile) -> list[str]:
    """Required job terms absent from the draft, followed by absent preferred terms."""
    return _missing(draft, requirement_terms(job.required_skills) + requirement_terms(job.preferred_skills))


def _with_resume(draft: TailoredDraft, **changes) -> TailoredDraft:
    resume = draft.tailored_resume.model_copy(update=changes)
    return draft.model_copy(update={"tailored_resume": resume}, deep=True)


def inject_skills(draft: TailoredDraft, terms: list[str]) -> TailoredDraft:
    """Append terms to the core skill group, else the first group, else a new one."""
    groups = list(draft.tailored_resume.skills)
    if not groups:
        return _with_resume(draft, skills=[SkillGroup(category=DEFAULT_SKILL_GROUP, items=terms)])
    target = next((index for index, group in enumerate(groups) if _CORE_GROUP_RE.search(group.category)), 0)
    groups[target] = groups[target].model_copy(update={"items": groups[target].items + terms})
    return _with_resume(draft, skills=groups)


def boost_summary(draft: TailoredDraft, job: JobProfile) -> tuple[TailoredDraft, list[str]]:
    window = int(get_scoring_value("booster.summary_keyword_window", 5))
    limit = int(get_scoring_value("booster.summary_terms", 4))
    terms = _missing(draft, requirement_terms(job.required_skills) + list(job.keywords[:window]))[:limit]
    if not terms:
        return draft, []

    phrase = ", ".join(terms)
    summary = draft.tailored_resume.summary.strip()
    if not summary:
        summary = f"Experienced with {phrase}."
    elif summary.endswith("."):
        summary = f"{summary[:-1]}, with expertise in {phrase}."
    else:
        summary = f"{summary}. Experienced with {phrase}."
    return _with_resume(draft, summary=summary), terms


def add_skill_bullet(draft: TailoredDraft, job: JobProfile) -> tuple[TailoredDraft, str | None]:
    """Add one bullet naming the first missing required skill to the most recent role."""
    experience = list(draft.tailored_resume.experience)
    max_bullets = int(get_scoring_value("booster.max_role_bullets", 6))
    if not experience or len(experience[0].bullets) >= max_bullets:
        return draft, None
    missing = _missing(draft, requirement_terms(job.required_skills))
    if not missing:
        return draft, None

    bullet = SKILL_BULLET_TEMPLATE.format(skill=missing[0])
    experience[0] = experience[0].model_copy(update={"bullets": experience[0].bullets + [bullet]})
    return _with_resume(draft, experience=experience), bullet


def inject_all_missing(draft: TailoredDraft, job: JobProfile) -> tuple[TailoredDraft, list[str]]:
    terms = _missing(
        draft,
        requirement_terms(job.required_skills) + requirement_terms(job.preferred_skills) + list(job.keywords),
    )
    if not terms:
        return draft, []
    groups = list(draft.tailored_resume.skills) + [SkillGroup(category=ADDITIONAL_SKILL_GROUP, items=terms)]
    return _with_resume(draft, skills=groups), terms


def _injection_step(draft: TailoredDraft, job: JobProfile) -> tuple[TailoredDraft, str | None]:
    budget = int(get_scoring_value("booster.injection_budget", 8))
    terms = missing_priority_terms(draft, job)[:budget]
    if not terms:
        return draft, None
    return inject_skills(draft, terms), f"Added missing skills to the skills section: {', '.join(terms)}"


def _summary_step(draft: TailoredDraft, job: JobProfile) -> tuple[TailoredDraft, str | None]:
    boosted, terms = boost_summary(draft, job)
    if not terms:
        return draft, None
    return boosted, f"Wove job keywords into the summary: {', '.join(terms)}"


def _bullet_step(draft: TailoredDraft, job: JobProfile) -> tuple[TailoredDraft, str | None]:
    boosted, bullet = add_skill_bullet(draft, job)
    if bullet is None:
        return draft, None
    return boosted, f'Added a skill-aligned bullet to the most recent role: "{bullet}"'


def _emergency_step(draft: TailoredDraft, job: JobProfile) -> tuple[TailoredDraft, str | None]:
    boosted, terms = inject_all_missing(draft, job)
    if not terms:
        return draft, None
    return boosted, f"Added remaining job terms to {ADDITIONAL_SKILL_GROUP}: {', '.join(terms)}"


# One tuple per pass, run in order while the score is below target.
BOOST_PASSES: tuple[tuple[BoostStep, ...], ...] = (
    (_injection_step, _summary_step),
    (_summary_step,),
    (_bullet_step,),
)


def _apply(
    step: BoostStep, draft: TailoredDraft, current: ScoreResult, job: JobProfile
) -> tuple[TailoredDraft, ScoreResult, str | None]:
    changed, action = step(draft, job)
    if action is None:
        return draft, current, None
    rescored = score_draft(changed, job)
    if rescored.score < current.score:
        logger.debug("booster_step_rejected step=%s before=%s after=%s", step.__name__, current.score, rescored.score)
        return draft, current, None
    return changed, rescored, action


def _improve(
    draft: TailoredDraft, current: ScoreResult, job: JobProfile, target: int
) -> tuple[TailoredDraft, ScoreResult, list[str]]:
    actions: list[str] = []
    for steps in BOOST_PASSES:
        if current.score >= target:
            break
        for step in steps:
            draft, current, action = _apply(step, draft, current, job)
            if action:
                actions.append(action)

    if current.score < int(get_scoring_value("booster.score_floor", 45)):
        draft, current, action = _apply(_emergency_step, draft, current, job)
        if action:
            actions.append(action)
    return draft, current, actions


def ensure_score_improvement(draft: TailoredDraft, candidate: CandidateProfile, job: JobProfile) -> BoostResult:
    """Re-score a cleaned draft against the original resume and never let the score go down.

    Below the target, up to three passes add missing job terms: first to the skills
    section and summary, then to the summary again, then as one bullet on the most
    recent role. A draft still under the score floor gets every remaining term in an
    extra skill group. Each change is kept only if it does not lower the score. If the
    draft still scores under the original resume, its resume content is restored from
    the parsed profile, which scores exactly the same as the original.
    """
    radar_before = score_radar(candidate, job)
    current = score_draft(draft, job)
    target = boost_target(radar_before.score)
    if current.score >= target:
        return BoostResult(output=draft, boosted=False, radar_before=radar_before, radar_after=current)

    output, current, actions = _improve(draft, current, job, target)

    if current.score < radar_before.score:
        restored = draft.model_copy(update={"tailored_resume": candidate_to_tailored_resume(candidate)}, deep=True)
        output, current, more = _improve(restored, score_draft(restored, job), job, target)
        actions = ["Restored the original resume content because the tailored version scored lower"] + more

    logger.debug(
        "booster_complete before=%s after=%s target=%s actions=%s",
        radar_before.score,
        current.score,
        target,
        len(actions),
    )
    return BoostResult(
        output=output,
        boosted=bool(actions),
        radar_before=radar_before,
        radar_after=current,
        boost_actions=actions,
    )
