from __future__ import annotations

import logging
from typing import Any, Callable

from resumefit.schemas import CandidateProfile, JobProfile, PipelineResult, QualityIssue, QualityResult, TailoredDraft, coerce_draft

from .booster import ensure_score_improvement
from .consistency import consistency_with_issues
from .dedupe import dedupe_with_issues
from .gate import run_quality_gate

logger = logging.getLogger(__name__)

DraftPass = Callable[[TailoredDraft], QualityResult]

# Order matters: the gate must see deduplicated bullets and the validator must see gated text.
CLEANUP_PASSES: tuple[DraftPass, ...] = (dedupe_with_issues, run_quality_gate, consistency_with_issues)


def run_cleanup(draft: TailoredDraft, passes: tuple[DraftPass, ...] = CLEANUP_PASSES) -> QualityResult:
    issues: list[QualityIssue] = []
    for stage in passes:
        result = stage(draft)
        draft = result.output
        issues.extend(result.issues)
    return QualityResult(output=draft, issues=issues, passed=not issues)


def run_quality_pipeline(draft: TailoredDraft | dict[str, Any] | None, candidate: CandidateProfile, job: JobProfile) -> PipelineResult:
    """Clean an AI-authored draft and guarantee its score does not fall below the original resume's."""
    cleaned = run_cleanup(coerce_draft(draft))
    boost = ensure_score_improvement(cleaned.output, candidate, job)

    issues = list(cleaned.issues)
    output = boost.output
    if boost.boosted:
        # Injected skills can satisfy checklist entries and gaps written against the old content.
        recheck = consistency_with_issues(output)
        output = recheck.output
        issues.extend(recheck.issues)

    logger.info(
        "quality_pipeline_complete issues=%s boosted=%s before=%s after=%s",
        len(issues),
        boost.boosted,
        boost.radar_before.score,
        boost.radar_after.score,
    )
    return PipelineResult(
        output=output,
        issues=issues,
        boosted=boost.boosted,
        radar_before=boost.radar_before,
        radar_after=boost.radar_after,
        boost_actions=boost.boost_actions,
    )
