from __future__ import annotations

import logging

from fastapi import status

from resumefit.core.config import settings
from resumefit.normalize import detect_resume, parse_job_description, parse_resume, validate_job_description
from resumefit.quality import run_quality_pipeline
from resumefit.schemas import CandidateProfile, JobProfile, PipelineResult, QuickMatchResult
from resumefit.schemas.api import (
    JobParseRequest,
    PipelineRequest,
    QuickMatchRequest,
    ResumeParseRequest,
    ScoreRequest,
    ScoreResponse,
)
from resumefit.scoring import quick_match, score_radar

logger = logging.getLogger(__name__)


class PipelineInputError(RuntimeError):
    def __init__(self, message: str, *, status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY):
        super().__init__(message)
        self.status_code = status_code


def _clip(text: str) -> str:
    return (text or "")[: settings.max_input_chars]


def check_inputs(resume_text: str, jd_text: str) -> list[str]:
    """Raise on an unusable job description; return warnings for anything merely doubtful."""
    check = validate_job_description(jd_text)
    if not check.valid:
        raise PipelineInputError(check.reason or "Job description is not usable.")
    warnings = list(check.warnings)
    detection = detect_resume(resume_text)
    if detection.message:
        warnings.append(detection.message)
    if warnings:
        logger.info("input_warnings count=%s resume_confidence=%s", len(warnings), detection.confidence)
    return warnings


def parse_resume_text(payload: ResumeParseRequest) -> CandidateProfile:
    candidate = parse_resume(_clip(payload.text), hidden_links=payload.hidden_links)
    logger.info(
        "resume_parse_complete experience=%s education=%s skills=%s",
        len(candidate.experience),
        len(candidate.education),
        len(candidate.skills),
    )
    return candidate


def parse_job_text(payload: JobParseRequest) -> JobProfile:
    job = parse_job_description(_clip(payload.text))
    logger.info("job_parse_complete required=%s keywords=%s", len(job.required_skills), len(job.keywords))
    return job


def run_quick_match(payload: QuickMatchRequest) -> QuickMatchResult:
    result = quick_match(_clip(payload.resume_text), _clip(payload.jd_text))
    logger.info("quick_match_complete score=%s label=%s", result.score, result.label)
    return result


def run_score(payload: ScoreRequest) -> ScoreResponse:
    resume_text, jd_text = _clip(payload.resume_text), _clip(payload.jd_text)
    warnings = check_inputs(resume_text, jd_text)
    candidate = parse_resume(resume_text, hidden_links=payload.hidden_links)
    job = parse_job_description(jd_text)
    radar = score_radar(candidate, job)
    logger.info("score_complete score=%s label=%s", radar.score, radar.label)
    return ScoreResponse(candidate=candidate, job=job, radar=radar, input_warnings=warnings)


def run_pipeline(payload: PipelineRequest) -> PipelineResult:
    """Validate and re-score a generated draft against the resume it was written from."""
    if not payload.resume_text.strip():
        raise PipelineInputError("Resume text is required to check a tailored draft.")
    if not payload.jd_text.strip():
        raise PipelineInputError("Job description text is required to check a tailored draft.")

    resume_text, jd_text = _clip(payload.resume_text), _clip(payload.jd_text)
    warnings = check_inputs(resume_text, jd_text)
    candidate = parse_resume(resume_text, hidden_links=payload.hidden_links)
    job = parse_job_description(jd_text)
    result = run_quality_pipeline(payload.draft, candidate, job).model_copy(update={"input_warnings": warnings})
    logger.info(
        "pipeline_request_complete before=%s after=%s issues=%s",
        result.radar_before.score,
        result.radar_after.score,
        len(result.issues),
    )
    return result
