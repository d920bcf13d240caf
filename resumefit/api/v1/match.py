from fastapi import APIRouter, Header, HTTPException, Request

from resumefit.core.rate_limit import rate_limit
from resumefit.core.security import check_api_key
from resumefit.schemas import CandidateProfile, JobProfile, PipelineResult, QuickMatchResult
from resumefit.schemas.api import (
    JobParseRequest,
    PipelineRequest,
    QuickMatchRequest,
    ResumeParseRequest,
    ScoreRequest,
    ScoreResponse,
)
from resumefit.services.match_service import (
    PipelineInputError,
    parse_job_text,
    parse_resume_text,
    run_pipeline,
    run_quick_match,
    run_score,
)

router = APIRouter()


@router.post("/resume/parse", response_model=CandidateProfile)
@rate_limit()
async def resume_parse(
    request: Request,
    payload: ResumeParseRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    return parse_resume_text(payload)


@router.post("/job/parse", response_model=JobProfile)
@rate_limit()
async def job_parse(
    request: Request,
    payload: JobParseRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    return parse_job_text(payload)


@router.post("/match/quick", response_model=QuickMatchResult)
@rate_limit()
async def match_quick(
    request: Request,
    payload: QuickMatchRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    return run_quick_match(payload)


@router.post("/match/score", response_model=ScoreResponse)
@rate_limit()
async def match_score(
    request: Request,
    payload: ScoreRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    try:
        return run_score(payload)
    except PipelineInputError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.post("/pipeline/run", response_model=PipelineResult)
@rate_limit()
async def pipeline_run(
    request: Request,
    payload: PipelineRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    try:
        return run_pipeline(payload)
    except PipelineInputError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
