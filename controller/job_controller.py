# controller/job_controller.py
from fastapi import APIRouter, Depends, Query, status
from controller.controller_dependencies import (
    get_job_service,
    get_match_service,
    get_privilege,
    require_elevated,
)
from controller.limits import rate_limited
from core.redaction import Privilege
from model.api import (
    CreateJobRequest,
    CreateJobResponse,
    JobListResponse,
    JobView,
    MatchRequest,
    MatchResponse,
)
from model.job import JobStatus
from service.job_service import JobService
from service.match_service import MatchService
from util.constants import InternalURIs

job_router = APIRouter(dependencies=rate_limited())


@job_router.post(
    InternalURIs.JOBS,
    response_model=CreateJobResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_elevated)],
)
async def create_job(
    payload: CreateJobRequest,
    service: JobService = Depends(get_job_service),
) -> CreateJobResponse:
    return await service.create(payload)


@job_router.get(InternalURIs.JOBS, response_model=JobListResponse)
async def list_jobs(
    job_status: JobStatus | None = Query(default="open", alias="status"),
    limit: int = Query(default=20, gt=0, le=100),
    offset: int = Query(default=0, ge=0),
    service: JobService = Depends(get_job_service),
) -> JobListResponse:
    return await service.list(job_status, limit, offset)


@job_router.get(InternalURIs.JOB, response_model=JobView)
async def get_job(
    job_id: str, service: JobService = Depends(get_job_service)
) -> JobView:
    return await service.get(job_id)


@job_router.post(InternalURIs.JOB_MATCH, response_model=MatchResponse)
async def match_job(
    job_id: str,
    payload: MatchRequest | None = None,
    privilege: Privilege = Depends(get_privilege),
    service: MatchService = Depends(get_match_service),
) -> MatchResponse:
    top_n = payload.topN if payload else None
    return await service.match(job_id, top_n, privilege)
