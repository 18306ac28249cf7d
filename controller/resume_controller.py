# controller/resume_controller.py
from fastapi import APIRouter, Depends, Query, status
from controller.controller_dependencies import get_privilege, get_resume_service
from controller.limits import rate_limited
from core.redaction import Privilege
from model.api import (
    IngestResumeRequest,
    IngestResumeResponse,
    ResumeListResponse,
    ResumeView,
)
from service.resume_service import ResumeService
from util.constants import InternalURIs

resume_router = APIRouter(dependencies=rate_limited())


@resume_router.post(
    InternalURIs.RESUMES,
    response_model=IngestResumeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def ingest_resume(
    payload: IngestResumeRequest,
    service: ResumeService = Depends(get_resume_service),
) -> IngestResumeResponse:
    return await service.ingest(
        payload.text, file_name=payload.fileName, parsed=payload.parsedData
    )


@resume_router.get(InternalURIs.RESUMES, response_model=ResumeListResponse)
async def list_resumes(
    q: str = Query(default="", max_length=200),
    limit: int = Query(default=10, gt=0, le=100),
    offset: int = Query(default=0, ge=0),
    privilege: Privilege = Depends(get_privilege),
    service: ResumeService = Depends(get_resume_service),
) -> ResumeListResponse:
    return await service.list(q, limit, offset, privilege)


@resume_router.get(InternalURIs.RESUME, response_model=ResumeView)
async def get_resume(
    resume_id: str,
    privilege: Privilege = Depends(get_privilege),
    service: ResumeService = Depends(get_resume_service),
) -> ResumeView:
    return await service.get(resume_id, privilege)
