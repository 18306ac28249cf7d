# controller/controller_dependencies.py
from fastapi import Request
from config.settings import settings
from core.embeddings import get_embedder
from core.redaction import Privilege, privilege_for
from core.resume_extractor import get_resume_extractor
from repository.job_repository import JobRepository
from repository.resume_repository import ResumeRepository
from service.job_service import JobService
from service.match_service import MatchService
from service.resume_service import ResumeService
from service.search_service import SearchService
from util.enums import ErrorMessage, Role
from util.errors import AppError


def get_search_service() -> SearchService:
    return SearchService(ResumeRepository(), get_embedder())


def get_match_service() -> MatchService:
    return MatchService(JobRepository(), ResumeRepository())


def get_resume_service() -> ResumeService:
    return ResumeService(
        ResumeRepository(), get_embedder(), extractor=get_resume_extractor()
    )


def get_job_service() -> JobService:
    return JobService(JobRepository(), get_embedder())


def get_caller_role(request: Request) -> Role:
    # The auth gateway in front of us owns identity; we only read its verdict.
    raw = (request.headers.get(settings.ROLE_HEADER) or "").strip().lower()
    try:
        return Role(raw)
    except ValueError:
        return Role.CANDIDATE


def get_privilege(request: Request) -> Privilege:
    return privilege_for(get_caller_role(request))


def require_elevated(request: Request) -> None:
    if get_privilege(request) != Privilege.ELEVATED:
        raise AppError.of(ErrorMessage.FORBIDDEN)
