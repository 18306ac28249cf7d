# service/job_service.py
import logging
from core.embeddings import EmbeddingProvider
from model.api import CreateJobRequest, CreateJobResponse, JobListResponse, JobView
from model.job import JobPosting, JobStatus, StructuredRequirements
from repository.job_repository import JobRepository
from util.enums import ErrorMessage
from util.errors import AppError

logger = logging.getLogger(__name__)


def _view(job: JobPosting) -> JobView:
    # embeddings stay server-side
    return JobView.model_validate(job.model_dump(exclude={"embedding"}))


class JobService:
    def __init__(self, jobs: JobRepository, embedder: EmbeddingProvider) -> None:
        self._jobs = jobs
        self._embedder = embedder

    async def create(self, payload: CreateJobRequest) -> CreateJobResponse:
        job = JobPosting(
            id=self._jobs.new_id(),
            title=payload.title,
            company=payload.company,
            description=payload.description,
            requirements=payload.requirements,
            structuredRequirements=payload.structuredRequirements
            or StructuredRequirements(),
            location=payload.location,
            salary=payload.salary,
            status=payload.status,
        )
        job.embedding = await self._embedder.embed(job.embedding_text())

        try:
            await self._jobs.put(job)
        except Exception:
            logger.error("job.persist.error id=%s", job.id, exc_info=True)
            raise AppError.of(ErrorMessage.INTERNAL_ERROR)

        logger.info("job.created id=%s", job.id)
        return CreateJobResponse(
            id=job.id,
            title=job.title,
            company=job.company,
            status=job.status,
            createdAt=job.createdAt,
        )

    async def list(
        self, status: JobStatus | None, limit: int, offset: int
    ) -> JobListResponse:
        if limit <= 0 or offset < 0:
            raise AppError.of(ErrorMessage.VALIDATION_FAILED)
        total, jobs = await self._jobs.list(status=status, limit=limit, offset=offset)
        return JobListResponse(
            total=total, limit=limit, offset=offset, jobs=[_view(j) for j in jobs]
        )

    async def get(self, job_id: str) -> JobView:
        job = await self._jobs.get(job_id)
        if job is None:
            raise AppError.of(ErrorMessage.JOB_NOT_FOUND)
        return _view(job)
