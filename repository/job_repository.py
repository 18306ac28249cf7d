# repository/job_repository.py
from typing import Final, List, Optional, Tuple
from uuid import uuid4
from redis.asyncio import Redis
from config.cache import get_redis
from model.job import JobPosting, JobStatus
from repository.namespaces import JOB_INDEX, JOBS
import logging

KEY_PREFIX: Final[str] = JOBS
logger = logging.getLogger(__name__)


class JobRepository:
    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(job_id: str) -> str:
        return f"{KEY_PREFIX}:{job_id}"

    @staticmethod
    def new_id() -> str:
        return str(uuid4())

    # ---------------- Core CRUD ----------------

    async def put(self, job: JobPosting) -> None:
        r = await self._client()
        await r.set(self._key(job.id), job.model_dump_json().encode("utf-8"))
        await r.sadd(JOB_INDEX, job.id)

    async def get(self, job_id: str) -> Optional[JobPosting]:
        if not job_id:
            return None
        r = await self._client()
        raw = await r.get(self._key(job_id))
        if raw is None:
            return None
        try:
            return JobPosting.model_validate_json(raw)
        except Exception:
            logger.error("job.decode.error id=%s", job_id)
            return None

    # ---------------- Listing ----------------

    async def _all(self) -> List[JobPosting]:
        r = await self._client()
        ids = [
            v.decode("utf-8") if isinstance(v, (bytes, bytearray)) else str(v)
            for v in await r.smembers(JOB_INDEX)
        ]
        if not ids:
            return []
        out: List[JobPosting] = []
        for jid, raw in zip(ids, await r.mget([self._key(i) for i in ids])):
            if raw is None:
                continue
            try:
                out.append(JobPosting.model_validate_json(raw))
            except Exception:
                logger.warning("job.decode.skip id=%s", jid)
        return out

    async def list(
        self, *, status: Optional[JobStatus] = None, limit: int = 20, offset: int = 0
    ) -> Tuple[int, List[JobPosting]]:
        """
        Return (total matching `status`, one page of them newest first).
        """
        jobs = [j for j in await self._all() if status is None or j.status == status]
        jobs.sort(key=lambda j: (j.createdAt, j.id), reverse=True)
        return len(jobs), jobs[offset : offset + limit]
