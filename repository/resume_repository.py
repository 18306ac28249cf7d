# repository/resume_repository.py
from typing import Final, List, Optional, Tuple
from uuid import uuid4
from redis.asyncio import Redis
from config.cache import get_redis
from model.resume import Resume
from repository.namespaces import RESUME_INDEX, RESUMES
import logging

KEY_PREFIX: Final[str] = RESUMES
logger = logging.getLogger(__name__)


class ResumeRepository:
    """
    Flow:
    - Each resume is one JSON blob keyed by id; ids are tracked in a set.
    - Reads hand back validated `Resume` models; blobs that no longer
      validate are skipped and logged, never raised.
    - The matching core only reads from here.
    """

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(resume_id: str) -> str:
        return f"{KEY_PREFIX}:{resume_id}"

    @staticmethod
    def new_id() -> str:
        return str(uuid4())

    async def put(self, resume: Resume) -> None:
        r = await self._client()
        payload = resume.model_dump_json().encode("utf-8")
        await r.set(self._key(resume.id), payload)
        await r.sadd(RESUME_INDEX, resume.id)

    async def get(self, resume_id: str) -> Optional[Resume]:
        if not resume_id:
            return None
        r = await self._client()
        raw = await r.get(self._key(resume_id))
        if raw is None:
            return None
        try:
            return Resume.model_validate_json(raw)
        except Exception:
            logger.error("resume.decode.error id=%s", resume_id)
            return None

    async def _all(self) -> List[Resume]:
        """Every stored resume, in id order; undecodable blobs are skipped."""
        r = await self._client()
        ids = sorted(
            v.decode("utf-8") if isinstance(v, (bytes, bytearray)) else str(v)
            for v in await r.smembers(RESUME_INDEX)
        )
        if not ids:
            return []
        blobs = await r.mget([self._key(i) for i in ids])
        out: List[Resume] = []
        for rid, raw in zip(ids, blobs):
            if raw is None:
                continue
            try:
                out.append(Resume.model_validate_json(raw))
            except Exception:
                # Skip malformed entries instead of failing the request
                logger.warning("resume.decode.skip id=%s", rid)
        return out

    async def all_with_embeddings(self) -> List[Resume]:
        """Snapshot of every resume that has a top-level embedding, in id order."""
        return [resume for resume in await self._all() if resume.embedding]

    async def list(
        self, *, q: str = "", limit: int = 10, offset: int = 0
    ) -> Tuple[int, List[Resume]]:
        """
        Return (total mentioning `q`, one page of them newest first).
        An empty `q` matches everything.
        """
        resumes = [resume for resume in await self._all() if resume.mentions(q)]
        resumes.sort(key=lambda resume: (resume.uploadedAt, resume.id), reverse=True)
        return len(resumes), resumes[offset : offset + limit]
