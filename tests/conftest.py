"""Shared fixtures: environment for Settings, in-memory stores, fake embedders."""
import os

# Settings() exits the process when required variables are missing, so these
# have to be in place before anything imports config.settings.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("ALLOWED_ORIGIN", "http://localhost:3000")
os.environ.setdefault("RATE_LIMIT_TIMES", "100")
os.environ.setdefault("RATE_LIMIT_SECONDS", "60")
os.environ.setdefault("EMBEDDING_BACKEND", "local")
os.environ.setdefault("RESUME_EXTRACTOR", "rules")

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from core.embeddings import fallback_embedding
from model.job import (
    ExperienceRequirement,
    JobPosting,
    JobStatus,
    StructuredRequirements,
)
from model.resume import Chunk, ExperienceEntry, ParsedResume, Resume


class FakeEmbedder:
    """Known texts map to fixed vectors; anything else gets the fallback."""

    def __init__(
        self, vectors: Optional[Dict[str, List[float]]] = None, dimension: int = 3
    ) -> None:
        self.dimension = dimension
        self.vectors = vectors or {}
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if text in self.vectors:
                return list(self.vectors[text])
            return fallback_embedding(text, self.dimension)
        finally:
            self.in_flight -= 1


class InMemoryResumeRepository:
    def __init__(self, resumes: Sequence[Resume] = ()) -> None:
        self.items: Dict[str, Resume] = {r.id: r for r in resumes}
        self._seq = 0

    def new_id(self) -> str:
        self._seq += 1
        return f"resume-{self._seq:03d}"

    async def put(self, resume: Resume) -> None:
        self.items[resume.id] = resume

    async def get(self, resume_id: str) -> Optional[Resume]:
        return self.items.get(resume_id)

    async def all_with_embeddings(self) -> List[Resume]:
        return [self.items[k] for k in sorted(self.items) if self.items[k].embedding]

    async def list(
        self, *, q: str = "", limit: int = 10, offset: int = 0
    ) -> Tuple[int, List[Resume]]:
        resumes = [r for r in self.items.values() if r.mentions(q)]
        resumes.sort(key=lambda r: (r.uploadedAt, r.id), reverse=True)
        return len(resumes), resumes[offset : offset + limit]


class BrokenResumeRepository(InMemoryResumeRepository):
    async def all_with_embeddings(self) -> List[Resume]:
        raise RuntimeError("connection reset by peer")


class InMemoryJobRepository:
    def __init__(self, jobs: Sequence[JobPosting] = ()) -> None:
        self.items: Dict[str, JobPosting] = {j.id: j for j in jobs}
        self._seq = 0

    def new_id(self) -> str:
        self._seq += 1
        return f"job-{self._seq:03d}"

    async def put(self, job: JobPosting) -> None:
        self.items[job.id] = job

    async def get(self, job_id: str) -> Optional[JobPosting]:
        return self.items.get(job_id)

    async def list(
        self, *, status: Optional[JobStatus] = None, limit: int = 20, offset: int = 0
    ) -> Tuple[int, List[JobPosting]]:
        jobs = [j for j in self.items.values() if status is None or j.status == status]
        jobs.sort(key=lambda j: (j.createdAt, j.id), reverse=True)
        return len(jobs), jobs[offset : offset + limit]


def make_resume(
    resume_id: str,
    embedding: List[float],
    *,
    name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    location: Optional[str] = None,
    skills: Sequence[str] = (),
    certifications: Sequence[str] = (),
    experience_entries: int = 0,
    chunks: Sequence[Tuple[str, List[float]]] = (),
    raw_text: Optional[str] = None,
    uploaded_at: Optional[datetime] = None,
) -> Resume:
    return Resume(
        id=resume_id,
        rawText=raw_text or " ".join(t for t, _ in chunks) or "resume text",
        parsedData=ParsedResume(
            name=name,
            email=email,
            phone=phone,
            location=location,
            skills=list(skills),
            certifications=list(certifications),
            experience=[
                ExperienceEntry(description=f"role {i}") for i in range(experience_entries)
            ],
        ),
        embedding=embedding,
        chunks=[
            Chunk(text=t, embedding=v, startChar=0, endChar=len(t)) for t, v in chunks
        ],
        uploadedAt=uploaded_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def make_job(
    job_id: str,
    embedding: List[float],
    *,
    skills: Sequence[str] = (),
    certifications: Sequence[str] = (),
    min_years: float = 0,
    title: str = "Backend Engineer",
) -> JobPosting:
    return JobPosting(
        id=job_id,
        title=title,
        company="Initech",
        description="Build search services",
        requirements="Python, Redis",
        structuredRequirements=StructuredRequirements(
            skills=list(skills),
            certifications=list(certifications),
            experience=ExperienceRequirement(minYears=min_years),
        ),
        embedding=embedding,
    )


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


class FakeRedis:
    """The handful of async Redis calls the repositories make, over dicts."""

    def __init__(self) -> None:
        self.values: Dict[str, bytes] = {}
        self.sets: Dict[str, set] = {}

    async def set(self, key: str, value: bytes) -> None:
        self.values[key] = value

    async def get(self, key: str) -> Optional[bytes]:
        return self.values.get(key)

    async def mget(self, keys: Sequence[str]) -> List[Optional[bytes]]:
        return [self.values.get(k) for k in keys]

    async def sadd(self, key: str, *members: str) -> None:
        self.sets.setdefault(key, set()).update(m.encode("utf-8") for m in members)

    async def smembers(self, key: str) -> set:
        return set(self.sets.get(key, set()))


class StubExtractor:
    def __init__(self, result: Optional[ParsedResume]) -> None:
        self.result = result
        self.calls: List[str] = []

    async def extract(self, text: str) -> Optional[ParsedResume]:
        self.calls.append(text)
        return self.result
