# service/resume_service.py
import asyncio
import logging
from typing import List, Optional
from config.settings import settings
from core.chunker import chunk_text
from core.embeddings import EmbeddingProvider
from core.redaction import Privilege, detect_pii, redact_fields
from core.resume_parser import parse_resume_text
from core.resume_extractor import ResumeExtractor
from model.api import IngestResumeResponse, ResumeListResponse, ResumeView
from model.resume import Chunk, ParsedResume, Resume
from repository.resume_repository import ResumeRepository
from util.enums import ErrorMessage
from util.errors import AppError
from util.timing import timed

logger = logging.getLogger(__name__)


class ResumeService:
    def __init__(
        self,
        resumes: ResumeRepository,
        embedder: EmbeddingProvider,
        *,
        window_words: int = settings.CHUNK_WORDS,
        overlap_words: int = settings.CHUNK_OVERLAP_WORDS,
        concurrency: int = settings.EMBED_CONCURRENCY,
        extractor: Optional[ResumeExtractor] = None,
    ) -> None:
        self._resumes = resumes
        self._embedder = embedder
        self._window = window_words
        self._overlap = overlap_words
        self._concurrency = max(1, concurrency)
        self._extractor = extractor

    async def _embed_all(self, texts: List[str]) -> List[List[float]]:
        """Embed in input order with at most `concurrency` calls in flight."""
        sem = asyncio.Semaphore(self._concurrency)

        async def _one(t: str) -> List[float]:
            async with sem:
                return await self._embedder.embed(t)

        return list(await asyncio.gather(*(_one(t) for t in texts)))

    async def _structure(self, text: str) -> ParsedResume:
        if self._extractor is not None:
            parsed = await self._extractor.extract(text)
            if parsed is not None:
                return parsed
        return parse_resume_text(text)

    async def ingest(
        self,
        text: str,
        *,
        file_name: str | None = None,
        parsed: ParsedResume | None = None,
    ) -> IngestResumeResponse:
        """
        Chunk, embed and store one resume's extracted text.
        Structured fields come from the caller, else the model extractor,
        else the rule-based parser.
        """
        if not isinstance(text, str) or not text.strip():
            raise AppError.of(ErrorMessage.VALIDATION_FAILED)

        if parsed is None:
            parsed = await self._structure(text)
        pieces = chunk_text(text, self._window, self._overlap)

        with timed(logger, "ingest.embed", chunks=len(pieces)):
            vectors = await self._embed_all([text] + [p.text for p in pieces])

        resume = Resume(
            id=self._resumes.new_id(),
            fileName=file_name,
            rawText=text,
            parsedData=parsed,
            pii=detect_pii(text, parsed),
            embedding=vectors[0],
            chunks=[
                Chunk(
                    text=p.text,
                    embedding=vec,
                    startChar=p.start_char,
                    endChar=p.end_char,
                )
                for p, vec in zip(pieces, vectors[1:])
            ],
        )

        try:
            await self._resumes.put(resume)
        except Exception:
            logger.error("ingest.persist.error id=%s", resume.id, exc_info=True)
            raise AppError.of(ErrorMessage.INTERNAL_ERROR)

        logger.info("ingest.ok id=%s chunks=%d", resume.id, len(resume.chunks))
        return IngestResumeResponse(
            id=resume.id,
            displayName=resume.display_name,
            chunkCount=len(resume.chunks),
            pii=resume.pii,
        )

    async def get(self, resume_id: str, privilege: Privilege) -> ResumeView:
        resume = await self._resumes.get(resume_id)
        if resume is None:
            raise AppError.of(ErrorMessage.RESUME_NOT_FOUND)
        return _view(resume, privilege)

    async def list(
        self, q: str | None, limit: int, offset: int, privilege: Privilege
    ) -> ResumeListResponse:
        """
        One page of stored resumes, newest first, optionally filtered by `q`.
        Raw text, embeddings and chunks are never returned.
        """
        if limit <= 0 or offset < 0:
            raise AppError.of(ErrorMessage.VALIDATION_FAILED)
        total, page = await self._resumes.list(
            q=(q or "").strip(), limit=limit, offset=offset
        )
        logger.info("resume.list total=%d returned=%d", total, len(page))
        return ResumeListResponse(
            total=total,
            limit=limit,
            offset=offset,
            resumes=[_view(r, privilege) for r in page],
        )


def _view(resume: Resume, privilege: Privilege) -> ResumeView:
    return ResumeView(
        id=resume.id,
        fileName=resume.fileName,
        displayName=resume.display_name,
        fields=redact_fields(resume.parsedData.model_dump(exclude_none=True), privilege),
        uploadedAt=resume.uploadedAt,
    )
