# service/search_service.py
import logging
from starlette.concurrency import run_in_threadpool
from config.settings import settings
from core.embeddings import EmbeddingProvider
from core.ranking import search_documents
from core.redaction import Privilege, redact_fields
from model.api import Evidence, SearchResponse, SearchResult
from repository.resume_repository import ResumeRepository
from util.enums import ErrorMessage
from util.errors import AppError
from util.functions import require_positive_int
from util.timing import timed

logger = logging.getLogger(__name__)


class SearchService:
    """
    Free-text query over every embedded resume.
    Ranking is purely semantic; fields are redacted after ranking.
    """

    def __init__(self, resumes: ResumeRepository, embedder: EmbeddingProvider) -> None:
        self._resumes = resumes
        self._embedder = embedder

    async def search(
        self, query: str, k: int | None, privilege: Privilege
    ) -> SearchResponse:
        if not isinstance(query, str) or not query.strip():
            raise AppError.of(ErrorMessage.QUERY_REQUIRED)
        k = require_positive_int(k, settings.DEFAULT_SEARCH_K)

        query_vector = await self._embedder.embed(query)

        try:
            with timed(logger, "search", k=k):
                docs = await self._resumes.all_with_embeddings()
                ranked, searched = await run_in_threadpool(
                    search_documents,
                    query_vector,
                    docs,
                    k,
                    evidence_limit=settings.EVIDENCE_LIMIT,
                    snippet_chars=settings.EVIDENCE_SNIPPET_CHARS,
                    epsilon=settings.SCORE_TIE_EPSILON,
                )
                by_id = {d.id: d for d in docs}
                results = [
                    SearchResult(
                        documentId=r.document_id,
                        displayName=by_id[r.document_id].display_name,
                        score=r.score,
                        evidence=[
                            Evidence(snippet=e.snippet, score=e.score)
                            for e in r.evidence
                        ],
                        fields=redact_fields(
                            by_id[r.document_id].parsedData.model_dump(
                                exclude_none=True
                            ),
                            privilege,
                        ),
                    )
                    for r in ranked
                ]
        except AppError:
            raise
        except Exception:
            logger.error("search.error", exc_info=True)
            raise AppError.of(ErrorMessage.INTERNAL_ERROR)

        logger.info(
            "search.ok searched=%d returned=%d privilege=%s",
            searched,
            len(results),
            privilege.value,
        )
        return SearchResponse(query=query, k=k, results=results, totalSearched=searched)
