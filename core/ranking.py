# core/ranking.py
from functools import cmp_to_key
from typing import Iterable, List, Optional, Sequence, Tuple
from core.entities import ScoredResult, ScoringWeights
from core.evidence import extract_evidence
from core.scoring import missing_requirements, score_candidate
from core.similarity import cosine_similarity
from model.job import JobPosting
from model.resume import Resume
from util.types import VectorLike
import logging

logger = logging.getLogger(__name__)

TIE_EPSILON = 1e-4


def _compare(a: ScoredResult, b: ScoredResult, epsilon: float) -> int:
    if abs(a.score - b.score) < epsilon:
        return (a.document_id > b.document_id) - (a.document_id < b.document_id)
    return -1 if a.score > b.score else 1


def rank_results(
    results: Iterable[ScoredResult], limit: int, *, epsilon: float = TIE_EPSILON
) -> List[ScoredResult]:
    """
    Order by descending score, near-equal scores by ascending document id,
    then keep the first `limit`.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ValueError("limit must be a positive integer")
    # Canonical id order first so the tolerance comparator always sees the
    # same input sequence, whatever order the caller scanned documents in.
    canonical = sorted(results, key=lambda r: r.document_id)
    ranked = sorted(canonical, key=cmp_to_key(lambda a, b: _compare(a, b, epsilon)))
    return ranked[:limit]


def eligible(documents: Iterable[Resume]) -> List[Resume]:
    """Only documents carrying a top-level embedding take part."""
    return [d for d in documents if d.embedding]


def search_documents(
    query_vector: VectorLike,
    documents: Sequence[Resume],
    k: int,
    *,
    evidence_limit: int = 3,
    snippet_chars: int = 200,
    epsilon: float = TIE_EPSILON,
) -> Tuple[List[ScoredResult], int]:
    """
    Pure semantic ranking for a free-text query.
    Returns (top k results, number of documents searched).
    """
    pool = eligible(documents)
    scored = [
        ScoredResult(
            document_id=doc.id,
            score=cosine_similarity(query_vector, doc.embedding),
            evidence=extract_evidence(
                query_vector,
                doc.chunks,
                limit=evidence_limit,
                snippet_chars=snippet_chars,
            ),
        )
        for doc in pool
    ]
    ranked = rank_results(scored, k, epsilon=epsilon)
    logger.debug("rank.search searched=%d returned=%d", len(pool), len(ranked))
    return ranked, len(pool)


def match_candidates(
    job: JobPosting,
    resumes: Sequence[Resume],
    top_n: int,
    *,
    weights: Optional[ScoringWeights] = None,
    evidence_threshold: float = 0.7,
    evidence_limit: int = 3,
    snippet_chars: int = 200,
    epsilon: float = TIE_EPSILON,
) -> Tuple[List[ScoredResult], int]:
    """
    Composite ranking of resumes against a job posting.
    Returns (top n results, number of candidates scored).
    """
    weights = weights or ScoringWeights()
    pool = eligible(resumes)
    scored: List[ScoredResult] = []
    for resume in pool:
        composite, breakdown, matched = score_candidate(job, resume, weights)
        scored.append(
            ScoredResult(
                document_id=resume.id,
                score=composite,
                breakdown=breakdown,
                matched_skills=matched,
                missing_requirements=missing_requirements(job, resume),
                evidence=extract_evidence(
                    job.embedding,
                    resume.chunks,
                    threshold=evidence_threshold,
                    limit=evidence_limit,
                    snippet_chars=snippet_chars,
                ),
            )
        )
    ranked = rank_results(scored, top_n, epsilon=epsilon)
    logger.debug("rank.match job=%s scored=%d returned=%d", job.id, len(pool), len(ranked))
    return ranked, len(pool)
