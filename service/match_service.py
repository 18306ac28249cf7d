# service/match_service.py
import logging
from starlette.concurrency import run_in_threadpool
from config.settings import settings
from core.entities import ScoringWeights
from core.ranking import match_candidates
from core.redaction import Privilege, redact_fields
from model.api import (
    CandidateMatch,
    Evidence,
    MatchResponse,
    MissingRequirement,
    ScoreBreakdown,
)
from repository.job_repository import JobRepository
from repository.resume_repository import ResumeRepository
from util.enums import ErrorMessage
from util.errors import AppError
from util.functions import require_positive_int
from util.timing import timed

logger = logging.getLogger(__name__)


def weights_from_settings() -> ScoringWeights:
    return ScoringWeights(
        semantic=settings.SEMANTIC_WEIGHT,
        skills=settings.SKILLS_WEIGHT,
        experience=settings.EXPERIENCE_WEIGHT,
    )


class MatchService:
    def __init__(self, jobs: JobRepository, resumes: ResumeRepository) -> None:
        self._jobs = jobs
        self._resumes = resumes

    async def match(
        self, job_id: str, top_n: int | None, privilege: Privilege
    ) -> MatchResponse:
        """
        Rank every embedded resume against a stored job posting.
        Raises AppError: 400 for a bad `top_n`, 404 for an unknown job,
        500 for anything that breaks while scoring.
        """
        top_n = require_positive_int(top_n, settings.DEFAULT_MATCH_TOP_N)

        job = await self._jobs.get(job_id)
        if job is None:
            logger.warning("match.job.missing job=%s", job_id)
            raise AppError.of(ErrorMessage.JOB_NOT_FOUND)

        try:
            with timed(logger, "match", job=job.id, top_n=top_n):
                resumes = await self._resumes.all_with_embeddings()
                ranked, total = await run_in_threadpool(
                    match_candidates,
                    job,
                    resumes,
                    top_n,
                    weights=weights_from_settings(),
                    evidence_threshold=settings.MATCH_EVIDENCE_THRESHOLD,
                    evidence_limit=settings.EVIDENCE_LIMIT,
                    snippet_chars=settings.EVIDENCE_SNIPPET_CHARS,
                    epsilon=settings.SCORE_TIE_EPSILON,
                )
                by_id = {r.id: r for r in resumes}
                matches = []
                for r in ranked:
                    resume = by_id[r.document_id]
                    matches.append(
                        CandidateMatch(
                            documentId=r.document_id,
                            displayName=resume.display_name,
                            compositeScore=r.score,
                            breakdown=ScoreBreakdown(
                                semantic=r.breakdown.semantic,
                                skills=r.breakdown.skills,
                                experience=r.breakdown.experience,
                            ),
                            matchedSkills=r.matched_skills,
                            evidence=[
                                Evidence(snippet=e.snippet, score=e.score)
                                for e in r.evidence
                            ],
                            missingRequirements=[
                                MissingRequirement(**m) for m in r.missing_requirements
                            ],
                            fields=redact_fields(
                                resume.parsedData.model_dump(exclude_none=True),
                                privilege,
                            ),
                        )
                    )
        except AppError:
            raise
        except Exception:
            logger.error("match.error job=%s", job.id, exc_info=True)
            raise AppError.of(ErrorMessage.INTERNAL_ERROR)

        logger.info(
            "match.ok job=%s candidates=%d returned=%d", job.id, total, len(matches)
        )
        return MatchResponse(
            jobId=job.id,
            jobTitle=job.title,
            totalCandidates=total,
            topN=top_n,
            matches=matches,
        )
