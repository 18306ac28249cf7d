# core/scoring.py
"""
Rule-based signals for job matching.

Every function here is deterministic and side-effect free; the same job and
resume always give the same numbers.
"""
from typing import List, Sequence, Tuple
from core.entities import MatchBreakdown, ScoringWeights
from core.similarity import cosine_similarity
from model.job import JobPosting
from model.resume import Resume
from util.functions import clean_terms, contains_term
from util.types import MissingRequirementDict


def split_matches(
    required: Sequence[str], candidate: Sequence[str]
) -> Tuple[List[str], List[str]]:
    """
    Partition `required` into (matched, missing), preserving order.

    A requirement is matched when some candidate term contains it,
    case-insensitively.
    """
    have = clean_terms(candidate)
    matched: List[str] = []
    missing: List[str] = []
    for term in clean_terms(required):
        (matched if contains_term(term, have) else missing).append(term)
    return matched, missing


def skills_score(required: Sequence[str], candidate: Sequence[str]) -> float:
    """Fraction of required skills matched; 0 when nothing is required."""
    req = clean_terms(required)
    if not req:
        return 0.0
    matched, _ = split_matches(req, candidate)
    return len(matched) / len(req)


def experience_score(min_years: float, entry_count: int) -> float:
    """
    Experience entries stand in for years of experience.

    With a positive minimum the ratio is capped at 1; without one, any
    experience at all scores 1.
    """
    if min_years and min_years > 0:
        return min(entry_count / min_years, 1.0)
    return 1.0 if entry_count > 0 else 0.0


def composite_score(
    breakdown: MatchBreakdown, weights: ScoringWeights = ScoringWeights()
) -> float:
    return (
        weights.semantic * breakdown.semantic
        + weights.skills * breakdown.skills
        + weights.experience * breakdown.experience
    )


def missing_requirements(
    job: JobPosting, resume: Resume
) -> List[MissingRequirementDict]:
    reqs = job.structuredRequirements
    parsed = resume.parsedData
    out: List[MissingRequirementDict] = []

    _, missing_skills = split_matches(reqs.skills, parsed.skills)
    if missing_skills:
        out.append({"category": "skills", "items": missing_skills})

    _, missing_certs = split_matches(reqs.certifications, parsed.certifications)
    if missing_certs:
        out.append({"category": "certifications", "items": missing_certs})
    return out


def score_candidate(
    job: JobPosting, resume: Resume, weights: ScoringWeights = ScoringWeights()
) -> Tuple[float, MatchBreakdown, List[str]]:
    """Return (composite, breakdown, matched required skills) for one resume."""
    reqs = job.structuredRequirements
    parsed = resume.parsedData

    matched, _ = split_matches(reqs.skills, parsed.skills)
    breakdown = MatchBreakdown(
        semantic=cosine_similarity(job.embedding, resume.embedding),
        skills=skills_score(reqs.skills, parsed.skills),
        experience=experience_score(reqs.experience.minYears, len(parsed.experience)),
    )
    return composite_score(breakdown, weights), breakdown, matched
