# core/entities.py
from dataclasses import dataclass, field
from typing import List, Optional
from util.types import MissingRequirementDict


@dataclass(frozen=True)
class TextChunk:
    """
    A window of words cut from a source text.
    `start_char`/`end_char` index into that source text.
    """

    text: str
    start_char: int
    end_char: int


@dataclass(frozen=True)
class ScoringWeights:
    semantic: float = 0.5
    skills: float = 0.3
    experience: float = 0.2


@dataclass
class EvidenceItem:
    snippet: str
    score: float


@dataclass
class MatchBreakdown:
    semantic: float
    skills: float
    experience: float


@dataclass
class ScoredResult:
    """
    One ranked document for a single request; never persisted.
    `score` is the ranking key: cosine for search, composite for job match.
    """

    document_id: str
    score: float
    evidence: List[EvidenceItem] = field(default_factory=list)
    breakdown: Optional[MatchBreakdown] = None
    matched_skills: List[str] = field(default_factory=list)
    missing_requirements: List[MissingRequirementDict] = field(default_factory=list)
