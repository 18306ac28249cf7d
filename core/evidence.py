# core/evidence.py
from typing import List, Optional, Sequence
from core.entities import EvidenceItem
from core.similarity import cosine_similarity
from model.resume import Chunk
from util.functions import clip_chars
from util.types import VectorLike


def extract_evidence(
    query_vector: VectorLike,
    chunks: Sequence[Chunk],
    *,
    threshold: Optional[float] = None,
    limit: int = 3,
    snippet_chars: int = 200,
) -> List[EvidenceItem]:
    """
    Best-matching chunks of one document as short snippets.

    Chunks without an embedding or without text are skipped. With a
    `threshold`, only chunks scoring strictly above it qualify (job match);
    without one the top chunks are taken whatever their score (search).
    """
    scored: List[tuple[float, Chunk]] = []
    for ch in chunks or []:
        if not ch.embedding or not ch.text:
            continue
        sim = cosine_similarity(query_vector, ch.embedding)
        if threshold is not None and not sim > threshold:
            continue
        scored.append((sim, ch))

    # stable: equal scores keep document order
    scored.sort(key=lambda t: t[0], reverse=True)
    return [
        EvidenceItem(snippet=clip_chars(ch.text, snippet_chars), score=sim)
        for sim, ch in scored[: max(limit, 0)]
    ]
