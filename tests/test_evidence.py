import pytest

from core.evidence import extract_evidence
from model.resume import Chunk


def _chunk(text, embedding):
    return Chunk(text=text, embedding=embedding, startChar=0, endChar=len(text))


def test_long_snippets_are_clipped_with_ellipsis():
    long_text = "x" * 250
    exact = "y" * 200
    ev = extract_evidence(
        [1.0, 0.0], [_chunk(long_text, [1.0, 0.0]), _chunk(exact, [1.0, 0.1])]
    )
    assert ev[0].snippet == "x" * 200 + "..."
    assert ev[1].snippet == exact


def test_at_most_three_snippets_best_first():
    chunks = [_chunk(f"c{i}", [1.0, i * 0.5]) for i in range(6)]
    ev = extract_evidence([1.0, 0.0], chunks)
    assert [e.snippet for e in ev] == ["c0", "c1", "c2"]
    assert ev[0].score >= ev[1].score >= ev[2].score


def test_skips_chunks_without_embedding_or_text():
    chunks = [
        _chunk("no vector", []),
        _chunk("", [1.0, 0.0]),
        _chunk("kept", [0.0, 1.0]),
    ]
    ev = extract_evidence([1.0, 0.0], chunks)
    assert [e.snippet for e in ev] == ["kept"]
    assert ev[0].score == pytest.approx(0.0)


def test_threshold_drops_low_scoring_chunks():
    chunks = [_chunk("hit", [1.0, 0.1]), _chunk("miss", [1.0, 1.0])]
    ev = extract_evidence([1.0, 0.0], chunks, threshold=0.71)
    assert [e.snippet for e in ev] == ["hit"]


def test_no_chunks():
    assert extract_evidence([1.0, 0.0], []) == []
