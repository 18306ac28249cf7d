import itertools

import pytest

from conftest import make_job, make_resume
from core.entities import ScoredResult
from core.ranking import match_candidates, rank_results, search_documents


def _ids(results):
    return [r.document_id for r in results]


class TestRankResults:
    def test_descending_by_score(self):
        results = [ScoredResult("a", 0.1), ScoredResult("b", 0.9), ScoredResult("c", 0.5)]
        assert _ids(rank_results(results, 10)) == ["b", "c", "a"]

    def test_near_equal_scores_break_by_ascending_id(self):
        results = [
            ScoredResult("b", 0.50005),
            ScoredResult("a", 0.5),
            ScoredResult("c", 0.9),
        ]
        # a's lower score is within tolerance of b's, so id order decides
        assert _ids(rank_results(results, 10)) == ["c", "a", "b"]

    def test_scores_outside_tolerance_are_not_ties(self):
        results = [ScoredResult("a", 0.5), ScoredResult("b", 0.5002)]
        assert _ids(rank_results(results, 10)) == ["b", "a"]

    def test_order_does_not_depend_on_input_order(self):
        base = [
            ScoredResult("d", 0.70003),
            ScoredResult("a", 0.7),
            ScoredResult("c", 0.2),
            ScoredResult("b", 0.70001),
            ScoredResult("e", -0.3),
        ]
        orders = {tuple(_ids(rank_results(list(p), 5))) for p in itertools.permutations(base)}
        assert orders == {("a", "b", "d", "c", "e")}

    @pytest.mark.parametrize("limit,expected", [(1, 1), (2, 2), (3, 3), (50, 3)])
    def test_truncates_to_limit(self, limit, expected):
        results = [ScoredResult(i, s) for i, s in (("x", 0.1), ("y", 0.2), ("z", 0.3))]
        assert len(rank_results(results, limit)) == expected

    @pytest.mark.parametrize("limit", [0, -3, True, 2.5, "5", None])
    def test_rejects_non_positive_or_non_int_limit(self, limit):
        with pytest.raises(ValueError):
            rank_results([ScoredResult("a", 1.0)], limit)


class TestSearchDocuments:
    def test_same_orthogonal_opposite(self):
        docs = [
            make_resume("opposite", [-1.0, 0.0]),
            make_resume("same", [1.0, 0.0]),
            make_resume("orthogonal", [0.0, 1.0]),
        ]
        ranked, searched = search_documents([1.0, 0.0], docs, 5)

        assert _ids(ranked) == ["same", "orthogonal", "opposite"]
        assert [r.score for r in ranked] == pytest.approx([1.0, 0.0, -1.0])
        assert searched == 3

    def test_documents_without_embedding_are_skipped(self):
        docs = [make_resume("a", [1.0, 0.0]), make_resume("b", [])]
        ranked, searched = search_documents([1.0, 0.0], docs, 5)
        assert _ids(ranked) == ["a"]
        assert searched == 1

    def test_result_count_is_min_of_k_and_eligible(self):
        docs = [make_resume(f"d{i}", [1.0, i / 10]) for i in range(4)]
        assert len(search_documents([1.0, 0.0], docs, 2)[0]) == 2
        assert len(search_documents([1.0, 0.0], docs, 10)[0]) == 4

    def test_evidence_takes_top_chunks_without_threshold(self):
        doc = make_resume(
            "a",
            [1.0, 0.0],
            chunks=[
                ("far", [-1.0, 0.0]),
                ("near", [1.0, 0.0]),
                ("mid", [1.0, 1.0]),
                ("ortho", [0.0, 1.0]),
            ],
        )
        ranked, _ = search_documents([1.0, 0.0], [doc], 1)
        evidence = ranked[0].evidence
        assert [e.snippet for e in evidence] == ["near", "mid", "ortho"]
        assert evidence[0].score == pytest.approx(1.0)

    def test_repeated_runs_are_identical(self):
        docs = [make_resume(f"d{i:02d}", [1.0, (i % 3) / 7]) for i in range(12)]
        first = _ids(search_documents([1.0, 0.0], docs, 12)[0])
        second = _ids(search_documents([1.0, 0.0], list(reversed(docs)), 12)[0])
        assert first == second


class TestMatchCandidates:
    def test_composite_ranking_and_threshold_evidence(self):
        job = make_job("job-1", [1.0, 0.0], skills=["Python", "Kubernetes"], min_years=2)
        strong = make_resume(
            "strong",
            [0.8, 0.6],
            skills=["Python 3"],
            experience_entries=2,
            chunks=[("relevant", [0.9, 0.1]), ("unrelated", [0.5, 0.9])],
        )
        weak = make_resume("weak", [0.0, 1.0], skills=[], experience_entries=0)

        ranked, total = match_candidates(job, [weak, strong], 10)

        assert total == 2
        assert _ids(ranked) == ["strong", "weak"]
        top = ranked[0]
        assert top.score == pytest.approx(0.75)
        assert top.matched_skills == ["Python"]
        assert top.missing_requirements == [{"category": "skills", "items": ["Kubernetes"]}]
        assert [e.snippet for e in top.evidence] == ["relevant"]
        assert ranked[1].score == pytest.approx(0.0)

    def test_no_chunk_above_threshold_means_no_evidence(self):
        job = make_job("job-1", [1.0, 0.0])
        resume = make_resume("r", [1.0, 0.0], chunks=[("meh", [1.0, 1.5])])
        ranked, _ = match_candidates(job, [resume], 1)
        assert ranked[0].evidence == []
