import asyncio
from datetime import datetime, timezone

import pytest

from conftest import FakeRedis, make_job, make_resume
from repository.job_repository import JobRepository
from repository.namespaces import RESUME_INDEX
from repository.resume_repository import ResumeRepository


@pytest.fixture
def redis(monkeypatch):
    fake = FakeRedis()

    async def _client():
        return fake

    monkeypatch.setattr(ResumeRepository, "_client", staticmethod(_client))
    monkeypatch.setattr(JobRepository, "_client", staticmethod(_client))
    return fake


def _at(day):
    return datetime(2024, 5, day, tzinfo=timezone.utc)


def _seed(repo):
    async def go():
        await repo.put(make_resume("b", [1.0], name="Ada Lovelace", uploaded_at=_at(2)))
        await repo.put(make_resume("a", [], name="Grace Hopper", uploaded_at=_at(3)))
        await repo.put(
            make_resume("c", [0.5], skills=["Kubernetes"], uploaded_at=_at(1))
        )

    asyncio.run(go())


class TestResumeRepository:
    def test_round_trip(self, redis):
        repo = ResumeRepository()
        _seed(repo)
        got = asyncio.run(repo.get("b"))
        assert got.parsedData.name == "Ada Lovelace"
        assert asyncio.run(repo.get("missing")) is None

    def test_all_with_embeddings_in_id_order(self, redis):
        repo = ResumeRepository()
        _seed(repo)
        assert [r.id for r in asyncio.run(repo.all_with_embeddings())] == ["b", "c"]

    def test_list_newest_first_with_paging_and_query(self, redis):
        repo = ResumeRepository()
        _seed(repo)

        total, page = asyncio.run(repo.list(limit=2))
        assert total == 3
        assert [r.id for r in page] == ["a", "b"]

        total, page = asyncio.run(repo.list(limit=2, offset=2))
        assert [r.id for r in page] == ["c"]

        total, page = asyncio.run(repo.list(q="kubernetes"))
        assert (total, [r.id for r in page]) == (1, ["c"])

    def test_malformed_blob_is_skipped(self, redis):
        repo = ResumeRepository()
        _seed(repo)
        redis.values[repo._key("bad")] = b"{not json"
        asyncio.run(redis.sadd(RESUME_INDEX, "bad"))

        total, page = asyncio.run(repo.list())
        assert total == 3
        assert "bad" not in [r.id for r in page]


def test_job_repository_lists_by_status(redis):
    repo = JobRepository()
    open_job = make_job("j-open", [1.0])
    closed_job = make_job("j-closed", [1.0]).model_copy(update={"status": "closed"})

    async def go():
        await repo.put(open_job)
        await repo.put(closed_job)
        return await repo.list(status="open")

    total, page = asyncio.run(go())
    assert total == 1
    assert [j.id for j in page] == ["j-open"]
    assert asyncio.run(repo.get("j-closed")).status == "closed"
