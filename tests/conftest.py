from __future__ import annotations

import os

os.environ.setdefault("JOBFEED_NO_LOG_FILE", "1")

import pytest

from jobfeed.feed import JobFeed
from jobfeed.models import Job
from jobfeed.sources import StaticSource
from jobfeed.storage import BookmarkStore, JsonBookmarkStore, SqliteBookmarkStore


class BrokenStore(BookmarkStore):
    """Store whose writes always fail."""

    name = "broken"

    def __init__(self, jobs: list[Job] | None = None) -> None:
        self._jobs = list(jobs or [])

    def load_all(self) -> list[Job]:
        return [j.flagged(True) for j in self._jobs]

    def upsert(self, job: Job) -> bool:
        return False

    def delete(self, job_id: str) -> bool:
        return False


def raw_job(job_id: str | None, title: str = "Cook", place: str = "Pune") -> dict:
    raw = {"title": title, "primary_details": {"Place": place}}
    if job_id is not None:
        raw["id"] = job_id
    return raw


@pytest.fixture(params=["sqlite", "json"])
def store(request, tmp_path) -> BookmarkStore:
    if request.param == "sqlite":
        s = SqliteBookmarkStore(tmp_path / "jobs.db")
    else:
        s = JsonBookmarkStore(tmp_path / "bookmarked_jobs.json")
    yield s
    s.close()


@pytest.fixture
def sqlite_store(tmp_path) -> SqliteBookmarkStore:
    s = SqliteBookmarkStore(tmp_path / "jobs.db")
    yield s
    s.close()


@pytest.fixture
def two_pages() -> StaticSource:
    return StaticSource({
        1: {"results": [raw_job("1", "Cook"), raw_job("2", "Driver", "Delhi")]},
        2: {"data": [raw_job("3", "Tailor", "Hyderabad")]},
        3: {"data": []},
    })


@pytest.fixture
def feed(two_pages, sqlite_store) -> JobFeed:
    return JobFeed(two_pages, sqlite_store)
