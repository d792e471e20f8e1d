"""Bookmarks as one JSON array in a flat file, with advisory file locking."""
from __future__ import annotations

import fcntl
import json
import os
from pathlib import Path

from jobfeed.log import get_logger
from jobfeed.models import Job
from jobfeed.storage.base import BookmarkStore

log = get_logger(__name__)


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        op = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(f.fileno(), op)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


class JsonBookmarkStore(BookmarkStore):
    name = "json"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock_path = self.path.with_name(self.path.name + ".lock")

    def _read(self) -> list[dict]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            text = f.read()
        if not text.strip():
            return []
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError(f"{self.path.name} does not hold a JSON array")
        return data

    def _write(self, records: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False)
        os.replace(tmp, self.path)

    def _rewrite(self, mutate) -> bool:
        """Read-modify-write the whole array under an exclusive lock."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._lock_path, "a", encoding="utf-8") as lf:
                _lock(lf)
                try:
                    self._write(mutate(self._read()))
                finally:
                    _unlock(lf)
        except (OSError, ValueError) as exc:
            log.error("Error writing %s: %s", self.path.name, exc)
            return False
        return True

    def load_all(self) -> list[Job]:
        try:
            records = self._read()
        except (OSError, ValueError) as exc:
            log.error("Error loading bookmarked jobs from %s: %s", self.path.name, exc)
            return []

        jobs: list[Job] = []
        for rec in records:
            try:
                jobs.append(Job.from_dict(rec, bookmarked=True))
            except (ValueError, TypeError) as exc:
                log.warning("Skipping unreadable bookmark entry: %s", exc)
        return jobs

    def upsert(self, job: Job) -> bool:
        def mutate(records: list[dict]) -> list[dict]:
            kept = [r for r in records if not (isinstance(r, dict) and str(r.get("id")) == job.id)]
            kept.append(job.to_dict())
            return kept

        ok = self._rewrite(mutate)
        if ok:
            log.debug("Bookmarked %s in %s", job.id, self.path.name)
        return ok

    def delete(self, job_id: str) -> bool:
        def mutate(records: list[dict]) -> list[dict]:
            return [r for r in records if not (isinstance(r, dict) and str(r.get("id")) == job_id)]

        return self._rewrite(mutate)
