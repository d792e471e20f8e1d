"""Keep bookmark flags in the job list consistent with the bookmark store."""
from __future__ import annotations

import threading

from jobfeed.log import get_logger
from jobfeed.models import Job
from jobfeed.storage import BookmarkStore

log = get_logger(__name__)


class Bookmarks:
    """In-memory mirror of a BookmarkStore.

    The store is authoritative; this object is a cache that is only updated
    after the store confirms a write.
    """

    def __init__(self, store: BookmarkStore) -> None:
        self.store = store
        self._lock = threading.Lock()
        self._jobs: dict[str, Job] = {}
        self.last_error: str | None = None
        self.reload()

    def reload(self) -> None:
        loaded = self.store.load_all()
        with self._lock:
            self._jobs = {j.id: j.flagged(True) for j in loaded}
        log.info("Loaded %d bookmarked job(s) from %s store", len(loaded), self.store.name)

    def jobs(self) -> list[Job]:
        with self._lock:
            return list(self._jobs.values())

    def ids(self) -> set[str]:
        with self._lock:
            return set(self._jobs)

    def contains(self, job_id: str) -> bool:
        with self._lock:
            return job_id in self._jobs

    def add(self, job: Job) -> bool:
        """Persist ``job``, then cache a flagged copy; False if the store refused."""
        with self._lock:
            if not self.store.upsert(job):
                self.last_error = f"Could not save bookmark for {job.id}"
                return False
            # Re-bookmarking moves the job to the end.
            self._jobs.pop(job.id, None)
            self._jobs[job.id] = job.flagged(True)
            self.last_error = None
        log.debug("Bookmarked %s", job.id)
        return True

    def remove(self, job_id: str) -> bool:
        with self._lock:
            if not self.store.delete(job_id):
                self.last_error = f"Could not remove bookmark for {job_id}"
                return False
            self._jobs.pop(job_id, None)
            self.last_error = None
        log.debug("Removed bookmark %s", job_id)
        return True

    def overlay(self, jobs: list[Job]) -> list[Job]:
        """Copies of ``jobs`` with ``bookmarked`` matching the cache."""
        marked = self.ids()
        return [j.flagged(j.id in marked) for j in jobs]
