"""
Paginated job feed with persisted bookmarks.

fetch page → locate job array → normalize → merge into jobs → overlay bookmark flags.
"""
from __future__ import annotations

import threading

from jobfeed.bookmarks import Bookmarks
from jobfeed.config import FeedConfig, ensure_dirs, load_config
from jobfeed.envelope import find_job_array
from jobfeed.log import get_logger
from jobfeed.models import Job
from jobfeed.normalize import normalize_batch
from jobfeed.sources import JobPageSource, SourceError, get_source
from jobfeed.storage import BookmarkStore, open_store

log = get_logger(__name__)


class JobFeed:
    """State and operations the presentation layer binds to.

    Public operations never raise. Fetch failures land in ``error``;
    bookmark persistence failures land in ``bookmark_error`` and make the
    bookmark methods return False.

    ``fetch_jobs(force=True)`` starts a new generation; any page request
    issued under an older generation is discarded when it resolves.
    """

    def __init__(self, source: JobPageSource, store: BookmarkStore) -> None:
        self.source = source
        self._bookmarks = Bookmarks(store)
        self._lock = threading.Lock()
        self._jobs: list[Job] = []
        self._generation = 0
        self.page: int = 1
        self.has_more_jobs: bool = True
        self.loading: bool = False
        self.error: str | None = None

    # ── read-only views ──────────────────────────────────────────────────

    @property
    def jobs(self) -> list[Job]:
        with self._lock:
            return list(self._jobs)

    @property
    def bookmarked_jobs(self) -> list[Job]:
        return self._bookmarks.jobs()

    @property
    def bookmark_error(self) -> str | None:
        return self._bookmarks.last_error

    # ── pagination ───────────────────────────────────────────────────────

    def fetch_jobs(self, force: bool = False) -> None:
        """Load page 1, replacing ``jobs``; a no-op when jobs are cached and not forced."""
        with self._lock:
            if self._jobs and not force:
                log.info("Using existing jobs, skipping fetch")
                return
            self._generation += 1
            generation = self._generation
            self.loading = True
            self.error = None

        log.info("Fetching jobs (page 1)...")
        try:
            doc = self.source.fetch_page(1)
        except SourceError as exc:
            self._fail(generation, f"Failed to fetch jobs: {exc}")
            return
        except Exception as exc:
            log.exception("Unexpected error fetching page 1")
            self._fail(generation, f"Failed to fetch jobs: {exc}")
            return

        records = find_job_array(doc) or []

        with self._lock:
            if generation != self._generation:
                log.info("Discarding superseded page 1 response")
                return
            batch = self._bookmarks.overlay(normalize_batch(records, 0, set()))
            self._jobs = batch
            self.page = 1
            self.loading = False
        log.info("Loaded %d job(s) from page 1", len(batch))

    def fetch_next_page(self) -> None:
        """Append page ``page + 1``; stops pagination on an empty page or any failure."""
        with self._lock:
            if self.loading or not self.has_more_jobs:
                return
            self.loading = True
            generation = self._generation
            next_page = self.page + 1

        log.info("Fetching next page of jobs: page %d", next_page)
        try:
            doc = self.source.fetch_page(next_page)
        except SourceError as exc:
            self._fail(generation, f"Failed to fetch page {next_page}: {exc}", stop=True)
            return
        except Exception as exc:
            log.exception("Unexpected error fetching page %d", next_page)
            self._fail(generation, f"Failed to fetch page {next_page}: {exc}", stop=True)
            return

        records = find_job_array(doc) or []

        with self._lock:
            if generation != self._generation:
                log.info("Discarding page %d response from a superseded refresh", next_page)
                return
            if not records:
                log.info("No more jobs available (page %d empty)", next_page)
                self.has_more_jobs = False
                self.loading = False
                return
            taken = {j.id for j in self._jobs}
            batch = normalize_batch(records, len(self._jobs), taken)
            self._jobs.extend(self._bookmarks.overlay(batch))
            self.page = next_page
            self.loading = False
        log.info("Appended %d job(s) from page %d", len(batch), next_page)

    def _fail(self, generation: int, message: str, *, stop: bool = False) -> None:
        log.error(message)
        with self._lock:
            if generation != self._generation:
                return
            self.error = message
            self.loading = False
            if stop:
                self.has_more_jobs = False

    # ── bookmarks ────────────────────────────────────────────────────────

    def _set_flag(self, job_id: str, value: bool) -> None:
        with self._lock:
            self._jobs = [j.flagged(value) if j.id == job_id else j for j in self._jobs]

    def bookmark_job(self, job: Job) -> bool:
        if not self._bookmarks.add(job):
            log.warning("Bookmark for %s not saved; state unchanged", job.id)
            return False
        self._set_flag(job.id, True)
        return True

    def remove_bookmark(self, job_id: str) -> bool:
        if not self._bookmarks.remove(job_id):
            log.warning("Bookmark %s not removed; state unchanged", job_id)
            return False
        self._set_flag(job_id, False)
        return True

    def is_bookmarked(self, job_id: str) -> bool:
        return self._bookmarks.contains(job_id)

    def toggle_bookmark(self, job: Job) -> bool:
        """Flip the bookmark for ``job``; returns the resulting state."""
        if self.is_bookmarked(job.id):
            return not self.remove_bookmark(job.id)
        return self.bookmark_job(job)

    # ── lookup ───────────────────────────────────────────────────────────

    def find_job(self, job_id: str) -> Job | None:
        """Job for a detail view: exact id, then case-insensitive, then substring.

        Each strategy searches the feed before the bookmarks.
        """
        if not job_id:
            return None
        pool = self.jobs + self.bookmarked_jobs
        wanted = str(job_id)
        matchers = (
            lambda jid: jid == wanted,
            lambda jid: jid.lower() == wanted.lower(),
            lambda jid: wanted in jid or jid in wanted,
        )
        for matches in matchers:
            for job in pool:
                if job.id and matches(job.id):
                    return job
        log.debug("Job not found (ID: %s)", job_id)
        return None


def open_feed(config: FeedConfig | None = None) -> JobFeed:
    """Wire a JobFeed from configuration; the storage backend is fixed here."""
    cfg = config or load_config()
    ensure_dirs(cfg)
    return JobFeed(get_source(cfg), open_store(cfg))
