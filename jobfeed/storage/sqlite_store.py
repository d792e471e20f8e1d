"""Bookmarks in a single SQLite table keyed by job id."""
from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

from jobfeed.log import get_logger
from jobfeed.models import Job
from jobfeed.storage.base import BookmarkStore

log = get_logger(__name__)

SCHEMA_SQL = "CREATE TABLE IF NOT EXISTS bookmarked_jobs (id TEXT PRIMARY KEY, data TEXT)"


class SqliteBookmarkStore(BookmarkStore):
    name = "sqlite"

    def __init__(self, path: Path | str) -> None:
        """Open the database and create the table; raises sqlite3.Error on failure."""
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self.conn = sqlite3.connect(self.path, check_same_thread=False)
        try:
            self.conn.execute(SCHEMA_SQL)
            self.conn.commit()
        except sqlite3.Error:
            self.conn.close()
            raise
        log.debug("SQLite bookmark table ready at %s", self.path)

    def load_all(self) -> list[Job]:
        try:
            with self._lock:
                rows = self.conn.execute("SELECT id, data FROM bookmarked_jobs").fetchall()
        except sqlite3.Error as exc:
            log.error("Error loading bookmarked jobs: %s", exc)
            return []

        jobs: list[Job] = []
        for row_id, data in rows:
            try:
                jobs.append(Job.from_json(data, bookmarked=True))
            except (ValueError, TypeError) as exc:
                log.warning("Skipping unreadable bookmark %s: %s", row_id, exc)
        return jobs

    def upsert(self, job: Job) -> bool:
        try:
            with self._lock:
                self.conn.execute(
                    "INSERT OR REPLACE INTO bookmarked_jobs (id, data) VALUES (?, ?)",
                    (job.id, job.to_json()),
                )
                self.conn.commit()
        except sqlite3.Error as exc:
            log.error("Error bookmarking job %s: %s", job.id, exc)
            return False
        return True

    def delete(self, job_id: str) -> bool:
        try:
            with self._lock:
                self.conn.execute("DELETE FROM bookmarked_jobs WHERE id = ?", (job_id,))
                self.conn.commit()
        except sqlite3.Error as exc:
            log.error("Error removing bookmark %s: %s", job_id, exc)
            return False
        return True

    def close(self) -> None:
        self.conn.close()
