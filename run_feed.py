#!/usr/bin/env python3
"""Entry point to drive the job feed from a terminal.

Usage:
  python run_feed.py [pages]          fetch page 1 plus pages-1 more
  python run_feed.py --bookmarks      list stored bookmarks
  python run_feed.py --bookmark ID    fetch page 1, then bookmark job ID
  python run_feed.py --unbookmark ID  remove bookmark ID
"""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from jobfeed.log import get_logger
from jobfeed.feed import JobFeed, open_feed

log = get_logger(__name__)


def _show_jobs(jobs) -> None:
    for j in jobs:
        mark = "*" if j.bookmarked else " "
        log.info("%s %-24s  %s | %s | %s", mark, j.id, j.title, j.location, j.salary)


def _fetch(feed: JobFeed, pages: int) -> int:
    feed.fetch_jobs()
    for _ in range(pages - 1):
        if not feed.has_more_jobs:
            break
        feed.fetch_next_page()
    if feed.error:
        log.error("%s", feed.error)
    _show_jobs(feed.jobs)
    log.info("Jobs: %d  page: %d  more: %s", len(feed.jobs), feed.page, feed.has_more_jobs)
    return 1 if feed.error and not feed.jobs else 0


def _arg_after(argv: list[str], flag: str) -> str | None:
    i = argv.index(flag) + 1
    return argv[i] if i < len(argv) else None


def main(argv: list[str]) -> int:
    feed = open_feed()

    if "--bookmarks" in argv:
        _show_jobs(feed.bookmarked_jobs)
        log.info("Bookmarked: %d", len(feed.bookmarked_jobs))
        return 0

    if "--unbookmark" in argv:
        job_id = _arg_after(argv, "--unbookmark")
        if not job_id:
            log.error("Usage: run_feed.py --unbookmark ID")
            return 2
        if not feed.remove_bookmark(job_id):
            log.error("%s", feed.bookmark_error)
            return 1
        log.info("Removed bookmark %s", job_id)
        return 0

    if "--bookmark" in argv:
        job_id = _arg_after(argv, "--bookmark")
        if not job_id:
            log.error("Usage: run_feed.py --bookmark ID")
            return 2
        feed.fetch_jobs()
        job = feed.find_job(job_id)
        if job is None:
            log.error("Job not found (ID: %s)", job_id)
            return 1
        if not feed.bookmark_job(job):
            log.error("%s", feed.bookmark_error)
            return 1
        log.info("Bookmarked %s: %s", job.id, job.title)
        return 0

    pages = int(argv[0]) if argv and argv[0].isdigit() else 1
    return _fetch(feed, max(pages, 1))


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
