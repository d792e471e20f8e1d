"""Lokal jobs API — public paginated job feed (no API key required).

GET <url>?page=<n> returns a JSON document; the job array sits under
``results`` on current deployments.
"""
from __future__ import annotations

from typing import Any

import requests

from jobfeed.config import DEFAULT_API_URL
from jobfeed.log import get_logger
from jobfeed.sources.base import JobPageSource, SourceError

log = get_logger(__name__)


class LokalSource(JobPageSource):
    def __init__(self, url: str = DEFAULT_API_URL, timeout_sec: float = 15.0) -> None:
        self.url = url
        self.timeout_sec = timeout_sec

    def fetch_page(self, page: int) -> Any:
        log.debug("Fetching %s?page=%d", self.url, page)
        try:
            r = requests.get(self.url, params={"page": page}, timeout=self.timeout_sec)
        except requests.RequestException as exc:
            raise SourceError(str(exc)) from exc

        try:
            r.raise_for_status()
        except requests.HTTPError as exc:
            raise SourceError(f"API error: {r.status_code} {r.reason}") from exc
        try:
            return r.json()
        except ValueError as exc:
            raise SourceError(f"Invalid JSON on page {page}: {exc}") from exc
