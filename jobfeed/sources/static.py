"""Page source backed by canned response documents.

Selected with ``api.source: static`` (or JOBFEED_SOURCE=static) to run the
feed offline from a JSON file; tests build it from dicts directly.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jobfeed.log import get_logger
from jobfeed.sources.base import JobPageSource, SourceError

log = get_logger(__name__)


class StaticSource(JobPageSource):
    """Serves pre-built response documents by page number.

    A page mapped to an exception instance raises it (wrapped in
    SourceError when it is not one already). Pages past the end return
    ``{"results": []}``.
    """

    def __init__(self, pages: dict[int, Any] | None = None) -> None:
        self.pages: dict[int, Any] = dict(pages or {})
        self.calls: list[int] = []

    @classmethod
    def from_file(cls, path: Path | str) -> StaticSource:
        """Load ``{"<page>": <response document>, ...}`` from a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{Path(path).name}: expected an object keyed by page number")
        return cls({int(page): doc for page, doc in data.items()})

    def fetch_page(self, page: int) -> Any:
        self.calls.append(page)
        doc = self.pages.get(page, {"results": []})
        if isinstance(doc, SourceError):
            raise doc
        if isinstance(doc, Exception):
            raise SourceError(str(doc)) from doc
        log.debug("StaticSource served page %d", page)
        return doc
