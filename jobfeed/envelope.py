"""Locate the job array inside a paginated response document."""
from __future__ import annotations

from typing import Any

from jobfeed.log import get_logger

log = get_logger(__name__)

# Object keys checked after ``results`` and the bare-array case, in order.
FALLBACK_KEYS: tuple[str, ...] = ("data", "jobs", "items")


def find_job_array(doc: Any) -> list | None:
    """Job records from ``doc``, or None when no known envelope matches.

    Priority: ``results`` array, bare top-level array, then ``data``,
    ``jobs``, ``items``.
    """
    if isinstance(doc, dict) and isinstance(doc.get("results"), list):
        log.debug("Found results array with %d jobs", len(doc["results"]))
        return doc["results"]
    if isinstance(doc, list):
        log.debug("Response is an array with %d jobs", len(doc))
        return doc
    if isinstance(doc, dict):
        for key in FALLBACK_KEYS:
            if isinstance(doc.get(key), list):
                log.debug("Found %s array with %d jobs", key, len(doc[key]))
                return doc[key]
        log.warning(
            "Could not find jobs array in response (keys: %s)",
            ", ".join(map(str, doc.keys())) or "none",
        )
    else:
        log.warning("Unexpected response type %s", type(doc).__name__)
    return None
