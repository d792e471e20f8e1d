"""Turn raw upstream job records into canonical Job objects.

The upstream API is loosely typed: some fields are flat, some nested under
``primary_details``, the phone number may only exist inside a ``tel:`` link,
and the free-form ``contentV3.V3`` list tags its entries either in English
(``field_key``) or in Telugu (``field_name``).

Each output field has an ordered table of extractors. The first extractor
that yields a non-empty string wins; an extractor that blows up on a
malformed nested value is skipped, so one bad field never blanks the record.
"""
from __future__ import annotations

import re
import time
from typing import Any, Callable, Iterable, Mapping

from jobfeed.log import get_logger
from jobfeed.models import (
    LOCATION_MISSING,
    PHONE_MISSING,
    SALARY_MISSING,
    UNTITLED,
    Job,
)

log = get_logger(__name__)

Extractor = Callable[[Mapping[str, Any]], Any]

# English key / translated name pairs used to tag contentV3 entries.
OTHER_DETAILS_TAGS = ("Other details", "ఇతర వివరాలు")
JOB_CATEGORY_TAGS = ("Job Category", "జాబ్ కేటగిరి")


def _clean(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _path(*keys: str) -> Extractor:
    """Walk nested mappings; a missing or non-mapping hop yields None."""

    def extract(raw: Mapping[str, Any]) -> Any:
        node: Any = raw
        for key in keys:
            if not isinstance(node, Mapping):
                return None
            node = node.get(key)
        return node

    return extract


def _tel_in(*keys: str, button_hint: str | None = None) -> Extractor:
    """Number following ``tel:`` inside a link found at ``keys``."""
    link_at = _path(*keys)

    def extract(raw: Mapping[str, Any]) -> Any:
        if button_hint is not None and button_hint not in _clean(raw.get("button_text")):
            return None
        link = _clean(link_at(raw))
        if "tel:" not in link:
            return None
        return link.split("tel:", 1)[1]

    return extract


def _tagged_content(tags: Iterable[str]) -> Extractor:
    """``field_value`` of the first contentV3 entry whose key or name is in ``tags``."""
    wanted = {t.strip() for t in tags}

    def extract(raw: Mapping[str, Any]) -> Any:
        entries = _path("contentV3", "V3")(raw)
        if not isinstance(entries, list):
            return None
        for item in entries:
            if not isinstance(item, Mapping):
                continue
            if _clean(item.get("field_key")) in wanted or _clean(item.get("field_name")) in wanted:
                return item.get("field_value")
        return None

    return extract


def _string_only(*keys: str) -> Extractor:
    at = _path(*keys)

    def extract(raw: Mapping[str, Any]) -> Any:
        value = at(raw)
        return value if isinstance(value, str) else None

    return extract


FIELD_EXTRACTORS: dict[str, list[Extractor]] = {
    "title": [_path("title")],
    "location": [_path("primary_details", "Place"), _path("job_location_slug")],
    "salary": [_path("primary_details", "Salary")],
    "phone": [
        _path("whatsapp_no"),
        _tel_in("contact_preference", "whatsapp_link"),
        _tel_in("custom_link", button_hint="Call"),
    ],
    "company": [_path("company_name")],
    "description": [
        _path("other_details"),
        _tagged_content(OTHER_DETAILS_TAGS),
        _string_only("content"),
    ],
    "job_type": [
        _path("primary_details", "Job_Type"),
        _path("job_hours"),
        _path("primary_details", "Other_details"),
        _tagged_content(JOB_CATEGORY_TAGS),
    ],
    "category": [_path("job_category"), _tagged_content(JOB_CATEGORY_TAGS)],
}

FIELD_DEFAULTS: dict[str, str] = {
    "title": UNTITLED,
    "location": LOCATION_MISSING,
    "salary": SALARY_MISSING,
    "phone": PHONE_MISSING,
    "company": "",
    "description": "",
    "job_type": "",
    "category": "",
}


def extract_field(raw: Mapping[str, Any], name: str) -> str:
    """First non-empty value from the field's extractor chain, else its default."""
    for extractor in FIELD_EXTRACTORS[name]:
        try:
            value = _clean(extractor(raw))
        except Exception as exc:
            log.debug("Extractor for %s failed: %s", name, exc)
            continue
        if value:
            return value
    return FIELD_DEFAULTS[name]


def slugify(text: str) -> str:
    return re.sub(r"\s+", "-", text.strip()).lower()


def _millis() -> int:
    return int(time.time() * 1000)


def make_job_id(raw: Any, index: int, taken: set[str] | None = None) -> str:
    """Upstream id if usable, otherwise one synthesized from title and position.

    Synthesized ids are suffixed until they are absent from ``taken``.
    Upstream ids are returned as-is even when they repeat.
    """
    if isinstance(raw, Mapping):
        upstream = _clean(raw.get("id"))
        if upstream:
            return upstream
        title = _clean(raw.get("title"))
    else:
        title = ""

    base = f"job-{slugify(title)}-{index}" if title else f"job-{index}-{_millis()}"
    if not taken or base not in taken:
        return base
    n = 2
    while f"{base}-{n}" in taken:
        n += 1
    return f"{base}-{n}"


def _degraded(raw: Any, index: int, taken: set[str] | None) -> Job:
    title = UNTITLED
    company = ""
    if isinstance(raw, Mapping):
        title = _clean(raw.get("title")) or UNTITLED
        company = _clean(raw.get("company_name"))
    job_id = f"job-{index}-{_millis()}"
    if taken and job_id in taken:
        job_id = make_job_id(None, index, taken)
    return Job(
        id=job_id,
        title=title,
        location="Error parsing location",
        salary="Error parsing salary",
        phone="Error parsing phone",
        company=company,
        description="Error parsing job details",
    )


def normalize_job(raw: Any, index: int, taken: set[str] | None = None) -> Job:
    """Canonical Job for one upstream record. Never raises."""
    try:
        if not isinstance(raw, Mapping):
            raise TypeError(f"expected a mapping, got {type(raw).__name__}")
        fields = {name: extract_field(raw, name) for name in FIELD_EXTRACTORS}
        return Job(id=make_job_id(raw, index, taken), **fields)
    except Exception as exc:
        log.warning("Could not normalize job at position %d: %s", index, exc)
        return _degraded(raw, index, taken)


def normalize_batch(records: list[Any], offset: int, taken: set[str] | None = None) -> list[Job]:
    """Normalize a page of records; positions start at ``offset``.

    ``taken`` is updated with every id produced so later records in the
    batch cannot reuse a synthesized id.
    """
    seen = set(taken or ())
    jobs: list[Job] = []
    for i, raw in enumerate(records):
        job = normalize_job(raw, offset + i, seen)
        seen.add(job.id)
        jobs.append(job)
    if taken is not None:
        taken.update(seen)
    return jobs


def dial_uri(phone: str) -> str | None:
    """``tel:`` URI for a display phone string, or None when it holds no number."""
    cleaned = re.sub(r"[^\d+]", "", phone or "")
    if not re.search(r"\d", cleaned):
        return None
    return f"tel:{cleaned}"
