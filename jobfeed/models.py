"""Canonical job record shared by the feed, the normalizer and the stores."""
from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any

LOCATION_MISSING = "Location not specified"
SALARY_MISSING = "Salary not specified"
PHONE_MISSING = "Phone not available"
UNTITLED = "Untitled Job"


@dataclass(frozen=True)
class Job:
    id: str
    title: str
    location: str = LOCATION_MISSING
    salary: str = SALARY_MISSING
    phone: str = PHONE_MISSING
    company: str = ""
    description: str = ""
    job_type: str = ""
    category: str = ""
    bookmarked: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serializable form; `bookmarked` is a view and is not stored."""
        return {
            "id": self.id,
            "title": self.title,
            "location": self.location,
            "salary": self.salary,
            "phone": self.phone,
            "company": self.company,
            "description": self.description,
            "jobType": self.job_type,
            "category": self.category,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, bookmarked: bool = False) -> Job:
        if not isinstance(data, dict) or not data.get("id"):
            raise ValueError("stored job has no id")
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or UNTITLED),
            location=str(data.get("location") or LOCATION_MISSING),
            salary=str(data.get("salary") or SALARY_MISSING),
            phone=str(data.get("phone") or PHONE_MISSING),
            company=str(data.get("company") or ""),
            description=str(data.get("description") or ""),
            job_type=str(data.get("jobType") or data.get("job_type") or ""),
            category=str(data.get("category") or ""),
            bookmarked=bookmarked,
        )

    @classmethod
    def from_json(cls, text: str, *, bookmarked: bool = False) -> Job:
        return cls.from_dict(json.loads(text), bookmarked=bookmarked)

    def flagged(self, bookmarked: bool) -> Job:
        """Copy with the bookmark view flag set."""
        return replace(self, bookmarked=bookmarked)
