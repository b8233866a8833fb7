"""
Job listing filter used by the careers page.

A free-text query matches job titles (case-insensitive substring); location
and employment type are exact-match facets where "All" means no filter.
All three predicates are combined with AND.
"""
import html
import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from careerpage.schemas.job import JobResponse

ALL = "All"
DEFAULT_EXCERPT_LENGTH = 150

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class JobFilters:
    query: str = ""
    location: str = ALL
    employment_type: str = ALL

    @property
    def is_empty(self) -> bool:
        return not self.query and self.location == ALL and self.employment_type == ALL


@dataclass
class JobFacets:
    locations: list[str] = field(default_factory=lambda: [ALL])
    employment_types: list[str] = field(default_factory=lambda: [ALL])


def matches(job: JobResponse, filters: JobFilters) -> bool:
    if filters.query and filters.query.lower() not in job.title.lower():
        return False
    if filters.location != ALL and job.location != filters.location:
        return False
    if filters.employment_type != ALL and job.employment_type != filters.employment_type:
        return False
    return True


def filter_jobs(
    jobs: Sequence[JobResponse],
    query: str = "",
    location: str = ALL,
    employment_type: str = ALL,
) -> list[JobResponse]:
    """Return the jobs matching every given criterion, in their original order."""
    filters = JobFilters(query=query or "", location=location or ALL, employment_type=employment_type or ALL)
    return [job for job in jobs if matches(job, filters)]


def _distinct(values: Iterable[str]) -> list[str]:
    """Distinct values in first-seen order, prefixed with the "All" sentinel."""
    return [ALL, *dict.fromkeys(values)]


def facet_options(jobs: Sequence[JobResponse]) -> JobFacets:
    return JobFacets(
        locations=_distinct(job.location for job in jobs),
        employment_types=_distinct(job.employment_type for job in jobs),
    )


def excerpt(description: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """
    Plain-text preview of rich HTML.

    Tags are stripped before truncating, so a cut can never land inside one.
    """
    if not description:
        return ""
    text = html.unescape(_TAG_RE.sub(" ", description))
    text = _WHITESPACE_RE.sub(" ", text).strip()
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."
