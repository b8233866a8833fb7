"""
Translation between storage rows (snake_case columns) and API entities
(camelCase fields).

Every read path goes through `company_from_row` / `job_from_row`, so
derived values such as postedDaysAgo are computed in exactly one place.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from careerpage.models.company import Company
from careerpage.models.job_posting import JobPosting
from careerpage.schemas.company import BrandConfig, CompanyResponse, PageSection, default_page_sections
from careerpage.schemas.job import JobResponse

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400

COMPANY_COLUMNS = ("name", "slug", "brand_config", "page_sections")

JOB_COLUMNS = (
    "company_id",
    "title",
    "slug",
    "location",
    "work_policy",
    "department",
    "employment_type",
    "experience_level",
    "job_type",
    "salary_range",
    "description",
    "application_url",
)

# Columns a partial update may explicitly clear
CLEARABLE_JOB_COLUMNS = frozenset({"salary_range", "application_url"})


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns store."""
    return datetime.utcnow()


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def posted_days_ago(created_at: Optional[datetime], now: Optional[datetime] = None) -> int:
    """Whole days between creation and now, floored."""
    if created_at is None:
        return 0
    now = _as_naive_utc(now or utcnow())
    elapsed = now - _as_naive_utc(created_at)
    return int(elapsed.total_seconds() // SECONDS_PER_DAY)


def to_columns(fields: Mapping[str, Any], allowed: Iterable[str]) -> dict[str, Any]:
    """
    Map camelCase (or already snake_case) field names onto storage columns.

    Unknown keys are dropped so a caller cannot write arbitrary columns.
    """
    allowed = set(allowed)
    columns: dict[str, Any] = {}
    for key, value in fields.items():
        column = to_snake(key)
        if column in allowed:
            columns[column] = value
    return columns


def job_update_columns(fields: Mapping[str, Any]) -> dict[str, Any]:
    """
    Columns for a partial job update.

    Empty values are ignored, except for the columns that may be cleared.
    """
    columns = to_columns(fields, JOB_COLUMNS)
    columns.pop("company_id", None)
    return {
        column: value
        for column, value in columns.items()
        if column in CLEARABLE_JOB_COLUMNS or value not in (None, "")
    }


def brand_config_from_document(document: Optional[Mapping[str, Any]]) -> BrandConfig:
    if not document:
        return BrandConfig()
    try:
        return BrandConfig.model_validate(document)
    except ValidationError as e:
        logger.warning(f"Stored brand config is invalid, using defaults: {e}")
        return BrandConfig()


def sections_from_document(document: Optional[list]) -> list[PageSection]:
    if document is None:
        return default_page_sections()
    sections = []
    for raw in document:
        try:
            sections.append(PageSection.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping malformed page section {raw!r}: {e}")
    return sections


def company_from_row(row: Company) -> CompanyResponse:
    return CompanyResponse(
        id=str(row.id),
        slug=row.slug,
        name=row.name,
        brand_config=brand_config_from_document(row.brand_config),
        page_sections=sections_from_document(row.page_sections),
    )


def job_from_row(row: JobPosting, now: Optional[datetime] = None) -> JobResponse:
    return JobResponse(
        id=str(row.id),
        company_id=str(row.company_id),
        title=row.title,
        slug=row.slug,
        location=row.location,
        work_policy=row.work_policy,
        department=row.department,
        employment_type=row.employment_type,
        experience_level=row.experience_level,
        job_type=row.job_type,
        salary_range=row.salary_range,
        description=row.description or "",
        application_url=row.application_url or "#",
        posted_days_ago=posted_days_ago(row.created_at, now),
    )
