"""
Job persistence: get / list / create / update / delete.

Reads fall back to the sample dataset; writes are plain remote calls with
no local caching, so callers re-fetch lists after a mutation.
"""
import logging
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careerpage.exceptions import NotFoundError
from careerpage.models.job_posting import JobPosting
from careerpage.schemas.job import JobCreate, JobResponse, JobUpdate
from careerpage.services import fallback
from careerpage.services.companies import get_company_row
from careerpage.services.mapping import JOB_COLUMNS, job_from_row, job_update_columns, to_columns
from careerpage.services.rich_text import sanitize_html
from careerpage.services.slugs import is_uuid, job_slug_for
from careerpage.services.store import READ_ERRORS, commit_write, execute_for_write, require_db

logger = logging.getLogger(__name__)


async def list_jobs(db: Optional[AsyncSession], company_id: str) -> list[JobResponse]:
    """Jobs of a company, newest first."""
    if db is None or not is_uuid(company_id):
        if db is not None:
            logger.warning(f'Company ID "{company_id}" is not a valid UUID. Using sample data.')
        else:
            logger.warning("Database not configured. Using sample data.")
        return fallback.get_jobs_by_company_id(company_id)

    try:
        result = await db.execute(
            select(JobPosting)
            .where(JobPosting.company_id == company_id)
            .order_by(JobPosting.created_at.desc())
        )
        rows = result.scalars().all()
    except READ_ERRORS as e:
        logger.warning(f"Error fetching jobs for company {company_id}, using sample data: {e}")
        return fallback.get_jobs_by_company_id(company_id)

    return [job_from_row(row) for row in rows]


async def get_job(db: Optional[AsyncSession], job_id: str) -> Optional[JobResponse]:
    if db is None or not is_uuid(job_id):
        return fallback.get_job_by_id(job_id)

    try:
        result = await db.execute(select(JobPosting).where(JobPosting.id == job_id))
        row = result.scalar_one_or_none()
    except READ_ERRORS as e:
        logger.warning(f"Error fetching job {job_id}, using sample data: {e}")
        return fallback.get_job_by_id(job_id)

    return job_from_row(row) if row else None


async def get_job_by_slug(db: Optional[AsyncSession], company_id: str, slug: str) -> Optional[JobResponse]:
    """A job slug is only unique within its company."""
    if db is None or not is_uuid(company_id):
        return fallback.get_job_by_slug(company_id, slug)

    try:
        result = await db.execute(
            select(JobPosting).where(
                JobPosting.company_id == company_id,
                JobPosting.slug == slug,
            )
        )
        row = result.scalar_one_or_none()
    except READ_ERRORS as e:
        logger.warning(f"Error fetching job '{slug}', using sample data: {e}")
        return fallback.get_job_by_slug(company_id, slug)

    return job_from_row(row) if row else None


async def _get_job_row(db: AsyncSession, job_id: str) -> JobPosting:
    if not is_uuid(job_id):
        raise NotFoundError(f"Job {job_id} is sample data and cannot be modified.")
    result = await execute_for_write(db, select(JobPosting).where(JobPosting.id == job_id), "load job")
    row = result.scalar_one_or_none()
    if row is None:
        raise NotFoundError(f"Job {job_id} not found")
    return row


async def create_job(
    db: Optional[AsyncSession],
    company_id: str,
    job: Union[JobCreate, dict],
) -> JobResponse:
    """Create a job; the slug is derived from the title when not given."""
    db = require_db(db)
    if isinstance(job, dict):
        job = JobCreate.model_validate(job)
    company = await get_company_row(db, company_id)

    columns = to_columns(job.model_dump(), JOB_COLUMNS)
    columns["company_id"] = company.id
    columns["slug"] = job_slug_for(job.title, job.slug)
    columns["description"] = sanitize_html(job.description)

    new_job = JobPosting(**columns)
    db.add(new_job)
    await commit_write(db, "create job")
    await db.refresh(new_job)

    logger.info(f"Created job {new_job.id}: {new_job.title} at {company.name}")
    return job_from_row(new_job)


async def update_job(
    db: Optional[AsyncSession],
    job_id: str,
    updates: Union[JobUpdate, dict],
) -> JobResponse:
    db = require_db(db)
    if isinstance(updates, dict):
        updates = JobUpdate.model_validate(updates)
    job = await _get_job_row(db, job_id)

    columns = job_update_columns(updates.model_dump(exclude_unset=True))
    if "description" in columns:
        columns["description"] = sanitize_html(columns["description"])

    for column, value in columns.items():
        setattr(job, column, value)

    await commit_write(db, "save job")
    await db.refresh(job)

    logger.info(f"Updated job {job.id} (fields: {', '.join(sorted(columns)) or 'none'})")
    return job_from_row(job)


async def delete_job(db: Optional[AsyncSession], job_id: str) -> None:
    db = require_db(db)
    job = await _get_job_row(db, job_id)
    await db.delete(job)
    await commit_write(db, "delete job")
    logger.info(f"Deleted job {job_id}")
