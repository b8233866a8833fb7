"""
Public careers pages.

Both routes read through the persistence services, so they keep working on
the sample dataset when the database is missing or failing.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from careerpage.config import settings
from careerpage.database import get_db
from careerpage.schemas.job import JobDetailResponse
from careerpage.schemas.page import CareerPage
from careerpage.services.companies import get_company_by_slug
from careerpage.services.composer import compose_job_detail, compose_page
from careerpage.services.job_filter import ALL, JobFilters
from careerpage.services.jobs import get_job_by_slug, list_jobs

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{company_slug}/careers", response_model=CareerPage)
async def careers_page(
    company_slug: str,
    q: str = Query("", description="Case-insensitive match on job title"),
    location: str = Query(ALL),
    employment_type: str = Query(ALL, alias="type"),
    db: Optional[AsyncSession] = Depends(get_db),
):
    """Composed careers page with the job list filtered by the query string."""
    company = await get_company_by_slug(db, company_slug)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")

    jobs = await list_jobs(db, company.id)
    filters = JobFilters(query=q, location=location, employment_type=employment_type)
    return compose_page(company, jobs, filters, excerpt_length=settings.excerpt_length)


@router.get("/{company_slug}/jobs/{job_slug}", response_model=JobDetailResponse)
async def job_detail(
    company_slug: str,
    job_slug: str,
    db: Optional[AsyncSession] = Depends(get_db),
):
    company = await get_company_by_slug(db, company_slug)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")

    job = await get_job_by_slug(db, company.id, job_slug)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return compose_job_detail(company, job)
