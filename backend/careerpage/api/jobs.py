"""
Jobs API endpoints.
Read, update and delete a single job posting from the editor.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from careerpage.api.auth import get_current_admin
from careerpage.api.errors import to_http_exception
from careerpage.database import get_db
from careerpage.exceptions import CareerPageError
from careerpage.models.admin_user import AdminUser
from careerpage.schemas.job import JobResponse, JobUpdate
from careerpage.services.admin import ensure_owns_company
from careerpage.services.jobs import delete_job, get_job, update_job

# Configure logger
logger = logging.getLogger(__name__)

router = APIRouter()


async def _owned_job(db: Optional[AsyncSession], job_id: str, admin: AdminUser) -> JobResponse:
    job = await get_job(db, job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    try:
        ensure_owns_company(admin, job.company_id)
    except CareerPageError as e:
        raise to_http_exception(e)
    return job


@router.get("/{job_id}", response_model=JobResponse)
async def read_job(
    job_id: str,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    return await _owned_job(db, job_id, current_admin)


@router.put("/{job_id}", response_model=JobResponse)
async def save_job(
    job_id: str,
    updates: JobUpdate,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    """
    Partially update a job.

    Empty values leave a field unchanged, except salaryRange and
    applicationUrl which can be cleared.
    """
    await _owned_job(db, job_id, current_admin)
    try:
        return await update_job(db, job_id, updates)
    except CareerPageError as e:
        raise to_http_exception(e)


@router.delete("/{job_id}", status_code=204)
async def remove_job(
    job_id: str,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    await _owned_job(db, job_id, current_admin)
    try:
        await delete_job(db, job_id)
    except CareerPageError as e:
        raise to_http_exception(e)
    return Response(status_code=204)
