"""
Editor API for a company: branding, page sections and its job list.

Section endpoints edit a copy of the full section list and save the whole
list back in one company update (last writer wins).
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from careerpage.api.auth import get_current_admin
from careerpage.api.errors import to_http_exception
from careerpage.database import get_db
from careerpage.exceptions import CareerPageError
from careerpage.models.admin_user import AdminUser
from careerpage.schemas.company import (
    CompanyResponse,
    CompanyUpdate,
    PageSection,
    SectionCreate,
    SectionMove,
    SectionUpdate,
)
from careerpage.schemas.job import JobCreate, JobResponse
from careerpage.services import sections as section_ops
from careerpage.services.admin import ensure_owns_company
from careerpage.services.companies import get_company, get_company_row, update_company
from careerpage.services.jobs import create_job, list_jobs
from careerpage.services.mapping import company_from_row

logger = logging.getLogger(__name__)
router = APIRouter()


async def _edit_sections(db: Optional[AsyncSession], company_id: str, edit) -> list[PageSection]:
    """Load the stored list, apply one edit, save the whole list."""
    company = company_from_row(await get_company_row(db, company_id))
    updated = edit(company.page_sections)
    saved = await update_company(db, company_id, CompanyUpdate(page_sections=updated))
    return saved.page_sections


# ============================================================
# COMPANY
# ============================================================

@router.get("/{company_id}", response_model=CompanyResponse)
async def read_company(
    company_id: str,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    try:
        ensure_owns_company(current_admin, company_id)
    except CareerPageError as e:
        raise to_http_exception(e)

    company = await get_company(db, company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.put("/{company_id}", response_model=CompanyResponse)
async def save_company(
    company_id: str,
    updates: CompanyUpdate,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    """
    Save branding and/or the full section list.

    Returns:
        200: Saved company
        403: The admin does not manage this company
        404: Company not found
        409: Slug already taken
        503: Database unavailable
    """
    try:
        ensure_owns_company(current_admin, company_id)
        return await update_company(db, company_id, updates)
    except CareerPageError as e:
        raise to_http_exception(e)


# ============================================================
# PAGE SECTIONS
# ============================================================

@router.get("/{company_id}/sections", response_model=list[PageSection])
async def read_sections(
    company_id: str,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    try:
        ensure_owns_company(current_admin, company_id)
    except CareerPageError as e:
        raise to_http_exception(e)

    company = await get_company(db, company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return section_ops.sort_sections(company.page_sections)


@router.post("/{company_id}/sections", response_model=list[PageSection], status_code=201)
async def add_section(
    company_id: str,
    section: SectionCreate,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    """Append a section. A page may hold only one Jobs section (422)."""
    try:
        ensure_owns_company(current_admin, company_id)
        return await _edit_sections(
            db, company_id, lambda current: section_ops.add_section(current, section.type)
        )
    except CareerPageError as e:
        raise to_http_exception(e)


@router.patch("/{company_id}/sections/{section_id}", response_model=list[PageSection])
async def edit_section(
    company_id: str,
    section_id: str,
    changes: SectionUpdate,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    fields = changes.model_dump(exclude_unset=True)
    try:
        ensure_owns_company(current_admin, company_id)
        return await _edit_sections(
            db, company_id, lambda current: section_ops.update_section(current, section_id, fields)
        )
    except CareerPageError as e:
        raise to_http_exception(e)


@router.post("/{company_id}/sections/{section_id}/move", response_model=list[PageSection])
async def move_section(
    company_id: str,
    section_id: str,
    move: SectionMove,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    """Swap a section with its neighbour; moving past either end changes nothing."""
    try:
        ensure_owns_company(current_admin, company_id)
        return await _edit_sections(
            db, company_id, lambda current: section_ops.move_section(current, section_id, move.direction)
        )
    except CareerPageError as e:
        raise to_http_exception(e)


@router.delete("/{company_id}/sections/{section_id}", response_model=list[PageSection])
async def delete_section(
    company_id: str,
    section_id: str,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    try:
        ensure_owns_company(current_admin, company_id)
        return await _edit_sections(
            db, company_id, lambda current: section_ops.delete_section(current, section_id)
        )
    except CareerPageError as e:
        raise to_http_exception(e)


# ============================================================
# JOBS
# ============================================================

@router.get("/{company_id}/jobs", response_model=list[JobResponse])
async def read_jobs(
    company_id: str,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    """Jobs of the company, newest first."""
    try:
        ensure_owns_company(current_admin, company_id)
    except CareerPageError as e:
        raise to_http_exception(e)
    return await list_jobs(db, company_id)


@router.post("/{company_id}/jobs", response_model=JobResponse, status_code=201)
async def add_job(
    company_id: str,
    job: JobCreate,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    """
    Create a job. The slug is derived from the title when omitted.

    Returns:
        201: Created job
        409: Slug already used by another job of this company
        503: Database unavailable
    """
    try:
        ensure_owns_company(current_admin, company_id)
        return await create_job(db, company_id, job)
    except CareerPageError as e:
        raise to_http_exception(e)
