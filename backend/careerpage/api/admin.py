"""
Admin dashboard and editor entry points.

/admin/editor resolves where a signed-in admin should land; /admin/{slug}
loads the editor payload (company, jobs, live preview) for the company the
admin manages.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from careerpage.api.auth import get_auth_context, get_current_admin
from careerpage.api.errors import to_http_exception
from careerpage.config import settings
from careerpage.database import get_db
from careerpage.exceptions import CareerPageError, ConflictError
from careerpage.models.admin_user import AdminUser
from careerpage.schemas.admin import DashboardResponse, EditorResponse
from careerpage.schemas.company import CompanyCreate, CompanyResponse
from careerpage.services.admin import (
    create_company_for_admin,
    editor_path,
    get_admin_profile,
    get_editable_company,
    resolve_editor_redirect,
)
from careerpage.services.auth import AuthContext
from careerpage.services.composer import compose_page
from careerpage.services.jobs import list_jobs

logger = logging.getLogger(__name__)
router = APIRouter()


def careers_url(slug: str) -> str:
    return f"{settings.get_frontend_url()}/{slug}/careers"


@router.get("", response_model=DashboardResponse)
async def dashboard(current_admin: AdminUser = Depends(get_current_admin)):
    """Profile plus links to the admin's editor and public page."""
    profile = get_admin_profile(current_admin)
    if profile.company is None:
        return DashboardResponse(profile=profile)
    return DashboardResponse(
        profile=profile,
        editor_url=editor_path(profile.company.slug),
        careers_url=careers_url(profile.company.slug),
    )


@router.post("/companies", response_model=CompanyResponse, status_code=201)
async def create_company(
    company: CompanyCreate,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    """
    Create a company and link it to the signed-in admin.

    Returns:
        201: Company created
        409: Slug taken, or the admin already manages a company
        422: Name missing or slug invalid
        503: Database unavailable
    """
    try:
        if current_admin.company_id is not None:
            raise ConflictError("You already manage a company")
        return await create_company_for_admin(db, current_admin, company.name, company.slug)
    except CareerPageError as e:
        raise to_http_exception(e)


@router.get("/editor")
async def editor_redirect(context: AuthContext = Depends(get_auth_context)):
    """Send the admin to their company's editor, the dashboard, or sign-in."""
    return RedirectResponse(url=resolve_editor_redirect(context.user), status_code=307)


@router.get("/{slug}", response_model=EditorResponse)
async def editor(
    slug: str,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Optional[AsyncSession] = Depends(get_db),
):
    """
    Editor payload for one company.

    Returns:
        200: Company, its jobs and a rendered preview
        403: The admin does not manage this company
        404: Company not found
    """
    try:
        company = await get_editable_company(db, current_admin, slug)
    except CareerPageError as e:
        raise to_http_exception(e)

    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")

    jobs = await list_jobs(db, company.id)
    return EditorResponse(
        company=company,
        jobs=jobs,
        preview=compose_page(company, jobs, excerpt_length=settings.excerpt_length),
        share_url=careers_url(company.slug),
    )
