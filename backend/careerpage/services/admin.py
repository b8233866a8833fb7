"""
Admin profile operations: who is signed in, which company they manage,
and where the editor entry point should send them.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from careerpage.exceptions import AuthFailure
from careerpage.models.admin_user import AdminUser
from careerpage.schemas.auth import AdminCompany, AdminProfile
from careerpage.schemas.company import CompanyResponse
from careerpage.services.companies import add_company, get_company_by_slug
from careerpage.services.mapping import company_from_row
from careerpage.services.store import commit_write

logger = logging.getLogger(__name__)

AUTH_PATH = "/admin/auth"
DASHBOARD_PATH = "/admin"


def get_admin_profile(user: AdminUser) -> AdminProfile:
    company = None
    if user.company is not None:
        company = AdminCompany(id=str(user.company.id), name=user.company.name, slug=user.company.slug)
    return AdminProfile(
        id=str(user.id),
        email=user.email,
        full_name=user.full_name,
        company_id=str(user.company_id) if user.company_id else None,
        company=company,
    )


def editor_path(slug: str) -> str:
    return f"/admin/{slug}"


def resolve_editor_redirect(user: Optional[AdminUser]) -> str:
    """Signed-out admins go to auth, admins without a company to the dashboard."""
    if user is None:
        return AUTH_PATH
    if user.company is not None:
        return editor_path(user.company.slug)
    return DASHBOARD_PATH


async def create_company_for_admin(
    db: Optional[AsyncSession],
    user: AdminUser,
    name: str,
    slug: Optional[str] = None,
) -> CompanyResponse:
    """Create a company and make the admin its editor, in one transaction."""
    company = await add_company(db, name, slug)
    user.company_id = company.id
    user.company = company
    await commit_write(db, "create company")
    await db.refresh(company)

    logger.info(f"Linked admin {user.email} to new company {company.slug}")
    return company_from_row(company)


def ensure_owns_company(user: AdminUser, company_id: str) -> None:
    if user.company_id is None or str(user.company_id) != str(company_id):
        logger.warning(f"Admin {user.email} attempted to edit company {company_id}")
        raise AuthFailure("You do not manage this company", AuthFailure.FORBIDDEN)


async def get_editable_company(db: Optional[AsyncSession], user: AdminUser, slug: str) -> Optional[CompanyResponse]:
    """The company behind /admin/{slug}, if the admin manages it."""
    company = await get_company_by_slug(db, slug)
    if company is None:
        return None
    ensure_owns_company(user, company.id)
    return company
