"""
Company persistence.

Companies have no parent and are never deleted, so the gateway exposes
lookups by id and slug, create and update.
"""
import logging
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careerpage.exceptions import ConflictError, NotFoundError, ValidationFailure
from careerpage.models.company import Company
from careerpage.schemas.company import BrandConfig, CompanyResponse, CompanyUpdate, default_page_sections
from careerpage.services import fallback
from careerpage.services.mapping import COMPANY_COLUMNS, company_from_row, to_columns, utcnow
from careerpage.services.slugs import is_uuid, is_valid_slug, slugify
from careerpage.services.store import READ_ERRORS, commit_write, execute_for_write, flush_write, require_db

logger = logging.getLogger(__name__)


async def get_company_by_slug(db: Optional[AsyncSession], slug: str) -> Optional[CompanyResponse]:
    """
    Look a company up by its public slug.

    Falls back to the sample dataset when the store is missing, failing,
    or simply does not hold the slug.
    """
    if db is None:
        logger.warning("Database not configured. Using sample data.")
        return fallback.get_company_by_slug(slug)

    try:
        result = await db.execute(select(Company).where(Company.slug == slug))
        row = result.scalar_one_or_none()
    except READ_ERRORS as e:
        logger.warning(f"Error fetching company '{slug}', using sample data: {e}")
        return fallback.get_company_by_slug(slug)

    if row is None:
        return fallback.get_company_by_slug(slug)
    return company_from_row(row)


async def get_company(db: Optional[AsyncSession], company_id: str) -> Optional[CompanyResponse]:
    """Look a company up by id; non-UUID ids are sample data."""
    if db is None or not is_uuid(company_id):
        if db is not None:
            logger.warning(f'Company ID "{company_id}" is not a valid UUID. Using sample data.')
        return fallback.get_company_by_id(company_id)

    try:
        result = await db.execute(select(Company).where(Company.id == company_id))
        row = result.scalar_one_or_none()
    except READ_ERRORS as e:
        logger.warning(f"Error fetching company {company_id}, using sample data: {e}")
        return fallback.get_company_by_id(company_id)

    return company_from_row(row) if row else None


async def get_company_row(db: Optional[AsyncSession], company_id: str) -> Company:
    """Load the stored row for a write. Sample-data ids are not writable."""
    db = require_db(db)
    if not is_uuid(company_id):
        raise NotFoundError(f"Company {company_id} is sample data and cannot be modified.")
    result = await execute_for_write(db, select(Company).where(Company.id == company_id), "load company")
    row = result.scalar_one_or_none()
    if row is None:
        raise NotFoundError(f"Company {company_id} not found")
    return row


async def add_company(db: Optional[AsyncSession], name: str, slug: Optional[str] = None) -> Company:
    """
    Stage a new company in the session without committing it.

    Callers that link the company to another row commit both together.
    """
    db = require_db(db)
    name = (name or "").strip()
    if not name:
        raise ValidationFailure("Company name is required")
    slug = slug or slugify(name)
    if not is_valid_slug(slug):
        raise ValidationFailure(f"Cannot derive a URL slug from '{name}'")

    existing = await execute_for_write(db, select(Company.id).where(Company.slug == slug), "create company")
    if existing.scalar_one_or_none() is not None:
        raise ConflictError(f"The URL '{slug}' is already taken")

    company = Company(
        name=name,
        slug=slug,
        brand_config=BrandConfig(),
        page_sections=default_page_sections(),
    )
    db.add(company)
    await flush_write(db, "create company")
    return company


async def create_company(db: Optional[AsyncSession], name: str, slug: Optional[str] = None) -> CompanyResponse:
    """Create a company with the default theme and sections."""
    company = await add_company(db, name, slug)
    await commit_write(db, "create company")
    await db.refresh(company)

    logger.info(f"Created company {company.id}: {company.name} ({company.slug})")
    return company_from_row(company)


async def update_company(
    db: Optional[AsyncSession],
    company_id: str,
    updates: Union[CompanyUpdate, dict],
) -> CompanyResponse:
    """
    Apply a partial update.

    page_sections replaces the whole stored list (last writer wins).
    """
    if isinstance(updates, dict):
        updates = CompanyUpdate.model_validate(updates)
    company = await get_company_row(db, company_id)

    columns = to_columns(updates.model_dump(exclude_none=True), COMPANY_COLUMNS)
    if "brand_config" in columns:
        columns["brand_config"] = updates.brand_config
    if "page_sections" in columns:
        columns["page_sections"] = updates.page_sections

    for column, value in columns.items():
        if value in ("", None):
            continue
        setattr(company, column, value)
    company.updated_at = utcnow()

    await commit_write(db, "save company")
    await db.refresh(company)

    logger.info(f"Updated company {company.id} (fields: {', '.join(sorted(columns)) or 'none'})")
    return company_from_row(company)
