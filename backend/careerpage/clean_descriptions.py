"""
One-off maintenance: remove editor data-start / data-end attributes from
every stored job description.

Usage: python -m careerpage.clean_descriptions
"""
import asyncio
import logging
import sys
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careerpage import database
from careerpage.models.job_posting import JobPosting
from careerpage.services.rich_text import strip_editor_attributes
from careerpage.services.store import commit_write

logger = logging.getLogger(__name__)


@dataclass
class CleanupReport:
    cleaned: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.cleaned + self.skipped


async def clean_job_descriptions(db: AsyncSession) -> CleanupReport:
    """Rewrite descriptions that carry editor attributes; leave clean ones alone."""
    result = await db.execute(select(JobPosting).order_by(JobPosting.created_at))
    jobs = result.scalars().all()
    report = CleanupReport()

    for job in jobs:
        original = job.description or ""
        cleaned = strip_editor_attributes(original)
        if cleaned == original:
            report.skipped += 1
            continue
        job.description = cleaned
        report.cleaned += 1
        logger.info(f'Cleaned: "{job.title}"')

    if report.cleaned:
        await commit_write(db, "clean job descriptions")
    return report


async def main() -> int:
    if database.AsyncSessionLocal is None:
        logger.error("DATABASE_URL is not configured; nothing to clean.")
        return 1

    async with database.AsyncSessionLocal() as db:
        report = await clean_job_descriptions(db)
    await database.close_db()

    logger.info(
        f"Cleaning complete: {report.cleaned} cleaned, {report.skipped} already clean "
        f"({report.total} job(s))"
    )
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    sys.exit(asyncio.run(main()))
