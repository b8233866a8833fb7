"""
Static sample dataset served when the database cannot answer a read.

Identifiers here ("c1", "j1", ...) are deliberately not UUIDs, so they can
never collide with rows in the store.
"""
from datetime import timedelta
from typing import Optional

from careerpage.schemas.company import BrandConfig, CompanyResponse, PageSection
from careerpage.schemas.job import JobResponse
from careerpage.services.mapping import posted_days_ago, utcnow

SAMPLE_COMPANIES: list[CompanyResponse] = [
    CompanyResponse(
        id="c1",
        slug="acme-corp",
        name="Acme Corp",
        brand_config=BrandConfig(
            primary_color="#0f172a",  # slate-900
            secondary_color="#3b82f6",  # blue-500
            font_family="Inter",
            logo_url="https://placehold.co/150x50/0f172a/ffffff?text=Acme+Corp",
        ),
        page_sections=[
            PageSection(
                id="s1",
                type="Hero",
                title="Join the Future",
                content="We are building the next generation of widgets.",
                background_image_url=(
                    "https://images.unsplash.com/photo-1497366216548-37526070297c"
                    "?auto=format&fit=crop&q=80&w=2301&ixlib=rb-4.0.3"
                ),
                order=0,
            ),
            PageSection(
                id="s2",
                type="About",
                title="About Us",
                content="Acme Corp is the leading provider of widgets worldwide.",
                order=1,
            ),
            PageSection(id="s3", type="Jobs", title="Open Positions", order=2),
        ],
    ),
    CompanyResponse(
        id="c2",
        slug="tech-nova",
        name="Tech Nova",
        brand_config=BrandConfig(
            primary_color="#7c3aed",  # violet-600
            secondary_color="#10b981",  # emerald-500
            font_family="Roboto",
            logo_url="https://placehold.co/150x50/7c3aed/ffffff?text=Tech+Nova",
        ),
        page_sections=[
            PageSection(
                id="s1",
                type="Hero",
                title="Innovate with Us",
                content="Pushing the boundaries of technology.",
                background_image_url=(
                    "https://images.unsplash.com/photo-1519389950473-47ba0277781c"
                    "?auto=format&fit=crop&q=80&w=2340&ixlib=rb-4.0.3"
                ),
                order=0,
            ),
            PageSection(
                id="s2",
                type="Video",
                title="Life at Tech Nova",
                content="https://www.youtube.com/embed/dQw4w9WgXcQ",
                order=1,
            ),
            PageSection(id="s3", type="Jobs", title="Careers", order=2),
        ],
    ),
]

# (job fields, age in days). Creation time is re-anchored to "now" on every
# read so postedDaysAgo goes through the same computation as stored jobs.
SAMPLE_JOBS: list[tuple[dict, int]] = [
    ({
        "id": "j1",
        "company_id": "c1",
        "title": "Full Stack Engineer",
        "work_policy": "Remote",
        "location": "Berlin, Germany",
        "department": "Product",
        "employment_type": "Full-time",
        "experience_level": "Senior",
        "job_type": "Temporary",
        "salary_range": "AED 8K–12K / month",
        "slug": "full-stack-engineer-berlin",
        "description": "Build amazing UIs with React and robust backends.",
        "application_url": "#",
    }, 40),
    ({
        "id": "j2",
        "company_id": "c1",
        "title": "Business Analyst",
        "work_policy": "Hybrid",
        "location": "Riyadh, Saudi Arabia",
        "department": "Customer Success",
        "employment_type": "Part-time",
        "experience_level": "Mid-level",
        "job_type": "Permanent",
        "salary_range": "USD 4K–6K / month",
        "slug": "business-analyst-riyadh",
        "description": "Analyze business needs and solutions.",
        "application_url": "#",
    }, 5),
    ({
        "id": "j3",
        "company_id": "c1",
        "title": "Software Engineer",
        "work_policy": "Remote",
        "location": "Berlin, Germany",
        "department": "Sales",
        "employment_type": "Contract",
        "experience_level": "Senior",
        "job_type": "Permanent",
        "salary_range": "SAR 10K–18K / month",
        "slug": "software-engineer-berlin",
        "description": "Drive sales through engineering.",
        "application_url": "#",
    }, 32),
    ({
        "id": "j4",
        "company_id": "c1",
        "title": "Marketing Manager",
        "work_policy": "Hybrid",
        "location": "Boston, United States",
        "department": "Engineering",
        "employment_type": "Part-time",
        "experience_level": "Mid-level",
        "job_type": "Temporary",
        "salary_range": "AED 8K–12K / month",
        "slug": "marketing-manager-boston",
        "description": "Lead our marketing efforts.",
        "application_url": "#",
    }, 22),
]


def _build_job(fields: dict, age_days: int) -> JobResponse:
    now = utcnow()
    created_at = now - timedelta(days=age_days)
    return JobResponse(**fields, posted_days_ago=posted_days_ago(created_at, now))


def get_company_by_slug(slug: str) -> Optional[CompanyResponse]:
    return next((c.model_copy(deep=True) for c in SAMPLE_COMPANIES if c.slug == slug), None)


def get_company_by_id(company_id: str) -> Optional[CompanyResponse]:
    return next((c.model_copy(deep=True) for c in SAMPLE_COMPANIES if c.id == str(company_id)), None)


def get_jobs_by_company_id(company_id: str) -> list[JobResponse]:
    return [_build_job(f, age) for f, age in SAMPLE_JOBS if f["company_id"] == str(company_id)]


def get_job_by_id(job_id: str) -> Optional[JobResponse]:
    return next((_build_job(f, age) for f, age in SAMPLE_JOBS if f["id"] == str(job_id)), None)


def get_job_by_slug(company_id: str, slug: str) -> Optional[JobResponse]:
    return next(
        (
            _build_job(f, age)
            for f, age in SAMPLE_JOBS
            if f["company_id"] == str(company_id) and f["slug"] == slug
        ),
        None,
    )
