"""
Section composer: turns a company's section list and its jobs into the
ordered blocks of the public careers page.

Only visible sections are rendered, sorted by `order`. Each section type
has one renderer in RENDERERS; a type without a renderer produces nothing
and is logged, since it usually means a document written by a newer or
broken client.
"""
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional, Sequence

from careerpage.schemas.company import CompanyResponse, PageSection, SectionType
from careerpage.schemas.job import JobDetailResponse, JobResponse
from careerpage.schemas.page import (
    AboutBlock,
    AppliedFilters,
    CareerPage,
    FacetsView,
    HeroBlock,
    JobCard,
    JobsBlock,
    RenderedSection,
    ThemeView,
    VideoBlock,
)
from careerpage.services.job_filter import DEFAULT_EXCERPT_LENGTH, JobFilters, excerpt, facet_options, filter_jobs

logger = logging.getLogger(__name__)

FONT_VARIABLES = {
    "Inter": "var(--font-inter)",
    "Roboto": "var(--font-roboto)",
    "Open Sans": "var(--font-open-sans)",
    "Lato": "var(--font-lato)",
    "Montserrat": "var(--font-montserrat)",
}
DEFAULT_FONT_VARIABLE = FONT_VARIABLES["Inter"]

# Hero over a background image: dark scrim and light text
HERO_SCRIM_OPACITY = 0.6
HERO_IMAGE_TITLE_COLOR = "#ffffff"
HERO_IMAGE_SUBTITLE_COLOR = "#e2e8f0"

DEFAULT_JOBS_TITLE = "Open Positions"
NO_JOBS_MESSAGE = "No jobs found matching your criteria."
VIDEO_PLACEHOLDER = "No video added yet"

YOUTUBE_RE = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^\"&?/\s]{11})"
)
VIMEO_RE = re.compile(r"vimeo\.com/(\d+)")


def resolve_video_embed(url: Optional[str]) -> Optional[str]:
    """
    Normalize a video reference to something a player can embed.

    Accepts an uploaded data URL, YouTube (watch, youtu.be, embed) and
    Vimeo links. Returns None for anything else.
    """
    if not url:
        return None
    url = url.strip()
    if url.startswith("data:video"):
        return url

    youtube = YOUTUBE_RE.search(url)
    if youtube:
        return f"https://www.youtube.com/embed/{youtube.group(1)}"

    vimeo = VIMEO_RE.search(url)
    if vimeo:
        return f"https://player.vimeo.com/video/{vimeo.group(1)}"

    if "youtube.com/embed" in url or "player.vimeo.com" in url:
        return url
    return None


def visible_sections(sections: Sequence[PageSection]) -> list[PageSection]:
    """Visible sections in ascending order; ties keep their list position."""
    return sorted((s for s in sections if s.is_visible), key=lambda s: s.order)


@dataclass
class RenderContext:
    company: CompanyResponse
    jobs: Sequence[JobResponse]
    filters: JobFilters = field(default_factory=JobFilters)
    excerpt_length: int = DEFAULT_EXCERPT_LENGTH


def render_hero(section: PageSection, ctx: RenderContext) -> HeroBlock:
    brand = ctx.company.brand_config
    if section.background_image_url:
        return HeroBlock(
            id=section.id,
            title=section.title,
            subtitle=section.content,
            logo_url=brand.logo_url,
            background_image_url=section.background_image_url,
            background=f"url({section.background_image_url})",
            scrim_opacity=HERO_SCRIM_OPACITY,
            title_color=HERO_IMAGE_TITLE_COLOR,
            subtitle_color=HERO_IMAGE_SUBTITLE_COLOR,
            cta_color=brand.secondary_color,
        )
    return HeroBlock(
        id=section.id,
        title=section.title,
        subtitle=section.content,
        logo_url=brand.logo_url,
        background=f"linear-gradient(to bottom, {brand.secondary_color}15, transparent)",
        title_color=brand.primary_color,
        cta_color=brand.secondary_color,
    )


def render_about(section: PageSection, ctx: RenderContext) -> AboutBlock:
    return AboutBlock(id=section.id, title=section.title, content=section.content)


def render_video(section: PageSection, ctx: RenderContext) -> VideoBlock:
    embed_url = resolve_video_embed(section.content)
    if embed_url is None:
        kind, placeholder = "placeholder", VIDEO_PLACEHOLDER
    elif embed_url.startswith("data:video"):
        kind, placeholder = "video", None
    else:
        kind, placeholder = "iframe", None
    return VideoBlock(
        id=section.id,
        title=section.title,
        embed_url=embed_url,
        media_kind=kind,
        placeholder=placeholder,
    )


def job_card(job: JobResponse, company_slug: str, excerpt_length: int) -> JobCard:
    return JobCard(
        id=job.id,
        title=job.title,
        slug=job.slug,
        url=f"/{company_slug}/jobs/{job.slug}",
        department=job.department,
        location=job.location,
        work_policy=job.work_policy,
        employment_type=job.employment_type,
        experience_level=job.experience_level,
        salary_range=job.salary_range,
        excerpt=excerpt(job.description, excerpt_length),
        posted_days_ago=job.posted_days_ago,
    )


def render_jobs(section: PageSection, ctx: RenderContext) -> JobsBlock:
    filters = ctx.filters
    matched = filter_jobs(ctx.jobs, filters.query, filters.location, filters.employment_type)
    facets = facet_options(ctx.jobs)
    return JobsBlock(
        id=section.id,
        title=section.title or DEFAULT_JOBS_TITLE,
        jobs=[job_card(job, ctx.company.slug, ctx.excerpt_length) for job in matched],
        total_jobs=len(ctx.jobs),
        facets=FacetsView(locations=facets.locations, employment_types=facets.employment_types),
        filters=AppliedFilters(
            query=filters.query,
            location=filters.location,
            employment_type=filters.employment_type,
        ),
        empty_message=None if matched else NO_JOBS_MESSAGE,
    )


RENDERERS: dict[str, Callable[[PageSection, RenderContext], RenderedSection]] = {
    SectionType.HERO.value: render_hero,
    SectionType.ABOUT.value: render_about,
    SectionType.VIDEO.value: render_video,
    SectionType.JOBS.value: render_jobs,
}


def render_section(section: PageSection, ctx: RenderContext) -> Optional[RenderedSection]:
    renderer = RENDERERS.get(section.type)
    if renderer is None:
        logger.warning(
            f"Section {section.id} of company {ctx.company.slug} has unknown type "
            f"'{section.type}'; nothing rendered"
        )
        return None
    return renderer(section, ctx)


def compose_page(
    company: CompanyResponse,
    jobs: Sequence[JobResponse],
    filters: Optional[JobFilters] = None,
    excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
    year: Optional[int] = None,
) -> CareerPage:
    """Build the full careers page for a company."""
    ctx = RenderContext(
        company=company,
        jobs=jobs,
        filters=filters or JobFilters(),
        excerpt_length=excerpt_length,
    )
    rendered = (render_section(section, ctx) for section in visible_sections(company.page_sections))
    brand = company.brand_config
    return CareerPage(
        company_name=company.name,
        company_slug=company.slug,
        header_title=f"{company.name} Careers",
        theme=ThemeView(
            primary_color=brand.primary_color,
            secondary_color=brand.secondary_color,
            font_family=brand.font_family,
            font_variable=FONT_VARIABLES.get(brand.font_family, DEFAULT_FONT_VARIABLE),
            logo_url=brand.logo_url,
        ),
        sections=[block for block in rendered if block is not None],
        footer=f"© {year or datetime.utcnow().year} {company.name}. All rights reserved.",
    )


def compose_job_detail(company: CompanyResponse, job: JobResponse) -> JobDetailResponse:
    """Job detail page: the job in its company's branding."""
    brand = company.brand_config
    return JobDetailResponse(
        company_name=company.name,
        company_slug=company.slug,
        logo_url=brand.logo_url,
        primary_color=brand.primary_color,
        font_family=brand.font_family,
        careers_url=f"/{company.slug}/careers",
        job=job,
        tags=[
            job.department,
            f"{job.location} ({job.work_policy})",
            job.employment_type,
            f"Posted {job.posted_days_ago} days ago",
        ],
    )
