"""
Tests for the section composer (public careers page rendering).
"""
import logging

import pytest

from careerpage.schemas.company import BrandConfig, CompanyResponse, PageSection
from careerpage.schemas.job import JobResponse
from careerpage.services.composer import (
    HERO_SCRIM_OPACITY,
    compose_job_detail,
    compose_page,
    resolve_video_embed,
    visible_sections,
)
from careerpage.services.fallback import get_company_by_slug, get_jobs_by_company_id
from careerpage.services.job_filter import JobFilters


def make_company(sections, **brand):
    return CompanyResponse(
        id="c9",
        slug="initech",
        name="Initech",
        brand_config=BrandConfig(**brand),
        page_sections=sections,
    )


def make_job(job_id, title, description="<p>Great job.</p>", **fields):
    values = dict(
        id=job_id,
        company_id="c9",
        slug=f"{job_id}-slug",
        title=title,
        location="Austin, TX",
        work_policy="Hybrid",
        department="Engineering",
        employment_type="Full-time",
        experience_level="Mid-level",
        job_type="Permanent",
        description=description,
        posted_days_ago=4,
    )
    values.update(fields)
    return JobResponse(**values)


# ============================================================
# ORDER & VISIBILITY
# ============================================================

def test_only_visible_sections_in_ascending_order():
    company = make_company([
        PageSection(id="jobs", type="Jobs", order=2),
        PageSection(id="hidden", type="About", order=0, is_visible=False),
        PageSection(id="hero", type="Hero", order=1),
        PageSection(id="about", type="About", order=3),
    ])
    page = compose_page(company, [])
    assert [block.id for block in page.sections] == ["hero", "jobs", "about"]


def test_visible_sections_ties_keep_list_position():
    sections = [
        PageSection(id="b", type="About", order=1),
        PageSection(id="a", type="About", order=1),
    ]
    assert [s.id for s in visible_sections(sections)] == ["b", "a"]


def test_unknown_section_type_renders_nothing_and_logs(caplog):
    company = make_company([
        PageSection(id="hero", type="Hero", order=0),
        PageSection(id="mystery", type="Testimonials", order=1),
    ])
    with caplog.at_level(logging.WARNING):
        page = compose_page(company, [])
    assert [block.id for block in page.sections] == ["hero"]
    assert "Testimonials" in caplog.text


# ============================================================
# HERO
# ============================================================

def test_hero_with_background_image_uses_scrim_and_light_text():
    company = make_company(
        [PageSection(id="hero", type="Hero", title="Work here", background_image_url="https://img/x.jpg")],
        secondary_color="#10b981",
    )
    hero = compose_page(company, []).sections[0]
    assert hero.scrim_opacity == HERO_SCRIM_OPACITY == 0.6
    assert hero.title_color == "#ffffff"
    assert hero.subtitle_color == "#e2e8f0"
    assert hero.background == "url(https://img/x.jpg)"
    assert hero.cta_color == "#10b981"


def test_hero_without_image_uses_gradient_and_brand_colors():
    company = make_company(
        [PageSection(id="hero", type="Hero", title="Work here")],
        primary_color="#7c3aed",
        secondary_color="#10b981",
    )
    hero = compose_page(company, []).sections[0]
    assert hero.scrim_opacity is None
    assert hero.background == "linear-gradient(to bottom, #10b98115, transparent)"
    assert hero.title_color == "#7c3aed"
    assert hero.cta_color == "#10b981"


# ============================================================
# VIDEO
# ============================================================

@pytest.mark.parametrize("url,expected", [
    ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "https://www.youtube.com/embed/dQw4w9WgXcQ"),
    ("https://youtu.be/dQw4w9WgXcQ", "https://www.youtube.com/embed/dQw4w9WgXcQ"),
    ("https://www.youtube.com/embed/dQw4w9WgXcQ", "https://www.youtube.com/embed/dQw4w9WgXcQ"),
    ("https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ", "https://www.youtube.com/embed/dQw4w9WgXcQ"),
    ("https://vimeo.com/76979871", "https://player.vimeo.com/video/76979871"),
    ("https://player.vimeo.com/video/76979871", "https://player.vimeo.com/video/76979871"),
    ("data:video/mp4;base64,AAAA", "data:video/mp4;base64,AAAA"),
    ("https://example.com/movie.mp4", None),
    ("", None),
    (None, None),
])
def test_resolve_video_embed(url, expected):
    assert resolve_video_embed(url) == expected


def test_video_block_media_kinds():
    company = make_company([
        PageSection(id="yt", type="Video", content="https://youtu.be/dQw4w9WgXcQ", order=0),
        PageSection(id="upload", type="Video", content="data:video/webm;base64,AAAA", order=1),
        PageSection(id="empty", type="Video", content="", order=2),
    ])
    blocks = {block.id: block for block in compose_page(company, []).sections}
    assert blocks["yt"].media_kind == "iframe"
    assert blocks["upload"].media_kind == "video"
    assert blocks["empty"].media_kind == "placeholder"
    assert blocks["empty"].placeholder == "No video added yet"


# ============================================================
# JOBS
# ============================================================

def test_jobs_block_filters_and_builds_cards():
    company = make_company([PageSection(id="jobs", type="Jobs", order=0)])
    jobs = [
        make_job("a", "Backend Engineer", description="<p>Build <em>APIs</em>.</p>"),
        make_job("b", "Office Manager", location="Remote", employment_type="Part-time"),
    ]
    block = compose_page(company, jobs, JobFilters(query="backend")).sections[0]

    assert block.title == "Open Positions"
    assert block.total_jobs == 2
    assert [card.id for card in block.jobs] == ["a"]
    card = block.jobs[0]
    assert card.url == "/initech/jobs/a-slug"
    assert card.excerpt == "Build APIs ."
    assert card.posted_days_ago == 4
    assert block.facets.locations == ["All", "Austin, TX", "Remote"]
    assert block.filters.query == "backend"
    assert block.empty_message is None


def test_jobs_block_empty_state():
    company = make_company([PageSection(id="jobs", type="Jobs", title="Careers", order=0)])
    block = compose_page(company, [make_job("a", "Designer")], JobFilters(query="pilot")).sections[0]
    assert block.title == "Careers"
    assert block.jobs == []
    assert block.empty_message == "No jobs found matching your criteria."


def test_jobs_block_respects_excerpt_length():
    company = make_company([PageSection(id="jobs", type="Jobs", order=0)])
    job = make_job("a", "Writer", description="<p>" + "lorem ipsum " * 40 + "</p>")
    card = compose_page(company, [job], excerpt_length=30).sections[0].jobs[0]
    assert card.excerpt.endswith("...")
    assert len(card.excerpt) <= 33


# ============================================================
# THEME / PAGE
# ============================================================

def test_theme_maps_font_to_css_variable():
    page = compose_page(make_company([], font_family="Open Sans"), [])
    assert page.theme.font_family == "Open Sans"
    assert page.theme.font_variable == "var(--font-open-sans)"


def test_page_header_and_footer():
    page = compose_page(make_company([]), [], year=2025)
    assert page.header_title == "Initech Careers"
    assert page.footer == "© 2025 Initech. All rights reserved."


def test_page_serializes_camel_case():
    company = make_company([PageSection(id="jobs", type="Jobs", order=0)])
    data = compose_page(company, [make_job("a", "Engineer")]).model_dump(by_alias=True)
    assert data["companyName"] == "Initech"
    assert data["sections"][0]["type"] == "Jobs"
    assert data["sections"][0]["jobs"][0]["postedDaysAgo"] == 4


def test_sample_company_renders():
    company = get_company_by_slug("tech-nova")
    page = compose_page(company, get_jobs_by_company_id(company.id))
    assert [block.type for block in page.sections] == ["Hero", "Video", "Jobs"]
    assert page.sections[1].embed_url == "https://www.youtube.com/embed/dQw4w9WgXcQ"
    assert page.theme.font_variable == "var(--font-roboto)"


# ============================================================
# JOB DETAIL
# ============================================================

def test_compose_job_detail():
    company = make_company([], primary_color="#7c3aed", font_family="Lato")
    detail = compose_job_detail(company, make_job("a", "Engineer"))
    assert detail.company_slug == "initech"
    assert detail.primary_color == "#7c3aed"
    assert detail.font_family == "Lato"
    assert detail.careers_url == "/initech/careers"
    assert detail.tags == ["Engineering", "Austin, TX (Hybrid)", "Full-time", "Posted 4 days ago"]
