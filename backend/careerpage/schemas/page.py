"""View models for the composed public careers page."""
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from careerpage.schemas.base import CamelModel


class ThemeView(CamelModel):
    primary_color: str
    secondary_color: str
    font_family: str
    font_variable: str
    logo_url: str = ""


class HeroBlock(CamelModel):
    type: Literal["Hero"] = "Hero"
    id: str
    title: Optional[str] = None
    subtitle: Optional[str] = None
    logo_url: str = ""
    background_image_url: Optional[str] = None
    background: str
    scrim_opacity: Optional[float] = None  # set only over a background image
    title_color: str
    subtitle_color: Optional[str] = None
    cta_label: str = "Learn More"
    cta_color: str


class AboutBlock(CamelModel):
    type: Literal["About"] = "About"
    id: str
    title: Optional[str] = None
    content: Optional[str] = None


class VideoBlock(CamelModel):
    type: Literal["Video"] = "Video"
    id: str
    title: Optional[str] = None
    embed_url: Optional[str] = None
    media_kind: Literal["iframe", "video", "placeholder"]
    placeholder: Optional[str] = None


class JobCard(CamelModel):
    id: str
    title: str
    slug: str
    url: str
    department: str
    location: str
    work_policy: str
    employment_type: str
    experience_level: str
    salary_range: Optional[str] = None
    excerpt: str
    posted_days_ago: int


class FacetsView(CamelModel):
    locations: list[str]
    employment_types: list[str]


class AppliedFilters(CamelModel):
    query: str = ""
    location: str = "All"
    employment_type: str = "All"


class JobsBlock(CamelModel):
    type: Literal["Jobs"] = "Jobs"
    id: str
    title: str
    jobs: list[JobCard]
    total_jobs: int
    facets: FacetsView
    filters: AppliedFilters
    empty_message: Optional[str] = None


RenderedSection = Annotated[
    Union[HeroBlock, AboutBlock, VideoBlock, JobsBlock],
    Field(discriminator="type"),
]


class CareerPage(CamelModel):
    """Everything a frontend needs to draw /{company}/careers."""
    company_name: str
    company_slug: str
    header_title: str
    theme: ThemeView
    sections: list[RenderedSection]
    footer: str
