"""Company, brand and page section schemas."""
import enum
import uuid
from typing import Optional

from pydantic import Field, field_validator

from careerpage.schemas.base import CamelModel
from careerpage.services.slugs import is_hex_color, is_valid_slug


class SectionType(str, enum.Enum):
    """Section kinds the careers page knows how to render."""
    HERO = "Hero"
    ABOUT = "About"
    VIDEO = "Video"
    JOBS = "Jobs"


class MoveDirection(str, enum.Enum):
    UP = "up"
    DOWN = "down"


class FontFamily(str, enum.Enum):
    INTER = "Inter"
    ROBOTO = "Roboto"
    OPEN_SANS = "Open Sans"
    LATO = "Lato"
    MONTSERRAT = "Montserrat"


def _new_section_id() -> str:
    return f"section-{uuid.uuid4().hex[:12]}"


def _check_slug(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_valid_slug(value):
        raise ValueError(
            "Slug may only contain lowercase letters, digits and hyphens, "
            "and may not start or end with a hyphen"
        )
    return value


class BrandConfig(CamelModel):
    """Theme settings embedded in a company."""
    primary_color: str = "#0f172a"
    secondary_color: str = "#3b82f6"
    font_family: FontFamily = FontFamily.INTER
    logo_url: str = ""

    @field_validator("primary_color", "secondary_color")
    @classmethod
    def validate_color(cls, value: str) -> str:
        if not is_hex_color(value):
            raise ValueError(f"'{value}' is not a hex color")
        return value


class PageSection(CamelModel):
    """
    One block of the careers page.

    `type` is kept as a plain string so documents written by other clients
    still load; the composer skips types it does not know.
    """
    id: str = Field(default_factory=_new_section_id)
    type: str
    title: Optional[str] = None
    content: Optional[str] = None
    background_image_url: Optional[str] = None
    order: int = 0
    is_visible: bool = True

    @property
    def is_known_type(self) -> bool:
        return self.type in {t.value for t in SectionType}


class CompanyResponse(CamelModel):
    """A tenant and its careers page configuration."""
    id: str
    slug: str
    name: str
    brand_config: BrandConfig = Field(default_factory=BrandConfig)
    page_sections: list[PageSection] = Field(default_factory=list)


class CompanyCreate(CamelModel):
    """Create a company; slug is derived from the name when omitted."""
    name: str = Field(min_length=1)
    slug: Optional[str] = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: Optional[str]) -> Optional[str]:
        return _check_slug(value or None)


class CompanyUpdate(CamelModel):
    """Partial company update. Sections are always written as a whole list."""
    name: Optional[str] = None
    slug: Optional[str] = None
    brand_config: Optional[BrandConfig] = None
    page_sections: Optional[list[PageSection]] = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: Optional[str]) -> Optional[str]:
        return _check_slug(value or None)


class SectionCreate(CamelModel):
    type: SectionType


class SectionUpdate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    background_image_url: Optional[str] = None
    is_visible: Optional[bool] = None


class SectionMove(CamelModel):
    direction: MoveDirection


DEFAULT_PAGE_SECTIONS = [
    {"id": "hero", "type": "Hero", "title": "Join Our Team",
     "content": "Help us build what comes next.", "order": 0, "isVisible": True},
    {"id": "about", "type": "About", "title": "About Us",
     "content": "Tell candidates who you are.", "order": 1, "isVisible": True},
    {"id": "jobs", "type": "Jobs", "title": "Open Positions", "order": 2, "isVisible": True},
]


def default_page_sections() -> list[PageSection]:
    return [PageSection.model_validate(s) for s in DEFAULT_PAGE_SECTIONS]
