"""Job-related Pydantic schemas."""
import enum
from typing import Optional

from pydantic import Field, field_validator

from careerpage.schemas.base import CamelModel
from careerpage.services.slugs import is_valid_slug


class WorkPolicy(str, enum.Enum):
    REMOTE = "Remote"
    HYBRID = "Hybrid"
    ON_SITE = "On-site"


class EmploymentType(str, enum.Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    INTERNSHIP = "Internship"


class ExperienceLevel(str, enum.Enum):
    JUNIOR = "Junior"
    MID_LEVEL = "Mid-level"
    SENIOR = "Senior"
    LEAD = "Lead"
    EXECUTIVE = "Executive"


class JobType(str, enum.Enum):
    PERMANENT = "Permanent"
    TEMPORARY = "Temporary"


class JobBase(CamelModel):
    """Fields shared by every job payload."""
    title: str
    location: str
    work_policy: WorkPolicy
    department: str
    employment_type: EmploymentType
    experience_level: ExperienceLevel
    job_type: JobType
    salary_range: Optional[str] = None
    description: str = ""
    application_url: Optional[str] = None


class JobResponse(JobBase):
    """A job as read back from the store or the sample dataset."""
    id: str
    company_id: str
    slug: str
    posted_days_ago: int = 0


class JobCreate(CamelModel):
    """
    New job posting. Missing fields take the editor defaults
    (Remote, Full-time, Mid-level, Permanent, Engineering).
    """
    title: str = "Untitled Job"
    slug: Optional[str] = None
    location: str = "Remote"
    work_policy: WorkPolicy = WorkPolicy.REMOTE
    department: str = "Engineering"
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    experience_level: ExperienceLevel = ExperienceLevel.MID_LEVEL
    job_type: JobType = JobType.PERMANENT
    salary_range: Optional[str] = None
    description: str = ""
    application_url: Optional[str] = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: Optional[str]) -> Optional[str]:
        if value and not is_valid_slug(value):
            raise ValueError("Job slug must be lowercase letters, digits and inner hyphens")
        return value or None


class JobUpdate(CamelModel):
    """Partial job update; unset fields are left untouched."""
    title: Optional[str] = None
    slug: Optional[str] = None
    location: Optional[str] = None
    work_policy: Optional[WorkPolicy] = None
    department: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    experience_level: Optional[ExperienceLevel] = None
    job_type: Optional[JobType] = None
    salary_range: Optional[str] = None
    description: Optional[str] = None
    application_url: Optional[str] = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: Optional[str]) -> Optional[str]:
        if value and not is_valid_slug(value):
            raise ValueError("Job slug must be lowercase letters, digits and inner hyphens")
        return value


class JobDetailResponse(CamelModel):
    """Public job detail: the job plus the branding of its company."""
    company_name: str
    company_slug: str
    logo_url: str = ""
    primary_color: str
    font_family: str = "Inter"
    careers_url: str
    job: JobResponse
    tags: list[str] = Field(default_factory=list)
