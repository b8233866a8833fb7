"""Admin dashboard and editor payloads."""
from typing import Optional

from careerpage.schemas.auth import AdminProfile
from careerpage.schemas.base import CamelModel
from careerpage.schemas.company import CompanyResponse
from careerpage.schemas.job import JobResponse
from careerpage.schemas.page import CareerPage


class DashboardResponse(CamelModel):
    profile: AdminProfile
    editor_url: Optional[str] = None
    careers_url: Optional[str] = None


class EditorResponse(CamelModel):
    """Everything the editor screen loads for one company, with a live preview."""
    company: CompanyResponse
    jobs: list[JobResponse]
    preview: CareerPage
    share_url: str
