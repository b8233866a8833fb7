"""Database models"""
from careerpage.models.company import Company
from careerpage.models.job_posting import JobPosting
from careerpage.models.admin_user import AdminUser
from careerpage.models.auth_session import AuthSession

__all__ = [
    "Company",
    "JobPosting",
    "AdminUser",
    "AuthSession",
]
