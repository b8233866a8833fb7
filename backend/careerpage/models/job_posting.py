from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from careerpage.database import Base
from careerpage.database_types import GUID


class JobPosting(Base):
    __tablename__ = "jobs"
    
    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    
    title = Column(String, nullable=False)
    slug = Column(String, nullable=False)
    location = Column(String, nullable=False)
    work_policy = Column(String, nullable=False)  # Remote | Hybrid | On-site
    department = Column(String, nullable=False)
    employment_type = Column(String, nullable=False)  # Full-time | Part-time | Contract | Internship
    experience_level = Column(String, nullable=False)  # Junior | Mid-level | Senior | Lead | Executive
    job_type = Column(String, nullable=False)  # Permanent | Temporary
    salary_range = Column(String, nullable=True)
    
    # Sanitized rich HTML
    description = Column(Text, nullable=False, default="")
    application_url = Column(String, nullable=True)
    
    # postedDaysAgo is derived from this at read time
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    
    company = relationship("Company", back_populates="jobs")
    
    __table_args__ = (
        # Job slugs are unique per company, not globally
        UniqueConstraint('company_id', 'slug', name='uq_jobs_company_slug'),
    )
