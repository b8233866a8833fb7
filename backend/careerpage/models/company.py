"""Company model: a tenant and its careers page document."""
from datetime import datetime
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
import uuid

from careerpage.database import Base
from careerpage.database_types import GUID, JSONDocument


class Company(Base):
    __tablename__ = "companies"
    
    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    slug = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    
    # Embedded documents, stored camelCase
    # brand_config: {"primaryColor": "#0f172a", "secondaryColor": ..., "fontFamily": "Inter", "logoUrl": ""}
    # page_sections: [{"id": ..., "type": "Hero", "order": 0, "isVisible": true, ...}, ...]
    brand_config = Column(JSONDocument, nullable=True)
    page_sections = Column(JSONDocument, nullable=True)
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    # Relationships
    jobs = relationship("JobPosting", back_populates="company", cascade="all, delete-orphan")
