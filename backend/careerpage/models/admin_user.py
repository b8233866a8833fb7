from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey
from sqlalchemy.orm import relationship
import uuid

from careerpage.database import Base
from careerpage.database_types import GUID


class AdminUser(Base):
    __tablename__ = "admin_users"
    
    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=True)
    
    # The company whose careers page this admin edits (set on sign-up or from the dashboard)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="SET NULL"), nullable=True, index=True)
    
    # Credentials
    password_hash = Column(String, nullable=False)
    email_confirmed_at = Column(DateTime, nullable=True)
    confirmation_token = Column(String, nullable=True, index=True)
    confirmation_expires_at = Column(DateTime, nullable=True)
    
    # Security & audit fields
    last_login_at = Column(DateTime, nullable=True)
    failed_login_attempts = Column(Integer, default=0, nullable=False)
    account_locked_until = Column(DateTime, nullable=True)
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    company = relationship("Company", lazy="selectin")
    sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")
    
    def is_email_confirmed(self) -> bool:
        return self.email_confirmed_at is not None
    
    def is_account_locked(self) -> bool:
        """Check if account is currently locked due to failed sign-in attempts."""
        if not self.account_locked_until:
            return False
        return datetime.utcnow() < self.account_locked_until
