from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from careerpage.database import Base
from careerpage.database_types import GUID


class AuthSession(Base):
    """Opaque session token handed to the browser in the auth cookie."""
    __tablename__ = "auth_sessions"
    
    token = Column(String, primary_key=True)
    user_id = Column(GUID, ForeignKey("admin_users.id", ondelete="CASCADE"), nullable=False, index=True)
    
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    
    user = relationship("AdminUser", back_populates="sessions", lazy="selectin")
    
    def is_expired(self) -> bool:
        return self.expires_at < datetime.utcnow()
