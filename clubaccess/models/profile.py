"""
Profile Model
One row per authenticated user
"""

from sqlalchemy import Column, String, Text, DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from clubaccess.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    # Same id as the auth provider's user
    id = Column(UUID(as_uuid=True), primary_key=True)
    full_name = Column(String(100), nullable=True)

    # Null until onboarding step 1
    user_type = Column(String(30), nullable=True)

    bio = Column(Text, nullable=True)
    location = Column(String(100), nullable=True)
    specialization = Column(String(200), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
