"""
Club Model
Represents football clubs on the platform
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID
import uuid
from clubaccess.database import Base


class Club(Base):
    __tablename__ = "clubs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    country = Column(String(100), nullable=False)
    founded_year = Column(Integer, nullable=False)
    league = Column(String(100), nullable=True)
    stadium = Column(String(100), nullable=True)
    logo_url = Column(String, nullable=True)

    manager_id = Column(UUID(as_uuid=True), ForeignKey("profiles.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
