"""
Profile Request/Response Models
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID
from enum import Enum
from clubaccess.schemas.timestamps import as_utc


class UserType(str, Enum):
    """Role a user picks during onboarding"""
    PLAYER = "player"
    CLUB = "club"
    AGENT = "agent"
    COACH = "coach"
    SCOUT = "scout"
    MEDICAL_STAFF = "medical_staff"
    FINANCIAL_STAFF = "financial_staff"
    TECHNICAL_STAFF = "technical_staff"
    JOURNALIST = "journalist"
    FAN = "fan"
    ADMIN = "admin"


class Profile(BaseModel):
    """Row of profiles"""
    id: UUID
    full_name: Optional[str] = None
    user_type: Optional[UserType] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    specialization: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("created_at", "updated_at")
    @classmethod
    def utc_timestamps(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class UserTypeUpdate(BaseModel):
    """Onboarding step 1: choose a user type"""
    user_type: UserType


class ProfileUpdate(BaseModel):
    """Editable free-text profile fields"""
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=2000)
    location: Optional[str] = Field(None, max_length=100)
    specialization: Optional[str] = Field(None, max_length=200)
