"""
Club Request/Response Models
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID
from clubaccess.schemas.timestamps import as_utc


class CreateClubRequest(BaseModel):
    """Request to create a new club"""
    name: str = Field(..., min_length=1, max_length=100, description="Club name")
    country: str = Field(..., min_length=1, max_length=100)
    founded_year: int = Field(..., ge=1800, le=2100)
    league: Optional[str] = Field(None, max_length=100)
    stadium: Optional[str] = Field(None, max_length=100)
    logo_url: Optional[str] = Field(None, description="URL returned by the logo upload endpoint")

    @field_validator("name", "country")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("league", "stadium")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    class Config:
        example = {
            "name": "Atlético Ribeira FC",
            "country": "Brasil",
            "founded_year": 1921,
            "league": "Série B",
            "stadium": "Estádio da Ribeira"
        }


class RegisterClubRequest(CreateClubRequest):
    """Club registration backed by a platform-issued invite code"""
    invite_code: str = Field(..., min_length=1, max_length=64)

    @field_validator("invite_code")
    @classmethod
    def strip_code(cls, value: str) -> str:
        return value.strip()


class ClubResponse(BaseModel):
    """Club details response"""
    id: UUID
    name: str
    country: str
    founded_year: int
    league: Optional[str] = None
    stadium: Optional[str] = None
    logo_url: Optional[str] = None
    manager_id: UUID
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("created_at")
    @classmethod
    def utc_timestamps(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class ClubListResponse(BaseModel):
    """List of clubs response"""
    total: int
    clubs: list[ClubResponse]


class LogoUploadResponse(BaseModel):
    """Public URL of an uploaded logo"""
    logo_url: str
