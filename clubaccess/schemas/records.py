"""
Sensitive Player Record Models
Medical, financial and technical sub-records, with structured
replacements for the free-form bonus and skill blobs
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime, date
from uuid import UUID
from enum import Enum
import json
from clubaccess.schemas.timestamps import as_utc


class RecordKind(str, Enum):
    """Kinds of sensitive record guarded by department permissions"""
    MEDICAL = "medical"
    FINANCIAL = "financial"
    TECHNICAL = "technical"


class Recommendation(str, Enum):
    SIGN = "sign"
    MONITOR = "monitor"
    REJECT = "reject"


def _decode_json(value):
    # JSON columns come back as text from both asyncpg and sqlite
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return value


class Bonus(BaseModel):
    """Single contractual bonus"""
    description: str = Field(..., min_length=1, max_length=200)
    amount: Optional[int] = Field(None, ge=0, description="Amount in cents")
    condition: Optional[str] = Field(None, max_length=200)


class TechnicalSkills(BaseModel):
    """Named technical ratings (1-10)"""
    ball_control: Optional[int] = Field(None, ge=1, le=10)
    passing: Optional[int] = Field(None, ge=1, le=10)
    shooting: Optional[int] = Field(None, ge=1, le=10)
    dribbling: Optional[int] = Field(None, ge=1, le=10)
    heading: Optional[int] = Field(None, ge=1, le=10)
    first_touch: Optional[int] = Field(None, ge=1, le=10)
    summary: Optional[str] = Field(None, max_length=1000)


# ─── Medical ────────────────────────────────────────────────────────────────

class MedicalInfoPayload(BaseModel):
    blood_type: Optional[str] = Field(None, max_length=5)
    allergies: List[str] = Field(default_factory=list)
    medical_history: Optional[str] = None
    last_medical_exam: Optional[date] = None
    fitness_level: Optional[int] = Field(None, ge=1, le=10)

    @field_validator("allergies")
    @classmethod
    def drop_blank(cls, value: List[str]) -> List[str]:
        return [item.strip() for item in value if item and item.strip()]


class MedicalInfo(MedicalInfoPayload):
    player_id: UUID
    club_id: UUID
    created_by: Optional[UUID] = None
    updated_at: Optional[datetime] = None

    @field_validator("updated_at")
    @classmethod
    def utc_timestamps(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @field_validator("allergies", mode="before")
    @classmethod
    def decode_allergies(cls, value):
        return _decode_json(value) or []


# ─── Financial ──────────────────────────────────────────────────────────────

class FinancialInfoPayload(BaseModel):
    salary: Optional[int] = Field(None, ge=0, description="Monthly salary in cents")
    contract_value: Optional[int] = Field(None, ge=0, description="Contract value in cents")
    agent_commission: Optional[float] = Field(None, ge=0, le=100, description="Percentage")
    bonuses: List[Bonus] = Field(default_factory=list)


class FinancialInfo(FinancialInfoPayload):
    player_id: UUID
    club_id: UUID
    created_by: Optional[UUID] = None
    updated_at: Optional[datetime] = None

    @field_validator("updated_at")
    @classmethod
    def utc_timestamps(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @field_validator("bonuses", mode="before")
    @classmethod
    def decode_bonuses(cls, value):
        return _decode_json(value) or []


# ─── Technical ──────────────────────────────────────────────────────────────

class TechnicalReportPayload(BaseModel):
    overall_rating: Optional[int] = Field(None, ge=1, le=10)
    technical_skills: Optional[TechnicalSkills] = None
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    detailed_notes: Optional[str] = None
    recommendation: Recommendation = Recommendation.MONITOR

    @field_validator("strengths", "weaknesses")
    @classmethod
    def drop_blank(cls, value: List[str]) -> List[str]:
        return [item.strip() for item in value if item and item.strip()]


class TechnicalReport(TechnicalReportPayload):
    id: UUID
    player_id: UUID
    club_id: UUID
    scout_id: UUID
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def utc_timestamps(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @field_validator("technical_skills", mode="before")
    @classmethod
    def decode_skills(cls, value):
        return _decode_json(value)

    @field_validator("strengths", "weaknesses", mode="before")
    @classmethod
    def decode_lists(cls, value):
        return _decode_json(value) or []


class TechnicalReportListResponse(BaseModel):
    total: int
    reports: List[TechnicalReport]
