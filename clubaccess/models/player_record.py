"""
Sensitive Player Record Models
Medical and financial info (one row per player per club) and
append-only technical reports
"""

from sqlalchemy import Column, String, Integer, Float, Text, Date, DateTime, JSON, UniqueConstraint, Index, func
from sqlalchemy.dialects.postgresql import UUID, JSONB
import uuid
from clubaccess.database import Base

JSONColumn = JSON().with_variant(JSONB(), "postgresql")


class PlayerMedicalInfo(Base):
    __tablename__ = "player_medical_info"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    player_id = Column(UUID(as_uuid=True), nullable=False)
    club_id = Column(UUID(as_uuid=True), nullable=False)

    blood_type = Column(String(5), nullable=True)
    allergies = Column(JSONColumn, nullable=True)
    medical_history = Column(Text, nullable=True)
    last_medical_exam = Column(Date, nullable=True)
    fitness_level = Column(Integer, nullable=True)

    created_by = Column(UUID(as_uuid=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("player_id", "club_id", name="uq_player_medical_info_player_club"),
    )


class PlayerFinancialInfo(Base):
    __tablename__ = "player_financial_info"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    player_id = Column(UUID(as_uuid=True), nullable=False)
    club_id = Column(UUID(as_uuid=True), nullable=False)

    # Amounts in cents
    salary = Column(Integer, nullable=True)
    contract_value = Column(Integer, nullable=True)
    agent_commission = Column(Float, nullable=True)
    bonuses = Column(JSONColumn, nullable=True)

    created_by = Column(UUID(as_uuid=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("player_id", "club_id", name="uq_player_financial_info_player_club"),
    )


class PlayerTechnicalReport(Base):
    __tablename__ = "player_technical_reports"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    player_id = Column(UUID(as_uuid=True), nullable=False)
    club_id = Column(UUID(as_uuid=True), nullable=False)
    scout_id = Column(UUID(as_uuid=True), nullable=False)

    overall_rating = Column(Integer, nullable=True)
    technical_skills = Column(JSONColumn, nullable=True)
    strengths = Column(JSONColumn, nullable=True)
    weaknesses = Column(JSONColumn, nullable=True)
    detailed_notes = Column(Text, nullable=True)
    recommendation = Column(String(10), nullable=False, default="monitor")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("ix_player_technical_reports_player_club", "player_id", "club_id"),
    )
