"""
Player Record Routes
Medical, financial and technical records, gated by department membership
"""

from fastapi import APIRouter, Depends, status
from typing import Optional
from uuid import UUID
from clubaccess.auth import get_current_identity
from clubaccess.identity import Identity
from clubaccess.schemas.records import (
    MedicalInfo,
    MedicalInfoPayload,
    FinancialInfo,
    FinancialInfoPayload,
    TechnicalReport,
    TechnicalReportPayload,
    TechnicalReportListResponse
)
from clubaccess.services.record_service import record_service

router = APIRouter()


@router.get("/{club_id}/players/{player_id}/medical", response_model=Optional[MedicalInfo])
async def get_medical_info(
    club_id: UUID,
    player_id: UUID,
    identity: Identity = Depends(get_current_identity)
):
    """Medical info (medical department, read). null if none recorded yet."""
    return await record_service.view_medical(identity, str(club_id), str(player_id))


@router.put("/{club_id}/players/{player_id}/medical", response_model=MedicalInfo)
async def save_medical_info(
    club_id: UUID,
    player_id: UUID,
    request: MedicalInfoPayload,
    identity: Identity = Depends(get_current_identity)
):
    """Create or replace medical info (medical department, write)"""
    return await record_service.save_medical(identity, str(club_id), str(player_id), request)


@router.get("/{club_id}/players/{player_id}/financial", response_model=Optional[FinancialInfo])
async def get_financial_info(
    club_id: UUID,
    player_id: UUID,
    identity: Identity = Depends(get_current_identity)
):
    """Contract figures (financial department, read). null if none recorded yet."""
    return await record_service.view_financial(identity, str(club_id), str(player_id))


@router.put("/{club_id}/players/{player_id}/financial", response_model=FinancialInfo)
async def save_financial_info(
    club_id: UUID,
    player_id: UUID,
    request: FinancialInfoPayload,
    identity: Identity = Depends(get_current_identity)
):
    """
    Create or replace contract figures (financial department, write)

    - **salary**, **contract_value**: amounts in cents
    - **agent_commission**: percentage 0-100
    - **bonuses**: list of {description, amount, condition}
    """
    return await record_service.save_financial(identity, str(club_id), str(player_id), request)


@router.get("/{club_id}/players/{player_id}/technical-reports", response_model=TechnicalReportListResponse)
async def list_technical_reports(
    club_id: UUID,
    player_id: UUID,
    identity: Identity = Depends(get_current_identity)
):
    """Scouting reports, newest first (technical or scouting department, read)"""
    reports = await record_service.list_technical_reports(identity, str(club_id), str(player_id))
    return {"total": len(reports), "reports": reports}


@router.post(
    "/{club_id}/players/{player_id}/technical-reports",
    response_model=TechnicalReport,
    status_code=status.HTTP_201_CREATED
)
async def add_technical_report(
    club_id: UUID,
    player_id: UUID,
    request: TechnicalReportPayload,
    identity: Identity = Depends(get_current_identity)
):
    """Add a scouting report (technical or scouting department, write)"""
    return await record_service.add_technical_report(identity, str(club_id), str(player_id), request)
