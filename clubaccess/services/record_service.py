"""
Player Record Service
Medical, financial and technical player records behind the department
permission check
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional, List
from uuid import uuid4
from clubaccess.identity import Identity
from clubaccess.database import database, store_guard
from clubaccess.errors import PermissionDenied
from clubaccess.permissions import Department, PermissionLevel, has_permission
from clubaccess.schemas.membership import MembershipStatus
from clubaccess.schemas.records import (
    RecordKind,
    MedicalInfo,
    MedicalInfoPayload,
    FinancialInfo,
    FinancialInfoPayload,
    TechnicalReport,
    TechnicalReportPayload,
)
from clubaccess.services.membership_service import membership_service

logger = logging.getLogger(__name__)

# Any one of the listed departments opens the record kind
RECORD_DEPARTMENTS = {
    RecordKind.MEDICAL: (Department.MEDICAL,),
    RecordKind.FINANCIAL: (Department.FINANCIAL,),
    RecordKind.TECHNICAL: (Department.TECHNICAL, Department.SCOUTING),
}


def _key(club_id: str, player_id: str) -> dict:
    return {"club_id": str(club_id), "player_id": str(player_id)}


class RecordService:
    """Service for sensitive player records"""

    @staticmethod
    async def _require(identity: Identity, club_id: str, kind: RecordKind, level: PermissionLevel) -> None:
        """
        Raise PermissionDenied unless the caller may access the record kind

        Memberships are read fresh on every call so that a revocation or
        approval takes effect on the next check.
        """
        memberships = await membership_service.list_for_user(identity.id, MembershipStatus.ACCEPTED)

        allowed = any(
            has_permission(memberships, department, level, club_id=club_id, user_id=identity.id)
            for department in RECORD_DEPARTMENTS[kind]
        )
        if not allowed:
            logger.warning(
                "Denied %s %s access to club %s for user %s",
                level.value, kind.value, club_id, identity.id,
            )
            raise PermissionDenied()

    # ─── Medical ────────────────────────────────────────────────────────────

    @staticmethod
    async def view_medical(identity: Identity, club_id: str, player_id: str) -> Optional[MedicalInfo]:
        async with store_guard("view medical info"):
            await RecordService._require(identity, club_id, RecordKind.MEDICAL, PermissionLevel.READ)
            row = await database.fetch_one(
                "SELECT * FROM player_medical_info WHERE player_id = :player_id AND club_id = :club_id",
                _key(club_id, player_id)
            )
        return MedicalInfo.model_validate(dict(row)) if row else None

    @staticmethod
    async def save_medical(
        identity: Identity,
        club_id: str,
        player_id: str,
        payload: MedicalInfoPayload,
        now: Optional[datetime] = None,
    ) -> MedicalInfo:
        """Create or overwrite the player's medical info for this club"""

        now = now or datetime.now(timezone.utc)
        async with store_guard("save medical info"):
            await RecordService._require(identity, club_id, RecordKind.MEDICAL, PermissionLevel.WRITE)
            row = await database.fetch_one(
                """
                INSERT INTO player_medical_info
                (id, player_id, club_id, blood_type, allergies, medical_history,
                 last_medical_exam, fitness_level, created_by, updated_at)
                VALUES (:id, :player_id, :club_id, :blood_type, :allergies, :medical_history,
                        :last_medical_exam, :fitness_level, :created_by, :now)
                ON CONFLICT (player_id, club_id) DO UPDATE SET
                    blood_type = excluded.blood_type,
                    allergies = excluded.allergies,
                    medical_history = excluded.medical_history,
                    last_medical_exam = excluded.last_medical_exam,
                    fitness_level = excluded.fitness_level,
                    updated_at = excluded.updated_at
                RETURNING *
                """,
                {
                    **_key(club_id, player_id),
                    "id": str(uuid4()),
                    "blood_type": payload.blood_type,
                    "allergies": json.dumps(payload.allergies),
                    "medical_history": payload.medical_history,
                    "last_medical_exam": payload.last_medical_exam,
                    "fitness_level": payload.fitness_level,
                    "created_by": identity.id,
                    "now": now,
                }
            )

        logger.info("Medical info for player %s in club %s saved by %s", player_id, club_id, identity.id)
        return MedicalInfo.model_validate(dict(row))

    # ─── Financial ──────────────────────────────────────────────────────────

    @staticmethod
    async def view_financial(identity: Identity, club_id: str, player_id: str) -> Optional[FinancialInfo]:
        async with store_guard("view financial info"):
            await RecordService._require(identity, club_id, RecordKind.FINANCIAL, PermissionLevel.READ)
            row = await database.fetch_one(
                "SELECT * FROM player_financial_info WHERE player_id = :player_id AND club_id = :club_id",
                _key(club_id, player_id)
            )
        return FinancialInfo.model_validate(dict(row)) if row else None

    @staticmethod
    async def save_financial(
        identity: Identity,
        club_id: str,
        player_id: str,
        payload: FinancialInfoPayload,
        now: Optional[datetime] = None,
    ) -> FinancialInfo:
        """Create or overwrite the player's contract figures for this club"""

        now = now or datetime.now(timezone.utc)
        async with store_guard("save financial info"):
            await RecordService._require(identity, club_id, RecordKind.FINANCIAL, PermissionLevel.WRITE)
            row = await database.fetch_one(
                """
                INSERT INTO player_financial_info
                (id, player_id, club_id, salary, contract_value, agent_commission,
                 bonuses, created_by, updated_at)
                VALUES (:id, :player_id, :club_id, :salary, :contract_value, :agent_commission,
                        :bonuses, :created_by, :now)
                ON CONFLICT (player_id, club_id) DO UPDATE SET
                    salary = excluded.salary,
                    contract_value = excluded.contract_value,
                    agent_commission = excluded.agent_commission,
                    bonuses = excluded.bonuses,
                    updated_at = excluded.updated_at
                RETURNING *
                """,
                {
                    **_key(club_id, player_id),
                    "id": str(uuid4()),
                    "salary": payload.salary,
                    "contract_value": payload.contract_value,
                    "agent_commission": payload.agent_commission,
                    "bonuses": json.dumps([bonus.model_dump() for bonus in payload.bonuses]),
                    "created_by": identity.id,
                    "now": now,
                }
            )

        logger.info("Financial info for player %s in club %s saved by %s", player_id, club_id, identity.id)
        return FinancialInfo.model_validate(dict(row))

    # ─── Technical ──────────────────────────────────────────────────────────

    @staticmethod
    async def list_technical_reports(identity: Identity, club_id: str, player_id: str) -> List[TechnicalReport]:
        """Report series for a player, newest first"""

        async with store_guard("list technical reports"):
            await RecordService._require(identity, club_id, RecordKind.TECHNICAL, PermissionLevel.READ)
            rows = await database.fetch_all(
                """
                SELECT * FROM player_technical_reports
                WHERE player_id = :player_id AND club_id = :club_id
                ORDER BY created_at DESC
                """,
                _key(club_id, player_id)
            )
        return [TechnicalReport.model_validate(dict(row)) for row in rows]

    @staticmethod
    async def add_technical_report(
        identity: Identity,
        club_id: str,
        player_id: str,
        payload: TechnicalReportPayload,
        now: Optional[datetime] = None,
    ) -> TechnicalReport:
        """Append a scouting report; earlier reports are kept"""

        now = now or datetime.now(timezone.utc)
        skills = payload.technical_skills.model_dump() if payload.technical_skills else None

        async with store_guard("add technical report"):
            await RecordService._require(identity, club_id, RecordKind.TECHNICAL, PermissionLevel.WRITE)
            row = await database.fetch_one(
                """
                INSERT INTO player_technical_reports
                (id, player_id, club_id, scout_id, overall_rating, technical_skills,
                 strengths, weaknesses, detailed_notes, recommendation, created_at)
                VALUES (:id, :player_id, :club_id, :scout_id, :overall_rating, :technical_skills,
                        :strengths, :weaknesses, :detailed_notes, :recommendation, :now)
                RETURNING *
                """,
                {
                    **_key(club_id, player_id),
                    "id": str(uuid4()),
                    "scout_id": identity.id,
                    "overall_rating": payload.overall_rating,
                    "technical_skills": json.dumps(skills) if skills is not None else None,
                    "strengths": json.dumps(payload.strengths),
                    "weaknesses": json.dumps(payload.weaknesses),
                    "detailed_notes": payload.detailed_notes,
                    "recommendation": payload.recommendation.value,
                    "now": now,
                }
            )

        logger.info("Technical report %s for player %s added by %s", row["id"], player_id, identity.id)
        return TechnicalReport.model_validate(dict(row))


# Create singleton instance
record_service = RecordService()
