"""
Sensitive Record Gate Tests
"""

from datetime import date, timedelta
from uuid import uuid4

import pytest

from clubaccess.errors import PermissionDenied
from clubaccess.permissions import Department, PermissionLevel
from clubaccess.schemas.profile import UserType
from clubaccess.schemas.records import (
    Bonus,
    FinancialInfoPayload,
    MedicalInfoPayload,
    Recommendation,
    TechnicalReportPayload,
    TechnicalSkills,
)
from clubaccess.services.record_service import record_service
from conftest import T0, grant, make_club, make_user


@pytest.fixture
def player_id():
    return str(uuid4())


class TestMedicalGate:

    async def test_medical_write_then_read(self, db, player_id):
        _, club = await make_club()
        doctor = await make_user(UserType.MEDICAL_STAFF)
        await grant(doctor, club.id, Department.MEDICAL, PermissionLevel.WRITE)

        saved = await record_service.save_medical(
            doctor, str(club.id), player_id,
            MedicalInfoPayload(blood_type="O+", allergies=["penicillin", " "], last_medical_exam=date(2026, 2, 1)),
        )
        viewed = await record_service.view_medical(doctor, str(club.id), player_id)

        assert saved.allergies == ["penicillin"]
        assert viewed.blood_type == "O+"
        assert viewed.last_medical_exam == date(2026, 2, 1)
        assert str(viewed.created_by) == doctor.id

    async def test_save_overwrites(self, db, player_id):
        _, club = await make_club()
        doctor = await make_user(UserType.MEDICAL_STAFF)
        await grant(doctor, club.id, Department.MEDICAL, PermissionLevel.WRITE)

        await record_service.save_medical(doctor, str(club.id), player_id, MedicalInfoPayload(fitness_level=5))
        await record_service.save_medical(doctor, str(club.id), player_id, MedicalInfoPayload(fitness_level=9))

        viewed = await record_service.view_medical(doctor, str(club.id), player_id)
        assert viewed.fitness_level == 9

    async def test_read_level_cannot_write(self, db, player_id):
        _, club = await make_club()
        nurse = await make_user(UserType.MEDICAL_STAFF)
        await grant(nurse, club.id, Department.MEDICAL, PermissionLevel.READ)

        assert await record_service.view_medical(nurse, str(club.id), player_id) is None
        with pytest.raises(PermissionDenied):
            await record_service.save_medical(nurse, str(club.id), player_id, MedicalInfoPayload())

    async def test_denial_does_not_reveal_existence(self, db, player_id):
        _, club = await make_club()
        doctor = await make_user(UserType.MEDICAL_STAFF)
        await grant(doctor, club.id, Department.MEDICAL, PermissionLevel.WRITE)
        await record_service.save_medical(doctor, str(club.id), player_id, MedicalInfoPayload(blood_type="A-"))
        outsider = await make_user(UserType.FAN)

        with pytest.raises(PermissionDenied) as existing:
            await record_service.view_medical(outsider, str(club.id), player_id)
        with pytest.raises(PermissionDenied) as missing:
            await record_service.view_medical(outsider, str(club.id), str(uuid4()))

        assert existing.value.message == missing.value.message


class TestDepartmentIsolation:

    async def test_club_admin_cannot_read_medical(self, db, player_id):
        owner, club = await make_club()
        with pytest.raises(PermissionDenied):
            await record_service.view_medical(owner, str(club.id), player_id)

    async def test_medical_staff_cannot_read_financial(self, db, player_id):
        _, club = await make_club()
        doctor = await make_user(UserType.MEDICAL_STAFF)
        await grant(doctor, club.id, Department.MEDICAL, PermissionLevel.ADMIN)

        with pytest.raises(PermissionDenied):
            await record_service.view_financial(doctor, str(club.id), player_id)

    async def test_membership_in_other_club_does_not_count(self, db, player_id):
        _, club_a = await make_club(name="Club A")
        _, club_b = await make_club(name="Club B")
        analyst = await make_user(UserType.FINANCIAL_STAFF)
        await grant(analyst, club_a.id, Department.FINANCIAL, PermissionLevel.WRITE)

        await record_service.view_financial(analyst, str(club_a.id), player_id)
        with pytest.raises(PermissionDenied):
            await record_service.view_financial(analyst, str(club_b.id), player_id)

    async def test_records_are_scoped_per_club(self, db, player_id):
        _, club_a = await make_club(name="Club A")
        _, club_b = await make_club(name="Club B")
        doctor = await make_user(UserType.MEDICAL_STAFF)
        await grant(doctor, club_a.id, Department.MEDICAL, PermissionLevel.WRITE)
        await grant(doctor, club_b.id, Department.MEDICAL, PermissionLevel.WRITE)

        await record_service.save_medical(doctor, str(club_a.id), player_id, MedicalInfoPayload(blood_type="B+"))

        assert await record_service.view_medical(doctor, str(club_b.id), player_id) is None


class TestFinancial:

    async def test_structured_bonuses(self, db, player_id):
        _, club = await make_club()
        analyst = await make_user(UserType.FINANCIAL_STAFF)
        await grant(analyst, club.id, Department.FINANCIAL, PermissionLevel.WRITE)

        payload = FinancialInfoPayload(
            salary=1_500_000,
            agent_commission=10,
            bonuses=[Bonus(description="Goal bonus", amount=50_000, condition="per goal")],
        )
        await record_service.save_financial(analyst, str(club.id), player_id, payload)
        viewed = await record_service.view_financial(analyst, str(club.id), player_id)

        assert viewed.salary == 1_500_000
        assert viewed.bonuses == [Bonus(description="Goal bonus", amount=50_000, condition="per goal")]

    async def test_save_overwrites_bonuses(self, db, player_id):
        _, club = await make_club()
        analyst = await make_user(UserType.FINANCIAL_STAFF)
        await grant(analyst, club.id, Department.FINANCIAL, PermissionLevel.WRITE)

        await record_service.save_financial(
            analyst, str(club.id), player_id, FinancialInfoPayload(bonuses=[Bonus(description="Signing")])
        )
        await record_service.save_financial(analyst, str(club.id), player_id, FinancialInfoPayload(salary=1))

        viewed = await record_service.view_financial(analyst, str(club.id), player_id)
        assert viewed.bonuses == []
        assert viewed.salary == 1


class TestTechnicalReports:

    async def test_reports_append_newest_first(self, db, player_id):
        _, club = await make_club()
        scout = await make_user(UserType.SCOUT)
        await grant(scout, club.id, Department.SCOUTING, PermissionLevel.WRITE)

        await record_service.add_technical_report(
            scout, str(club.id), player_id, TechnicalReportPayload(overall_rating=6), now=T0
        )
        await record_service.add_technical_report(
            scout, str(club.id), player_id,
            TechnicalReportPayload(
                overall_rating=8,
                technical_skills=TechnicalSkills(passing=9, shooting=7),
                strengths=["vision"],
                recommendation=Recommendation.SIGN,
            ),
            now=T0 + timedelta(days=1),
        )

        reports = await record_service.list_technical_reports(scout, str(club.id), player_id)

        assert [report.overall_rating for report in reports] == [8, 6]
        assert reports[0].technical_skills.passing == 9
        assert reports[0].strengths == ["vision"]
        assert reports[0].recommendation is Recommendation.SIGN
        assert str(reports[0].scout_id) == scout.id
        assert reports[1].technical_skills is None

    @pytest.mark.parametrize("department", [Department.TECHNICAL, Department.SCOUTING])
    async def test_technical_or_scouting_may_read(self, db, player_id, department):
        _, club = await make_club()
        staff = await make_user(UserType.TECHNICAL_STAFF)
        await grant(staff, club.id, department, PermissionLevel.READ)

        assert await record_service.list_technical_reports(staff, str(club.id), player_id) == []

    async def test_medical_cannot_add_report(self, db, player_id):
        _, club = await make_club()
        doctor = await make_user(UserType.MEDICAL_STAFF)
        await grant(doctor, club.id, Department.MEDICAL, PermissionLevel.ADMIN)

        with pytest.raises(PermissionDenied):
            await record_service.add_technical_report(doctor, str(club.id), player_id, TechnicalReportPayload())
