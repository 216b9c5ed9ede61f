"""
Invitation Lifecycle Tests
Issue, redeem, request access, decisions, withdrawal and removal
"""

import asyncio
from datetime import timedelta

import pytest

from clubaccess.errors import (
    DependencyUnavailable,
    InvalidTransition,
    InviteNotFound,
    MembershipNotFound,
    PermissionDenied,
    ValidationError,
)
from clubaccess.permissions import Department, PermissionLevel
from clubaccess.schemas.membership import Decision, Membership, MembershipStatus
from clubaccess.schemas.profile import UserType
from clubaccess.services.invitation_service import invitation_service
from clubaccess.services.membership_service import membership_service
from clubaccess.services.record_service import record_service
from clubaccess.schemas.records import TechnicalReportPayload
from conftest import T0, make_club, make_user, grant


async def issue(owner, club, department=Department.TECHNICAL, level=PermissionLevel.WRITE, ttl_days=7, now=T0):
    return await invitation_service.issue(owner, str(club.id), department, level, ttl_days, now=now)


class TestIssue:

    async def test_issue_creates_unassigned_pending_invite(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club)

        assert invite.user_id is None
        assert invite.status is MembershipStatus.PENDING
        assert invite.used is False
        assert invite.invite_code
        assert str(invite.invited_by) == owner.id
        assert invite.expires_at == T0 + timedelta(days=7)

    async def test_codes_are_unique(self, db):
        owner, club = await make_club()
        codes = {(await issue(owner, club)).invite_code for _ in range(5)}
        assert len(codes) == 5

    async def test_no_ttl_never_expires(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club, ttl_days=None)
        assert invite.expires_at is None

    @pytest.mark.parametrize("ttl_days", [0, -3])
    async def test_non_positive_ttl_rejected(self, db, ttl_days):
        owner, club = await make_club()
        with pytest.raises(ValidationError):
            await issue(owner, club, ttl_days=ttl_days)

    async def test_non_admin_cannot_issue(self, db):
        _, club = await make_club()
        staff = await make_user(UserType.MEDICAL_STAFF)
        await grant(staff, club.id, Department.MEDICAL, PermissionLevel.ADMIN)

        with pytest.raises(PermissionDenied):
            await issue(staff, club)

    async def test_admin_of_another_club_cannot_issue(self, db):
        owner_a, _ = await make_club(name="Club A")
        _, club_b = await make_club(name="Club B")
        with pytest.raises(PermissionDenied):
            await issue(owner_a, club_b)

    async def test_registration_invite_requires_platform_admin(self, db):
        club_user = await make_user(UserType.CLUB)
        with pytest.raises(PermissionDenied):
            await invitation_service.issue(club_user, None, Department.MANAGEMENT, PermissionLevel.ADMIN, 7)

    async def test_registration_invite_is_management_admin(self, db):
        admin = await make_user(UserType.ADMIN)
        invite = await invitation_service.issue(admin, None, Department.MEDICAL, PermissionLevel.READ, 7, now=T0)

        assert invite.club_id is None
        assert invite.department is Department.MANAGEMENT
        assert invite.permission_level is PermissionLevel.ADMIN


class TestRedeem:

    async def test_redeem_grants_membership(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club)
        scout = await make_user(UserType.SCOUT)

        membership = await invitation_service.redeem(scout, invite.invite_code, now=T0 + timedelta(hours=1))

        assert membership.id == invite.id
        assert str(membership.user_id) == scout.id
        assert membership.status is MembershipStatus.ACCEPTED
        assert membership.used is True
        assert membership.department is Department.TECHNICAL
        assert membership.permission_level is PermissionLevel.WRITE

    async def test_code_is_trimmed(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club)
        scout = await make_user(UserType.SCOUT)

        membership = await invitation_service.redeem(scout, f"  {invite.invite_code}\n", now=T0)
        assert membership.status is MembershipStatus.ACCEPTED

    async def test_unknown_code(self, db):
        scout = await make_user(UserType.SCOUT)
        with pytest.raises(InviteNotFound):
            await invitation_service.redeem(scout, "00000000-0000-0000-0000-000000000000", now=T0)

    async def test_blank_code(self, db):
        scout = await make_user(UserType.SCOUT)
        with pytest.raises(InviteNotFound):
            await invitation_service.redeem(scout, "   ", now=T0)

    async def test_second_redemption_fails_and_first_claim_stands(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club)
        first = await make_user(UserType.SCOUT)
        second = await make_user(UserType.SCOUT)

        await invitation_service.redeem(first, invite.invite_code, now=T0)
        with pytest.raises(InviteNotFound):
            await invitation_service.redeem(second, invite.invite_code, now=T0)
        with pytest.raises(InviteNotFound):
            await invitation_service.redeem(first, invite.invite_code, now=T0)

        stored = await membership_service.get_by_id(invite.id)
        assert str(stored.user_id) == first.id

    async def test_expired_code(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club, ttl_days=7)
        scout = await make_user(UserType.SCOUT)

        with pytest.raises(InviteNotFound) as exc_info:
            await invitation_service.redeem(scout, invite.invite_code, now=T0 + timedelta(days=8))

        # Same message as an unknown code
        assert exc_info.value.message == InviteNotFound().message

    async def test_requested_access_row_is_not_redeemable(self, db):
        _, club = await make_club()
        requester = await make_user(UserType.MEDICAL_STAFF)
        request = await invitation_service.request_access(requester, str(club.id), Department.MEDICAL, now=T0)

        other = await make_user(UserType.MEDICAL_STAFF)
        with pytest.raises(InviteNotFound):
            await invitation_service.redeem(other, request.invite_code, now=T0)

    async def test_registration_invite_not_redeemable_as_member_invite(self, db):
        admin = await make_user(UserType.ADMIN)
        invite = await invitation_service.issue(admin, None, Department.MANAGEMENT, PermissionLevel.ADMIN, 7, now=T0)
        user = await make_user(UserType.CLUB)

        with pytest.raises(InviteNotFound):
            await invitation_service.redeem(user, invite.invite_code, now=T0)

    async def test_concurrent_redemption_has_single_winner(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club)
        users = [await make_user(UserType.TECHNICAL_STAFF) for _ in range(8)]

        async def redeem_with_retry(identity):
            # Retrying after a transient store failure is part of the contract
            for _ in range(50):
                try:
                    return await invitation_service.redeem(identity, invite.invite_code, now=T0)
                except DependencyUnavailable:
                    await asyncio.sleep(0.01)
            raise AssertionError("store stayed unavailable")

        results = await asyncio.gather(*(redeem_with_retry(user) for user in users), return_exceptions=True)

        winners = [result for result in results if isinstance(result, Membership)]
        losers = [result for result in results if not isinstance(result, Membership)]
        assert len(winners) == 1
        assert len(losers) == len(users) - 1
        assert all(isinstance(result, InviteNotFound) for result in losers)

        stored = await membership_service.get_by_id(invite.id)
        assert stored.user_id == winners[0].user_id


class TestSevenDayTechnicalInvite:
    """Issue technical/write with a 7 day TTL and redeem around the deadline"""

    async def test_redeemed_on_day_six_grants_write(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club, Department.TECHNICAL, PermissionLevel.WRITE, ttl_days=7)
        scout = await make_user(UserType.TECHNICAL_STAFF)

        await invitation_service.redeem(scout, invite.invite_code, now=T0 + timedelta(days=6))

        report = await record_service.add_technical_report(
            scout, str(club.id), str(owner.user_id), TechnicalReportPayload(overall_rating=7)
        )
        assert report.overall_rating == 7

    async def test_redeemed_on_day_eight_is_refused(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club, Department.TECHNICAL, PermissionLevel.WRITE, ttl_days=7)
        scout = await make_user(UserType.TECHNICAL_STAFF)

        with pytest.raises(InviteNotFound):
            await invitation_service.redeem(scout, invite.invite_code, now=T0 + timedelta(days=8))

        with pytest.raises(PermissionDenied):
            await record_service.add_technical_report(
                scout, str(club.id), str(owner.user_id), TechnicalReportPayload(overall_rating=7)
            )


class TestAccessRequests:

    async def test_request_is_pending_read(self, db):
        _, club = await make_club()
        requester = await make_user(UserType.FINANCIAL_STAFF)

        request = await invitation_service.request_access(requester, str(club.id), Department.FINANCIAL, now=T0)

        assert request.status is MembershipStatus.PENDING
        assert request.permission_level is PermissionLevel.READ
        assert str(request.user_id) == requester.id
        assert request.expires_at is None
        assert request.invite_code

    async def test_approve(self, db):
        owner, club = await make_club()
        requester = await make_user(UserType.FINANCIAL_STAFF)
        request = await invitation_service.request_access(requester, str(club.id), Department.FINANCIAL, now=T0)

        decided = await invitation_service.decide(owner, str(request.id), Decision.APPROVE, now=T0)

        assert decided.status is MembershipStatus.ACCEPTED
        assert decided.used is True
        assert decided.accepted_at is not None

    async def test_reject(self, db):
        owner, club = await make_club()
        requester = await make_user(UserType.FINANCIAL_STAFF)
        request = await invitation_service.request_access(requester, str(club.id), Department.FINANCIAL, now=T0)

        decided = await invitation_service.decide(owner, str(request.id), Decision.REJECT, now=T0)

        assert decided.status is MembershipStatus.REJECTED
        assert decided.accepted_at is None

    @pytest.mark.parametrize("first,second", [
        (Decision.APPROVE, Decision.REJECT),
        (Decision.REJECT, Decision.APPROVE),
        (Decision.APPROVE, Decision.APPROVE),
    ])
    async def test_second_decision_is_invalid_transition(self, db, first, second):
        owner, club = await make_club()
        requester = await make_user(UserType.COACH)
        request = await invitation_service.request_access(requester, str(club.id), Department.TECHNICAL, now=T0)

        await invitation_service.decide(owner, str(request.id), first, now=T0)
        with pytest.raises(InvalidTransition):
            await invitation_service.decide(owner, str(request.id), second, now=T0)

    async def test_decision_on_unclaimed_invite_is_invalid(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club)
        with pytest.raises(InvalidTransition):
            await invitation_service.decide(owner, str(invite.id), Decision.APPROVE, now=T0)

    async def test_unknown_membership(self, db):
        owner, _ = await make_club()
        with pytest.raises(MembershipNotFound):
            await invitation_service.decide(owner, "7a0c9a52-3f51-4a4f-9d0e-6cc1a2d7b0aa", Decision.APPROVE)

    async def test_unknown_and_foreign_ids_answer_alike(self, db):
        owner_a, _ = await make_club(name="Club A")
        _, club_b = await make_club(name="Club B")
        requester = await make_user(UserType.COACH)
        request = await invitation_service.request_access(requester, str(club_b.id), Department.TECHNICAL, now=T0)
        unknown_id = "7a0c9a52-3f51-4a4f-9d0e-6cc1a2d7b0aa"

        # Administrator of another club
        with pytest.raises(MembershipNotFound):
            await invitation_service.decide(owner_a, str(request.id), Decision.APPROVE, now=T0)
        with pytest.raises(MembershipNotFound):
            await invitation_service.decide(owner_a, unknown_id, Decision.APPROVE, now=T0)

        # Caller who administers nothing
        outsider = await make_user(UserType.FAN)
        with pytest.raises(PermissionDenied):
            await invitation_service.remove_member(outsider, str(request.id))
        with pytest.raises(PermissionDenied):
            await invitation_service.remove_member(outsider, unknown_id)

        stored = await membership_service.get_by_id(request.id)
        assert stored.status is MembershipStatus.PENDING

    async def test_requester_cannot_approve_self(self, db):
        _, club = await make_club()
        requester = await make_user(UserType.COACH)
        request = await invitation_service.request_access(requester, str(club.id), Department.MANAGEMENT, now=T0)

        with pytest.raises(PermissionDenied):
            await invitation_service.decide(requester, str(request.id), Decision.APPROVE, now=T0)

    async def test_pending_lists(self, db):
        owner, club = await make_club()
        requester = await make_user(UserType.COACH)
        await invitation_service.request_access(requester, str(club.id), Department.TECHNICAL, now=T0)
        await issue(owner, club)

        pending = await invitation_service.list_pending_requests(owner, str(club.id))
        outstanding = await invitation_service.list_outstanding_invites(owner, str(club.id))
        mine = await invitation_service.list_my_memberships(requester, MembershipStatus.PENDING)

        assert [str(m.user_id) for m in pending] == [requester.id]
        assert len(outstanding) == 1 and outstanding[0].user_id is None
        assert len(mine) == 1


class TestWithdrawAndRemove:

    async def test_withdraw_unclaimed_invite(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club)

        await invitation_service.withdraw(owner, str(invite.id))

        assert await membership_service.get_by_id(invite.id) is None
        scout = await make_user(UserType.SCOUT)
        with pytest.raises(InviteNotFound):
            await invitation_service.redeem(scout, invite.invite_code, now=T0)

    async def test_withdraw_claimed_invite_is_invalid(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club)
        scout = await make_user(UserType.SCOUT)
        await invitation_service.redeem(scout, invite.invite_code, now=T0)

        with pytest.raises(InvalidTransition):
            await invitation_service.withdraw(owner, str(invite.id))

    async def test_removal_takes_effect_on_next_check(self, db):
        owner, club = await make_club()
        invite = await issue(owner, club, Department.TECHNICAL, PermissionLevel.READ)
        scout = await make_user(UserType.SCOUT)
        membership = await invitation_service.redeem(scout, invite.invite_code, now=T0)

        assert await record_service.list_technical_reports(scout, str(club.id), str(owner.user_id)) == []

        await invitation_service.remove_member(owner, str(membership.id))

        with pytest.raises(PermissionDenied):
            await record_service.list_technical_reports(scout, str(club.id), str(owner.user_id))

    async def test_member_cannot_remove_others_without_admin(self, db):
        owner, club = await make_club()
        staff = await make_user(UserType.MEDICAL_STAFF)
        await grant(staff, club.id, Department.MEDICAL, PermissionLevel.WRITE)
        owner_memberships = await membership_service.list_for_user(owner.id)

        with pytest.raises(PermissionDenied):
            await invitation_service.remove_member(staff, str(owner_memberships[0].id))

    async def test_admin_cannot_remove_own_membership(self, db):
        owner, club = await make_club()
        owner_membership = (await membership_service.list_for_user(owner.id))[0]

        with pytest.raises(InvalidTransition):
            await invitation_service.remove_member(owner, str(owner_membership.id))
