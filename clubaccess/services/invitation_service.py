"""
Invitation Service
Issues, redeems and decides club membership invitations and access requests
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, List
from clubaccess.identity import Identity
from clubaccess.database import store_guard
from clubaccess.errors import (
    ValidationError,
    InviteNotFound,
    InvalidTransition,
    PermissionDenied,
    MembershipNotFound,
)
from clubaccess.permissions import Department, PermissionLevel, can_manage_club
from clubaccess.schemas.membership import Membership, MembershipStatus, Decision
from clubaccess.services.membership_service import membership_service, generate_invite_code
from clubaccess.services.profile_service import profile_service

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _mask(invite_code: str) -> str:
    """Log-safe form of an invite code"""
    return f"{invite_code[:8]}…" if invite_code else "<empty>"


class InvitationService:
    """Service for the invitation lifecycle"""

    @staticmethod
    async def _manages(identity: Identity, club_id: Optional[str]) -> bool:
        """
        True if the caller administers the club

        A club_id of None refers to club-registration invites, which only
        platform administrators manage.
        """
        if club_id is None:
            return await profile_service.is_platform_admin(identity.id)

        memberships = await membership_service.list_for_user(identity.id, MembershipStatus.ACCEPTED)
        return can_manage_club(memberships, str(club_id), user_id=identity.id)

    @staticmethod
    async def _manages_any(identity: Identity) -> bool:
        memberships = await membership_service.list_for_user(identity.id, MembershipStatus.ACCEPTED)
        if any(
            can_manage_club(memberships, str(m.club_id), user_id=identity.id)
            for m in memberships if m.club_id is not None
        ):
            return True
        return await profile_service.is_platform_admin(identity.id)

    @staticmethod
    async def _require_club_manager(identity: Identity, club_id: Optional[str]) -> None:
        if not await InvitationService._manages(identity, club_id):
            logger.warning("User %s denied: not an administrator of club %s", identity.id, club_id)
            raise PermissionDenied()

    @staticmethod
    async def _load_managed(identity: Identity, membership_id: str) -> Membership:
        """
        Fetch a membership of a club the caller administers

        An unknown id answers exactly like an id from a club the caller does
        not administer: PermissionDenied for callers who administer nothing,
        MembershipNotFound for everyone else.
        """
        membership = await membership_service.get_by_id(membership_id)
        if membership is not None and await InvitationService._manages(identity, membership.club_id):
            return membership

        if await InvitationService._manages_any(identity):
            raise MembershipNotFound()

        logger.warning("User %s denied access to membership %s", identity.id, membership_id)
        raise PermissionDenied()

    @staticmethod
    async def issue(
        identity: Identity,
        club_id: Optional[str],
        department: Department,
        permission_level: PermissionLevel,
        ttl_days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Membership:
        """
        Issue a new invite code

        Args:
            identity: Issuer
            club_id: Club to join, or None for a club-registration invite
            department: Department granted on redemption
            permission_level: Level granted on redemption
            ttl_days: Days until expiry; None never expires
            now: Issuance time (defaults to current UTC time)

        Returns:
            The unassigned pending membership carrying the invite code

        Raises:
            ValidationError: ttl_days given but not positive
            PermissionDenied: issuer does not manage the club
        """
        if ttl_days is not None and ttl_days <= 0:
            raise ValidationError("ttl_days must be a positive number of days")

        if club_id is None:
            # Registration invites always create the club owner's membership
            department = Department.MANAGEMENT
            permission_level = PermissionLevel.ADMIN

        now = now or _utcnow()
        expires_at = now + timedelta(days=ttl_days) if ttl_days is not None else None

        async with store_guard("issue invite"):
            await InvitationService._require_club_manager(identity, club_id)

            invite = await membership_service.create(
                club_id=club_id,
                user_id=None,
                department=department,
                permission_level=permission_level,
                status=MembershipStatus.PENDING,
                invited_by=identity.id,
                invite_code=generate_invite_code(),
                expires_at=expires_at,
                now=now,
            )

        logger.info(
            "Invite %s issued by %s for club=%s department=%s level=%s expires_at=%s",
            invite.id, identity.id, club_id, invite.department.value,
            invite.permission_level.value, expires_at,
        )
        return invite

    @staticmethod
    async def redeem(identity: Identity, invite_code: str, now: Optional[datetime] = None) -> Membership:
        """
        Redeem an invite code for the caller

        The validity check and the claim happen in one conditional UPDATE,
        so of several concurrent redeemers exactly one succeeds. Retrying
        after an unknown outcome is safe: a second attempt finds no
        claimable row.

        Raises:
            InviteNotFound: code unknown, expired, used, or not redeemable
        """
        now = now or _utcnow()
        invite_code = (invite_code or "").strip()
        if not invite_code:
            raise InviteNotFound()

        async with store_guard("redeem invite"):
            await profile_service.ensure_profile(identity, now=now)
            membership = await membership_service.claim_invite(invite_code, identity.id, now)

        if membership is None:
            logger.info("Redemption of %s by %s failed", _mask(invite_code), identity.id)
            raise InviteNotFound()

        logger.info("Invite %s redeemed by %s (membership %s)", _mask(invite_code), identity.id, membership.id)
        return membership

    @staticmethod
    async def request_access(
        identity: Identity,
        club_id: str,
        department: Department,
        now: Optional[datetime] = None,
    ) -> Membership:
        """Record a self-service request to join a club department at read level"""

        now = now or _utcnow()
        async with store_guard("request access"):
            await profile_service.ensure_profile(identity, now=now)
            membership = await membership_service.create(
                club_id=club_id,
                user_id=identity.id,
                department=department,
                permission_level=PermissionLevel.READ,
                status=MembershipStatus.PENDING,
                invited_by=identity.id,
                # Audit only; requester-owned rows are never redeemable by code
                invite_code=generate_invite_code(),
                now=now,
            )

        logger.info("User %s requested %s access to club %s", identity.id, Department(department).value, club_id)
        return membership

    @staticmethod
    async def decide(
        identity: Identity,
        membership_id: str,
        decision: Decision,
        now: Optional[datetime] = None,
    ) -> Membership:
        """
        Approve or reject a pending access request

        Raises:
            MembershipNotFound: unknown id, or a club the caller does not manage
            PermissionDenied: caller manages no club at all
            InvalidTransition: the request is no longer pending
        """
        now = now or _utcnow()
        decision = Decision(decision)

        async with store_guard("decide access request"):
            membership = await InvitationService._load_managed(identity, membership_id)

            if membership.is_unassigned:
                # Unclaimed invites are redeemed by code, not approved
                logger.warning("Decision on unassigned invite %s refused", membership_id)
                raise InvalidTransition()

            decided = await membership_service.decide(membership_id, decision.resulting_status, now)

        if decided is None:
            logger.warning(
                "Invalid transition: %s on membership %s in status %s",
                decision.value, membership_id, membership.status.value,
            )
            raise InvalidTransition()

        logger.info("Membership %s %sd by %s", membership_id, decision.value, identity.id)
        return decided

    @staticmethod
    async def withdraw(identity: Identity, membership_id: str) -> None:
        """Delete an unclaimed invite"""

        async with store_guard("withdraw invite"):
            await InvitationService._load_managed(identity, membership_id)

            if not await membership_service.delete_unassigned(membership_id):
                logger.warning("Withdraw of claimed or decided membership %s refused", membership_id)
                raise InvalidTransition()

        logger.info("Invite %s withdrawn by %s", membership_id, identity.id)

    @staticmethod
    async def remove_member(identity: Identity, membership_id: str) -> None:
        """Revoke a membership; the next permission check no longer sees it"""

        async with store_guard("remove membership"):
            membership = await InvitationService._load_managed(identity, membership_id)
            if membership.club_id is None:
                # Registration invites are withdrawn, not removed
                raise MembershipNotFound()

            if membership.user_id is not None and str(membership.user_id) == identity.id:
                raise InvalidTransition("You cannot remove your own membership")

            if not await membership_service.delete(membership_id):
                raise MembershipNotFound()

        logger.info("Membership %s removed from club %s by %s", membership_id, membership.club_id, identity.id)

    @staticmethod
    async def list_outstanding_invites(identity: Identity, club_id: Optional[str]) -> List[Membership]:
        """Unclaimed pending invites of a club (or registration invites for None)"""

        async with store_guard("list invites"):
            await InvitationService._require_club_manager(identity, club_id)
            return await membership_service.list_for_club(club_id, MembershipStatus.PENDING, unassigned=True)

    @staticmethod
    async def list_pending_requests(identity: Identity, club_id: str) -> List[Membership]:
        """Access requests awaiting a decision"""

        async with store_guard("list access requests"):
            await InvitationService._require_club_manager(identity, club_id)
            return await membership_service.list_for_club(club_id, MembershipStatus.PENDING, unassigned=False)

    @staticmethod
    async def list_my_memberships(identity: Identity, status: Optional[MembershipStatus] = None) -> List[Membership]:
        async with store_guard("list memberships"):
            return await membership_service.list_for_user(identity.id, status)


# Create singleton instance
invitation_service = InvitationService()
