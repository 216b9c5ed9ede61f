"""
Invite Routes
Issue, redeem, list and withdraw invite codes
"""

from fastapi import APIRouter, Depends, status, Query, Response
from typing import Optional
from uuid import UUID
from clubaccess.auth import get_current_identity
from clubaccess.config import settings
from clubaccess.identity import Identity
from clubaccess.schemas.membership import (
    Membership,
    IssueInviteRequest,
    RedeemInviteRequest,
    MembershipListResponse
)
from clubaccess.schemas.onboarding import RedeemResponse
from clubaccess.services.invitation_service import invitation_service
from clubaccess.services.onboarding_service import onboarding_service

router = APIRouter()


@router.post("", response_model=Membership, status_code=status.HTTP_201_CREATED)
async def issue_invite(
    request: IssueInviteRequest,
    identity: Identity = Depends(get_current_identity)
):
    """
    Issue an invite code (club administrators; platform admins for club registration)

    - **club_id**: Club to join; omit for a club-registration invite
    - **department**: Department granted on redemption
    - **permission_level**: read, write or admin
    - **ttl_days**: Days until expiry. Defaults to the configured TTL when
      omitted; an explicit null never expires

    Returns: The pending invite, including its code
    """
    ttl_days = request.ttl_days
    if "ttl_days" not in request.model_fields_set:
        ttl_days = settings.INVITE_DEFAULT_TTL_DAYS

    return await invitation_service.issue(
        identity,
        str(request.club_id) if request.club_id else None,
        request.department,
        request.permission_level,
        ttl_days,
    )


@router.post("/redeem", response_model=RedeemResponse)
async def redeem_invite(
    request: RedeemInviteRequest,
    identity: Identity = Depends(get_current_identity)
):
    """
    Redeem an invite code and join the club

    Every failure (unknown, expired, used code) returns the same 404.
    """
    membership = await invitation_service.redeem(identity, request.invite_code)
    state = await onboarding_service.status(identity)
    return {"membership": membership, "onboarding_state": state}


@router.get("", response_model=MembershipListResponse)
async def list_outstanding_invites(
    club_id: Optional[UUID] = Query(None, description="Club ID; omit for club-registration invites"),
    identity: Identity = Depends(get_current_identity)
):
    """List unclaimed invite codes"""
    invites = await invitation_service.list_outstanding_invites(identity, str(club_id) if club_id else None)
    return {"total": len(invites), "memberships": invites}


@router.delete("/{invite_id}", status_code=status.HTTP_204_NO_CONTENT)
async def withdraw_invite(
    invite_id: UUID,
    identity: Identity = Depends(get_current_identity)
):
    """Withdraw an invite that has not been redeemed yet"""
    await invitation_service.withdraw(identity, str(invite_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
