"""
Membership Routes
Access requests, decisions, the caller's memberships and removal
"""

from fastapi import APIRouter, Depends, status, Query, Response
from uuid import UUID
from clubaccess.auth import get_current_identity
from clubaccess.identity import Identity
from clubaccess.schemas.membership import (
    Membership,
    MembershipStatus,
    AccessRequest,
    DecisionRequest,
    MembershipListResponse
)
from clubaccess.services.invitation_service import invitation_service

router = APIRouter()


@router.post("/requests", response_model=Membership, status_code=status.HTTP_201_CREATED)
async def request_access(
    request: AccessRequest,
    identity: Identity = Depends(get_current_identity)
):
    """
    Ask to join a club department

    The request starts pending at read level until a club administrator
    approves or rejects it.
    """
    return await invitation_service.request_access(identity, str(request.club_id), request.department)


@router.get("/requests", response_model=MembershipListResponse)
async def list_pending_requests(
    club_id: UUID = Query(..., description="Club ID"),
    identity: Identity = Depends(get_current_identity)
):
    """List access requests awaiting a decision (club administrators only)"""
    requests = await invitation_service.list_pending_requests(identity, str(club_id))
    return {"total": len(requests), "memberships": requests}


@router.post("/{membership_id}/decision", response_model=Membership)
async def decide_request(
    membership_id: UUID,
    request: DecisionRequest,
    identity: Identity = Depends(get_current_identity)
):
    """
    Approve or reject a pending access request

    - **decision**: approve or reject

    Deciding a request that is no longer pending returns 409.
    """
    return await invitation_service.decide(identity, str(membership_id), request.decision)


@router.get("/me", response_model=MembershipListResponse)
async def list_my_memberships(identity: Identity = Depends(get_current_identity)):
    """Accepted memberships of the caller"""
    memberships = await invitation_service.list_my_memberships(identity, MembershipStatus.ACCEPTED)
    return {"total": len(memberships), "memberships": memberships}


@router.get("/me/pending", response_model=MembershipListResponse)
async def list_my_pending(identity: Identity = Depends(get_current_identity)):
    """Caller's access requests still awaiting a decision"""
    memberships = await invitation_service.list_my_memberships(identity, MembershipStatus.PENDING)
    return {"total": len(memberships), "memberships": memberships}


@router.delete("/{membership_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_membership(
    membership_id: UUID,
    identity: Identity = Depends(get_current_identity)
):
    """Remove a member from the club (club administrators only)"""
    await invitation_service.remove_member(identity, str(membership_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
