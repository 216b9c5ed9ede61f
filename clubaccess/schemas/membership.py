"""
Club Membership Request/Response Models
Memberships and unredeemed invitations share one record shape
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from enum import Enum
from clubaccess.permissions import Department, PermissionLevel
from clubaccess.schemas.timestamps import as_utc


class MembershipStatus(str, Enum):
    """Lifecycle of a membership record; accepted and rejected are terminal"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Decision(str, Enum):
    """Admin decision on a self-requested access record"""
    APPROVE = "approve"
    REJECT = "reject"

    @property
    def resulting_status(self) -> MembershipStatus:
        return {
            Decision.APPROVE: MembershipStatus.ACCEPTED,
            Decision.REJECT: MembershipStatus.REJECTED,
        }[self]


class Membership(BaseModel):
    """Row of club_members"""
    id: UUID
    club_id: Optional[UUID] = None
    user_id: Optional[UUID] = None
    department: Department
    permission_level: PermissionLevel
    status: MembershipStatus
    invite_code: Optional[str] = None
    invited_by: Optional[UUID] = None
    invited_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    used: bool = False

    class Config:
        from_attributes = True

    @field_validator("invited_at", "accepted_at", "expires_at")
    @classmethod
    def utc_timestamps(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @property
    def is_unassigned(self) -> bool:
        return self.user_id is None


class IssueInviteRequest(BaseModel):
    """Request to issue an invite code"""
    club_id: Optional[UUID] = Field(None, description="Club to join; omit for a club-registration invite")
    department: Department = Field(default=Department.TECHNICAL)
    permission_level: PermissionLevel = Field(default=PermissionLevel.READ)
    ttl_days: Optional[int] = Field(None, description="Days until the code expires; null never expires")

    class Config:
        example = {
            "club_id": "4b1c7f9e-2d61-4a3e-9a8f-0c5d2b7e1f30",
            "department": "technical",
            "permission_level": "write",
            "ttl_days": 7
        }


class RedeemInviteRequest(BaseModel):
    """Request to redeem an invite code"""
    invite_code: str = Field(..., min_length=1, max_length=64)

    @field_validator("invite_code")
    @classmethod
    def strip_code(cls, value: str) -> str:
        return value.strip()


class AccessRequest(BaseModel):
    """Self-service request to join a club department"""
    club_id: UUID
    department: Department


class DecisionRequest(BaseModel):
    """Approve or reject a pending access request"""
    decision: Decision


class MembershipListResponse(BaseModel):
    """List of memberships"""
    total: int
    memberships: List[Membership]
