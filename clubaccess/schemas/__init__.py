"""
Pydantic schemas for request/response validation
"""

from clubaccess.schemas.club import (
    CreateClubRequest,
    RegisterClubRequest,
    ClubResponse,
    ClubListResponse,
    LogoUploadResponse
)
from clubaccess.schemas.membership import (
    Membership,
    MembershipStatus,
    Decision,
    IssueInviteRequest,
    RedeemInviteRequest,
    AccessRequest,
    DecisionRequest,
    MembershipListResponse
)
from clubaccess.schemas.profile import UserType, Profile, UserTypeUpdate, ProfileUpdate

__all__ = [
    "CreateClubRequest",
    "RegisterClubRequest",
    "ClubResponse",
    "ClubListResponse",
    "LogoUploadResponse",
    "Membership",
    "MembershipStatus",
    "Decision",
    "IssueInviteRequest",
    "RedeemInviteRequest",
    "AccessRequest",
    "DecisionRequest",
    "MembershipListResponse",
    "UserType",
    "Profile",
    "UserTypeUpdate",
    "ProfileUpdate",
]
