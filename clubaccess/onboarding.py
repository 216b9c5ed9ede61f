"""
Onboarding State Resolver
Derives the setup screen a user must complete from scratch on every call
"""

from enum import Enum
from typing import Iterable, Optional
from clubaccess.permissions import Department, PermissionLevel
from clubaccess.schemas.membership import MembershipStatus
from clubaccess.schemas.profile import UserType


class OnboardingState(str, Enum):
    NEEDS_USER_TYPE = "needs_user_type"
    NEEDS_CLUB_CREATION = "needs_club_creation"
    NEEDS_CLUB_AFFILIATION = "needs_club_affiliation"
    READY = "ready"


class _Requirement(Enum):
    """What a user type must hold before reaching the dashboard"""
    NONE = "none"
    OWNED_CLUB = "owned_club"
    CLUB_AFFILIATION = "club_affiliation"


# Every UserType must appear here; checked at import time below
USER_TYPE_REQUIREMENTS = {
    UserType.CLUB: _Requirement.OWNED_CLUB,
    UserType.MEDICAL_STAFF: _Requirement.CLUB_AFFILIATION,
    UserType.FINANCIAL_STAFF: _Requirement.CLUB_AFFILIATION,
    UserType.TECHNICAL_STAFF: _Requirement.CLUB_AFFILIATION,
    UserType.SCOUT: _Requirement.CLUB_AFFILIATION,
    UserType.COACH: _Requirement.CLUB_AFFILIATION,
    UserType.PLAYER: _Requirement.NONE,
    UserType.AGENT: _Requirement.NONE,
    UserType.JOURNALIST: _Requirement.NONE,
    UserType.FAN: _Requirement.NONE,
    UserType.ADMIN: _Requirement.NONE,
}

_missing = set(UserType) - set(USER_TYPE_REQUIREMENTS)
if _missing:
    raise RuntimeError(f"No onboarding requirement for user types: {sorted(m.value for m in _missing)}")


def _owns_club(profile_id, memberships) -> bool:
    return any(
        Department(m.department) is Department.MANAGEMENT
        and PermissionLevel(m.permission_level) is PermissionLevel.ADMIN
        and m.user_id is not None
        and str(m.user_id) == str(profile_id)
        for m in memberships
    )


def _has_accepted(memberships) -> bool:
    return any(MembershipStatus(m.status) is MembershipStatus.ACCEPTED for m in memberships)


def resolve(profile, memberships: Optional[Iterable] = None) -> OnboardingState:
    """
    Resolve the onboarding state for a profile

    Args:
        profile: Profile (id and user_type are read)
        memberships: The user's membership records, any status

    Returns:
        The single onboarding state the UI must show
    """
    if profile.user_type is None:
        return OnboardingState.NEEDS_USER_TYPE

    memberships = list(memberships or [])
    requirement = USER_TYPE_REQUIREMENTS[UserType(profile.user_type)]

    if requirement is _Requirement.OWNED_CLUB and not _owns_club(profile.id, memberships):
        return OnboardingState.NEEDS_CLUB_CREATION

    if requirement is _Requirement.CLUB_AFFILIATION and not _has_accepted(memberships):
        return OnboardingState.NEEDS_CLUB_AFFILIATION

    return OnboardingState.READY
