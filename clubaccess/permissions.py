"""
Permission Model and Evaluator
Departments, ordered permission levels and the single permission check
consulted before any sensitive read or write
"""

from enum import Enum
from typing import Iterable, Optional


class Department(str, Enum):
    """Organizational unit that scopes a membership"""
    MEDICAL = "medical"
    FINANCIAL = "financial"
    TECHNICAL = "technical"
    SCOUTING = "scouting"
    MANAGEMENT = "management"
    ADMIN = "admin"


class PermissionLevel(str, Enum):
    """Capability held within a department, ordered read < write < admin"""
    READ = "read"
    WRITE = "write"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return LEVEL_ORDER[self]

    def covers(self, required: "PermissionLevel") -> bool:
        """True if this level satisfies the required level"""
        return self.rank >= LEVEL_ORDER[required]


LEVEL_ORDER = {
    PermissionLevel.READ: 1,
    PermissionLevel.WRITE: 2,
    PermissionLevel.ADMIN: 3,
}

# Departments whose admins may manage a club's memberships and invitations
MANAGING_DEPARTMENTS = (Department.MANAGEMENT, Department.ADMIN)

ACCEPTED = "accepted"


def _value(field) -> str:
    return field.value if isinstance(field, Enum) else field


def has_permission(
    memberships: Iterable,
    department: Department,
    min_level: PermissionLevel = PermissionLevel.READ,
    *,
    club_id: Optional[str] = None,
    user_id: Optional[str] = None,
) -> bool:
    """
    Check whether any effective membership grants access

    Args:
        memberships: Membership records (anything with department,
            permission_level, status, club_id and user_id attributes)
        department: Department being accessed; matched exactly
        min_level: Minimum permission level required
        club_id: Only count memberships in this club
        user_id: Only count memberships held by this user

    Returns:
        True if an accepted membership in the department meets min_level
    """
    department = Department(department)
    min_level = PermissionLevel(min_level)

    for membership in memberships:
        if _value(membership.status) != ACCEPTED:
            continue
        if Department(membership.department) is not department:
            continue
        if club_id is not None and str(membership.club_id) != str(club_id):
            continue
        if user_id is not None and str(membership.user_id) != str(user_id):
            continue
        if PermissionLevel(membership.permission_level).covers(min_level):
            return True

    return False


def can_manage_club(memberships: Iterable, club_id: str, user_id: Optional[str] = None) -> bool:
    """True if the memberships include admin level in a managing department of the club"""
    return any(
        has_permission(memberships, department, PermissionLevel.ADMIN, club_id=club_id, user_id=user_id)
        for department in MANAGING_DEPARTMENTS
    )
