"""
Membership Ledger
Reads and conditional writes against club_members
"""

import uuid
from datetime import datetime
from typing import Optional, List
from clubaccess.database import database
from clubaccess.permissions import Department, PermissionLevel
from clubaccess.schemas.membership import Membership, MembershipStatus


# Validity predicate shared by both claim statements. Evaluated inside the
# UPDATE so that only one concurrent claimer can match the row.
_CLAIMABLE = """
    invite_code = :invite_code
    AND status = 'pending'
    AND used = FALSE
    AND user_id IS NULL
    AND (expires_at IS NULL OR expires_at >= :now)
"""

_CLAIM_MEMBER_INVITE = f"""
    UPDATE club_members
    SET user_id = :user_id, status = 'accepted', accepted_at = :now, used = TRUE
    WHERE {_CLAIMABLE}
      AND club_id IS NOT NULL
    RETURNING *
"""

_CLAIM_REGISTRATION_INVITE = f"""
    UPDATE club_members
    SET user_id = :user_id, status = 'accepted', accepted_at = :now, used = TRUE
    WHERE {_CLAIMABLE}
      AND club_id IS NULL
      AND department = 'management'
      AND permission_level = 'admin'
    RETURNING *
"""


def generate_invite_code() -> str:
    """Random, non-sequential invite code in canonical UUID form"""
    return str(uuid.uuid4())


def _to_membership(row) -> Optional[Membership]:
    return Membership.model_validate(dict(row)) if row else None


class MembershipService:
    """Service for membership ledger operations"""

    @staticmethod
    async def create(
        *,
        club_id: Optional[str],
        user_id: Optional[str],
        department: Department,
        permission_level: PermissionLevel,
        status: MembershipStatus,
        invited_by: Optional[str],
        now: datetime,
        invite_code: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        accepted_at: Optional[datetime] = None,
    ) -> Membership:
        """Insert one membership row and return it"""

        row = await database.fetch_one(
            """
            INSERT INTO club_members
            (id, club_id, user_id, department, permission_level, status,
             invite_code, invited_by, invited_at, accepted_at, expires_at, used)
            VALUES (:id, :club_id, :user_id, :department, :permission_level, :status,
                    :invite_code, :invited_by, :invited_at, :accepted_at, :expires_at, FALSE)
            RETURNING *
            """,
            {
                "id": str(uuid.uuid4()),
                "club_id": str(club_id) if club_id else None,
                "user_id": str(user_id) if user_id else None,
                "department": Department(department).value,
                "permission_level": PermissionLevel(permission_level).value,
                "status": MembershipStatus(status).value,
                "invite_code": invite_code,
                "invited_by": str(invited_by) if invited_by else None,
                "invited_at": now,
                "accepted_at": accepted_at,
                "expires_at": expires_at,
            }
        )

        return _to_membership(row)

    @staticmethod
    async def get_by_id(membership_id: str) -> Optional[Membership]:
        row = await database.fetch_one(
            "SELECT * FROM club_members WHERE id = :id",
            {"id": str(membership_id)}
        )
        return _to_membership(row)

    @staticmethod
    async def list_for_user(user_id: str, status: Optional[MembershipStatus] = None) -> List[Membership]:
        """All memberships held by a user, optionally filtered by status"""

        query = "SELECT * FROM club_members WHERE user_id = :user_id"
        params = {"user_id": str(user_id)}
        if status is not None:
            query += " AND status = :status"
            params["status"] = MembershipStatus(status).value
        query += " ORDER BY invited_at DESC"

        rows = await database.fetch_all(query, params)
        return [_to_membership(row) for row in rows]

    @staticmethod
    async def list_for_club(
        club_id: Optional[str],
        status: Optional[MembershipStatus] = None,
        unassigned: Optional[bool] = None,
    ) -> List[Membership]:
        """
        Memberships of a club

        Args:
            club_id: Club ID, or None for club-registration invites
            status: Only rows in this status
            unassigned: True for unclaimed invites, False for claimed rows
        """

        params = {}
        if club_id is None:
            where_clause = "club_id IS NULL"
        else:
            where_clause = "club_id = :club_id"
            params["club_id"] = str(club_id)

        if status is not None:
            where_clause += " AND status = :status"
            params["status"] = MembershipStatus(status).value

        if unassigned is True:
            where_clause += " AND user_id IS NULL"
        elif unassigned is False:
            where_clause += " AND user_id IS NOT NULL"

        rows = await database.fetch_all(
            f"SELECT * FROM club_members WHERE {where_clause} ORDER BY invited_at DESC",
            params
        )
        return [_to_membership(row) for row in rows]

    @staticmethod
    async def claim_invite(
        invite_code: str,
        user_id: str,
        now: datetime,
        registration: bool = False,
    ) -> Optional[Membership]:
        """
        Atomically claim an unassigned invite

        Returns the claimed row, or None when no row satisfied the
        validity predicate at the moment of the write.
        """

        row = await database.fetch_one(
            _CLAIM_REGISTRATION_INVITE if registration else _CLAIM_MEMBER_INVITE,
            {"invite_code": invite_code, "user_id": str(user_id), "now": now}
        )
        return _to_membership(row)

    @staticmethod
    async def attach_club(membership_id: str, club_id: str) -> Membership:
        """Bind a claimed club-registration membership to its new club"""

        row = await database.fetch_one(
            """
            UPDATE club_members
            SET club_id = :club_id
            WHERE id = :id AND club_id IS NULL
            RETURNING *
            """,
            {"id": str(membership_id), "club_id": str(club_id)}
        )
        return _to_membership(row)

    @staticmethod
    async def decide(membership_id: str, status: MembershipStatus, now: datetime) -> Optional[Membership]:
        """
        Move a pending requester-owned row to accepted or rejected

        Returns None when the row was not pending at the moment of the write.
        """

        accepted = MembershipStatus(status) is MembershipStatus.ACCEPTED
        row = await database.fetch_one(
            """
            UPDATE club_members
            SET status = :status, used = TRUE, accepted_at = :accepted_at
            WHERE id = :id
              AND status = 'pending'
              AND user_id IS NOT NULL
            RETURNING *
            """,
            {
                "id": str(membership_id),
                "status": MembershipStatus(status).value,
                "accepted_at": now if accepted else None,
            }
        )
        return _to_membership(row)

    @staticmethod
    async def delete_unassigned(membership_id: str) -> bool:
        """Delete an unclaimed invite; False if it was claimed meanwhile"""

        row = await database.fetch_one(
            """
            DELETE FROM club_members
            WHERE id = :id AND user_id IS NULL AND status = 'pending'
            RETURNING id
            """,
            {"id": str(membership_id)}
        )
        return row is not None

    @staticmethod
    async def delete(membership_id: str) -> bool:
        row = await database.fetch_one(
            "DELETE FROM club_members WHERE id = :id RETURNING id",
            {"id": str(membership_id)}
        )
        return row is not None


# Create singleton instance
membership_service = MembershipService()
