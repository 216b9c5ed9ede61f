"""
Club Service
Business logic for club creation, invite-backed registration and lookup
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4
from clubaccess.identity import Identity
from clubaccess.database import database, store_guard
from clubaccess.errors import ClubNotFound, InviteNotFound, PermissionDenied
from clubaccess.permissions import Department, PermissionLevel
from clubaccess.schemas.club import CreateClubRequest, RegisterClubRequest, ClubResponse
from clubaccess.schemas.membership import MembershipStatus
from clubaccess.schemas.profile import UserType
from clubaccess.services.membership_service import membership_service
from clubaccess.services.profile_service import profile_service

logger = logging.getLogger(__name__)


class ClubService:
    """Service for club management operations"""

    @staticmethod
    async def _insert_club(identity: Identity, data: CreateClubRequest, now: datetime) -> ClubResponse:
        club = await database.fetch_one(
            """
            INSERT INTO clubs (id, name, country, founded_year, league, stadium, logo_url, manager_id, created_at)
            VALUES (:id, :name, :country, :founded_year, :league, :stadium, :logo_url, :manager_id, :created_at)
            RETURNING *
            """,
            {
                "id": str(uuid4()),
                "name": data.name,
                "country": data.country,
                "founded_year": data.founded_year,
                "league": data.league,
                "stadium": data.stadium,
                "logo_url": data.logo_url,
                "manager_id": identity.id,
                "created_at": now,
            }
        )
        return ClubResponse.model_validate(dict(club))

    @staticmethod
    async def create_club(identity: Identity, data: CreateClubRequest, now: Optional[datetime] = None) -> ClubResponse:
        """
        Create a club owned by the caller

        The club row and the owner's accepted management/admin membership
        are written in one transaction.

        Raises:
            PermissionDenied: caller's user type is not club
        """
        now = now or datetime.now(timezone.utc)

        async with store_guard("create club"):
            profile = await profile_service.ensure_profile(identity, now=now)
            if profile.user_type is not UserType.CLUB:
                logger.warning("User %s (user_type=%s) tried to create a club", identity.id, profile.user_type)
                raise PermissionDenied("Only club accounts can create a club")

            async with database.transaction():
                club = await ClubService._insert_club(identity, data, now)
                await membership_service.create(
                    club_id=club.id,
                    user_id=identity.id,
                    department=Department.MANAGEMENT,
                    permission_level=PermissionLevel.ADMIN,
                    status=MembershipStatus.ACCEPTED,
                    invited_by=identity.id,
                    accepted_at=now,
                    now=now,
                )

        logger.info("Club %s (%s) created by %s", club.id, club.name, identity.id)
        return club

    @staticmethod
    async def register_club(identity: Identity, data: RegisterClubRequest, now: Optional[datetime] = None) -> ClubResponse:
        """
        Create a club by redeeming a club-registration invite

        Claiming the invite, creating the club, binding the claimed
        membership and switching the profile to the club user type all
        commit together, or not at all.

        Raises:
            InviteNotFound: code is not a live club-registration invite
        """
        now = now or datetime.now(timezone.utc)

        async with store_guard("register club"):
            await profile_service.ensure_profile(identity, now=now)

            async with database.transaction():
                membership = await membership_service.claim_invite(
                    data.invite_code, identity.id, now, registration=True
                )
                if membership is None:
                    raise InviteNotFound()

                club = await ClubService._insert_club(identity, data, now)
                await membership_service.attach_club(membership.id, club.id)
                await database.execute(
                    # A platform admin registering a club stays admin
                    """
                    UPDATE profiles SET user_type = :user_type, updated_at = :now
                    WHERE id = :id AND (user_type IS NULL OR user_type <> :admin)
                    """,
                    {"user_type": UserType.CLUB.value, "admin": UserType.ADMIN.value, "now": now, "id": identity.id}
                )

        logger.info("Club %s registered by %s via invite membership %s", club.id, identity.id, membership.id)
        return club

    @staticmethod
    async def get_club(club_id: str) -> ClubResponse:
        """Get club by ID"""

        async with store_guard("get club"):
            club = await database.fetch_one(
                "SELECT * FROM clubs WHERE id = :id",
                {"id": str(club_id)}
            )

        if not club:
            raise ClubNotFound()

        return ClubResponse.model_validate(dict(club))

    @staticmethod
    async def list_clubs(skip: int = 0, limit: int = 50) -> dict:
        """List clubs alphabetically with pagination"""

        async with store_guard("list clubs"):
            total = await database.fetch_val("SELECT COUNT(*) FROM clubs")
            clubs = await database.fetch_all(
                "SELECT * FROM clubs ORDER BY name LIMIT :limit OFFSET :skip",
                {"skip": skip, "limit": limit}
            )

        return {
            "total": total or 0,
            "clubs": [ClubResponse.model_validate(dict(club)) for club in clubs]
        }


# Create singleton instance
club_service = ClubService()
