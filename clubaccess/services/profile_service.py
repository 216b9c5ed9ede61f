"""
Profile Service
Profile creation on first authentication and user-type onboarding
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from clubaccess.identity import Identity
from clubaccess.database import database, store_guard
from clubaccess.errors import PermissionDenied
from clubaccess.schemas.profile import Profile, ProfileUpdate, UserType

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for profile operations"""

    @staticmethod
    async def get_profile(user_id: str) -> Optional[Profile]:
        row = await database.fetch_one(
            "SELECT * FROM profiles WHERE id = :id",
            {"id": str(user_id)}
        )
        return Profile.model_validate(dict(row)) if row else None

    @staticmethod
    async def ensure_profile(identity: Identity, now: Optional[datetime] = None) -> Profile:
        """Return the caller's profile, creating it on first authentication"""

        async with store_guard("ensure profile"):
            profile = await ProfileService.get_profile(identity.id)
            if profile:
                return profile

            now = now or datetime.now(timezone.utc)
            await database.execute(
                """
                INSERT INTO profiles (id, full_name, user_type, created_at, updated_at)
                VALUES (:id, :full_name, NULL, :now, :now)
                ON CONFLICT (id) DO NOTHING
                """,
                {"id": identity.id, "full_name": identity.full_name, "now": now}
            )
            logger.info("Created profile for user %s", identity.id)

            return await ProfileService.get_profile(identity.id)

    @staticmethod
    async def set_user_type(identity: Identity, user_type: UserType, now: Optional[datetime] = None) -> Profile:
        """
        Set (or later change) the caller's user type

        Platform admin is granted out of band (grant_platform_admin) and can
        neither be picked nor dropped here.

        Raises:
            PermissionDenied: admin requested, or the caller is a platform admin
        """
        user_type = UserType(user_type)
        now = now or datetime.now(timezone.utc)
        async with store_guard("set user type"):
            profile = await ProfileService.ensure_profile(identity, now=now)
            if user_type is UserType.ADMIN or profile.user_type is UserType.ADMIN:
                logger.warning("User %s refused user_type change %s -> %s", identity.id,
                               profile.user_type.value if profile.user_type else None, user_type.value)
                raise PermissionDenied("The admin user type cannot be self-assigned or changed")

            row = await database.fetch_one(
                """
                UPDATE profiles
                SET user_type = :user_type, updated_at = :now
                WHERE id = :id
                RETURNING *
                """,
                {"id": identity.id, "user_type": UserType(user_type).value, "now": now}
            )

        logger.info("User %s set user_type=%s", identity.id, UserType(user_type).value)
        return Profile.model_validate(dict(row))

    @staticmethod
    async def update_profile(identity: Identity, data: ProfileUpdate, now: Optional[datetime] = None) -> Profile:
        """Update free-text profile fields that were provided"""

        now = now or datetime.now(timezone.utc)
        update_data = data.model_dump(exclude_unset=True)

        async with store_guard("update profile"):
            profile = await ProfileService.ensure_profile(identity, now=now)
            if not update_data:
                return profile

            assignments = ", ".join(f"{field} = :{field}" for field in update_data)
            row = await database.fetch_one(
                f"UPDATE profiles SET {assignments}, updated_at = :now WHERE id = :id RETURNING *",
                {**update_data, "id": identity.id, "now": now}
            )

        return Profile.model_validate(dict(row))

    @staticmethod
    async def grant_platform_admin(user_id: str, now: Optional[datetime] = None) -> Optional[Profile]:
        """Mark an existing profile as platform admin; None if no such profile"""

        now = now or datetime.now(timezone.utc)
        async with store_guard("grant platform admin"):
            row = await database.fetch_one(
                """
                UPDATE profiles
                SET user_type = :user_type, updated_at = :now
                WHERE id = :id
                RETURNING *
                """,
                {"id": str(user_id), "user_type": UserType.ADMIN.value, "now": now}
            )

        if row is None:
            return None
        logger.info("User %s granted platform admin", user_id)
        return Profile.model_validate(dict(row))

    @staticmethod
    async def is_platform_admin(user_id: str) -> bool:
        profile = await ProfileService.get_profile(user_id)
        return bool(profile and profile.user_type is UserType.ADMIN)


# Create singleton instance
profile_service = ProfileService()
