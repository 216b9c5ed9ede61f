"""
Script to grant Platform Admin
Run this to promote an existing profile to platform admin
"""

import sys
import asyncio
from pathlib import Path
from uuid import UUID

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from clubaccess.config import configure_logging
from clubaccess.database import connect_db, disconnect_db
from clubaccess.errors import ClubAccessError
from clubaccess.services.profile_service import profile_service


async def create_platform_admin(user_id: str):
    """
    Grant platform admin to a profile

    Args:
        user_id: Profile ID (the auth provider's user id); the user must
            have signed in once so the profile exists
    """

    await connect_db()

    try:
        profile = await profile_service.grant_platform_admin(user_id)

        if profile is None:
            print(f"❌ No profile with ID {user_id}. Sign in once first!")
            return

        print("✅ Platform Admin granted successfully!")
        print(f"   ID: {profile.id}")
        print(f"   Name: {profile.full_name or '(not set)'}")

    except ClubAccessError as e:
        print(f"❌ Error granting platform admin: {e.message}")

    finally:
        await disconnect_db()


async def main():
    """Main function"""
    print("\n" + "="*60)
    print("CREATE PLATFORM ADMIN")
    print("="*60 + "\n")

    user_id = input("Enter profile ID: ").strip()
    try:
        UUID(user_id)
    except ValueError:
        print("❌ Not a valid profile ID!")
        return

    print("\n")
    await create_platform_admin(user_id)
    print("\n")


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main())
