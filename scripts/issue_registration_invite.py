"""
Script to issue a club-registration invite
Run this as a platform admin to let a new club sign up
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
from clubaccess.identity import Identity
from clubaccess.permissions import Department, PermissionLevel
from clubaccess.services.invitation_service import invitation_service


async def issue_registration_invite(admin_id: str, ttl_days: int = None):
    """
    Issue a club-registration invite code

    Args:
        admin_id: Profile ID of a platform admin (user_type = admin)
        ttl_days: Days until the code expires (None never expires)
    """

    await connect_db()

    try:
        invite = await invitation_service.issue(
            Identity(user_id=UUID(admin_id)),
            None,
            Department.MANAGEMENT,
            PermissionLevel.ADMIN,
            ttl_days,
        )

        print("✅ Club registration invite created!")
        print(f"   Code: {invite.invite_code}")
        if invite.expires_at:
            print(f"   Expires: {invite.expires_at.isoformat()}")
        else:
            print("   Expires: never")

    except ClubAccessError as e:
        print(f"❌ Could not issue invite: {e.message}")

    finally:
        await disconnect_db()


async def main():
    """Main function"""
    print("\n" + "="*60)
    print("ISSUE CLUB REGISTRATION INVITE")
    print("="*60 + "\n")

    admin_id = input("Enter platform admin profile ID: ").strip()
    try:
        UUID(admin_id)
    except ValueError:
        print("❌ Not a valid profile ID!")
        return

    ttl = input("Days until expiry (blank = never): ").strip()
    if ttl and not ttl.isdigit():
        print("❌ Expiry must be a whole number of days!")
        return

    print("\n")
    await issue_registration_invite(admin_id, int(ttl) if ttl else None)
    print("\n")


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main())
