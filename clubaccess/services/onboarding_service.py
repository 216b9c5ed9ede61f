"""
Onboarding Service
Loads a user's profile and memberships and resolves the onboarding state
"""

from clubaccess.identity import Identity
from clubaccess.database import store_guard
from clubaccess.onboarding import OnboardingState, resolve
from clubaccess.services.membership_service import membership_service
from clubaccess.services.profile_service import profile_service


class OnboardingService:
    """Service for onboarding status"""

    @staticmethod
    async def status(identity: Identity) -> OnboardingState:
        async with store_guard("onboarding status"):
            profile = await profile_service.ensure_profile(identity)
            memberships = await membership_service.list_for_user(identity.id)
        return resolve(profile, memberships)


# Create singleton instance
onboarding_service = OnboardingService()
