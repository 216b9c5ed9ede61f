"""
Onboarding Response Models
Mutations that move a user through setup echo the recomputed state
"""

from pydantic import BaseModel
from clubaccess.onboarding import OnboardingState
from clubaccess.schemas.club import ClubResponse
from clubaccess.schemas.membership import Membership
from clubaccess.schemas.profile import Profile


class OnboardingStatusResponse(BaseModel):
    """Setup screen the client must show next"""
    state: OnboardingState


class ProfileStatusResponse(BaseModel):
    profile: Profile
    onboarding_state: OnboardingState


class RedeemResponse(BaseModel):
    membership: Membership
    onboarding_state: OnboardingState


class ClubCreatedResponse(BaseModel):
    club: ClubResponse
    onboarding_state: OnboardingState
