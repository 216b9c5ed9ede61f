"""
Onboarding Routes
"""

from fastapi import APIRouter, Depends
from clubaccess.auth import get_current_identity
from clubaccess.identity import Identity
from clubaccess.schemas.onboarding import OnboardingStatusResponse
from clubaccess.services.onboarding_service import onboarding_service

router = APIRouter()


@router.get("", response_model=OnboardingStatusResponse)
async def get_onboarding_status(identity: Identity = Depends(get_current_identity)):
    """
    Which setup screen the caller must complete next

    One of needs_user_type, needs_club_creation, needs_club_affiliation
    or ready. Recomputed from stored data on every call.
    """
    state = await onboarding_service.status(identity)
    return {"state": state}
