"""
Profile Routes
Caller's own profile and onboarding step 1
"""

from fastapi import APIRouter, Depends
from clubaccess.auth import get_current_identity, get_current_profile
from clubaccess.identity import Identity
from clubaccess.schemas.profile import Profile, ProfileUpdate, UserTypeUpdate
from clubaccess.schemas.onboarding import ProfileStatusResponse
from clubaccess.services.profile_service import profile_service
from clubaccess.services.onboarding_service import onboarding_service

router = APIRouter()


@router.get("/me", response_model=Profile)
async def get_my_profile(profile: Profile = Depends(get_current_profile)):
    """
    Get the caller's profile

    The profile is created on the first authenticated request.
    """
    return profile


@router.patch("/me", response_model=Profile)
async def update_my_profile(
    request: ProfileUpdate,
    identity: Identity = Depends(get_current_identity)
):
    """
    Update free-text profile fields

    - **full_name**, **bio**, **location**, **specialization**: only the
      fields present in the body are changed
    """
    return await profile_service.update_profile(identity, request)


@router.put("/me/user-type", response_model=ProfileStatusResponse)
async def set_my_user_type(
    request: UserTypeUpdate,
    identity: Identity = Depends(get_current_identity)
):
    """
    Choose the user type (onboarding step 1)

    Returns: Updated profile and the next onboarding state
    """
    profile = await profile_service.set_user_type(identity, request.user_type)
    state = await onboarding_service.status(identity)
    return {"profile": profile, "onboarding_state": state}
