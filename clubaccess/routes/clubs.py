"""
Club Routes
Club creation, invite-backed registration, lookup and logo upload
"""

from fastapi import APIRouter, Depends, status, Query, UploadFile, File
from uuid import UUID
from clubaccess.auth import get_current_identity
from clubaccess.identity import Identity
from clubaccess.schemas.club import (
    CreateClubRequest,
    RegisterClubRequest,
    ClubResponse,
    ClubListResponse,
    LogoUploadResponse
)
from clubaccess.schemas.onboarding import ClubCreatedResponse
from clubaccess.services.club_service import club_service
from clubaccess.services.onboarding_service import onboarding_service
from clubaccess.services.storage_service import storage_service

router = APIRouter()


@router.get("", response_model=ClubListResponse)
async def list_clubs(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(50, ge=1, le=100, description="Number of records to return"),
    identity: Identity = Depends(get_current_identity)
):
    """
    List clubs, used by the request-access club picker
    """
    return await club_service.list_clubs(skip=skip, limit=limit)


@router.post("", response_model=ClubCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_club(
    request: CreateClubRequest,
    identity: Identity = Depends(get_current_identity)
):
    """
    Create a club owned by the caller (club accounts only)

    - **name**, **country**, **founded_year**: required
    - **league**, **stadium**, **logo_url**: optional

    Returns: Created club and the caller's next onboarding state
    """
    club = await club_service.create_club(identity, request)
    state = await onboarding_service.status(identity)
    return {"club": club, "onboarding_state": state}


@router.post("/register", response_model=ClubCreatedResponse, status_code=status.HTTP_201_CREATED)
async def register_club(
    request: RegisterClubRequest,
    identity: Identity = Depends(get_current_identity)
):
    """
    Register a club with a platform-issued invite code

    The code is single use. Unknown, expired or already used codes all
    get the same 404.
    """
    club = await club_service.register_club(identity, request)
    state = await onboarding_service.status(identity)
    return {"club": club, "onboarding_state": state}


@router.post("/logo", response_model=LogoUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_club_logo(
    file: UploadFile = File(...),
    identity: Identity = Depends(get_current_identity)
):
    """
    Upload a club logo (JPEG, PNG, GIF, SVG or WEBP)

    Returns: Public URL to pass as logo_url when creating the club
    """
    content = await file.read()
    logo_url = await storage_service.upload_club_logo(identity, file.filename, content, file.content_type)
    return {"logo_url": logo_url}


@router.get("/{club_id}", response_model=ClubResponse)
async def get_club(
    club_id: UUID,
    identity: Identity = Depends(get_current_identity)
):
    """Get club details"""
    return await club_service.get_club(str(club_id))
