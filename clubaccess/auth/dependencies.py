"""
Authentication Dependencies
Verification of bearer tokens issued by the hosted auth provider
"""

import logging
from uuid import UUID
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from clubaccess.identity import Identity
from clubaccess.config import settings
from clubaccess.schemas.profile import Profile
from clubaccess.services.profile_service import profile_service

logger = logging.getLogger(__name__)

# Security scheme
security = HTTPBearer()


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_access_token(token: str) -> dict:
    """
    Decode JWT access token

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        HTTPException: If token is invalid
    """
    try:
        options = {"verify_aud": settings.JWT_AUDIENCE is not None}
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options=options,
        )
        return payload
    except JWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise _unauthorized()


def identity_from_payload(payload: dict) -> Identity:
    """Build the caller identity from verified token claims"""

    subject = payload.get("sub")
    try:
        user_id = UUID(str(subject))
    except ValueError:
        raise _unauthorized("Invalid authentication credentials")

    metadata = payload.get("user_metadata") or {}
    return Identity(
        user_id=user_id,
        email=payload.get("email"),
        full_name=metadata.get("full_name"),
    )


async def get_current_identity(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Identity:
    """
    Get the authenticated caller from the bearer token

    Raises:
        HTTPException: If token is invalid or carries no user id
    """
    payload = decode_access_token(credentials.credentials)
    return identity_from_payload(payload)


async def get_current_profile(identity: Identity = Depends(get_current_identity)) -> Profile:
    """Caller's profile, created on the first authenticated request"""
    return await profile_service.ensure_profile(identity)
