"""
Authentication Module
Bearer token verification and caller identity
"""

from clubaccess.identity import Identity
from clubaccess.auth.dependencies import (
    decode_access_token,
    identity_from_payload,
    get_current_identity,
    get_current_profile,
)

__all__ = [
    "Identity",
    "decode_access_token",
    "identity_from_payload",
    "get_current_identity",
    "get_current_profile",
]
