"""
Domain Errors
Raised by services, rendered to HTTP responses in main.py
"""


class ClubAccessError(Exception):
    """Base class for every error surfaced to the caller"""

    status_code = 400
    default_message = "Request could not be completed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ClubAccessError):
    """Malformed input to issuance or upload"""

    status_code = 400
    default_message = "Invalid input"


class InviteNotFound(ClubAccessError):
    """Invite code absent, expired, used or in the wrong state.

    The message is deliberately identical for every sub-cause.
    """

    status_code = 404
    default_message = "Invite code is invalid or no longer available"


class InvalidTransition(ClubAccessError):
    """Membership is not in a state that allows the requested change"""

    status_code = 409
    default_message = "This request has already been processed"


class PermissionDenied(ClubAccessError):
    """Caller lacks the permission for this club or department"""

    status_code = 403
    default_message = "You do not have permission to perform this action"


class MembershipNotFound(ClubAccessError):
    """Unknown membership id"""

    status_code = 404
    default_message = "Membership not found"


class DependencyUnavailable(ClubAccessError):
    """External store or storage could not be reached"""

    status_code = 503
    default_message = "Service temporarily unavailable, please try again"


class ClubNotFound(ClubAccessError):
    status_code = 404
    default_message = "Club not found"
