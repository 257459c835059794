"""
Typed failures raised by the booking/quota services.
Raised in the service modules and translated to JSON responses by
apps.core.api.api_endpoint. Never retried: only transaction conflicts are.
"""


class GymBookingError(Exception):
    """Base exception for every user-facing rule violation."""
    status_code = 400
    code = 'error'


class AuthenticationError(GymBookingError):
    """No verified actor identity."""
    status_code = 401
    code = 'authentication'


class AuthorizationError(GymBookingError):
    """Actor lacks the required role or ownership, or the account is frozen."""
    status_code = 403
    code = 'authorization'


class ValidationError(GymBookingError):
    """Malformed input (start >= end, sub-capacities over total, missing level)."""
    status_code = 400
    code = 'validation'


class NotFoundError(GymBookingError):
    """Referenced slot, booking or profile does not exist."""
    status_code = 404
    code = 'not_found'


class ConflictError(GymBookingError):
    """State-dependent rule violation: capacity, quota, overlap, non-empty day."""
    status_code = 409
    code = 'conflict'


class PolicyViolation(GymBookingError):
    """Timing rule violated: past slot, early no-show, late self-cancellation."""
    status_code = 422
    code = 'policy_violation'
