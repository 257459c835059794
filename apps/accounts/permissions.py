"""
Actor resolution shared by every service.

The actor is the verified auth user handed over by the view layer
(request.user). These helpers turn it into a gym profile or raise the typed
authentication/authorization failures.
"""
from apps.core.exceptions import AuthenticationError, AuthorizationError

from .models import Role, UserProfile


def require_authenticated(actor):
    if actor is None or not getattr(actor, 'is_authenticated', False):
        raise AuthenticationError('Not authenticated')
    return actor


def get_profile(actor):
    """Profile of an authenticated actor, or None if setup was never completed."""
    require_authenticated(actor)
    return UserProfile.objects.select_related('user').filter(user=actor).first()


def require_admin(actor) -> UserProfile:
    profile = get_profile(actor)
    if profile is None or profile.role != Role.ADMIN:
        raise AuthorizationError('Not authorized')
    return profile


def require_lifter(actor) -> UserProfile:
    profile = get_profile(actor)
    if profile is None or profile.role != Role.LIFTER:
        raise AuthorizationError('Not authorized')
    return profile
