"""
Profile setup and admin management of lifter accounts.

Public API:
  create_user_profile(actor, role, experience_level, name, email)
  update_user_status(actor, profile_id, status)     admin-only
  current_user(actor)
  all_lifters(actor)                                admin-only
"""
import logging

from apps.audit.log import record
from apps.audit.payloads import UserProfileCreated, UserStatusUpdated
from apps.core.api import isoformat
from apps.core.db import atomic_with_retry
from apps.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from apps.policies.store import (
    DEFAULT_WEEKLY_QUOTA_EXPERIENCED,
    DEFAULT_WEEKLY_QUOTA_INEXPERIENCED,
    policy_snapshot,
    resolve_int,
)

from .models import ExperienceLevel, ProfileStatus, Role, UserProfile
from .permissions import get_profile, require_admin, require_authenticated

logger = logging.getLogger(__name__)


def default_weekly_quota(level, snapshot=None) -> int:
    key = (DEFAULT_WEEKLY_QUOTA_EXPERIENCED if level == ExperienceLevel.EXPERIENCED
           else DEFAULT_WEEKLY_QUOTA_INEXPERIENCED)
    return resolve_int(key, snapshot)


def profile_to_dict(profile: UserProfile) -> dict:
    user = profile.user
    return {
        'id': str(profile.id),
        'user_id': user.pk,
        'username': user.get_username(),
        'name': profile.display_name,
        'email': user.email,
        'role': profile.role,
        'experience_level': profile.experience_level,
        'weekly_quota': profile.weekly_quota,
        'status': profile.status,
        'joined_at': isoformat(profile.joined_at),
    }


# ── Setup ─────────────────────────────────────────────────────────────────────

@atomic_with_retry
def create_user_profile(actor, role, experience_level=None, name='', email='') -> UserProfile:
    """
    First-time profile setup for the signed-in user. Returns the existing
    profile unchanged if setup was already completed.
    """
    require_authenticated(actor)

    existing = UserProfile.objects.filter(user=actor).first()
    if existing is not None:
        return existing

    if role not in Role.values:
        raise ValidationError(f"Unknown role '{role}'")
    if experience_level is not None and experience_level not in ExperienceLevel.values:
        raise ValidationError(f"Unknown experience level '{experience_level}'")

    weekly_quota = None
    if role == Role.ADMIN:
        if not actor.is_staff:
            raise AuthorizationError('Only staff users can become admins')
        experience_level = None
    else:
        if experience_level is None:
            raise ValidationError('Experience level not set')
        weekly_quota = default_weekly_quota(experience_level, policy_snapshot())

    name = (name or '').strip()
    if name:
        first, _, last = name.partition(' ')
        actor.first_name, actor.last_name = first[:150], last.strip()[:150]
    if email:
        actor.email = email.strip()
    if name or email:
        actor.save(update_fields=['first_name', 'last_name', 'email'])

    profile = UserProfile.objects.create(
        user=actor,
        role=role,
        experience_level=experience_level,
        weekly_quota=weekly_quota,
    )
    record(actor, UserProfileCreated(role=role, experience_level=experience_level), profile.id)
    logger.info('Profile %s created for user %s as %s', profile.id, actor.pk, role)
    return profile


# ── Admin ─────────────────────────────────────────────────────────────────────

@atomic_with_retry
def update_user_status(actor, profile_id, status) -> UserProfile:
    require_admin(actor)
    if status not in ProfileStatus.values:
        raise ValidationError(f"Unknown status '{status}'")

    profile = UserProfile.objects.select_for_update().filter(id=profile_id).first()
    if profile is None:
        raise NotFoundError('User profile not found')

    profile.status = status
    profile.save(update_fields=['status'])

    record(actor, UserStatusUpdated(status=status), profile.id)
    logger.info('Profile %s set to %s by %s', profile.id, status, actor.pk)
    return profile


# ── Reads ─────────────────────────────────────────────────────────────────────

def current_user(actor):
    profile = get_profile(actor)
    return profile_to_dict(profile) if profile else None


def all_lifters(actor) -> list:
    require_admin(actor)
    lifters = (
        UserProfile.objects
        .select_related('user')
        .filter(role=Role.LIFTER)
        .order_by('joined_at')
    )
    return [profile_to_dict(p) for p in lifters]
