"""
Policy store: soft configuration for the booking engine.

Public API:
  resolve(key, overrides)        pure lookup with built-in fallback
  resolve_int(key, overrides)    same, parsed as int
  policy_snapshot()              stored policies as {key: value}
  get_policy(key)
  get_all_policies(actor)        admin-only
  upsert_policy(actor, key, value)   admin-only, audited
  seed_defaults()                idempotent insert of missing keys

Operations read policy_snapshot() once and resolve keys from it. A key that
is missing or does not parse falls back to its built-in default, so a bad
policy row never hard-fails a booking path.
"""
import logging

from django.conf import settings

from apps.accounts.permissions import require_admin
from apps.audit.log import record
from apps.audit.payloads import PolicyUpdated
from apps.core.db import atomic_with_retry
from apps.core.exceptions import ValidationError

from .models import Policy

logger = logging.getLogger(__name__)

KEY_MAX_LENGTH = Policy._meta.get_field('key').max_length

CANCELLATION_CUTOFF_HOURS = 'cancellationCutoffHours'
DEFAULT_WEEKLY_QUOTA_EXPERIENCED = 'defaultWeeklyQuotaExperienced'
DEFAULT_WEEKLY_QUOTA_INEXPERIENCED = 'defaultWeeklyQuotaInexperienced'
MAX_FUTURE_BOOKINGS = 'maxFutureBookings'
WAITLIST_OFFER_TIMEOUT_MINUTES = 'waitlistOfferTimeoutMinutes'  # not read by any operation
GYM_TIMEZONE = 'gymTimezone'
DEFAULT_WORKING_HOURS = 'defaultWorkingHours'


def default_policies() -> dict:
    return {
        CANCELLATION_CUTOFF_HOURS: '24',
        DEFAULT_WEEKLY_QUOTA_EXPERIENCED: '4',
        DEFAULT_WEEKLY_QUOTA_INEXPERIENCED: '3',
        MAX_FUTURE_BOOKINGS: '10',
        WAITLIST_OFFER_TIMEOUT_MINUTES: '15',
        GYM_TIMEZONE: settings.GYM_DEFAULT_TIMEZONE,
        DEFAULT_WORKING_HOURS: '09:00 - 14:00, 17:00-22:00',
    }


# ── Resolution ────────────────────────────────────────────────────────────────

def resolve(key: str, overrides=None):
    """Stored value for `key` from `overrides`, else its built-in default."""
    value = (overrides or {}).get(key)
    if value is None or not str(value).strip():
        return default_policies().get(key)
    return str(value).strip()


def resolve_int(key: str, overrides=None) -> int:
    default = int(default_policies()[key])
    try:
        return int(str((overrides or {}).get(key)).strip())
    except (TypeError, ValueError):
        return default


def policy_snapshot() -> dict:
    return dict(Policy.objects.values_list('key', 'value'))


# ── Reads ─────────────────────────────────────────────────────────────────────

def get_policy(key: str):
    return Policy.objects.filter(key=key).first()


def get_all_policies(actor) -> list:
    require_admin(actor)
    return list(Policy.objects.order_by('key'))


# ── Writes ────────────────────────────────────────────────────────────────────

@atomic_with_retry
def upsert_policy(actor, key: str, value) -> Policy:
    require_admin(actor)

    key = (key or '').strip()
    if not key:
        raise ValidationError('Policy key is required')
    if len(key) > KEY_MAX_LENGTH:
        raise ValidationError(f'Policy key must be at most {KEY_MAX_LENGTH} characters')
    if value is None:
        raise ValidationError('Policy value is required')
    value = str(value)

    policy, created = Policy.objects.select_for_update().get_or_create(
        key=key, defaults={'value': value},
    )
    if not created:
        policy.value = value
        policy.save(update_fields=['value', 'updated_at'])

    record(actor, PolicyUpdated(key=key, value=value), key)
    logger.info('Policy %s set to %r by %s', key, value, actor.pk)
    return policy


def seed_defaults() -> int:
    """Insert every default policy that is not stored yet. Returns the number inserted."""
    inserted = 0
    for key, value in default_policies().items():
        _, created = Policy.objects.get_or_create(key=key, defaults={'value': value})
        if created:
            inserted += 1
    if inserted:
        logger.info('Seeded %d default policies', inserted)
    return inserted
