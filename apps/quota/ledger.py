"""
Quota ledger: per-lifter, per-ISO-week booking allowance.

Public API:
  get_or_create_window(lifter, week_start)
  increment(window_id)
  decrement(window_id)              floor-clamped at zero
  refund(lifter, week_start)
  get_current_quota(actor)          lifter-only, read-only
  create_quota_window(actor)        lifter-only, audited on insert
  unbooked_lifters(actor)           admin-only

`used` is only ever changed with single-statement F() updates, so two
concurrent writers never lose an update and a refund can never push the
counter below zero.
"""
import logging

from django.db.models import F
from django.utils import timezone

from apps.accounts.models import ProfileStatus, Role, UserProfile
from apps.accounts.permissions import require_admin, require_lifter
from apps.accounts.services import profile_to_dict
from apps.audit.log import record
from apps.audit.payloads import QuotaWindowCreated
from apps.core.db import atomic_with_retry
from apps.core.timeutils import week_end_for, week_start_for

from .models import QuotaWindow

logger = logging.getLogger(__name__)


# ── Window lifecycle ──────────────────────────────────────────────────────────

def _window_for(lifter: UserProfile, week_start):
    return QuotaWindow.objects.get_or_create(
        lifter=lifter,
        week_start=week_start,
        defaults={
            'week_end': week_end_for(week_start),
            'quota': lifter.weekly_quota or 0,
            'used': 0,
        },
    )


def get_or_create_window(lifter: UserProfile, week_start) -> QuotaWindow:
    """
    Window for `lifter` in the week starting at `week_start`. A new window
    snapshots the lifter's current weekly quota; existing windows keep theirs.
    """
    window, created = _window_for(lifter, week_start)
    if created:
        logger.debug('Quota window %s opened for %s (quota %d)', window.id, lifter.id, window.quota)
    return window


# ── Counters ──────────────────────────────────────────────────────────────────

def increment(window_id) -> None:
    QuotaWindow.objects.filter(id=window_id).update(used=F('used') + 1)


def decrement(window_id) -> bool:
    """Give one booking back. Returns False if `used` was already zero."""
    return QuotaWindow.objects.filter(id=window_id, used__gt=0).update(used=F('used') - 1) > 0


def refund(lifter: UserProfile, week_start) -> bool:
    window = QuotaWindow.objects.filter(lifter=lifter, week_start=week_start).first()
    if window is None:
        return False
    return decrement(window.id)


# ── Lifter operations ─────────────────────────────────────────────────────────

def get_current_quota(actor) -> dict:
    """This week's quota for the calling lifter. Never creates a window."""
    profile = require_lifter(actor)
    week_start = week_start_for(timezone.now())
    window = QuotaWindow.objects.filter(lifter=profile, week_start=week_start).first()

    if window is None:
        quota, used = profile.weekly_quota or 0, 0
    else:
        quota, used = window.quota, window.used

    return {
        'quota': quota,
        'used': used,
        'remaining': max(0, quota - used),
        'week_start': week_start,
        'week_end': week_end_for(week_start),
    }


@atomic_with_retry
def create_quota_window(actor) -> QuotaWindow:
    profile = require_lifter(actor)
    profile = UserProfile.objects.select_for_update().get(id=profile.id)

    window, created = _window_for(profile, week_start_for(timezone.now()))
    if created:
        record(actor, QuotaWindowCreated(week_start=window.week_start, quota=window.quota), window.id)
        logger.info('Quota window %s created for %s', window.id, profile.id)
    return window


# ── Admin reads ───────────────────────────────────────────────────────────────

def unbooked_lifters(actor) -> list:
    """Active lifters who still have quota left this week."""
    require_admin(actor)
    week_start = week_start_for(timezone.now())

    windows = {
        w.lifter_id: w
        for w in QuotaWindow.objects.filter(week_start=week_start, lifter__role=Role.LIFTER)
    }
    lifters = (
        UserProfile.objects
        .select_related('user')
        .filter(role=Role.LIFTER, status=ProfileStatus.ACTIVE)
        .order_by('joined_at')
    )

    result = []
    for lifter in lifters:
        window = windows.get(lifter.id)
        quota = window.quota if window else (lifter.weekly_quota or 0)
        used = window.used if window else 0
        if used < quota:
            entry = profile_to_dict(lifter)
            entry.update({
                'quota_total': quota,
                'quota_used': used,
                'quota_remaining': quota - used,
            })
            result.append(entry)
    return result
