"""
Booking engine: pure business logic, no HTTP/request awareness.

Public API:
  book_slot(actor, slot_id)
  cancel_booking(actor, booking_id, reason='')
  mark_no_show(actor, booking_id)
  mark_attended(actor, booking_id)
  lifter_bookings(actor, limit=None)

Each mutation validates and writes inside one transaction. book_slot locks
the lifter's profile, then the slot, then the quota window (always in that
order) so concurrent requests for the last seat serialize and exactly one
wins. Checks run in a fixed order and the first failure is raised before
anything is written.
"""
import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from apps.accounts.models import ProfileStatus, Role, UserProfile
from apps.accounts.permissions import get_profile, require_admin, require_lifter
from apps.audit.log import record
from apps.audit.payloads import BookingAttended, BookingCanceled, BookingCreated, BookingNoShow
from apps.core.db import atomic_with_retry
from apps.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PolicyViolation,
    ValidationError,
)
from apps.core.timeutils import week_start_for
from apps.policies.store import CANCELLATION_CUTOFF_HOURS, MAX_FUTURE_BOOKINGS, policy_snapshot, resolve_int
from apps.quota.ledger import get_or_create_window, increment, refund
from apps.quota.models import QuotaWindow
from apps.slots.models import Slot

from .models import Booking, BookingStatus

logger = logging.getLogger(__name__)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _locked_booking(booking_id) -> Booking:
    booking = (
        Booking.objects
        .select_for_update()
        .filter(id=booking_id)
        .first()
    )
    if booking is None:
        raise NotFoundError('Booking not found')
    return booking


def _slot_of(booking) -> Slot:
    slot = Slot.objects.filter(id=booking.slot_id).first() if booking.slot_id else None
    if slot is None:
        raise NotFoundError('Slot not found')
    return slot


# ── Book ──────────────────────────────────────────────────────────────────────

@atomic_with_retry
def book_slot(actor, slot_id) -> Booking:
    now = timezone.now()

    # 1. Actor: active lifter with an experience level
    profile = get_profile(actor)
    if profile is None or profile.role != Role.LIFTER or profile.status != ProfileStatus.ACTIVE:
        raise AuthorizationError('Not authorized or account frozen')
    profile = UserProfile.objects.select_for_update().get(id=profile.id)
    if profile.status != ProfileStatus.ACTIVE:
        raise AuthorizationError('Not authorized or account frozen')
    if not profile.experience_level:
        raise ValidationError('Experience level not set')
    level = profile.experience_level

    # 2. Slot exists and is open
    slot = Slot.objects.select_for_update().filter(id=slot_id).first()
    if slot is None:
        raise NotFoundError('Slot not found')
    if not slot.is_open:
        raise ConflictError('Slot not available')

    # 3. Not in the past
    if slot.starts_at <= now:
        raise PolicyViolation('Cannot book past slots')

    live = Booking.objects.filter(lifter=profile, status=BookingStatus.BOOKED)

    # 4. No overlapping live booking
    if live.filter(slot__starts_at__lt=slot.ends_at, slot__ends_at__gt=slot.starts_at).exists():
        raise ConflictError('You have an overlapping booking')

    # 5. Weekly quota
    window = get_or_create_window(profile, week_start_for(now))
    window = QuotaWindow.objects.select_for_update().get(id=window.id)
    if window.used >= window.quota:
        raise ConflictError('Weekly quota exceeded')

    # 6. Seat in the lifter's level pool
    taken = Booking.objects.filter(slot=slot, status=BookingStatus.BOOKED, level=level).count()
    if taken >= slot.capacity_for(level):
        raise ConflictError(f'No {level} slots available')

    # 7. Future booking cap
    snapshot = policy_snapshot()
    if live.filter(slot__starts_at__gt=now).count() >= resolve_int(MAX_FUTURE_BOOKINGS, snapshot):
        raise ConflictError('Maximum future bookings exceeded')

    booking = Booking.objects.create(
        lifter=profile,
        slot=slot,
        level=level,
        status=BookingStatus.BOOKED,
    )
    increment(window.id)

    record(actor, BookingCreated(slot_id=str(slot.id), level=level), booking.id)
    logger.info('Booking %s created: lifter %s, slot %s (%s)', booking.id_short, profile.id, slot.id, level)
    return booking


# ── Cancel ────────────────────────────────────────────────────────────────────

@atomic_with_retry
def cancel_booking(actor, booking_id, reason='') -> Booking:
    """
    Cancel a live booking as its lifter or as an admin.

    A lifter may cancel only up to the cutoff before the slot starts and is
    refunded. Admins may cancel at any time and the lifter is always refunded.
    The refund goes to the window of the week the booking was made in.
    """
    now = timezone.now()
    profile = get_profile(actor)
    booking = _locked_booking(booking_id)

    if profile is None:
        raise AuthorizationError('User profile not found')
    is_owner = booking.lifter_id == profile.id
    if not is_owner and profile.role != Role.ADMIN:
        raise AuthorizationError('Not authorized')
    if not booking.is_booked:
        raise ConflictError('Booking cannot be canceled')

    slot = _slot_of(booking)
    cutoff_hours = resolve_int(CANCELLATION_CUTOFF_HOURS, policy_snapshot())
    within_cutoff = now <= slot.starts_at - timedelta(hours=cutoff_hours)

    if is_owner and not within_cutoff:
        raise PolicyViolation(f'Cannot cancel within {cutoff_hours} hours of slot start')

    booking.cancel(by_admin=not is_owner, reason=(reason or '').strip())

    refunded = False
    if within_cutoff or not is_owner:
        refunded = refund(booking.lifter, week_start_for(booking.created_at))

    record(actor, BookingCanceled(
        canceled_by='lifter' if is_owner else 'admin',
        within_cutoff=within_cutoff,
        refunded=refunded,
    ), booking.id)
    logger.info(
        'Booking %s canceled by %s (within cutoff: %s, refunded: %s)',
        booking.id_short, 'lifter' if is_owner else 'admin', within_cutoff, refunded,
    )
    return booking


# ── Attendance ────────────────────────────────────────────────────────────────

@atomic_with_retry
def mark_no_show(actor, booking_id) -> Booking:
    require_admin(actor)
    booking = _locked_booking(booking_id)
    if not booking.is_booked:
        raise ConflictError('Can only mark booked sessions as no-show')

    slot = _slot_of(booking)
    if timezone.now() < slot.ends_at:
        raise PolicyViolation('Cannot mark no-show before slot ends')

    booking.mark_no_show()
    record(actor, BookingNoShow(), booking.id)
    logger.info('Booking %s marked no-show', booking.id_short)
    return booking


@atomic_with_retry
def mark_attended(actor, booking_id) -> Booking:
    require_admin(actor)
    booking = _locked_booking(booking_id)
    if not booking.is_booked:
        raise ConflictError('Can only mark booked sessions as attended')

    slot = _slot_of(booking)
    if timezone.now() < slot.starts_at:
        raise PolicyViolation('Cannot mark attendance before slot starts')

    booking.mark_attended()
    record(actor, BookingAttended(), booking.id)
    logger.info('Booking %s marked attended', booking.id_short)
    return booking


# ── History ───────────────────────────────────────────────────────────────────

def lifter_bookings(actor, limit=None) -> list:
    """The calling lifter's most recent bookings, newest first, with their slots."""
    profile = require_lifter(actor)
    limit = limit or settings.LIFTER_BOOKINGS_LIMIT
    return list(
        Booking.objects
        .select_related('slot')
        .filter(lifter=profile)
        .order_by('-created_at')[:limit]
    )
