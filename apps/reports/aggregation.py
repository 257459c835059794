"""
Read-only admin reporting over bookings, slots and quota windows.

Public API:
  dashboard_stats(actor)
  monthly_report(actor, year, month)

Percentages are whole numbers rounded half up; an empty denominator gives 0.
Month boundaries are UTC.
"""
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.utils import timezone

from apps.accounts.models import ProfileStatus, Role, UserProfile
from apps.accounts.permissions import require_admin
from apps.bookings.models import Booking, BookingStatus
from apps.core.exceptions import ValidationError
from apps.core.timeutils import month_bounds, week_start_for, week_starts_in_month
from apps.policies.store import CANCELLATION_CUTOFF_HOURS, policy_snapshot, resolve_int
from apps.quota.models import QuotaWindow
from apps.slots.models import Slot, SlotStatus

SEATED = (BookingStatus.BOOKED, BookingStatus.ATTENDED)


def _percent(part, whole) -> int:
    if not whole:
        return 0
    return int((Decimal(part) * 100 / Decimal(whole)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def _windows_by_lifter(week_starts) -> dict:
    """{(lifter_id, week_start): QuotaWindow} for the given weeks."""
    return {
        (w.lifter_id, w.week_start): w
        for w in QuotaWindow.objects.filter(week_start__in=list(week_starts))
    }


def _met_quota(lifter, window) -> bool:
    quota = window.quota if window else (lifter.weekly_quota or 0)
    used = window.used if window else 0
    return used >= quota


# ── Dashboard ─────────────────────────────────────────────────────────────────

def dashboard_stats(actor) -> dict:
    require_admin(actor)
    now = timezone.now()
    week_start = week_start_for(now)

    lifters = list(UserProfile.objects.filter(role=Role.LIFTER))
    active = [l for l in lifters if l.status == ProfileStatus.ACTIVE]

    upcoming = list(Slot.objects.filter(
        starts_at__gte=now,
        starts_at__lt=now + timedelta(days=7),
        status=SlotStatus.OPEN,
    ))
    booked_in_upcoming = Booking.objects.filter(slot__in=upcoming, status=BookingStatus.BOOKED).count()
    capacity = sum(slot.capacity_total for slot in upcoming)

    weekly_bookings = Booking.objects.filter(
        created_at__gte=week_start,
        created_at__lt=week_start + timedelta(days=7),
        status=BookingStatus.BOOKED,
    ).count()

    windows = _windows_by_lifter([week_start])
    compliant = sum(1 for l in active if _met_quota(l, windows.get((l.id, week_start))))

    return {
        'total_lifters': len(lifters),
        'active_slots': len(upcoming),
        'total_bookings': weekly_bookings,
        'compliance_rate': _percent(compliant, len(active)),
        'utilization_rate': _percent(booked_in_upcoming, capacity),
    }


# ── Monthly report ────────────────────────────────────────────────────────────

def monthly_report(actor, year: int, month: int) -> dict:
    require_admin(actor)
    if not 1 <= month <= 12:
        raise ValidationError('month must be between 1 and 12')
    if not 1 <= year <= 9998:
        raise ValidationError('year is out of range')

    now = timezone.now()
    start, end = month_bounds(year, month)
    cutoff = timedelta(hours=resolve_int(CANCELLATION_CUTOFF_HOURS, policy_snapshot()))

    bookings = list(
        Booking.objects
        .select_related('slot')
        .filter(created_at__gte=start, created_at__lt=end)
    )
    slots = list(Slot.objects.filter(starts_at__gte=start, starts_at__lt=end))

    def count(status):
        return sum(1 for b in bookings if b.status == status)

    late_cancellations = sum(
        1 for b in bookings
        if b.status == BookingStatus.CANCELED_BY_LIFTER and b.canceled_at and b.slot
        and b.canceled_at > b.slot.starts_at - cutoff
    )

    capacity = sum(slot.capacity_total for slot in slots)
    seated = sum(1 for b in bookings if b.status in SEATED)

    # Slots whose cutoff has passed, and how many of them were full by then.
    past_cutoff = [slot for slot in slots if slot.starts_at - cutoff <= now]
    filled = 0
    for slot in past_cutoff:
        slot_cutoff = slot.starts_at - cutoff
        held = sum(
            1 for b in bookings
            if b.slot_id == slot.id and b.created_at <= slot_cutoff and b.status in SEATED
        )
        if held >= slot.capacity_total:
            filled += 1

    weeks = week_starts_in_month(year, month)
    windows = _windows_by_lifter(weeks)
    active = UserProfile.objects.filter(role=Role.LIFTER, status=ProfileStatus.ACTIVE)
    compliant = 0
    total_active = 0
    for lifter in active:
        total_active += 1
        if all(_met_quota(lifter, windows.get((lifter.id, week))) for week in weeks):
            compliant += 1

    return {
        'period': f'{year}-{month:02d}',
        'total_bookings': len(bookings),
        'completed_bookings': count(BookingStatus.ATTENDED),
        'canceled_by_lifter': count(BookingStatus.CANCELED_BY_LIFTER),
        'canceled_by_admin': count(BookingStatus.CANCELED_BY_ADMIN),
        'late_cancellations': late_cancellations,
        'no_shows': count(BookingStatus.NO_SHOW),
        'utilization_rate': _percent(seated, capacity),
        'fill_rate_at_cutoff': _percent(filled, len(past_cutoff)),
        'unique_lifters': len({b.lifter_id for b in bookings}),
        'quota_compliance_rate': _percent(compliant, total_active),
        'total_slots': len(slots),
        'total_capacity': capacity,
    }
