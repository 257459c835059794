"""
Slot manager: admin-side slot lifecycle and slot availability reads.

Public API:
  create_slot(actor, starts_at, ends_at, capacity_total, capacity_exp, capacity_inexp)
  update_slot(actor, slot_id, capacity_total=, capacity_exp=, capacity_inexp=, status=)
  delete_slot(actor, slot_id)
  fill_day_with_default_working_hours(actor, day_start)
  list_slots(starts_from, starts_before)

Every mutation is admin-only, runs in one transaction and writes one audit
record. Capacity is validated against the bookings currently holding seats.
"""
import logging
from datetime import datetime, timedelta, time as time_type

from django.conf import settings
from django.db.models import Count

from apps.accounts.models import ExperienceLevel
from apps.accounts.permissions import require_admin
from apps.audit.log import record
from apps.audit.payloads import SlotCreated, SlotDeleted, SlotsAutofilledDay, SlotUpdated
from apps.bookings.models import Booking, BookingStatus
from apps.core.db import atomic_with_retry
from apps.core.exceptions import ConflictError, NotFoundError, ValidationError
from apps.core.timeutils import (
    local_date_of,
    local_wall_clock_to_instant,
    parse_working_hours,
    week_start_for,
)
from apps.policies.models import Policy
from apps.policies.store import DEFAULT_WORKING_HOURS, GYM_TIMEZONE, default_policies, policy_snapshot, resolve
from apps.quota.ledger import refund

from .models import Slot, SlotStatus

logger = logging.getLogger(__name__)

SLOT_DELETED_REASON = 'Slot deleted by admin'


# ── Helpers ───────────────────────────────────────────────────────────────────

def _locked_slot(slot_id) -> Slot:
    slot = Slot.objects.select_for_update().filter(id=slot_id).first()
    if slot is None:
        raise NotFoundError('Slot not found')
    return slot


def _booked_counts(slot) -> dict:
    """{level: booked seat count} for a slot."""
    counts = dict(
        Booking.objects
        .filter(slot=slot, status=BookingStatus.BOOKED)
        .order_by()
        .values('level')
        .annotate(n=Count('id'))
        .values_list('level', 'n')
    )
    return {level: counts.get(level, 0) for level in ExperienceLevel.values}


def _check_capacities(total, exp, inexp):
    for name, value in (('capacity_total', total), ('capacity_exp', exp), ('capacity_inexp', inexp)):
        if value is None or value < 0:
            raise ValidationError(f'{name} must be a non-negative integer')


# ── Create ────────────────────────────────────────────────────────────────────

@atomic_with_retry
def create_slot(actor, starts_at, ends_at, capacity_total, capacity_exp, capacity_inexp) -> Slot:
    require_admin(actor)

    _check_capacities(capacity_total, capacity_exp, capacity_inexp)
    if capacity_exp + capacity_inexp > capacity_total:
        raise ValidationError('Sub-capacities cannot exceed total capacity')
    if starts_at >= ends_at:
        raise ValidationError('Start time must be before end time')

    tz = resolve(GYM_TIMEZONE, policy_snapshot())
    slot = Slot.objects.create(
        starts_at=starts_at,
        ends_at=ends_at,
        tz=tz,
        capacity_total=capacity_total,
        capacity_exp=capacity_exp,
        capacity_inexp=capacity_inexp,
        status=SlotStatus.OPEN,
        created_by=actor,
    )
    record(actor, SlotCreated(
        starts_at=starts_at,
        ends_at=ends_at,
        capacity_total=capacity_total,
        capacity_exp=capacity_exp,
        capacity_inexp=capacity_inexp,
        tz=tz,
    ), slot.id)
    logger.info('Slot %s created by %s (%s to %s)', slot.id, actor.pk, starts_at, ends_at)
    return slot


# ── Update ────────────────────────────────────────────────────────────────────

@atomic_with_retry
def update_slot(actor, slot_id, *, capacity_total=None, capacity_exp=None,
                capacity_inexp=None, status=None) -> Slot:
    require_admin(actor)
    if status is not None and status not in SlotStatus.values:
        raise ValidationError(f"Unknown slot status '{status}'")

    slot = _locked_slot(slot_id)
    changes = {}

    if capacity_total is not None or capacity_exp is not None or capacity_inexp is not None:
        new_total = slot.capacity_total if capacity_total is None else capacity_total
        new_exp = slot.capacity_exp if capacity_exp is None else capacity_exp
        new_inexp = slot.capacity_inexp if capacity_inexp is None else capacity_inexp
        _check_capacities(new_total, new_exp, new_inexp)

        if new_exp + new_inexp > new_total:
            raise ConflictError('Sub-capacities cannot exceed total capacity')

        booked = _booked_counts(slot)
        booked_exp = booked[ExperienceLevel.EXPERIENCED]
        booked_inexp = booked[ExperienceLevel.INEXPERIENCED]
        if booked_exp > new_exp or booked_inexp > new_inexp:
            raise ConflictError(
                f'Cannot reduce capacity below current bookings '
                f'({booked_exp} exp, {booked_inexp} inexp)'
            )

        for field, value in (('capacity_total', capacity_total),
                             ('capacity_exp', capacity_exp),
                             ('capacity_inexp', capacity_inexp)):
            if value is not None:
                setattr(slot, field, value)
                changes[field] = value

    if status is not None:
        slot.status = status
        changes['status'] = status

    slot.save(update_fields=list(changes) + ['updated_at'])
    record(actor, SlotUpdated(changes=changes), slot.id)
    logger.info('Slot %s updated by %s: %s', slot.id, actor.pk, changes)
    return slot


# ── Delete ────────────────────────────────────────────────────────────────────

@atomic_with_retry
def delete_slot(actor, slot_id) -> list:
    """
    Cancel every live booking on the slot as the admin, refund each lifter on
    the slot's own week, then hard-delete the slot. Returns the canceled ids.
    """
    require_admin(actor)
    slot = _locked_slot(slot_id)
    week_start = week_start_for(slot.starts_at)

    bookings = list(
        Booking.objects
        .select_for_update()
        .select_related('lifter')
        .filter(slot=slot, status=BookingStatus.BOOKED)
        .order_by('created_at')
    )
    for booking in bookings:
        booking.cancel(by_admin=True, reason=SLOT_DELETED_REASON)
        refund(booking.lifter, week_start)

    canceled_ids = [str(b.id) for b in bookings]
    entity_id = slot.id
    slot.delete()

    record(actor, SlotDeleted(canceled_booking_ids=tuple(canceled_ids)), entity_id)
    logger.info('Slot %s deleted by %s, %d bookings canceled', entity_id, actor.pk, len(canceled_ids))
    return canceled_ids


# ── Autofill ──────────────────────────────────────────────────────────────────

def _slot_starts_for_day(day_start, zone_name, ranges_raw) -> list:
    """
    (starts_at, ends_at) pairs covering the working-hour ranges on the gym-local
    date of `day_start`. Ranges ending at or before their start run to local
    midnight. Duplicate starts keep their first occurrence.
    """
    length = timedelta(minutes=settings.AUTOFILL_SLOT_MINUTES)
    local_day = local_date_of(day_start, zone_name)
    next_midnight = local_wall_clock_to_instant(local_day + timedelta(days=1), time_type(0, 0), zone_name)

    seen = {}
    for start_wall, end_wall in parse_working_hours(ranges_raw):
        start = local_wall_clock_to_instant(local_day, start_wall, zone_name)
        end = local_wall_clock_to_instant(local_day, end_wall, zone_name)
        if end <= start:
            end = next_midnight
        while start + length <= end:
            seen.setdefault(start, start + length)
            start += length
    return sorted(seen.items())


@atomic_with_retry
def fill_day_with_default_working_hours(actor, day_start: datetime) -> dict:
    require_admin(actor)
    day_end = day_start + timedelta(hours=24)

    # Concurrent autofills queue on the working-hours policy row, so the
    # empty-day check below sees any slots a previous fill committed.
    Policy.objects.select_for_update().get_or_create(
        key=DEFAULT_WORKING_HOURS, defaults={'value': default_policies()[DEFAULT_WORKING_HOURS]},
    )

    if Slot.objects.filter(starts_at__gte=day_start, starts_at__lt=day_end).exists():
        raise ConflictError('Day already has slots; only empty days can be auto-filled')

    snapshot = policy_snapshot()
    zone_name = resolve(GYM_TIMEZONE, snapshot)
    ranges_raw = resolve(DEFAULT_WORKING_HOURS, snapshot)

    slots = [
        Slot(
            starts_at=starts_at,
            ends_at=ends_at,
            tz=zone_name,
            capacity_total=settings.AUTOFILL_CAPACITY_TOTAL,
            capacity_exp=settings.AUTOFILL_CAPACITY_EXP,
            capacity_inexp=settings.AUTOFILL_CAPACITY_INEXP,
            status=SlotStatus.OPEN,
            created_by=actor,
        )
        for starts_at, ends_at in _slot_starts_for_day(day_start, zone_name, ranges_raw)
    ]
    Slot.objects.bulk_create(slots)

    created = len(slots)
    record(
        actor,
        SlotsAutofilledDay(day_start_utc=day_start, created=created, ranges_raw=ranges_raw),
        f'day_{day_start.isoformat()}',
    )
    logger.info('Autofilled %d slots for day starting %s (%s)', created, day_start, zone_name)
    return {'created': created}


# ── Availability ──────────────────────────────────────────────────────────────

def _booking_entry(booking) -> dict:
    return {
        'booking_id': str(booking.id),
        'lifter_id': str(booking.lifter_id),
        'level': booking.level,
        'name': booking.lifter.display_name,
    }


def list_slots(starts_from, starts_before) -> list:
    """Slots starting in [starts_from, starts_before) with per-level availability."""
    slots = list(
        Slot.objects
        .filter(starts_at__gte=starts_from, starts_at__lt=starts_before)
        .order_by('starts_at')
    )
    live = (
        Booking.objects
        .select_related('lifter__user')
        .filter(slot__in=slots, status=BookingStatus.BOOKED)
        .order_by('created_at')
    )
    by_slot = {}
    for booking in live:
        by_slot.setdefault(booking.slot_id, []).append(booking)

    result = []
    for slot in slots:
        bookings = by_slot.get(slot.id, [])
        exp = [_booking_entry(b) for b in bookings if b.level == ExperienceLevel.EXPERIENCED]
        inexp = [_booking_entry(b) for b in bookings if b.level == ExperienceLevel.INEXPERIENCED]
        booked = len(exp) + len(inexp)
        result.append({
            'slot': slot,
            'booked_exp': len(exp),
            'booked_inexp': len(inexp),
            'available_exp': slot.capacity_exp - len(exp),
            'available_inexp': slot.capacity_inexp - len(inexp),
            'total_booked': booked,
            'total_available': slot.capacity_total - booked,
            'exp_bookings': exp,
            'inexp_bookings': inexp,
        })
    return result
