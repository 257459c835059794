"""
Bookings app models:
  - Booking : a lifter's seat in a slot, with a one-way state machine

`booked` is the only live state. Every other status is terminal and is
reached through the transition helpers below, never by writing the field.
"""
from django.db import models
from django.utils import timezone
from apps.core.exceptions import ConflictError
from apps.core.models import UUIDModel, TimestampedModel
from apps.accounts.models import ExperienceLevel


class BookingStatus(models.TextChoices):
    BOOKED             = 'booked',             'Booked'
    CANCELED_BY_LIFTER = 'canceled_by_lifter', 'Canceled by lifter'
    CANCELED_BY_ADMIN  = 'canceled_by_admin',  'Canceled by admin'
    NO_SHOW            = 'no_show',            'No-show'
    ATTENDED           = 'attended',           'Attended'


class Booking(UUIDModel, TimestampedModel):
    lifter = models.ForeignKey(
        'accounts.UserProfile', on_delete=models.PROTECT, related_name='bookings',
    )
    # Nullable so the booking (and its history) outlives a deleted slot.
    slot = models.ForeignKey(
        'slots.Slot', on_delete=models.SET_NULL, null=True, blank=True, related_name='bookings',
    )
    level = models.CharField(
        max_length=20, choices=ExperienceLevel.choices,
        help_text='Lifter experience level at booking time',
    )
    status = models.CharField(
        max_length=20, choices=BookingStatus.choices,
        default=BookingStatus.BOOKED,
    )
    canceled_at = models.DateTimeField(null=True, blank=True)
    cancel_reason = models.TextField(blank=True)

    class Meta:
        verbose_name = 'Booking'
        verbose_name_plural = 'Bookings'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['slot', 'status'], name='booking_slot_status_idx'),
            models.Index(fields=['lifter', 'created_at'], name='booking_lifter_created_idx'),
            models.Index(fields=['lifter', 'slot'], name='booking_lifter_slot_idx'),
            models.Index(fields=['status'], name='booking_status_idx'),
        ]

    def __str__(self):
        return f"#{self.id_short} | {self.lifter} | {self.status}"

    @property
    def id_short(self):
        """Returns the first 8 chars of UUID in uppercase."""
        return str(self.id)[:8].upper()

    @property
    def is_booked(self):
        return self.status == BookingStatus.BOOKED

    # ── State transition helpers ──────────────────────────────────────────────

    def cancel(self, by_admin: bool, reason=''):
        self._transition(
            BookingStatus.CANCELED_BY_ADMIN if by_admin else BookingStatus.CANCELED_BY_LIFTER,
            'Booking cannot be canceled',
        )
        self.canceled_at = timezone.now()
        if reason:
            self.cancel_reason = reason
        self.save(update_fields=['status', 'canceled_at', 'cancel_reason', 'updated_at'])

    def mark_no_show(self):
        self._transition(BookingStatus.NO_SHOW, 'Can only mark booked sessions as no-show')
        self.save(update_fields=['status', 'updated_at'])

    def mark_attended(self):
        self._transition(BookingStatus.ATTENDED, 'Can only mark booked sessions as attended')
        self.save(update_fields=['status', 'updated_at'])

    def _transition(self, new_status, refusal):
        if self.status != BookingStatus.BOOKED:
            raise ConflictError(refusal)
        self.status = new_status
