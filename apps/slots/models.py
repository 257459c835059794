"""
Bookable time slots.
Each slot has two independent capacity pools, one per experience level,
whose sum never exceeds the slot's total capacity.
"""
from django.conf import settings
from django.db import models
from apps.core.models import UUIDModel, TimestampedModel
from apps.accounts.models import ExperienceLevel


class SlotStatus(models.TextChoices):
    OPEN     = 'open',     'Open'
    CLOSED   = 'closed',   'Closed'
    CANCELED = 'canceled', 'Canceled'


class Slot(UUIDModel, TimestampedModel):
    starts_at = models.DateTimeField(db_index=True)
    ends_at = models.DateTimeField()
    tz = models.CharField(
        max_length=64,
        help_text='Gym timezone at creation; display only',
    )
    capacity_total = models.PositiveIntegerField()
    capacity_exp = models.PositiveIntegerField(help_text='Seats reserved for experienced lifters')
    capacity_inexp = models.PositiveIntegerField(help_text='Seats reserved for inexperienced lifters')
    status = models.CharField(
        max_length=10, choices=SlotStatus.choices,
        default=SlotStatus.OPEN, db_index=True,
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='created_slots',
    )

    class Meta:
        verbose_name = 'Slot'
        verbose_name_plural = 'Slots'
        ordering = ['starts_at']
        indexes = [
            models.Index(fields=['starts_at', 'ends_at'], name='slot_starts_ends_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(starts_at__lt=models.F('ends_at')),
                name='slot_starts_before_ends',
            ),
            models.CheckConstraint(
                condition=models.Q(
                    capacity_total__gte=models.F('capacity_exp') + models.F('capacity_inexp'),
                ),
                name='slot_level_capacity_within_total',
            ),
        ]

    def __str__(self):
        return f"{self.starts_at:%Y-%m-%d %H:%M} - {self.ends_at:%H:%M} UTC ({self.status})"

    @property
    def is_open(self):
        return self.status == SlotStatus.OPEN

    def capacity_for(self, level):
        return self.capacity_exp if level == ExperienceLevel.EXPERIENCED else self.capacity_inexp
