"""
Weekly quota windows.
One row per lifter per ISO week (Monday 00:00 UTC). The quota is snapshotted
from the lifter's profile when the window is created; `used` counts the
bookings charged against it.
"""
from django.db import models
from apps.core.models import UUIDModel


class QuotaWindow(UUIDModel):
    lifter = models.ForeignKey(
        'accounts.UserProfile',
        on_delete=models.CASCADE,
        related_name='quota_windows',
    )
    week_start = models.DateTimeField()
    week_end = models.DateTimeField()
    quota = models.PositiveIntegerField()
    used = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = 'Quota Window'
        verbose_name_plural = 'Quota Windows'
        ordering = ['-week_start']
        constraints = [
            models.UniqueConstraint(fields=['lifter', 'week_start'], name='unique_quota_window_per_week'),
            models.CheckConstraint(condition=models.Q(used__gte=0), name='quota_window_used_non_negative'),
        ]

    def __str__(self):
        return f"{self.lifter} week of {self.week_start:%Y-%m-%d}: {self.used}/{self.quota}"

    @property
    def remaining(self):
        return max(0, self.quota - self.used)
