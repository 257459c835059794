"""
Audit log: append-only record of every mutating action.
Rows are written by apps.audit.log.record inside the same transaction as the
change they describe, and are never updated or deleted afterwards.
"""
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
from django.utils import timezone
from apps.core.models import UUIDModel


class AuditAction(models.TextChoices):
    POLICY_UPDATED       = 'policy_updated',       'Policy updated'
    USER_PROFILE_CREATED = 'user_profile_created', 'User profile created'
    USER_STATUS_UPDATED  = 'user_status_updated',  'User status updated'
    SLOT_CREATED         = 'slot_created',         'Slot created'
    SLOT_UPDATED         = 'slot_updated',         'Slot updated'
    SLOT_DELETED         = 'slot_deleted',         'Slot deleted'
    SLOTS_AUTOFILLED_DAY = 'slots_autofilled_day', 'Day auto-filled with slots'
    QUOTA_WINDOW_CREATED = 'quota_window_created', 'Quota window created'
    BOOKING_CREATED      = 'booking_created',      'Booking created'
    BOOKING_CANCELED     = 'booking_canceled',     'Booking canceled'
    BOOKING_NO_SHOW      = 'booking_no_show',      'Booking marked no-show'
    BOOKING_ATTENDED     = 'booking_attended',     'Booking marked attended'


class AuditLogImmutableError(Exception):
    """Raised on any attempt to modify or delete a written audit entry."""


class AuditLogQuerySet(models.QuerySet):
    """Bulk writes are refused the same way as instance writes."""

    def update(self, **kwargs):
        raise AuditLogImmutableError('Audit log entries are append-only.')

    def bulk_update(self, objs, fields, batch_size=None):
        raise AuditLogImmutableError('Audit log entries are append-only.')

    def delete(self):
        raise AuditLogImmutableError('Audit log entries are append-only.')

    delete.queryset_only = True


class AuditLog(UUIDModel):
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='audit_logs',
    )
    action = models.CharField(max_length=40, choices=AuditAction.choices, db_index=True)
    entity = models.CharField(max_length=40)
    # Policy keys are written here as-is, so this matches Policy.key.
    entity_id = models.CharField(max_length=100)
    payload = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder)
    at = models.DateTimeField(default=timezone.now, db_index=True)

    objects = AuditLogQuerySet.as_manager()

    class Meta:
        verbose_name = 'Audit Log'
        verbose_name_plural = 'Audit Logs'
        ordering = ['-at']

    def __str__(self):
        return f"{self.action} {self.entity}:{self.entity_id} by {self.actor_id}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise AuditLogImmutableError('Audit log entries are append-only.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise AuditLogImmutableError('Audit log entries are append-only.')
