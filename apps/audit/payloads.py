"""
Audit payloads: one frozen record type per audited action.

Each record knows its action and entity; the field values become the JSON
payload of the AuditLog row (empty records store no payload).
"""
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import ClassVar, Optional

from .models import AuditAction


@dataclass(frozen=True)
class AuditPayload:
    action: ClassVar[str]
    entity: ClassVar[str]

    def to_json(self):
        return asdict(self) or None


@dataclass(frozen=True)
class PolicyUpdated(AuditPayload):
    action: ClassVar[str] = AuditAction.POLICY_UPDATED
    entity: ClassVar[str] = 'policy'
    key: str
    value: str


@dataclass(frozen=True)
class UserProfileCreated(AuditPayload):
    action: ClassVar[str] = AuditAction.USER_PROFILE_CREATED
    entity: ClassVar[str] = 'user_profile'
    role: str
    experience_level: Optional[str] = None


@dataclass(frozen=True)
class UserStatusUpdated(AuditPayload):
    action: ClassVar[str] = AuditAction.USER_STATUS_UPDATED
    entity: ClassVar[str] = 'user_profile'
    status: str


@dataclass(frozen=True)
class SlotCreated(AuditPayload):
    action: ClassVar[str] = AuditAction.SLOT_CREATED
    entity: ClassVar[str] = 'slot'
    starts_at: datetime
    ends_at: datetime
    capacity_total: int
    capacity_exp: int
    capacity_inexp: int
    tz: str


@dataclass(frozen=True)
class SlotUpdated(AuditPayload):
    action: ClassVar[str] = AuditAction.SLOT_UPDATED
    entity: ClassVar[str] = 'slot'
    changes: dict = field(default_factory=dict)


@dataclass(frozen=True)
class SlotDeleted(AuditPayload):
    action: ClassVar[str] = AuditAction.SLOT_DELETED
    entity: ClassVar[str] = 'slot'
    canceled_booking_ids: tuple = ()


@dataclass(frozen=True)
class SlotsAutofilledDay(AuditPayload):
    action: ClassVar[str] = AuditAction.SLOTS_AUTOFILLED_DAY
    entity: ClassVar[str] = 'slot'
    day_start_utc: datetime
    created: int
    ranges_raw: str


@dataclass(frozen=True)
class QuotaWindowCreated(AuditPayload):
    action: ClassVar[str] = AuditAction.QUOTA_WINDOW_CREATED
    entity: ClassVar[str] = 'quota_window'
    week_start: datetime
    quota: int


@dataclass(frozen=True)
class BookingCreated(AuditPayload):
    action: ClassVar[str] = AuditAction.BOOKING_CREATED
    entity: ClassVar[str] = 'booking'
    slot_id: str
    level: str


@dataclass(frozen=True)
class BookingCanceled(AuditPayload):
    action: ClassVar[str] = AuditAction.BOOKING_CANCELED
    entity: ClassVar[str] = 'booking'
    canceled_by: str
    within_cutoff: bool
    refunded: bool


@dataclass(frozen=True)
class BookingNoShow(AuditPayload):
    action: ClassVar[str] = AuditAction.BOOKING_NO_SHOW
    entity: ClassVar[str] = 'booking'


@dataclass(frozen=True)
class BookingAttended(AuditPayload):
    action: ClassVar[str] = AuditAction.BOOKING_ATTENDED
    entity: ClassVar[str] = 'booking'
