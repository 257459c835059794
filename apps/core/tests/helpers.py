"""
Fixtures shared by the app test suites.
"""
from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import patch

from django.contrib.auth.models import User

from apps.accounts.models import ExperienceLevel, ProfileStatus, Role, UserProfile
from apps.slots.models import Slot, SlotStatus

# Wednesday; its ISO week starts Monday 2030-01-07.
NOW = datetime(2030, 1, 9, 10, 0, tzinfo=dt_timezone.utc)
WEEK_START = datetime(2030, 1, 7, tzinfo=dt_timezone.utc)

MODEL_BACKEND = 'django.contrib.auth.backends.ModelBackend'


def freeze_time(testcase, instant=NOW):
    """Pin timezone.now() to `instant` for the rest of the test."""
    patcher = patch('django.utils.timezone.now', return_value=instant)
    mock = patcher.start()
    testcase.addCleanup(patcher.stop)
    return mock


def make_admin(username='admin'):
    user = User.objects.create_user(username=username, password='password', is_staff=True)
    UserProfile.objects.create(user=user, role=Role.ADMIN)
    return user


def make_lifter(username, level=ExperienceLevel.EXPERIENCED, weekly_quota=4,
                status=ProfileStatus.ACTIVE):
    user = User.objects.create_user(username=username, password='password')
    UserProfile.objects.create(
        user=user,
        role=Role.LIFTER,
        experience_level=level,
        weekly_quota=weekly_quota,
        status=status,
    )
    return user


def make_slot(starts_at, hours=1, total=5, exp=3, inexp=2, status=SlotStatus.OPEN):
    return Slot.objects.create(
        starts_at=starts_at,
        ends_at=starts_at + timedelta(hours=hours),
        tz='UTC',
        capacity_total=total,
        capacity_exp=exp,
        capacity_inexp=inexp,
        status=status,
    )


def login_as(client, user):
    client.force_login(user, backend=MODEL_BACKEND)
