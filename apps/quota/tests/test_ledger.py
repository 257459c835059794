from datetime import timedelta

from django.test import TestCase
from django.urls import reverse

from apps.accounts.models import ProfileStatus
from apps.audit.models import AuditAction, AuditLog
from apps.core.exceptions import AuthorizationError
from apps.core.tests.helpers import NOW, WEEK_START, freeze_time, login_as, make_admin, make_lifter
from apps.quota.ledger import (
    create_quota_window,
    decrement,
    get_current_quota,
    get_or_create_window,
    increment,
    refund,
    unbooked_lifters,
)
from apps.quota.models import QuotaWindow


class WindowLifecycleTests(TestCase):
    def setUp(self):
        self.lifter = make_lifter('lifter', weekly_quota=4)
        self.profile = self.lifter.gym_profile

    def test_new_window_snapshots_profile_quota(self):
        window = get_or_create_window(self.profile, WEEK_START)
        self.assertEqual((window.quota, window.used), (4, 0))
        self.assertEqual(window.week_end, WEEK_START + timedelta(days=7) - timedelta(milliseconds=1))

    def test_existing_window_keeps_its_snapshot(self):
        first = get_or_create_window(self.profile, WEEK_START)
        self.profile.weekly_quota = 9
        self.profile.save()
        again = get_or_create_window(self.profile, WEEK_START)
        self.assertEqual(again.id, first.id)
        self.assertEqual(again.quota, 4)

    def test_missing_profile_quota_snapshots_zero(self):
        self.profile.weekly_quota = None
        self.profile.save()
        self.assertEqual(get_or_create_window(self.profile, WEEK_START).quota, 0)


class CounterTests(TestCase):
    def setUp(self):
        self.profile = make_lifter('lifter').gym_profile
        self.window = get_or_create_window(self.profile, WEEK_START)

    def test_increment_then_decrement(self):
        increment(self.window.id)
        increment(self.window.id)
        self.assertTrue(decrement(self.window.id))
        self.window.refresh_from_db()
        self.assertEqual(self.window.used, 1)

    def test_decrement_is_clamped_at_zero(self):
        self.assertFalse(decrement(self.window.id))
        self.assertFalse(decrement(self.window.id))
        self.window.refresh_from_db()
        self.assertEqual(self.window.used, 0)

    def test_refund_without_window(self):
        self.assertFalse(refund(self.profile, WEEK_START + timedelta(days=7)))
        self.assertFalse(QuotaWindow.objects.filter(week_start=WEEK_START + timedelta(days=7)).exists())


class CurrentQuotaTests(TestCase):
    def setUp(self):
        freeze_time(self)
        self.lifter = make_lifter('lifter', weekly_quota=3)

    def test_synthesized_without_creating_window(self):
        quota = get_current_quota(self.lifter)
        self.assertEqual((quota['quota'], quota['used'], quota['remaining']), (3, 0, 3))
        self.assertEqual(quota['week_start'], WEEK_START)
        self.assertFalse(QuotaWindow.objects.exists())

    def test_reads_existing_window(self):
        window = get_or_create_window(self.lifter.gym_profile, WEEK_START)
        increment(window.id)
        self.assertEqual(get_current_quota(self.lifter)['remaining'], 2)

    def test_admin_has_no_quota(self):
        with self.assertRaises(AuthorizationError):
            get_current_quota(make_admin())

    def test_create_quota_window_audits_once(self):
        first = create_quota_window(self.lifter)
        second = create_quota_window(self.lifter)
        self.assertEqual(first.id, second.id)
        self.assertEqual(first.week_start, WEEK_START)
        self.assertEqual(AuditLog.objects.filter(action=AuditAction.QUOTA_WINDOW_CREATED).count(), 1)


class UnbookedLiftersTests(TestCase):
    def setUp(self):
        freeze_time(self)
        self.admin = make_admin()
        self.idle = make_lifter('idle', weekly_quota=3)
        self.busy = make_lifter('busy', weekly_quota=2)
        make_lifter('frozen', weekly_quota=3, status=ProfileStatus.FROZEN)
        QuotaWindow.objects.create(
            lifter=self.busy.gym_profile, week_start=WEEK_START,
            week_end=WEEK_START + timedelta(days=7), quota=2, used=2,
        )

    def test_only_active_lifters_with_quota_left(self):
        lifters = unbooked_lifters(self.admin)
        self.assertEqual([l['username'] for l in lifters], ['idle'])
        self.assertEqual(lifters[0]['quota_remaining'], 3)

    def test_views(self):
        login_as(self.client, self.admin)
        response = self.client.get(reverse('quota:unbooked'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()['lifters']), 1)

        login_as(self.client, self.idle)
        response = self.client.get(reverse('quota:current'))
        self.assertEqual(response.json()['quota']['remaining'], 3)
        self.assertTrue(response.json()['quota']['week_start'].startswith('2030-01-07T00:00:00'))

        response = self.client.post(reverse('quota:current'))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(QuotaWindow.objects.filter(id=response.json()['window_id']).exists())
