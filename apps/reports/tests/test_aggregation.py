from datetime import timedelta

from django.test import TestCase
from django.urls import reverse

from apps.accounts.models import ProfileStatus
from apps.bookings.engine import book_slot, cancel_booking
from apps.core.exceptions import AuthorizationError, ValidationError
from apps.core.tests.helpers import NOW, freeze_time, login_as, make_admin, make_lifter, make_slot
from apps.reports.aggregation import _percent, dashboard_stats, monthly_report
from apps.slots.models import SlotStatus


class PercentTests(TestCase):
    def test_rounds_half_up(self):
        self.assertEqual(_percent(1, 8), 13)
        self.assertEqual(_percent(1, 3), 33)

    def test_empty_denominator(self):
        self.assertEqual(_percent(0, 0), 0)


class ReportTests(TestCase):
    def setUp(self):
        freeze_time(self)
        self.admin = make_admin()
        self.a = make_lifter('a', weekly_quota=1)
        self.b = make_lifter('b', weekly_quota=2)
        make_lifter('c', status=ProfileStatus.FROZEN)

        s1 = make_slot(NOW + timedelta(days=1))
        s2 = make_slot(NOW + timedelta(days=2))
        s3 = make_slot(NOW + timedelta(days=8))
        make_slot(NOW + timedelta(days=1), status=SlotStatus.CLOSED)

        book_slot(self.a, s1.id)
        book_slot(self.b, s2.id)
        cancel_booking(self.b, book_slot(self.b, s3.id).id)

    def test_dashboard_stats(self):
        self.assertEqual(dashboard_stats(self.admin), {
            'total_lifters': 3,
            'active_slots': 2,
            'total_bookings': 2,
            'compliance_rate': 50,
            'utilization_rate': 20,
        })

    def test_monthly_report(self):
        report = monthly_report(self.admin, 2030, 1)

        self.assertEqual(report['period'], '2030-01')
        self.assertEqual(report['total_bookings'], 3)
        self.assertEqual(report['completed_bookings'], 0)
        self.assertEqual(report['canceled_by_lifter'], 1)
        self.assertEqual(report['canceled_by_admin'], 0)
        self.assertEqual(report['late_cancellations'], 0)
        self.assertEqual(report['no_shows'], 0)
        self.assertEqual(report['total_slots'], 4)
        self.assertEqual(report['total_capacity'], 20)
        self.assertEqual(report['utilization_rate'], 10)
        self.assertEqual(report['fill_rate_at_cutoff'], 0)
        self.assertEqual(report['unique_lifters'], 2)
        self.assertEqual(report['quota_compliance_rate'], 0)

    def test_empty_month(self):
        report = monthly_report(self.admin, 2029, 6)
        self.assertEqual(report['total_bookings'], 0)
        self.assertEqual(report['utilization_rate'], 0)

    def test_invalid_month(self):
        with self.assertRaises(ValidationError):
            monthly_report(self.admin, 2030, 13)

    def test_admin_only(self):
        with self.assertRaises(AuthorizationError):
            dashboard_stats(self.a)

    def test_views(self):
        login_as(self.client, self.admin)
        response = self.client.get(reverse('reports:monthly'), {'year': 2030, 'month': 1})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['report']['period'], '2030-01')

        response = self.client.get(reverse('reports:dashboard'))
        self.assertEqual(response.json()['stats']['total_lifters'], 3)

        response = self.client.get(reverse('reports:monthly'), {'year': 'soon', 'month': 1})
        self.assertEqual(response.status_code, 400)
