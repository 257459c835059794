from datetime import date, datetime, time, timedelta, timezone as dt_timezone

from django.test import SimpleTestCase

from apps.core.exceptions import ValidationError
from apps.core.timeutils import (
    local_date_of,
    local_wall_clock_to_instant,
    overlaps,
    parse_hhmm,
    parse_working_hours,
    week_end_for,
    week_start_for,
    week_starts_in_month,
)

UTC = dt_timezone.utc


class WeekStartTests(SimpleTestCase):
    def test_midweek_instant_maps_to_monday_midnight(self):
        instant = datetime(2030, 1, 9, 17, 45, tzinfo=UTC)
        self.assertEqual(week_start_for(instant), datetime(2030, 1, 7, tzinfo=UTC))

    def test_sunday_belongs_to_previous_week(self):
        sunday = datetime(2030, 1, 13, 23, 59, tzinfo=UTC)
        self.assertEqual(week_start_for(sunday), datetime(2030, 1, 7, tzinfo=UTC))

    def test_monday_midnight_starts_new_week(self):
        monday = datetime(2030, 1, 14, tzinfo=UTC)
        self.assertEqual(week_start_for(monday), monday)

    def test_non_utc_instant_uses_utc_calendar(self):
        # 01:00 Monday in +03:00 is still Sunday in UTC
        instant = datetime(2030, 1, 14, 1, 0, tzinfo=dt_timezone(timedelta(hours=3)))
        self.assertEqual(week_start_for(instant), datetime(2030, 1, 7, tzinfo=UTC))

    def test_week_end_is_last_millisecond(self):
        start = datetime(2030, 1, 7, tzinfo=UTC)
        self.assertEqual(
            week_end_for(start),
            datetime(2030, 1, 13, 23, 59, 59, 999000, tzinfo=UTC),
        )

    def test_week_starts_in_month_covers_leading_partial_week(self):
        weeks = week_starts_in_month(2030, 1)
        self.assertEqual(weeks[0], datetime(2029, 12, 31, tzinfo=UTC))
        self.assertEqual(weeks[-1], datetime(2030, 1, 28, tzinfo=UTC))
        self.assertEqual(len(weeks), 5)


class OverlapTests(SimpleTestCase):
    def setUp(self):
        self.nine = datetime(2030, 1, 9, 9, tzinfo=UTC)
        self.ten = datetime(2030, 1, 9, 10, tzinfo=UTC)
        self.eleven = datetime(2030, 1, 9, 11, tzinfo=UTC)

    def test_touching_intervals_do_not_overlap(self):
        self.assertFalse(overlaps(self.nine, self.ten, self.ten, self.eleven))

    def test_contained_interval_overlaps(self):
        half_past = self.nine + timedelta(minutes=30)
        self.assertTrue(overlaps(self.nine, self.eleven, half_past, self.ten))


class WallClockTests(SimpleTestCase):
    def test_fixed_offset_zone(self):
        instant = local_wall_clock_to_instant(date(2030, 1, 9), time(9, 0), 'Africa/Johannesburg')
        self.assertEqual(instant, datetime(2030, 1, 9, 7, 0, tzinfo=UTC))

    def test_dst_zone_uses_offset_of_that_date(self):
        summer = local_wall_clock_to_instant(date(2030, 7, 1), time(9, 0), 'Europe/Berlin')
        winter = local_wall_clock_to_instant(date(2030, 1, 1), time(9, 0), 'Europe/Berlin')
        self.assertEqual(summer.hour, 7)
        self.assertEqual(winter.hour, 8)

    def test_local_date_can_differ_from_utc_date(self):
        instant = datetime(2030, 1, 9, 23, 30, tzinfo=UTC)
        self.assertEqual(local_date_of(instant, 'Asia/Tokyo'), date(2030, 1, 10))

    def test_unknown_zone_is_validation_error(self):
        with self.assertRaises(ValidationError):
            local_wall_clock_to_instant(date(2030, 1, 9), time(9, 0), 'Mars/Olympus_Mons')


class WorkingHoursParseTests(SimpleTestCase):
    def test_default_policy_string(self):
        self.assertEqual(
            parse_working_hours('09:00 - 14:00, 17:00-22:00'),
            [(time(9, 0), time(14, 0)), (time(17, 0), time(22, 0))],
        )

    def test_malformed_ranges_are_skipped(self):
        self.assertEqual(
            parse_working_hours('nonsense, 25:00-26:00, 8:30 -9:30, 10:00-'),
            [(time(8, 30), time(9, 30))],
        )

    def test_parse_hhmm_bounds(self):
        self.assertEqual(parse_hhmm('23:59'), time(23, 59))
        self.assertIsNone(parse_hhmm('24:00'))
        self.assertIsNone(parse_hhmm('12:60'))
