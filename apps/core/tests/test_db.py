from unittest.mock import patch

from django.db import OperationalError, transaction
from django.test import TransactionTestCase, override_settings

from apps.core.db import atomic_with_retry


@override_settings(BOOKING_TX_RETRIES=3, BOOKING_TX_RETRY_DELAY=0)
class AtomicWithRetryTests(TransactionTestCase):
    def test_retries_write_conflicts_then_succeeds(self):
        calls = []

        @atomic_with_retry
        def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise OperationalError('deadlock detected')
            return 'done'

        with patch('apps.core.db.time.sleep'):
            self.assertEqual(flaky(), 'done')
        self.assertEqual(len(calls), 3)

    def test_gives_up_after_configured_attempts(self):
        calls = []

        @atomic_with_retry
        def always_conflicts():
            calls.append(1)
            raise OperationalError('could not serialize access')

        with patch('apps.core.db.time.sleep'):
            with self.assertRaises(OperationalError):
                always_conflicts()
        self.assertEqual(len(calls), 3)

    def test_no_retry_inside_enclosing_transaction(self):
        calls = []

        @atomic_with_retry
        def conflicts():
            calls.append(1)
            raise OperationalError('deadlock detected')

        with self.assertRaises(OperationalError):
            with transaction.atomic():
                conflicts()
        self.assertEqual(len(calls), 1)

    def test_other_errors_are_not_retried(self):
        calls = []

        @atomic_with_retry
        def broken():
            calls.append(1)
            raise ValueError('bad input')

        with self.assertRaises(ValueError):
            broken()
        self.assertEqual(len(calls), 1)
