#!/usr/bin/env python3
import sys
import os
import unittest
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.throttle import AttemptJanitor, FailedAttemptTracker, start_attempt_janitor


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestFailedAttemptTracker(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.tracker = FailedAttemptTracker(max_attempts=3, window_seconds=60, block_seconds=120, clock=self.clock)

    def test_blocks_after_max_attempts(self):
        self.assertEqual(self.tracker.record_failure("1.2.3.4"), (False, 1))
        self.assertEqual(self.tracker.record_failure("1.2.3.4"), (False, 2))
        self.assertFalse(self.tracker.is_blocked("1.2.3.4"))
        self.assertEqual(self.tracker.record_failure("1.2.3.4"), (True, 3))
        self.assertTrue(self.tracker.is_blocked("1.2.3.4"))
        self.assertFalse(self.tracker.is_blocked("5.6.7.8"))

    def test_block_expires(self):
        for _ in range(3):
            self.tracker.record_failure("ip")
        self.clock.now += 121
        self.assertFalse(self.tracker.is_blocked("ip"))

    def test_window_restarts_count(self):
        self.tracker.record_failure("ip")
        self.tracker.record_failure("ip")
        self.clock.now += 61
        self.assertEqual(self.tracker.record_failure("ip"), (False, 1))
        self.assertEqual(self.tracker.attempts("ip"), 1)

    def test_count_returned_matches_window(self):
        self.tracker.record_failure("ip")
        self.clock.now += 61
        self.tracker.record_failure("ip")
        self.clock.now += 10
        # O alerta usa a contagem retornada, não uma leitura posterior
        self.assertEqual(self.tracker.record_failure("ip"), (False, 2))
        self.assertEqual(self.tracker.record_failure("ip"), (True, 3))
        self.assertEqual(self.tracker.attempts("ip"), 0)

    def test_reset(self):
        self.tracker.record_failure("ip")
        self.tracker.record_failure("ip")
        self.tracker.reset("ip")
        self.assertEqual(self.tracker.attempts("ip"), 0)
        self.assertEqual(self.tracker.record_failure("ip"), (False, 1))

    def test_purge_expired(self):
        self.tracker.record_failure("a")
        for _ in range(3):
            self.tracker.record_failure("b")
        self.clock.now += 200
        self.assertEqual(self.tracker.purge_expired(), 2)
        self.assertEqual(self.tracker.attempts("a"), 0)

    def test_clear(self):
        for _ in range(3):
            self.tracker.record_failure("ip")
        self.tracker.clear()
        self.assertFalse(self.tracker.is_blocked("ip"))

    def test_disabled(self):
        tracker = FailedAttemptTracker(max_attempts=0, window_seconds=60, block_seconds=120)
        for _ in range(10):
            self.assertEqual(tracker.record_failure("ip"), (False, 0))
        self.assertFalse(tracker.is_blocked("ip"))
        self.assertIsNone(start_attempt_janitor(tracker, 60))

    def test_max_size(self):
        tracker = FailedAttemptTracker(max_attempts=5, window_seconds=60, block_seconds=120, max_size=2, clock=self.clock)
        for key in ("a", "b", "c"):
            tracker.record_failure(key)
            self.clock.now += 1
        self.assertEqual(tracker.attempts("a"), 0)
        self.assertEqual(tracker.attempts("c"), 1)


class TestAttemptJanitor(unittest.TestCase):
    def test_stop(self):
        tracker = FailedAttemptTracker(max_attempts=3, window_seconds=60, block_seconds=120)
        janitor = AttemptJanitor(tracker, interval_seconds=1)
        janitor.start()
        janitor.stop()
        janitor.join(timeout=2)
        self.assertFalse(janitor.is_alive())


if __name__ == '__main__':
    unittest.main()
