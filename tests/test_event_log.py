"""Tests for the bounded session event log."""

import unittest

from geocoin.core.enums import EventCategory
from geocoin.utils.event_log import EventLog, GameEvent


def _event(step: int, category: EventCategory = EventCategory.MOVE) -> GameEvent:
    return GameEvent(step=step, category=category, message=f"step {step}")


class TestEventLog(unittest.TestCase):

    def test_latest_returns_most_recent_oldest_first(self):
        log = EventLog()
        for s in range(5):
            log.append(_event(s))
        self.assertEqual([e.step for e in log.latest(3)], [2, 3, 4])
        self.assertEqual(log.latest(0), [])

    def test_since_step(self):
        log = EventLog()
        for s in (0, 1, 1, 2, 5):
            log.append(_event(s))
        self.assertEqual([e.step for e in log.since_step(1)], [1, 1, 2, 5])
        self.assertEqual(log.since_step(6), [])

    def test_capacity_drops_oldest(self):
        log = EventLog(capacity=3)
        for s in range(10):
            log.append(_event(s))
        self.assertEqual(len(log), 3)
        self.assertEqual([e.step for e in log.since_step(0)], [7, 8, 9])

    def test_clear(self):
        log = EventLog()
        log.append(_event(0, EventCategory.RESET))
        log.clear()
        self.assertEqual(len(log), 0)


if __name__ == "__main__":
    unittest.main()
