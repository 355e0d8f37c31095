"""
Unit tests for the capped diagnostic log.
"""

import logging
import re
import unittest
import sys
import os

# Add parent directory to path to import app modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from api_scheduler.log_store import LogStore


class TestLogStore(unittest.TestCase):

    def test_keeps_most_recent_hundred(self):
        """Inserting 150 entries keeps the last 100, oldest first."""
        store = LogStore()
        for i in range(150):
            store.add(f"message {i}")

        entries = store.entries()

        self.assertEqual(len(entries), 100)
        self.assertEqual(
            [e.message for e in entries], [f"message {i}" for i in range(50, 150)]
        )

    def test_custom_capacity(self):
        store = LogStore(capacity=3)
        for i in range(5):
            store.add(str(i))

        self.assertEqual([e.message for e in store.entries()], ["2", "3", "4"])
        self.assertEqual(len(store), 3)

    def test_entry_time_format(self):
        entry = LogStore().add("hello")

        self.assertRegex(entry.time, re.compile(r"^\d{2}:\d{2}:\d{2}$"))

    def test_entries_is_a_snapshot(self):
        store = LogStore()
        store.add("first")
        snapshot = store.entries()
        store.add("second")

        self.assertEqual(len(snapshot), 1)

    def test_clear(self):
        store = LogStore()
        store.add("first")
        store.clear()

        self.assertEqual(store.entries(), [])

    def test_mirrors_to_logger(self):
        store = LogStore()
        with self.assertLogs("Scheduler", level="WARNING") as captured:
            store.add("something failed", logging.WARNING)

        self.assertIn("something failed", captured.output[0])


if __name__ == "__main__":
    unittest.main()
