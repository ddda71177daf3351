"""
Tests for the session catalog and availability resolver.
"""

import unittest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from worksite_assigner.sessions import (
    ALL_SESSIONS, get_available_sessions, is_valid_session,
    session_priority, sessions_for_day, sort_sessions
)


class TestSessionCatalog(unittest.TestCase):
    """Test cases for the fixed session catalog."""

    def test_catalog_order(self):
        """Test the six sessions in priority order."""
        self.assertEqual(ALL_SESSIONS, [
            "Mon AM", "Mon PM", "Tues AM", "Tues PM", "Wed AM", "Wed PM"
        ])

    def test_session_priority(self):
        """Test earlier sessions have lower priority values."""
        self.assertEqual(session_priority("Mon AM"), 0)
        self.assertEqual(session_priority("Wed PM"), 5)
        self.assertLess(session_priority("Mon PM"), session_priority("Tues AM"))

    def test_sort_sessions(self):
        """Test sorting into catalog order."""
        self.assertEqual(sort_sessions(["Wed AM", "Mon PM", "Tues AM"]),
                         ["Mon PM", "Tues AM", "Wed AM"])

    def test_is_valid_session(self):
        """Test catalog membership."""
        self.assertTrue(is_valid_session("Tues PM"))
        self.assertFalse(is_valid_session("Tues Any"))
        self.assertFalse(is_valid_session("Thu AM"))
        self.assertFalse(is_valid_session(None))

    def test_sessions_for_day(self):
        """Test both sessions of a day in order."""
        self.assertEqual(sessions_for_day("Wed"), ["Wed AM", "Wed PM"])
        self.assertEqual(sessions_for_day("Fri"), [])


class TestAvailabilityResolver(unittest.TestCase):
    """Test cases for get_available_sessions."""

    def test_any_day(self):
        """Test 'Any Day' and blank resolve to the whole catalog."""
        self.assertEqual(get_available_sessions("Any Day"), ALL_SESSIONS)
        self.assertEqual(get_available_sessions(""), ALL_SESSIONS)
        self.assertEqual(get_available_sessions(None), ALL_SESSIONS)

    def test_single_session(self):
        """Test an exact session token resolves to itself."""
        self.assertEqual(get_available_sessions("Tues AM"), ["Tues AM"])
        self.assertEqual(get_available_sessions("Wed PM"), ["Wed PM"])

    def test_day_any(self):
        """Test '<Day> Any' resolves to that day's two sessions."""
        self.assertEqual(get_available_sessions("Mon Any"), ["Mon AM", "Mon PM"])
        self.assertEqual(get_available_sessions("Tues Any"), ["Tues AM", "Tues PM"])
        self.assertEqual(get_available_sessions("Wed Any"), ["Wed AM", "Wed PM"])

    def test_unrecognized_falls_back_to_catalog(self):
        """Test fallback strings degrade to the whole week."""
        self.assertEqual(get_available_sessions("ASAP"), ALL_SESSIONS)
        self.assertEqual(get_available_sessions("FRIDAY PM"), ALL_SESSIONS)

    def test_returns_fresh_list(self):
        """Test callers cannot mutate the catalog through the result."""
        sessions = get_available_sessions("Any Day")
        sessions.clear()
        self.assertEqual(len(ALL_SESSIONS), 6)


if __name__ == '__main__':
    unittest.main()
