"""
Tests for the AssignmentValidator class.
"""

import unittest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from worksite_assigner.tools import Assignment, AssignmentValidator, ClientRequest, TeamAssigner
from tests.fixtures import SAMPLE_CLIENTS, SAMPLE_ROSTER


class TestAssignmentValidator(unittest.TestCase):
    """Test cases for AssignmentValidator."""

    def setUp(self):
        """Set up test fixtures."""
        self.validator = AssignmentValidator(SAMPLE_ROSTER)
        self.client = ClientRequest(name="Acme")

    def test_init(self):
        """Test validator initialization."""
        self.assertEqual(self.validator.roster, SAMPLE_ROSTER)
        self.assertEqual(self.validator.max_sessions_per_team, 6)

    def test_validate_greedy_run(self):
        """Test a run produced by the assigner is valid."""
        result = TeamAssigner(SAMPLE_ROSTER).assign(SAMPLE_CLIENTS)
        is_valid, violations, breakdown = self.validator.validate(result.assignments)

        self.assertTrue(is_valid)
        self.assertEqual(violations, [])
        self.assertEqual(breakdown['total'], 0)

    def test_validate_empty(self):
        """Test an empty assignment list is valid."""
        is_valid, violations, breakdown = self.validator.validate([])
        self.assertTrue(is_valid)
        self.assertEqual(breakdown, {'total': 0})

    def test_double_booking(self):
        """Test the same team twice in one session is flagged."""
        assignments = [
            Assignment("Team 1", self.client, "Mon AM"),
            Assignment("Team 1", ClientRequest(name="Other"), "Mon AM"),
        ]
        is_valid, violations, breakdown = self.validator.validate(assignments)

        self.assertFalse(is_valid)
        self.assertEqual(breakdown['double_booked'], 1)
        self.assertIn("double-booked", violations[0])

    def test_unknown_team_and_session(self):
        """Test teams outside the roster and sessions outside the catalog."""
        assignments = [
            Assignment("Team 9", self.client, "Mon AM"),
            Assignment("Team 1", self.client, "Thu AM"),
        ]
        is_valid, violations, breakdown = self.validator.validate(assignments)

        self.assertFalse(is_valid)
        self.assertEqual(breakdown['unknown_team'], 1)
        self.assertEqual(breakdown['invalid_session'], 1)
        self.assertEqual(breakdown['total'], 2)

    def test_over_capacity(self):
        """Test a team above the session cap is flagged."""
        validator = AssignmentValidator(["A"], max_sessions_per_team=1)
        assignments = [
            Assignment("A", self.client, "Mon AM"),
            Assignment("A", self.client, "Mon PM"),
        ]
        is_valid, violations, breakdown = validator.validate(assignments)

        self.assertFalse(is_valid)
        self.assertEqual(breakdown['over_capacity'], 1)


if __name__ == '__main__':
    unittest.main()
