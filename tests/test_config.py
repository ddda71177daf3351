"""
Tests for configuration loading and validation.
"""

import unittest
from unittest.mock import patch
import json
import shutil
import tempfile
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from worksite_assigner.config import ConfigManager, load_config
from tests.fixtures import isolate_environment


class TestConfigManager(unittest.TestCase):
    """Test cases for ConfigManager."""

    def setUp(self):
        isolate_environment(self)
        self.tmp_dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.tmp_dir, "assigner_config.json")

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _write(self, data):
        with open(self.config_file, "w") as f:
            json.dump(data, f)

    def test_defaults(self):
        """Test default values when no file exists."""
        config = ConfigManager(self.config_file).config

        self.assertEqual(config.assignment.max_sessions_per_team, 6)
        self.assertEqual(config.assignment.default_num_teams, 2)
        self.assertEqual(config.input.preferred_day_column, 10)
        self.assertEqual(config.input.job_length_column, 11)
        self.assertEqual(config.clients_file, "data/clients.csv")

    def test_file_merge(self):
        """Test file values override defaults section by section."""
        self._write({"assignment": {"default_num_teams": 5}, "output": {"save_assignments": False}})
        config = load_config(self.config_file)

        self.assertEqual(config.assignment.default_num_teams, 5)
        self.assertEqual(config.assignment.max_sessions_per_team, 6)
        self.assertFalse(config.output.save_assignments)

    def test_unreadable_file_falls_back(self):
        """Test a malformed file keeps the defaults."""
        with open(self.config_file, "w") as f:
            f.write("{not json")
        with patch("builtins.print"):
            config = ConfigManager(self.config_file).config
        self.assertEqual(config.assignment.default_num_teams, 2)

    def test_unknown_key(self):
        """Test unknown keys raise ValueError."""
        self._write({"assignment": {"bogus": 1}})
        with self.assertRaises(ValueError):
            ConfigManager(self.config_file)

    def test_wrong_value_type(self):
        """Test a value of the wrong type raises ValueError at load time."""
        self._write({"assignment": {"max_sessions_per_team": "6"}})
        with self.assertRaises(ValueError) as ctx:
            ConfigManager(self.config_file)
        self.assertIn("max_sessions_per_team", str(ctx.exception))

    def test_bool_rejected_for_count(self):
        """Test JSON booleans are not accepted as integers."""
        self._write({"input": {"name_column": True}})
        with self.assertRaises(ValueError):
            ConfigManager(self.config_file)

    def test_team_names_must_be_strings(self):
        """Test team_names entries are checked."""
        self._write({"assignment": {"team_names": ["North", 2]}})
        with self.assertRaises(ValueError):
            ConfigManager(self.config_file)

    def test_print_config_summary(self):
        """Test the summary lists settings and reports issues."""
        self._write({"assignment": {"max_sessions_per_team": 7, "team_names": ["North"]}})
        manager = ConfigManager(self.config_file)
        with patch("builtins.print") as mock_print:
            manager.print_config_summary()

        printed = "\n".join(str(call.args[0]) for call in mock_print.call_args_list if call.args)
        self.assertIn("Max sessions per team: 7", printed)
        self.assertIn("Team names: North", printed)
        self.assertIn("CONFIGURATION ISSUES", printed)
        self.assertIn("max_sessions_per_team must be between 1 and 6", printed)

    def test_print_config_summary_valid(self):
        """Test a default configuration prints as valid."""
        manager = ConfigManager(self.config_file)
        with patch("builtins.print") as mock_print:
            manager.print_config_summary()

        printed = "\n".join(str(call.args[0]) for call in mock_print.call_args_list if call.args)
        self.assertIn("Configuration is valid", printed)

    @patch.dict(os.environ, {
        "WORKSITE_NUM_TEAMS": "4",
        "WORKSITE_TEAM_NAMES": "North, South,,East",
        "WORKSITE_OUTPUT_DIR": "out",
    })
    def test_env_overrides(self):
        """Test environment variables override file and defaults."""
        config = ConfigManager(self.config_file).config

        self.assertEqual(config.assignment.default_num_teams, 4)
        self.assertEqual(config.assignment.team_names, ["North", "South", "East"])
        self.assertEqual(config.output.output_directory, "out")

    def test_validate_defaults(self):
        """Test default configuration has no issues."""
        self.assertEqual(ConfigManager(self.config_file).validate_config(), [])

    def test_validate_issues(self):
        """Test out-of-range values are reported."""
        self._write({"assignment": {"max_sessions_per_team": 7, "default_num_teams": 30,
                                    "team_name_template": "Crew"}})
        issues = ConfigManager(self.config_file).validate_config()

        self.assertEqual(len(issues), 3)

    def test_save_round_trip(self):
        """Test saved configuration loads back with the same values."""
        manager = ConfigManager(self.config_file)
        manager.config.assignment.default_num_teams = 3
        with patch("builtins.print"):
            manager.save_config()

        self.assertEqual(load_config(self.config_file).assignment.default_num_teams, 3)


if __name__ == '__main__':
    unittest.main()
