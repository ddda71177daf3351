"""
Test fixtures and utilities for worksite assigner tests.
"""

import os
import tempfile

from worksite_assigner.tools import ClientRequest


# Test data fixtures
SAMPLE_CLIENTS = [
    ClientRequest(
        name="Acme Builders",
        address="12 Main St",
        travel_time="15 min",
        preferred_day="Monday",
        job_length="Full day 2 teams"
    ),
    ClientRequest(
        name="Riverside Clinic",
        address="4 Mill Rd",
        travel_time="30 min",
        preferred_day="tuesday afternoon",
        job_length="Half day"
    ),
    ClientRequest(
        name="Northgate School",
        address="88 Park Ave",
        travel_time="20 min",
        preferred_day="",
        job_length="Half day 3 teams"
    )
]

SAMPLE_ROSTER = ["Team 1", "Team 2", "Team 3"]

# Expected greedy output for SAMPLE_CLIENTS on SAMPLE_ROSTER
EXPECTED_ASSIGNMENTS = [
    ("Team 1", "Acme Builders", "Mon AM"),
    ("Team 2", "Acme Builders", "Mon AM"),
    ("Team 3", "Acme Builders", "Mon PM"),
    ("Team 1", "Acme Builders", "Mon PM"),
    ("Team 2", "Riverside Clinic", "Tues PM"),
    ("Team 3", "Northgate School", "Mon AM"),
]

CSV_HEADER = ("Client Name,Address,Contact,Phone,Travel Time,Notes,"
              "Email,Site Type,Parking,Access,Date Requested,Job Length")

SAMPLE_CSV = "\n".join([
    CSV_HEADER,
    "*Acme Builders,12 Main St,,,15 min,,,,,,Monday,Full day 2 teams",
    "",
    "Riverside Clinic,4 Mill Rd,,,30 min,,,,,,tuesday afternoon,Half day",
    CSV_HEADER,
    "Northgate School,88 Park Ave,,,20 min,,,,,,,Half day 3 teams",
    "Short Row,1 High St",
]) + "\n"


def as_triples(assignments):
    """(team, client name, session) tuples for easy comparison"""
    return [(a.team, a.client.name, a.session) for a in assignments]


def write_temp_csv(text: str, directory: str = None) -> str:
    """Write CSV text to a temporary file and return its path."""
    fd, path = tempfile.mkstemp(suffix=".csv", dir=directory)
    with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    return path


def create_test_config(tmp_dir: str):
    """Default configuration with logs and output redirected to tmp_dir."""
    from worksite_assigner.config import ConfigManager

    config = ConfigManager(os.path.join(tmp_dir, "missing_config.json")).config
    config.monitoring.log_directory = os.path.join(tmp_dir, "logs")
    config.output.output_directory = os.path.join(tmp_dir, "schedules")
    return config


def isolate_environment(test_case):
    """Run a test with no WORKSITE_* variables and no .env file loading."""
    from unittest.mock import patch

    env = patch.dict(os.environ, {}, clear=True)
    dotenv = patch("worksite_assigner.config.load_dotenv")
    for patcher in (env, dotenv):
        patcher.start()
        test_case.addCleanup(patcher.stop)
