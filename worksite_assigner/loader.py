"""
Client CSV loading

Turns an uploaded client spreadsheet (exported as CSV) into ClientRequest
records. The first non-empty row is the header; repeated header rows are
dropped; columns are mapped by position.
"""

import csv
import io
import os
from typing import List, Optional

from .config import InputConfig
from .tools import ClientRequest


def _column(row: List[str], index: int) -> str:
    return row[index] if 0 <= index < len(row) else ""


def parse_clients_csv(text: str, input_config=None) -> List[ClientRequest]:
    """Parse CSV text into client records. Header-only or empty text yields []."""
    if input_config is None:
        input_config = InputConfig()

    rows = [row for row in csv.reader(io.StringIO(text))
            if any(cell.strip() for cell in row)]
    if len(rows) < 2:
        return []

    header = rows[0]
    clients = []
    for row in rows[1:]:
        if row == header:
            continue

        name = _column(row, input_config.name_column)
        if input_config.name_strip_char:
            # Only the first marker is removed ("*Acme*" -> "Acme*")
            name = name.replace(input_config.name_strip_char, "", 1)

        clients.append(ClientRequest(
            name=name.strip(),
            address=_column(row, input_config.address_column),
            travel_time=_column(row, input_config.travel_time_column),
            preferred_day=_column(row, input_config.preferred_day_column),
            job_length=_column(row, input_config.job_length_column),
        ))

    return clients


def load_clients(path: str, input_config=None) -> List[ClientRequest]:
    """Read a client CSV file from disk."""
    # A directory is reported the same way as a missing file
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Clients file not found: {path}")

    input_config = input_config or InputConfig()
    encoding = input_config.encoding
    with open(path, 'r', encoding=encoding, newline='') as f:
        text = f.read()

    return parse_clients_csv(text, input_config)


def build_roster(num_teams: int, team_names: Optional[List[str]] = None,
                 name_template: str = "Team {n}") -> List[str]:
    """
    Build a roster of num_teams names.

    Given names are used in order; blanks and missing entries fall back to
    the template ("Team 1", "Team 2", ...).
    """
    team_names = team_names or []
    roster = []
    for i in range(num_teams):
        name = team_names[i].strip() if i < len(team_names) and team_names[i] else ""
        roster.append(name or name_template.format(n=i + 1))
    return roster
