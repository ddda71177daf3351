"""
Free-text normalization for client records

Two prioritized rule chains:

1. Requirement Parser - job length text -> (sessions needed, teams needed)
2. Preference Normalizer - preferred day text -> canonical day/session token

Both are permissive: any text yields a result, nothing raises.
Rule order is significant and evaluated top to bottom.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .sessions import ANY_DAY


@dataclass(frozen=True)
class Requirement:
    """Sessions and simultaneous teams a client needs"""
    sessions_needed: int = 1
    teams_needed: int = 1


# (keyword, sessions) - later entries override earlier ones, so "half" beats "full"
SESSION_RULES: List[Tuple[str, int]] = [
    ("full", 2),
    ("half", 1),
]

# (pattern, teams) - checked in order, last match wins
TEAM_RULES: List[Tuple[re.Pattern, int]] = [
    (re.compile(r"\b2\s*teams?\b"), 2),
    (re.compile(r"\b3\s*teams?\b"), 3),
    (re.compile(r"\b4\s*teams?\b"), 4),
]


def parse_requirement(job_length: Optional[str]) -> Requirement:
    """Parse sessions and teams required from job length text."""
    lower = (job_length or "").lower()

    sessions = 1
    for keyword, value in SESSION_RULES:
        if keyword in lower:
            sessions = value

    teams = 1
    for pattern, value in TEAM_RULES:
        if pattern.search(lower):
            teams = value

    return Requirement(sessions_needed=sessions, teams_needed=teams)


# Preference normalization
# ------------------------

# (full name, abbreviations, label)
DAY_NAMES = [
    ("monday", ("mon",), "Mon"),
    ("tuesday", ("tue", "tues"), "Tues"),
    ("wednesday", ("wed",), "Wed"),
]


def _with_period(label: str, norm: str) -> str:
    if "pm" in norm:
        return f"{label} PM"
    if "am" in norm:
        return f"{label} AM"
    return f"{label} Any"


# Each rule: (predicate(norm), transform(norm)).
# Rules run on the lower-cased, trimmed text with morning/afternoon substituted.
Rule = Tuple[Callable[[str], bool], Callable[[str], str]]


def _build_rules() -> List[Rule]:
    rules: List[Rule] = []

    for full, _, label in DAY_NAMES:
        rules.append((lambda n, full=full: n == full,
                      lambda n, label=label: f"{label} Any"))

    for full, _, label in DAY_NAMES:
        rules.append((lambda n, full=full: full in n,
                      lambda n, label=label: _with_period(label, n)))

    for _, abbrevs, label in DAY_NAMES:
        rules.append((lambda n, abbrevs=abbrevs: n in abbrevs,
                      lambda n, label=label: f"{label} Any"))

    # "tues" contains "tue", so the shortest abbreviation covers the substring case
    for _, abbrevs, label in DAY_NAMES:
        rules.append((lambda n, short=abbrevs[0]: short in n,
                      lambda n, label=label: _with_period(label, n)))

    rules.append((lambda n: "am" in n or "pm" in n,
                  lambda n: n.upper()))

    return rules


PREFERENCE_RULES: List[Rule] = _build_rules()


def normalize_preference(preferred_day: Optional[str]) -> str:
    """
    Abbreviate free-text day/session notes into a canonical token.

    Returns one of "Any Day", "<Day> AM", "<Day> PM", "<Day> Any" for
    recognized text. Unrecognized text containing am/pm comes back upper-cased;
    anything else is returned exactly as given.
    """
    if not preferred_day or not preferred_day.strip():
        return ANY_DAY

    val = preferred_day.strip().lower()
    if val in ("any", "any day"):
        return ANY_DAY

    norm = val.replace("morning", "am").replace("afternoon", "pm")

    for predicate, transform in PREFERENCE_RULES:
        if predicate(norm):
            return transform(norm)

    # No rule matched: hand back the untouched input
    return preferred_day
