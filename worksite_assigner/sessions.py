"""
Session Catalog and Availability Resolver

The weekly grid is fixed: three days, a morning and an afternoon each.
Catalog order is the only tie-break used for "earliest available" selection.
"""

from typing import Dict, Iterable, List, Optional

DAYS = ["Mon", "Tues", "Wed"]
PERIODS = ["AM", "PM"]

# Priority order: Mon AM < Mon PM < Tues AM < Tues PM < Wed AM < Wed PM
ALL_SESSIONS = [f"{day} {period}" for day in DAYS for period in PERIODS]

ANY_DAY = "Any Day"

SESSIONS_PER_TEAM = len(ALL_SESSIONS)

_PRIORITY: Dict[str, int] = {session: i for i, session in enumerate(ALL_SESSIONS)}


def is_valid_session(token: Optional[str]) -> bool:
    """True if token is one of the six catalog sessions"""
    return token in _PRIORITY


def session_priority(session: str) -> int:
    """Catalog position of a session (0 = earliest)"""
    return _PRIORITY[session]


def sort_sessions(sessions: Iterable[str]) -> List[str]:
    """Sort sessions into catalog order"""
    return sorted(sessions, key=session_priority)


def sessions_for_day(day: str) -> List[str]:
    """Both sessions of a day label ('Mon', 'Tues', 'Wed'), in catalog order"""
    return [s for s in ALL_SESSIONS if s.split(" ")[0] == day]


def get_available_sessions(requested: Optional[str]) -> List[str]:
    """
    Resolve a normalized preference into an ordered candidate session list.

    - blank or "Any Day"        -> full catalog
    - a single catalog session  -> just that session
    - "<Day> Any" (or any token starting with a day label) -> that day's sessions
    - anything else             -> full catalog

    Always returns a fresh list.
    """
    if not requested or requested == ANY_DAY:
        return list(ALL_SESSIONS)

    if is_valid_session(requested):
        return [requested]

    for day in DAYS:
        if requested.startswith(day):
            return sessions_for_day(day)

    # Unrecognized fallback strings degrade to the whole week
    return list(ALL_SESSIONS)
