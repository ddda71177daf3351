"""
Worksite Team Assigner

Greedy, load-balanced assignment of worksite job requests to teams across a
fixed weekly grid of six sessions (Mon/Tues/Wed, morning and afternoon).
"""

__version__ = "1.0.0"

from .sessions import ALL_SESSIONS, get_available_sessions
from .parsing import Requirement, normalize_preference, parse_requirement
from .tools import (
    Assignment,
    AssignmentAnalyzer,
    AssignmentResult,
    AssignmentValidator,
    ClientRequest,
    LoadBalancedTeamSelector,
    Shortfall,
    TeamAssigner
)

__all__ = [
    "ALL_SESSIONS",
    "get_available_sessions",
    "Requirement",
    "normalize_preference",
    "parse_requirement",
    "Assignment",
    "AssignmentAnalyzer",
    "AssignmentResult",
    "AssignmentValidator",
    "ClientRequest",
    "LoadBalancedTeamSelector",
    "Shortfall",
    "TeamAssigner",
]
