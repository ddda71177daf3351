"""
Worksite Team Assigner - Core Tool Implementations

Greedy, load-balanced assignment of worksite clients to teams across the weekly
session grid:

1. LoadBalancedTeamSelector - Picks the least-loaded eligible teams for a session
2. TeamAssigner - Single-pass greedy assignment, client by client, in input order
3. AssignmentValidator - Checks run invariants (unique team/session, team cap, roster)
4. AssignmentAnalyzer - Per-team view, per-client requirement summary, load balance

Partial fulfilment is valid output: when a client runs out of candidate sessions
or eligible teams the shortfall is recorded and processing moves on.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from collections import defaultdict
from dataclasses import dataclass, field

from .parsing import normalize_preference, parse_requirement
from .sessions import SESSIONS_PER_TEAM, get_available_sessions, is_valid_session


@dataclass(frozen=True)
class ClientRequest:
    """One worksite job request"""
    name: str
    address: str = ""
    travel_time: str = ""
    preferred_day: Optional[str] = ""
    job_length: Optional[str] = ""

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'address': self.address,
            'travel_time': self.travel_time,
            'preferred_day': self.preferred_day or "",
            'job_length': self.job_length or "",
        }


@dataclass(frozen=True)
class Assignment:
    """Single assignment: team to client for a session"""
    team: str
    client: ClientRequest
    session: str

    def to_dict(self) -> Dict:
        return {
            'team': self.team,
            'client': self.client.name,
            'session': self.session,
        }


@dataclass(frozen=True)
class Shortfall:
    """
    A requirement that could not be met in full.

    kind == 'session': the client ran out of candidate sessions
    kind == 'team': fewer eligible teams than required for a session
    """
    client: ClientRequest
    kind: str
    requested: int
    assigned: int
    session: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'client': self.client.name,
            'kind': self.kind,
            'session': self.session,
            'requested': self.requested,
            'assigned': self.assigned,
        }


@dataclass
class AssignmentResult:
    """Output of one assignment run"""
    assignments: List[Assignment]
    team_sessions: Dict[str, List[str]]
    shortfalls: List[Shortfall] = field(default_factory=list)

    @property
    def roster(self) -> List[str]:
        return list(self.team_sessions.keys())

    def team_loads(self) -> Dict[str, int]:
        return {team: len(sessions) for team, sessions in self.team_sessions.items()}

    def to_dict(self) -> Dict:
        return {
            'assignments': [a.to_dict() for a in self.assignments],
            'team_sessions': {team: list(s) for team, s in self.team_sessions.items()},
            'shortfalls': [s.to_dict() for s in self.shortfalls],
        }


class LoadBalancedTeamSelector:
    """
    Chooses teams for one session.

    Eligible teams do not already hold the session and are under the session cap.
    They are ranked by current load (fewest held sessions first); ties keep
    roster order because the sort is stable.
    """

    def __init__(self, max_sessions_per_team: int = SESSIONS_PER_TEAM):
        self.max_sessions_per_team = max_sessions_per_team

    def eligible_teams(self, session: str, team_sessions: Dict[str, List[str]]) -> List[str]:
        """Eligible teams for a session, least loaded first"""
        eligible = [
            team for team, held in team_sessions.items()
            if session not in held and len(held) < self.max_sessions_per_team
        ]
        eligible.sort(key=lambda team: len(team_sessions[team]))
        return eligible

    def select(self, session: str, teams_needed: int,
               team_sessions: Dict[str, List[str]]) -> List[str]:
        """Pick up to teams_needed teams; fewer if not enough are eligible"""
        return self.eligible_teams(session, team_sessions)[:teams_needed]


class TeamAssigner:
    """
    Greedy load-balanced assignment of clients to teams.

    Clients are processed strictly in input order. For each required session the
    earliest unused candidate (catalog order) is taken and the selector fills it
    with the least-loaded teams. Never backtracks, so a complete schedule is not
    guaranteed even when one exists.
    """

    def __init__(self, roster: Sequence[str], config=None,
                 selector: Optional[LoadBalancedTeamSelector] = None):
        # Duplicates collapse; first occurrence keeps its roster position
        self.roster = list(dict.fromkeys(roster))
        self.config = config

        if selector is None:
            max_sessions = SESSIONS_PER_TEAM
            if config is not None:
                max_sessions = min(config.assignment.max_sessions_per_team, SESSIONS_PER_TEAM)
            selector = LoadBalancedTeamSelector(max_sessions)
        self.selector = selector

    def _fresh_state(self, seed_sessions: Optional[Dict[str, Iterable[str]]] = None) -> Dict[str, List[str]]:
        """Run-local team -> held sessions, optionally pre-loaded"""
        state = {team: [] for team in self.roster}
        if seed_sessions:
            for team, sessions in seed_sessions.items():
                if team not in state:
                    continue
                for session in sessions:
                    if session not in state[team]:
                        state[team].append(session)
        return state

    def assign(self, clients: Iterable[ClientRequest],
               seed_sessions: Optional[Dict[str, Iterable[str]]] = None) -> AssignmentResult:
        """Assign every client in order and return the run's output snapshot."""
        team_sessions = self._fresh_state(seed_sessions)
        assignments: List[Assignment] = []
        shortfalls: List[Shortfall] = []

        for client in clients:
            requirement = parse_requirement(client.job_length)
            requested = normalize_preference(client.preferred_day)
            possible_sessions = get_available_sessions(requested)
            used_sessions: List[str] = []

            for _ in range(requirement.sessions_needed):
                available = [s for s in possible_sessions if s not in used_sessions]
                if not available:
                    shortfalls.append(Shortfall(
                        client=client, kind='session',
                        requested=requirement.sessions_needed,
                        assigned=len(used_sessions)
                    ))
                    break

                session = available[0]
                used_sessions.append(session)

                teams = self.selector.select(session, requirement.teams_needed, team_sessions)
                for team in teams:
                    team_sessions[team].append(session)
                    assignments.append(Assignment(team=team, client=client, session=session))

                if len(teams) < requirement.teams_needed:
                    shortfalls.append(Shortfall(
                        client=client, kind='team',
                        requested=requirement.teams_needed,
                        assigned=len(teams),
                        session=session
                    ))

        return AssignmentResult(
            assignments=assignments,
            team_sessions=team_sessions,
            shortfalls=shortfalls
        )


class AssignmentValidator:
    """
    Checks the invariants every assignment run must hold:

    - each (team, session) pair appears at most once
    - no team holds more than six sessions
    - sessions come from the catalog, teams from the roster
    """

    def __init__(self, roster: Sequence[str], max_sessions_per_team: int = SESSIONS_PER_TEAM):
        self.roster = list(dict.fromkeys(roster))
        self.max_sessions_per_team = max_sessions_per_team

    def validate(self, assignments: Iterable[Assignment]) -> Tuple[bool, List[str], Dict]:
        """
        Validate a list of assignments.
        Returns (is_valid, list_of_violations, violation_breakdown)
        """
        violations = []
        breakdown = defaultdict(int)

        seen_pairs = set()
        team_counts = defaultdict(int)

        for a in assignments:
            if a.team not in self.roster:
                violations.append(f"Unknown team {a.team} assigned to {a.client.name}")
                breakdown['unknown_team'] += 1

            if not is_valid_session(a.session):
                violations.append(f"Invalid session '{a.session}' for {a.client.name}")
                breakdown['invalid_session'] += 1

            pair = (a.team, a.session)
            if pair in seen_pairs:
                violations.append(f"Team {a.team} double-booked for {a.session} ({a.client.name})")
                breakdown['double_booked'] += 1
            seen_pairs.add(pair)

            team_counts[a.team] += 1

        for team, count in team_counts.items():
            if count > self.max_sessions_per_team:
                violations.append(
                    f"Team {team} holds {count} sessions but max is {self.max_sessions_per_team}"
                )
                breakdown['over_capacity'] += 1

        breakdown = dict(breakdown)
        breakdown['total'] = len(violations)
        return len(violations) == 0, violations, breakdown


class AssignmentAnalyzer:
    """Derived views over an assignment run for display and reporting."""

    def client_summary(self, clients: Iterable[ClientRequest]) -> List[Dict]:
        """Requirements table: one row per client in input order"""
        rows = []
        for client in clients:
            requirement = parse_requirement(client.job_length)
            rows.append({
                'name': client.name,
                'date_requested': normalize_preference(client.preferred_day),
                'sessions_needed': requirement.sessions_needed,
                'teams_needed': requirement.teams_needed,
            })
        return rows

    def group_by_team(self, result: AssignmentResult) -> Dict[str, List[Assignment]]:
        """Assignments grouped per team; every roster team present, possibly empty"""
        grouped = {team: [] for team in result.roster}
        for a in result.assignments:
            grouped.setdefault(a.team, []).append(a)
        return grouped

    def analyze(self, result: AssignmentResult,
                clients: Optional[Sequence[ClientRequest]] = None) -> Dict:
        """Load balance and fulfilment summary of a run."""
        loads = result.team_loads()
        load_values = list(loads.values()) or [0]

        fulfilment = []
        # The same client object may appear on several rows
        rows_by_identity = defaultdict(list)
        if clients is not None:
            for client in clients:
                requirement = parse_requirement(client.job_length)
                rows_by_identity[id(client)].append(len(fulfilment))
                fulfilment.append({
                    'name': client.name,
                    'required_slots': requirement.sessions_needed * requirement.teams_needed,
                    'assigned_slots': 0,
                })
            for a in result.assignments:
                rows = rows_by_identity.get(id(a.client))
                if not rows:
                    continue
                # Fill rows in input order, matching the order the assigner served them
                row = next((i for i in rows
                            if fulfilment[i]['assigned_slots'] < fulfilment[i]['required_slots']),
                           rows[-1])
                fulfilment[row]['assigned_slots'] += 1

        unmet = [f['name'] for f in fulfilment if f['assigned_slots'] < f['required_slots']]

        return {
            'team_loads': loads,
            'min_load': min(load_values),
            'max_load': max(load_values),
            'load_spread': max(load_values) - min(load_values),
            'total_assignments': len(result.assignments),
            'shortfalls': [s.to_dict() for s in result.shortfalls],
            'clients_fully_served': len(fulfilment) - len(unmet),
            'clients_partially_served': unmet,
        }

