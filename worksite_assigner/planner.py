"""
Worksite Team Planner

Loads client records, runs the load-balanced team assignment and reports the
result. The assignment tools are also exposed as LangChain StructuredTools so
an agent host can drive them.

Run: python -m worksite_assigner data/clients.csv --teams 3
"""

import argparse
import json
import os
import sys
from typing import List, Optional, Sequence
from datetime import datetime

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from .config import ConfigManager
from .loader import build_roster, load_clients
from .monitoring import RunMonitor
from .parsing import normalize_preference, parse_requirement
from .sessions import get_available_sessions
from .tools import (
    AssignmentAnalyzer, AssignmentResult, AssignmentValidator,
    ClientRequest, TeamAssigner
)


# Logging utility
class TeeLogger:
    """Logs to both console and file"""
    def __init__(self, filename):
        self.terminal = sys.stdout
        self.log = open(filename, 'w', encoding='utf-8')

    def write(self, message):
        self.terminal.write(message)
        self.log.write(message)

    def flush(self):
        self.terminal.flush()
        self.log.flush()

    def close(self):
        self.log.close()


# Pydantic models for tool inputs (required by LangChain)

class ParseRequirementInput(BaseModel):
    """Input for requirement parsing"""
    job_length: str = Field(default="", description="Free-text job length, e.g. 'Full day, 2 teams'")


class NormalizePreferenceInput(BaseModel):
    """Input for preference normalization"""
    preferred_day: str = Field(default="", description="Free-text preferred day, e.g. 'monday afternoon'")


class AvailableSessionsInput(BaseModel):
    """Input for session availability lookup"""
    preference: str = Field(default="Any Day", description="Normalized preference token, e.g. 'Tues Any'")


class AssignTeamsInput(BaseModel):
    """Input for team assignment - leave empty to use the configured roster"""
    team_names: Optional[List[str]] = Field(default=None, description="Ordered team roster (optional)")


class SummarizeAssignmentsInput(BaseModel):
    """Input for assignment summary - no fields, uses the last run"""


class ValidateAssignmentsInput(BaseModel):
    """Input for assignment validation - no fields, uses the last run"""


class WorksitePlanner:
    """
    Coordinates a worksite assignment session.

    Tools:
    1. Requirement Parser
    2. Preference Normalizer
    3. Availability Resolver
    4. Team Assigner
    5. Assignment Analyzer
    6. Assignment Validator
    """

    def __init__(self, clients_file: Optional[str] = None,
                 clients: Optional[Sequence[ClientRequest]] = None,
                 roster: Optional[Sequence[str]] = None,
                 config=None):
        """
        Initialize planner with client data.

        Args:
            clients_file: Path to a client CSV (ignored when clients is given)
            clients: Already-loaded client records
            roster: Ordered team names (defaults to the configured roster)
            config: Configuration object (optional)
        """
        if config is None:
            config = ConfigManager().config

        self.config = config
        self.monitor = RunMonitor(log_dir=config.monitoring.log_directory)

        if clients is not None:
            self.clients = list(clients)
        else:
            start = self.monitor.start_timer()
            self.clients = load_clients(clients_file or config.clients_file, config.input)
            self.monitor.end_timer(start, 'load')

        self.roster = self._resolve_roster(roster)

        self.analyzer = AssignmentAnalyzer()
        self.tools = self._create_tools()

        # Last run, for tools that report on it
        self.last_result: Optional[AssignmentResult] = None

    def _resolve_roster(self, roster: Optional[Sequence[str]]) -> List[str]:
        """Validate an explicit roster or build the configured default one"""
        settings = self.config.assignment
        if roster is None:
            roster = build_roster(settings.default_num_teams, settings.team_names,
                                  settings.team_name_template)

        roster = list(dict.fromkeys(name.strip() for name in roster if name and name.strip()))
        if not roster:
            raise ValueError("At least one team is required")
        if not settings.min_teams <= len(roster) <= settings.max_teams:
            raise ValueError(
                f"Number of teams must be between {settings.min_teams} and {settings.max_teams}, got {len(roster)}"
            )
        return roster

    def run(self, roster: Optional[Sequence[str]] = None) -> AssignmentResult:
        """Run one assignment over the loaded clients."""
        if not self.clients:
            raise ValueError("No client records loaded - upload a CSV file first")

        if roster is not None:
            self.roster = self._resolve_roster(roster)

        start = self.monitor.start_timer()
        result = TeamAssigner(self.roster, self.config).assign(self.clients)
        self.monitor.end_timer(start, 'assignment')

        if self.config.monitoring.enable_monitoring:
            self.monitor.record_run(len(self.clients), result)

        self.last_result = result
        return result

    def validate(self, result: AssignmentResult):
        validator = AssignmentValidator(result.roster, self.config.assignment.max_sessions_per_team)
        return validator.validate(result.assignments)

    def _create_tools(self) -> List[StructuredTool]:
        """Create LangChain tools from our implementations"""

        def parse_requirement_tool(job_length: str = "") -> str:
            """Parses sessions needed (1 or 2) and teams needed (1-4) from job length text."""
            requirement = parse_requirement(job_length)
            return json.dumps({
                "sessions_needed": requirement.sessions_needed,
                "teams_needed": requirement.teams_needed
            })

        def normalize_preference_tool(preferred_day: str = "") -> str:
            """Normalizes a preferred day note and lists the sessions it allows."""
            normalized = normalize_preference(preferred_day)
            return json.dumps({
                "normalized": normalized,
                "candidate_sessions": get_available_sessions(normalized)
            })

        def available_sessions_tool(preference: str = "Any Day") -> str:
            """Lists candidate sessions, in catalog order, for a normalized preference."""
            return json.dumps(get_available_sessions(preference))

        def assign_teams_tool(team_names: Optional[List[str]] = None) -> str:
            """
            Assigns all loaded clients to teams, least-loaded team first.

            Returns metadata about the run; use summarize_assignments for detail.
            """
            try:
                result = self.run(team_names)
            except ValueError as e:
                return json.dumps({"status": "error", "message": str(e)})

            return json.dumps({
                "status": "success",
                "num_assignments": len(result.assignments),
                "team_loads": result.team_loads(),
                "shortfalls": len(result.shortfalls),
                "message": f"Made {len(result.assignments)} assignments across {len(result.roster)} teams"
            })

        def summarize_assignments_tool() -> str:
            """Summarizes the last run: per-team sessions, load spread and unmet requirements."""
            if self.last_result is None:
                return json.dumps({"error": "No assignments available - run assign_teams first"})

            summary = self.analyzer.analyze(self.last_result, self.clients)
            summary["by_team"] = {
                team: [a.to_dict() for a in items]
                for team, items in self.analyzer.group_by_team(self.last_result).items()
            }
            return json.dumps(summary)

        def validate_assignments_tool() -> str:
            """Checks the last run for double-booked teams, over-capacity teams and unknown sessions."""
            if self.last_result is None:
                return json.dumps({"valid": False, "message": "No assignments available to validate"})

            is_valid, violations, breakdown = self.validate(self.last_result)
            return json.dumps({
                "valid": is_valid,
                "violations": violations,
                "breakdown": breakdown
            })

        tools = [
            StructuredTool.from_function(
                func=parse_requirement_tool,
                name="parse_requirement",
                description="Parse sessions and teams required from free-text job length",
                args_schema=ParseRequirementInput
            ),
            StructuredTool.from_function(
                func=normalize_preference_tool,
                name="normalize_preference",
                description="Normalize a free-text preferred day into a canonical day/session token",
                args_schema=NormalizePreferenceInput
            ),
            StructuredTool.from_function(
                func=available_sessions_tool,
                name="available_sessions",
                description="List candidate sessions for a normalized preference, earliest first",
                args_schema=AvailableSessionsInput
            ),
            StructuredTool.from_function(
                func=assign_teams_tool,
                name="assign_teams",
                description="Assign all loaded clients to teams with load balancing. Optionally pass a team roster.",
                args_schema=AssignTeamsInput
            ),
            StructuredTool.from_function(
                func=summarize_assignments_tool,
                name="summarize_assignments",
                description="Summarize the last assignment run per team and per client. No input needed.",
                args_schema=SummarizeAssignmentsInput
            ),
            StructuredTool.from_function(
                func=validate_assignments_tool,
                name="validate_assignments",
                description="Validate the last assignment run against booking invariants. No input needed.",
                args_schema=ValidateAssignmentsInput
            )
        ]

        return tools

    def save_results(self, result: AssignmentResult, output_dir: Optional[str] = None,
                     timestamp: Optional[str] = None) -> str:
        """Write the run to a timestamped JSON file and return its path"""
        output_dir = output_dir or self.config.output.output_directory
        timestamp = timestamp or datetime.now().strftime("%Y%m%d_%H%M%S")
        os.makedirs(output_dir, exist_ok=True)
        output_file = os.path.join(output_dir, f"assignments_{timestamp}.json")

        is_valid, violations, breakdown = self.validate(result)
        document = result.to_dict()
        document.update({
            'timestamp': timestamp,
            'roster': result.roster,
            'clients': [c.to_dict() for c in self.clients],
            'requirements': self.analyzer.client_summary(self.clients),
            'validation': {
                'is_valid': is_valid,
                'violations': violations,
                'breakdown': breakdown
            },
            'analysis': self.analyzer.analyze(result, self.clients)
        })

        with open(output_file, 'w') as f:
            json.dump(document, f, indent=2)

        return output_file

    def print_requirements(self):
        """Print the per-client requirements table"""
        rows = self.analyzer.client_summary(self.clients)
        print("\nWorksite Session & Team Requirements")
        print("-" * 80)
        print(f"{'Client Name':<32} {'Date Requested':<20} {'Sessions':>8} {'Teams':>6}")
        for row in rows:
            print(f"{row['name'][:32]:<32} {row['date_requested'][:20]:<20} "
                  f"{row['sessions_needed']:>8} {row['teams_needed']:>6}")

    def print_assignments(self, result: AssignmentResult):
        """Print assignments grouped by team"""
        print("\nTeam Assignments")
        for team, items in self.analyzer.group_by_team(result).items():
            print("=" * 80)
            print(f"{team} ({len(items)} sessions)")
            print("-" * 80)
            if not items:
                print("  (No assignments)")
                continue
            for a in items:
                job_length = a.client.job_length or "Not specified"
                print(f"  {a.session:<8} {a.client.name[:30]:<30} {a.client.travel_time:<10} {job_length}")

        if result.shortfalls:
            print("\n⚠️  SHORTFALLS:")
            for s in result.shortfalls:
                where = f" at {s.session}" if s.session else ""
                print(f"  - {s.client.name}: {s.assigned}/{s.requested} {s.kind}s{where}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Assign worksite clients to teams')
    parser.add_argument('clients_file', nargs='?', default=None,
                        help='Client CSV file (defaults to the configured clients_file)')
    parser.add_argument('--teams', type=int, default=None,
                        help='Number of teams')
    parser.add_argument('--team-names', nargs='+', default=None,
                        help='Team names in roster order')
    parser.add_argument('--config', type=str, default=None,
                        help='Configuration JSON file')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory for the assignment JSON')
    parser.add_argument('--log-dir', type=str, default=None,
                        help='Directory for run logs')
    parser.add_argument('--no-save', action='store_true',
                        help='Do not write the assignment JSON')
    parser.add_argument('--no-log', action='store_true',
                        help='Do not write run logs')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command line entry point. Returns a process exit code."""
    args = _build_parser().parse_args(argv)

    try:
        config = ConfigManager(args.config).config
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    if args.log_dir:
        config.monitoring.log_directory = args.log_dir

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    tee = None
    if not args.no_log:
        os.makedirs(config.monitoring.log_directory, exist_ok=True)
        log_file = os.path.join(config.monitoring.log_directory, f"assigner_run_{timestamp}.txt")
        tee = TeeLogger(log_file)
        sys.stdout = tee

    try:
        roster = None
        if args.teams is not None or args.team_names:
            num_teams = args.teams if args.teams is not None else len(args.team_names)
            roster = build_roster(num_teams, args.team_names,
                                  config.assignment.team_name_template)

        planner = WorksitePlanner(clients_file=args.clients_file, roster=roster, config=config)
        print(f"Loaded {len(planner.clients)} clients, {len(planner.roster)} teams: {', '.join(planner.roster)}")

        result = planner.run()

        planner.print_requirements()
        planner.print_assignments(result)

        is_valid, violations, _ = planner.validate(result)
        if not is_valid:
            print(f"\n❌ {len(violations)} booking violations")
            for v in violations[:10]:
                print(f"  - {v}")

        if config.output.save_assignments and not args.no_save:
            output_file = planner.save_results(result, args.output_dir, timestamp)
            print(f"\n✓ Assignments saved to: {output_file}")

        if config.monitoring.print_realtime_status:
            planner.monitor.print_realtime_status()
        if not args.no_log and config.monitoring.save_session_logs:
            planner.monitor.save_session_log()

        return 0

    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1

    finally:
        if tee is not None:
            sys.stdout = tee.terminal
            tee.close()


if __name__ == "__main__":
    sys.exit(main())
