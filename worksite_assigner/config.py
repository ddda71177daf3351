"""
Configuration Management for Worksite Team Assigner

Centralized configuration with validation and environment support.
"""

import json
import os
from typing import Dict, Any, Optional, List
from dataclasses import MISSING, dataclass, field, fields, asdict

from dotenv import load_dotenv

from .sessions import SESSIONS_PER_TEAM


@dataclass
class AssignmentConfig:
    """Core assignment algorithm configuration"""
    max_sessions_per_team: int = SESSIONS_PER_TEAM
    default_num_teams: int = 2
    min_teams: int = 1
    max_teams: int = 20
    team_name_template: str = "Team {n}"
    team_names: List[str] = field(default_factory=list)


@dataclass
class InputConfig:
    """Client CSV column layout (zero-based positions)"""
    name_column: int = 0
    address_column: int = 1
    travel_time_column: int = 4
    preferred_day_column: int = 10
    job_length_column: int = 11
    name_strip_char: str = "*"
    encoding: str = "utf-8-sig"


@dataclass
class MonitoringConfig:
    """Run monitoring configuration"""
    enable_monitoring: bool = True
    log_directory: str = "logs"
    save_session_logs: bool = True
    print_realtime_status: bool = False


@dataclass
class OutputConfig:
    """Where and whether assignment results are written"""
    output_directory: str = "schedules"
    save_assignments: bool = True


@dataclass
class WorksiteAssignerConfig:
    """Complete configuration for the worksite team assigner"""
    assignment: AssignmentConfig
    input: InputConfig
    monitoring: MonitoringConfig
    output: OutputConfig

    # File paths
    clients_file: str = "data/clients.csv"
    config_file: str = "config/assigner_config.json"


class ConfigManager:
    """Manages configuration loading, validation, and environment overrides"""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or "config/assigner_config.json"
        self.config = self._load_config()

    def _load_config(self) -> WorksiteAssignerConfig:
        """Load configuration from file with environment overrides"""
        # Start with defaults
        config_dict = self._get_default_config()

        # Load from file if exists
        if os.path.exists(self.config_file):
            try:
                with open(self.config_file, 'r') as f:
                    file_config = json.load(f)
                config_dict = self._merge_configs(config_dict, file_config)
            except (OSError, json.JSONDecodeError) as e:
                print(f"Warning: Could not load config file {self.config_file}: {e}")

        # Apply environment overrides
        config_dict = self._apply_env_overrides(config_dict)

        # Validate and create config object
        return self._dict_to_config(config_dict)

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration as dictionary"""
        default_config = WorksiteAssignerConfig(
            assignment=AssignmentConfig(),
            input=InputConfig(),
            monitoring=MonitoringConfig(),
            output=OutputConfig()
        )
        config_dict = asdict(default_config)
        config_dict["config_file"] = self.config_file
        return config_dict

    def _merge_configs(self, base: Dict, override: Dict) -> Dict:
        """Recursively merge configuration dictionaries"""
        merged = base.copy()

        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._merge_configs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _apply_env_overrides(self, config_dict: Dict) -> Dict:
        """Apply environment variable overrides (a local .env file is honored)"""
        load_dotenv()

        # Assignment configuration
        if "WORKSITE_NUM_TEAMS" in os.environ:
            config_dict.setdefault("assignment", {})["default_num_teams"] = int(os.environ["WORKSITE_NUM_TEAMS"])

        if "WORKSITE_TEAM_NAMES" in os.environ:
            names = [n.strip() for n in os.environ["WORKSITE_TEAM_NAMES"].split(",") if n.strip()]
            config_dict.setdefault("assignment", {})["team_names"] = names

        if "WORKSITE_MAX_SESSIONS_PER_TEAM" in os.environ:
            config_dict.setdefault("assignment", {})["max_sessions_per_team"] = int(os.environ["WORKSITE_MAX_SESSIONS_PER_TEAM"])

        # Monitoring configuration
        if "WORKSITE_DISABLE_MONITORING" in os.environ:
            config_dict.setdefault("monitoring", {})["enable_monitoring"] = False

        if "WORKSITE_LOG_DIR" in os.environ:
            config_dict.setdefault("monitoring", {})["log_directory"] = os.environ["WORKSITE_LOG_DIR"]

        # Output configuration
        if "WORKSITE_OUTPUT_DIR" in os.environ:
            config_dict.setdefault("output", {})["output_directory"] = os.environ["WORKSITE_OUTPUT_DIR"]

        # File paths
        if "WORKSITE_CLIENTS_FILE" in os.environ:
            config_dict["clients_file"] = os.environ["WORKSITE_CLIENTS_FILE"]

        return config_dict

    def _dict_to_config(self, config_dict: Dict) -> WorksiteAssignerConfig:
        """Convert dictionary to typed configuration object"""
        try:
            config = WorksiteAssignerConfig(
                assignment=AssignmentConfig(**config_dict.get("assignment", {})),
                input=InputConfig(**config_dict.get("input", {})),
                monitoring=MonitoringConfig(**config_dict.get("monitoring", {})),
                output=OutputConfig(**config_dict.get("output", {})),
                clients_file=config_dict.get("clients_file", "data/clients.csv"),
                config_file=config_dict.get("config_file", self.config_file)
            )
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}")

        for section in (config.assignment, config.input, config.monitoring, config.output):
            self._check_field_types(section)
        for name in ("clients_file", "config_file"):
            if not isinstance(getattr(config, name), str):
                raise ValueError(f"Invalid configuration: {name} must be str")

        return config

    def _check_field_types(self, section):
        """Each value must have the type of its field's default"""
        for f in fields(section):
            value = getattr(section, f.name)
            default = f.default_factory() if f.default is MISSING else f.default
            expected = type(default)

            # bool is an int subclass; JSON true must not pass as a count
            wrong_bool = isinstance(value, bool) and expected is not bool
            if wrong_bool or not isinstance(value, expected):
                raise ValueError(
                    f"Invalid configuration: {type(section).__name__}.{f.name} "
                    f"must be {expected.__name__}, got {value!r}"
                )
            if expected is list and not all(isinstance(item, str) for item in value):
                raise ValueError(
                    f"Invalid configuration: {type(section).__name__}.{f.name} must be a list of strings"
                )

    def save_config(self, config_file: Optional[str] = None):
        """Save current configuration to file"""
        file_path = config_file or self.config_file

        # Ensure directory exists
        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        config_dict = asdict(self.config)

        with open(file_path, 'w') as f:
            json.dump(config_dict, f, indent=2)

        print(f"Configuration saved to {file_path}")

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of issues"""
        issues = []
        assignment = self.config.assignment

        if not 1 <= assignment.max_sessions_per_team <= SESSIONS_PER_TEAM:
            issues.append(f"max_sessions_per_team must be between 1 and {SESSIONS_PER_TEAM}")

        if assignment.min_teams < 1:
            issues.append("min_teams must be at least 1")

        if assignment.max_teams < assignment.min_teams:
            issues.append("max_teams must not be less than min_teams")

        if not assignment.min_teams <= assignment.default_num_teams <= assignment.max_teams:
            issues.append(
                f"default_num_teams must be between {assignment.min_teams} and {assignment.max_teams}"
            )

        if "{n}" not in assignment.team_name_template:
            issues.append("team_name_template must contain '{n}'")

        columns = [
            self.config.input.name_column,
            self.config.input.address_column,
            self.config.input.travel_time_column,
            self.config.input.preferred_day_column,
            self.config.input.job_length_column,
        ]
        if any(c < 0 for c in columns):
            issues.append("CSV column positions must be non-negative")

        return issues

    def print_config_summary(self):
        """Print human-readable configuration summary"""
        print("\n" + "="*60)
        print("🔧 ASSIGNER CONFIGURATION")
        print("="*60)

        print(f"\n📋 ASSIGNMENT:")
        print(f"  Max sessions per team: {self.config.assignment.max_sessions_per_team}")
        print(f"  Default teams: {self.config.assignment.default_num_teams}")
        print(f"  Team range: {self.config.assignment.min_teams}-{self.config.assignment.max_teams}")
        if self.config.assignment.team_names:
            print(f"  Team names: {', '.join(self.config.assignment.team_names)}")

        print(f"\n📥 INPUT COLUMNS:")
        print(f"  Name: {self.config.input.name_column}")
        print(f"  Preferred day: {self.config.input.preferred_day_column}")
        print(f"  Job length: {self.config.input.job_length_column}")

        print(f"\n📁 FILES:")
        print(f"  Clients: {self.config.clients_file}")
        print(f"  Output dir: {self.config.output.output_directory}")
        print(f"  Log dir: {self.config.monitoring.log_directory}")

        issues = self.validate_config()
        if issues:
            print(f"\n⚠️  CONFIGURATION ISSUES:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"\n✅ Configuration is valid")

        print("="*60)


# Convenience function for easy access
def load_config(config_file: Optional[str] = None) -> WorksiteAssignerConfig:
    """Load and return assigner configuration"""
    manager = ConfigManager(config_file)
    return manager.config
