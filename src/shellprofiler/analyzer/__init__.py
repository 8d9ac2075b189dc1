"""Classification and aggregation of shell history."""

from .classifier import CommandClassifier, categorize_command, clean_history_line
from .config_parser import parse_config_content
from .profile import ProfileAggregator
from .timeline import TimelineCurator, is_interesting_command
from .tools import ToolDetector, run_version_probe

__all__ = [
    "CommandClassifier",
    "categorize_command",
    "clean_history_line",
    "parse_config_content",
    "ProfileAggregator",
    "TimelineCurator",
    "is_interesting_command",
    "ToolDetector",
    "run_version_probe",
]
