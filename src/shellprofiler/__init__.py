"""Shell Profiler - Derive a behavioral profile from shell history."""

__version__ = "0.1.0"

from .config import Config
from .models import (
    CommandEntry,
    ShellConfig,
    PluginInfo,
    TechProfile,
    WorkPatterns,
    ToolUsage,
    Insights,
    ShellData,
    TimelineEntry,
    AnalysisReport,
)
from .pipeline import analyze_shells, run_analysis

__all__ = [
    "Config",
    "CommandEntry",
    "ShellConfig",
    "PluginInfo",
    "TechProfile",
    "WorkPatterns",
    "ToolUsage",
    "Insights",
    "ShellData",
    "TimelineEntry",
    "AnalysisReport",
    "analyze_shells",
    "run_analysis",
]
