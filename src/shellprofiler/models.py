"""Core data models for the Shell Profiler."""

from datetime import datetime
from typing import Optional, Dict, List, FrozenSet, Tuple
from pydantic import BaseModel, ConfigDict, Field


# Shells are always visited in this order; unknown shells sort after, by name.
SHELL_ORDER = ("bash", "zsh", "fish")


def shell_sort_key(shell: str) -> tuple[int, str]:
    """Sort key placing known shells in canonical order."""
    if shell in SHELL_ORDER:
        return (SHELL_ORDER.index(shell), shell)
    return (len(SHELL_ORDER), shell)


class CommandEntry(BaseModel):
    """A single parsed history line."""

    model_config = ConfigDict(frozen=True)

    command: str
    timestamp: Optional[datetime] = None  # None when the history format records no time
    categories: FrozenSet[str] = Field(default_factory=frozenset)


class ConfigFileInfo(BaseModel):
    """A configuration file that was found and read."""

    path: str
    modified: datetime
    content: str = ""


class PluginInfo(BaseModel):
    """A shell plugin discovered on disk."""

    name: str
    source: str
    last_updated: datetime


class ShellConfig(BaseModel):
    """Configuration inventory for one shell."""

    config_files: Dict[str, ConfigFileInfo] = Field(default_factory=dict)
    aliases: Dict[str, str] = Field(default_factory=dict)
    environment: Dict[str, str] = Field(default_factory=dict)
    plugins: List[PluginInfo] = Field(default_factory=list)


class TechProfile(BaseModel):
    """Technology profile derived from command usage."""

    primary_role: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)
    secondary_skills: List[str] = Field(default_factory=list)
    proficiency: Dict[str, float] = Field(default_factory=dict)


class WorkPatterns(BaseModel):
    """When and how the user works."""

    peak_hours: List[int] = Field(default_factory=list, max_length=3)
    productivity: Dict[str, float] = Field(default_factory=dict)
    common_workflows: List[str] = Field(default_factory=list)


class ToolUsage(BaseModel):
    """Raw usage counts per tool family."""

    editors: Dict[str, int] = Field(default_factory=dict)
    languages: Dict[str, int] = Field(default_factory=dict)
    build_tools: Dict[str, int] = Field(default_factory=dict)


class Insights(BaseModel):
    """All derived aggregates."""

    technical_profile: TechProfile = Field(default_factory=TechProfile)
    work_patterns: WorkPatterns = Field(default_factory=WorkPatterns)
    tool_usage: ToolUsage = Field(default_factory=ToolUsage)
    command_complexity: float = 0.0
    recommendations: List[str] = Field(default_factory=list)
    workflow_tips: List[str] = Field(default_factory=list)


class ShellData(BaseModel):
    """Aggregate root of one analysis run."""

    histories: Dict[str, List[CommandEntry]] = Field(default_factory=dict)
    shell_configs: Dict[str, ShellConfig] = Field(default_factory=dict)
    insights: Insights = Field(default_factory=Insights)

    def ordered_histories(self) -> List[Tuple[str, List[CommandEntry]]]:
        """Histories as (shell, entries) pairs in canonical shell order."""
        return [
            (shell, self.histories[shell])
            for shell in sorted(self.histories, key=shell_sort_key)
        ]

    @property
    def total_commands(self) -> int:
        return sum(len(entries) for entries in self.histories.values())


class TimelineEntry(BaseModel):
    """A notable command selected for chronological display."""

    model_config = ConfigDict(frozen=True)

    timestamp: Optional[datetime] = None
    command: str
    shell: str


class NarrativeSection(BaseModel):
    """One section of the generated narrative."""

    title: str
    description: str
    quotes: List[str] = Field(default_factory=list)


class NarrativeResponse(BaseModel):
    """Structured narrative returned by the LLM."""

    sections: List[NarrativeSection] = Field(default_factory=list)


class AnalysisReport(BaseModel):
    """Complete result of a run, including the optional narrative."""

    shell_data: ShellData
    timeline: List[TimelineEntry] = Field(default_factory=list)
    narrative: List[NarrativeSection] = Field(default_factory=list)
    narrative_error: Optional[str] = None
