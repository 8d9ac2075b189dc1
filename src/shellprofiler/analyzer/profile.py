"""Folding classified histories into profile aggregates."""

import logging
import re
from collections import Counter
from typing import Iterable, Mapping, Optional, Sequence
from ..models import (
    CommandEntry,
    Insights,
    ShellConfig,
    TechProfile,
    ToolUsage,
    WorkPatterns,
    shell_sort_key,
)
from .classifier import BUILD_TOOLS, DEV_TOOLS, EDITORS, CommandClassifier

logger = logging.getLogger(__name__)


WORKFLOW_PATTERNS = {
    "git_workflow": re.compile(r"git (commit|push|pull|merge)"),
    "build": re.compile(r"(make|build|compile)"),
    "deploy": re.compile(r"(deploy|kubectl|docker)"),
    "test": re.compile(r"test|spec|pytest"),
}

COMMAND_VARIETY = "Command Variety"
WORKFLOW_COMPLEXITY = "Workflow Complexity"

MAX_PEAK_HOURS = 3
MIN_ALIASES = 5
MIN_PLUGINS = 3
TIP_THRESHOLD = 10


def rank_counts(counts: Mapping[str, int]) -> list[tuple[str, int]]:
    """Order (key, count) pairs by count descending, then key ascending."""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def match_workflow_patterns(command: str) -> list[str]:
    return [label for label, regex in WORKFLOW_PATTERNS.items() if regex.search(command)]


def peak_hours(entries: Iterable[CommandEntry], limit: int = MAX_PEAK_HOURS) -> list[int]:
    """Busiest hours of day; on equal counts the earlier hour wins.

    Entries without a timestamp are not bucketed.
    """
    buckets = Counter(
        entry.timestamp.hour for entry in entries if entry.timestamp is not None
    )
    ranked = sorted(buckets.items(), key=lambda item: (-item[1], item[0]))
    return [hour for hour, _ in ranked[:limit]]


def productivity_metrics(
    entries: Sequence[CommandEntry], patterns: Mapping[str, int]
) -> dict[str, float]:
    """Command variety and workflow complexity, both in [0, 1]."""
    total = len(entries)
    if total == 0:
        return {COMMAND_VARIETY: 0.0, WORKFLOW_COMPLEXITY: 0.0}

    unique = len({entry.command for entry in entries})
    workflow = sum(patterns.get(label, 0) for label in WORKFLOW_PATTERNS)

    return {
        COMMAND_VARIETY: unique / total,
        # A command can match several patterns; the score is capped at 1
        WORKFLOW_COMPLEXITY: min(1.0, workflow / total),
    }


def command_complexity(entries: Sequence[CommandEntry]) -> float:
    """Percentage score of pipes, redirections and multi-argument commands."""
    if not entries:
        return 0.0

    score = 0.0
    for entry in entries:
        if any(ch in entry.command for ch in "|<>"):
            score += 1
        if len(entry.command.split()) > 2:
            score += 0.5

    return score / len(entries) * 100


def role_title(identifier: str) -> str:
    return f"{identifier[:1].upper()}{identifier[1:]} Developer"


class ProfileAggregator:
    """Derives TechProfile, WorkPatterns and ToolUsage from histories."""

    def __init__(self, classifier: CommandClassifier):
        """Initialize aggregator.

        Args:
            classifier: Classifier bound to this run's installed candidates
        """
        self.classifier = classifier

    def aggregate(
        self,
        histories: Mapping[str, Sequence[CommandEntry]],
        shell_configs: Optional[Mapping[str, ShellConfig]] = None,
    ) -> Insights:
        """Compute all insights over every shell's history.

        Args:
            histories: Shell name -> parsed entries
            shell_configs: Shell name -> configuration, used for recommendations

        Returns:
            Insights with every aggregate present (empty when there is no data)
        """
        entries = [
            entry
            for shell in sorted(histories, key=shell_sort_key)
            for entry in histories[shell]
        ]

        language_counts: Counter = Counter()
        tool_counts: Counter = Counter()
        pattern_counts: Counter = Counter()

        for entry in entries:
            language_counts.update(self.classifier.languages_in(entry.command))
            tool_counts.update(self.classifier.prefixed_tools(entry.command, DEV_TOOLS))
            pattern_counts.update(match_workflow_patterns(entry.command))

        logger.debug(
            "Aggregated %d commands: %d languages, %d tools",
            len(entries), len(language_counts), len(tool_counts),
        )

        work_patterns = WorkPatterns(
            peak_hours=peak_hours(entries),
            productivity=productivity_metrics(entries, pattern_counts),
            common_workflows=[label for label, count in rank_counts(pattern_counts) if count > 0],
        )

        return Insights(
            technical_profile=self.tech_profile(language_counts, tool_counts, len(entries)),
            work_patterns=work_patterns,
            tool_usage=self.tool_usage(entries),
            command_complexity=command_complexity(entries),
            recommendations=self.recommendations(shell_configs or {}),
            workflow_tips=self.workflow_tips(entries),
        )

    def tech_profile(
        self, language_counts: Mapping[str, int], tool_counts: Mapping[str, int], total: int
    ) -> TechProfile:
        """Build the tech profile from usage counts.

        Proficiency is each identifier's share of ``total``. Languages with a
        positive count form the tech stack; remaining tools become secondary
        skills.
        """
        ranked_languages = [(key, count) for key, count in rank_counts(language_counts) if count > 0]
        ranked_tools = [(key, count) for key, count in rank_counts(tool_counts) if count > 0]

        primary_role = role_title(ranked_languages[0][0]) if ranked_languages else None
        tech_stack = [key for key, _ in ranked_languages]
        secondary_skills = [key for key, _ in ranked_tools if key not in tech_stack]

        proficiency: dict[str, float] = {}
        if total > 0:
            for key, count in ranked_languages + ranked_tools:
                proficiency[key] = count / total

        return TechProfile(
            primary_role=primary_role,
            tech_stack=tech_stack,
            secondary_skills=secondary_skills,
            proficiency=proficiency,
        )

    def tool_usage(self, entries: Sequence[CommandEntry]) -> ToolUsage:
        """Raw editor, language and build tool tallies."""
        editors: Counter = Counter()
        languages: Counter = Counter()
        build_tools: Counter = Counter()

        for entry in entries:
            languages.update(self.classifier.languages_in(entry.command))
            editors.update(self.classifier.prefixed_tools(entry.command, EDITORS))
            build_tools.update(self.classifier.prefixed_tools(entry.command, BUILD_TOOLS))

        return ToolUsage(
            editors=dict(rank_counts(editors)),
            languages=dict(rank_counts(languages)),
            build_tools=dict(rank_counts(build_tools)),
        )

    def recommendations(self, shell_configs: Mapping[str, ShellConfig]) -> list[str]:
        tips = []
        for shell in sorted(shell_configs, key=shell_sort_key):
            config = shell_configs[shell]
            if len(config.aliases) < MIN_ALIASES:
                tips.append(
                    f"Consider adding more aliases to your {shell} configuration to improve productivity"
                )
            if len(config.plugins) < MIN_PLUGINS:
                tips.append(f"Explore popular {shell} plugins to enhance your shell experience")
        return tips

    def workflow_tips(self, entries: Sequence[CommandEntry]) -> list[str]:
        """Suggest aliases for frequently repeated two-word command prefixes."""
        prefixes: Counter = Counter()
        for entry in entries:
            parts = entry.command.split()
            if len(parts) > 1:
                prefixes[" ".join(parts[:2])] += 1

        return [
            f"You frequently use '{prefix}'. Consider creating an alias for this pattern"
            for prefix, count in rank_counts(prefixes)
            if count > TIP_THRESHOLD
        ]
