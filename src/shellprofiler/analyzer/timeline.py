"""Selection of notable commands for the timeline view."""

from typing import Mapping, Sequence
from ..models import CommandEntry, TimelineEntry, shell_sort_key


# Hard cap on curated entries; a configured limit can only lower it
MAX_TIMELINE_ENTRIES = 15
DEFAULT_TIMELINE_LIMIT = MAX_TIMELINE_ENTRIES

NOTABLE_TOOLS = (
    "git", "docker", "kubectl", "terraform", "ansible", "make", "npm", "go",
    "python", "java", "ssh", "scp", "curl", "wget", "vim", "nvim", "emacs", "code",
)
SHELL_METACHARACTERS = "|><&;"
COMMON_TYPOS = frozenset(
    {"sl", "cd..", "pythoon", "gti", "vmi", "nivm", "emasc", "clea", "exot"}
)


def is_typo_command(command: str) -> bool:
    return command in COMMON_TYPOS


def is_interesting_command(command: str) -> bool:
    """Notable tool prefix, shell metacharacters, or a well-known typo."""
    if command.startswith(NOTABLE_TOOLS):
        return True
    if any(ch in command for ch in SHELL_METACHARACTERS):
        return True
    return is_typo_command(command)


class TimelineCurator:
    """Picks a bounded, de-duplicated set of interesting commands."""

    def __init__(self, limit: int = DEFAULT_TIMELINE_LIMIT):
        self.limit = min(limit, MAX_TIMELINE_ENTRIES)

    def curate(self, histories: Mapping[str, Sequence[CommandEntry]]) -> list[TimelineEntry]:
        """Collect interesting commands, first occurrence only.

        Shells are scanned in canonical order and scanning stops as soon as
        ``limit`` entries are collected, even if shells remain unscanned.
        """
        timeline: list[TimelineEntry] = []
        seen: set[str] = set()

        if self.limit <= 0:
            return timeline

        for shell in sorted(histories, key=shell_sort_key):
            for entry in histories[shell]:
                if entry.command in seen or not is_interesting_command(entry.command):
                    continue

                seen.add(entry.command)
                timeline.append(
                    TimelineEntry(timestamp=entry.timestamp, command=entry.command, shell=shell)
                )
                if len(timeline) >= self.limit:
                    return timeline

        return timeline
