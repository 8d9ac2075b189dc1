"""Shell history file reading and format-aware parsing."""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional
from ..models import CommandEntry
from ..paths import expand_path
from ..analyzer.classifier import ZSH_EXTENDED_RE, categorize_command, clean_history_line

logger = logging.getLogger(__name__)


HISTORY_PATHS = {
    "bash": "~/.bash_history",
    "zsh": "~/.zsh_history",
    "fish": "~/.local/share/fish/fish_history",
}

BASH_TIMESTAMP_RE = re.compile(r"^#(\d{9,})\s*$")
FISH_CMD_PREFIX = "- cmd:"
FISH_WHEN_RE = re.compile(r"^\s+when:\s*(\d+)\s*$")


def _from_epoch(value: str) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(int(value))
    except (ValueError, OverflowError, OSError):
        return None


class HistoryReader:
    """Reads history files from their well-known locations."""

    def __init__(self, home: Path, paths: Optional[dict[str, str]] = None):
        """Initialize reader.

        Args:
            home: Home directory used for ``~`` expansion
            paths: Shell name -> history path; defaults to HISTORY_PATHS
        """
        self.home = home
        self.paths = HISTORY_PATHS if paths is None else paths

    def read_lines(self, shell: str) -> Optional[list[str]]:
        """Return the raw lines of a shell's history, or None if unavailable."""
        if shell not in self.paths:
            return None

        path = expand_path(self.paths[shell], self.home)
        if not path.is_file():
            logger.debug("No %s history at %s", shell, path)
            return None

        try:
            return path.read_text(encoding="utf-8", errors="replace").splitlines()
        except OSError as e:
            logger.debug("Could not read %s history %s: %s", shell, path, e)
            return None

    def read(
        self, shell: str, categorize: Callable[[str], frozenset[str]] = categorize_command
    ) -> Optional[list[CommandEntry]]:
        """Read and parse a shell's history into command entries."""
        lines = self.read_lines(shell)
        if lines is None:
            return None
        return parse_history(shell, lines, categorize)


def parse_history(
    shell: str,
    lines: list[str],
    categorize: Callable[[str], frozenset[str]] = categorize_command,
) -> list[CommandEntry]:
    """Parse history lines for ``shell`` into entries, oldest first.

    Timestamps are taken from the format where it records them (bash
    ``#<epoch>`` lines, zsh extended history, fish ``when:``) and left as
    None otherwise.
    """
    if shell == "fish":
        parsed = _parse_fish(lines)
    else:
        parsed = _parse_line_oriented(lines)

    return [
        CommandEntry(command=command, timestamp=timestamp, categories=categorize(command))
        for command, timestamp in parsed
    ]


def join_continuations(lines: list[str]) -> list[str]:
    """Merge physical lines ending in a backslash into one logical line."""
    logical: list[str] = []
    pending: Optional[str] = None

    for line in lines:
        if pending is not None:
            line = f"{pending} {line.strip()}"
            pending = None

        stripped = line.rstrip()
        if stripped.endswith("\\"):
            pending = stripped[:-1].rstrip()
            continue
        logical.append(line)

    if pending is not None:
        logical.append(pending)
    return logical


def _parse_line_oriented(lines: list[str]) -> list[tuple[str, Optional[datetime]]]:
    parsed = []
    pending_time: Optional[datetime] = None

    for line in join_continuations(lines):
        bash_stamp = BASH_TIMESTAMP_RE.match(line.strip())
        if bash_stamp:
            pending_time = _from_epoch(bash_stamp.group(1))
            continue

        zsh_stamp = ZSH_EXTENDED_RE.match(line.strip())
        timestamp = _from_epoch(zsh_stamp.group(1)) if zsh_stamp else pending_time
        pending_time = None

        command = clean_history_line(line)
        if command:
            parsed.append((command, timestamp))

    return parsed


def _parse_fish(lines: list[str]) -> list[tuple[str, Optional[datetime]]]:
    parsed: list[list] = []

    for line in lines:
        if line.startswith(FISH_CMD_PREFIX):
            command = clean_history_line(line[len(FISH_CMD_PREFIX):])
            # Keep a placeholder so a following "when:" binds to the right entry
            parsed.append([command, None])
            continue

        when = FISH_WHEN_RE.match(line)
        if when and parsed:
            parsed[-1][1] = _from_epoch(when.group(1))

    return [(command, timestamp) for command, timestamp in parsed if command]
