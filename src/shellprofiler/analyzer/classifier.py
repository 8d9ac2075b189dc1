"""Command normalization, categorization and tool detection."""

import re
from typing import Callable, Iterable, Mapping, Optional, Sequence


CATEGORY_RULES: dict[str, tuple[str, ...]] = {
    "development": ("git", "docker", "npm", "go", "python"),
    "system": ("sudo", "systemctl", "ps", "top"),
    "file": ("ls", "cd", "cp", "mv", "rm"),
}

PACKAGE_MANAGERS = {
    "python": "pip",
    "node": "npm",
    "go": "go get",
    "rust": "cargo",
    "ruby": "gem",
    "php": "composer",
}

DEV_TOOLS = ("git", "docker", "kubectl", "terraform", "ansible", "make")
EDITORS = ("vim", "nvim", "emacs", "code", "nano")
BUILD_TOOLS = ("make", "maven", "gradle", "npm", "yarn", "pip", "cargo", "composer", "bundler")

# zsh EXTENDED_HISTORY: ": <epoch>:<duration>;<command>"
ZSH_EXTENDED_RE = re.compile(r"^:\s*(\d+):\d+;")


def clean_history_line(line: str) -> str:
    """Normalize a raw history line to the invoked command.

    Metadata prefixes are stripped. Comment lines and lines that are empty
    after cleaning yield an empty string and should be dropped.
    """
    text = line.strip()
    match = ZSH_EXTENDED_RE.match(text)
    if match:
        text = text[match.end():].strip()
    if not text or text.startswith("#"):
        return ""
    return text


def categorize_command(
    command: str, rules: Optional[Mapping[str, Sequence[str]]] = None
) -> frozenset[str]:
    """Tag a command with every category whose prefix list matches it."""
    rules = CATEGORY_RULES if rules is None else rules
    return frozenset(
        category
        for category, prefixes in rules.items()
        if any(command.startswith(prefix) for prefix in prefixes)
    )


class CommandClassifier:
    """Classifies commands against the tools confirmed installed on this host."""

    def __init__(
        self,
        is_installed: Callable[[str], bool],
        candidates: Iterable[str] = (),
    ):
        """Initialize classifier.

        Args:
            is_installed: Maps a tool identifier to whether it is installed
            candidates: Installed language/tool identifiers to look for
        """
        self.is_installed = is_installed
        self.candidates = list(candidates)

    def languages_in(self, command: str) -> list[str]:
        """Candidates mentioned by name or by package manager invocation."""
        found = []
        for identifier in self.candidates:
            manager = PACKAGE_MANAGERS.get(identifier)
            if identifier in command or (manager and manager in command):
                found.append(identifier)
        return found

    def prefixed_tools(self, command: str, tools: Sequence[str]) -> list[str]:
        """Tools the command starts with, restricted to installed ones."""
        return [
            tool for tool in tools
            if command.startswith(tool) and self.is_installed(tool)
        ]
