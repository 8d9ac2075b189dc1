"""Installed-tool detection via version probes."""

import logging
import shlex
import subprocess
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Callable, Iterable, Optional

from .classifier import PACKAGE_MANAGERS

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 3.0
DEFAULT_MAX_WORKERS = 8
DEFAULT_MAX_CANDIDATES = 10

PROBE_COMMANDS = {
    # Programming Languages
    "python": "python --version",
    "python3": "python3 --version",
    "node": "node --version",
    "go": "go version",
    "java": "java -version",
    "ruby": "ruby --version",
    "php": "php --version",
    "rust": "rustc --version",
    "perl": "perl --version",
    "scala": "scala -version",
    "kotlin": "kotlin -version",
    "swift": "swift --version",
    "r": "R --version",
    "julia": "julia --version",
    "haskell": "ghc --version",
    "elixir": "elixir --version",
    "erlang": "erl -version",
    "clang": "clang --version",
    "gcc": "gcc --version",
    "dotnet": "dotnet --version",
    "lua": "lua -v",
    "ocaml": "ocaml -version",
    "dart": "dart --version",
    "zig": "zig version",
    "nim": "nim --version",
    # Build Tools & Package Managers
    "maven": "mvn --version",
    "gradle": "gradle --version",
    "npm": "npm --version",
    "yarn": "yarn --version",
    "pnpm": "pnpm --version",
    "pip": "pip --version",
    "cargo": "cargo --version",
    "composer": "composer --version",
    "bundler": "bundle --version",
    # DevOps & Cloud Tools
    "docker": "docker --version",
    "kubectl": "kubectl version --client",
    "terraform": "terraform version",
    "ansible": "ansible --version",
    "vagrant": "vagrant --version",
    "helm": "helm version",
    "aws": "aws --version",
    "gcloud": "gcloud --version",
    "azure": "az --version",
    # Version Control
    "git": "git --version",
    "svn": "svn --version",
    "mercurial": "hg --version",
    # Databases
    "mysql": "mysql --version",
    "psql": "psql --version",
    "mongodb": "mongod --version",
    "redis": "redis-cli --version",
    # Web Servers & Tools
    "nginx": "nginx -v",
    "apache2": "apache2 -v",
    "curl": "curl --version",
    "wget": "wget --version",
    # Text Editors & IDEs
    "vim": "vim --version",
    "nvim": "nvim --version",
    "emacs": "emacs --version",
    "code": "code --version",
    # Shell & Terminal Tools
    "zsh": "zsh --version",
    "bash": "bash --version",
    "fish": "fish --version",
    "tmux": "tmux -V",
}


def run_version_probe(tool: str, timeout: float = DEFAULT_PROBE_TIMEOUT) -> bool:
    """Run the version command for ``tool``; any failure means not installed."""
    command = PROBE_COMMANDS.get(tool, f"{tool} --version")
    try:
        subprocess.run(
            shlex.split(command),
            check=True,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        logger.debug("Probe %r: binary not found", command)
        return False
    except subprocess.TimeoutExpired:
        logger.debug("Probe %r: timed out after %.1fs", command, timeout)
        return False
    except (subprocess.CalledProcessError, OSError) as e:
        logger.debug("Probe %r failed: %s", command, e)
        return False
    return True


class ToolDetector:
    """Answers "is this tool installed?" once per tool for the whole run."""

    def __init__(
        self,
        probe: Optional[Callable[[str], bool]] = None,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        """Initialize detector.

        Args:
            probe: Tool identifier -> installed; defaults to a real version probe
            timeout: Seconds allowed per real probe
            max_workers: Upper bound on concurrently running probes
        """
        self._probe = probe or partial(run_version_probe, timeout=timeout)
        self.max_workers = max(1, max_workers)
        self._cache: dict[str, bool] = {}

    def is_installed(self, tool: str) -> bool:
        if tool not in self._cache:
            self._cache[tool] = self._probe(tool)
        return self._cache[tool]

    def probe_all(self, tools: Iterable[str]) -> dict[str, bool]:
        """Probe every tool not already cached, in parallel."""
        tools = list(dict.fromkeys(tools))
        pending = [tool for tool in tools if tool not in self._cache]

        if pending:
            workers = min(self.max_workers, len(pending))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(self._probe, pending))
            self._cache.update(zip(pending, results))
            logger.debug(
                "Probed %d tools, %d installed", len(pending), sum(results)
            )

        return {tool: self._cache[tool] for tool in tools}

    def select_candidates(
        self, commands: Iterable[str], limit: int = DEFAULT_MAX_CANDIDATES
    ) -> list[str]:
        """Pick the installed tools most plausibly used in ``commands``.

        Installed identifiers are ranked by how many commands mention them
        (by name or package manager), then alphabetically, and the first
        ``limit`` are kept.
        """
        installed = [tool for tool, ok in self.probe_all(PROBE_COMMANDS).items() if ok]
        commands = list(commands)

        def mentions(tool: str) -> int:
            manager = PACKAGE_MANAGERS.get(tool)
            return sum(
                1 for command in commands
                if tool in command or (manager and manager in command)
            )

        counts = {tool: mentions(tool) for tool in installed}
        ranked = sorted(installed, key=lambda tool: (-counts[tool], tool))
        return ranked[:limit]
