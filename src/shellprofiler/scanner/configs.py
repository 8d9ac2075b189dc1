"""Shell configuration file reading and plugin discovery."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional
from ..models import ConfigFileInfo, PluginInfo, ShellConfig
from ..paths import expand_path
from ..analyzer.config_parser import parse_config_content

logger = logging.getLogger(__name__)


CONFIG_PATHS = {
    "bash": ["~/.bashrc", "~/.bash_profile", "~/.bash_aliases"],
    "zsh": ["~/.zshrc", "~/.zsh_plugins", "~/.zprofile"],
    "fish": ["~/.config/fish/config.fish", "~/.config/fish/functions", "~/.config/fish/conf.d"],
}

# Plugin managers recognized by the presence of their directory
ZSH_PLUGIN_MANAGERS = ["~/.antigen", "~/.zinit", "~/.zplug"]
BASH_PLUGIN_MANAGERS = ["~/.bash_it", "~/.local/share/bash-completion"]
OH_MY_ZSH_PLUGINS = "~/.oh-my-zsh/plugins"
FISH_CONF_D = "~/.config/fish/conf.d"


def _mtime(path: Path) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(path.stat().st_mtime)
    except OSError:
        return None


def _list_dir(root: Path) -> list[Path]:
    if not root.is_dir():
        return []
    try:
        return sorted(root.iterdir())
    except OSError:
        return []  # Skip directories we can't access


class ConfigReader:
    """Reads configuration files and probes plugin directories for a shell."""

    def __init__(self, home: Path, paths: Optional[dict[str, list[str]]] = None):
        """Initialize reader.

        Args:
            home: Home directory used for ``~`` expansion
            paths: Shell name -> config file paths; defaults to CONFIG_PATHS
        """
        self.home = home
        self.paths = CONFIG_PATHS if paths is None else paths

    def read(self, shell: str) -> ShellConfig:
        """Collect config files, aliases, environment and plugins for ``shell``.

        Files are read in declared order, so on duplicate names the value from
        the later file wins.
        """
        config = ShellConfig()

        for logical_path in self.paths.get(shell, []):
            info = self._read_file(logical_path)
            if info is None:
                continue
            config.config_files[logical_path] = info

            aliases, environment = parse_config_content(info.content)
            config.aliases.update(aliases)
            config.environment.update(environment)

        config.plugins = self.detect_plugins(shell)
        return config

    def _read_file(self, logical_path: str) -> Optional[ConfigFileInfo]:
        path = expand_path(logical_path, self.home)
        if not path.is_file():
            return None

        modified = _mtime(path)
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Could not read config %s: %s", path, e)
            return None
        if modified is None:
            return None

        return ConfigFileInfo(path=str(path), modified=modified, content=content)

    def detect_plugins(self, shell: str) -> list[PluginInfo]:
        """Probe known plugin-manager layouts for ``shell``."""
        if shell == "zsh":
            return self._subdirectories(OH_MY_ZSH_PLUGINS) + self._managers(ZSH_PLUGIN_MANAGERS)
        if shell == "fish":
            return self._suffixed_files(FISH_CONF_D, ".fish")
        if shell == "bash":
            return self._managers(BASH_PLUGIN_MANAGERS)
        return []

    def _subdirectories(self, logical_path: str) -> list[PluginInfo]:
        """One plugin per subdirectory, e.g. oh-my-zsh's plugins/<name>/."""
        root = expand_path(logical_path, self.home)
        plugins = []
        for entry in _list_dir(root):
            modified = _mtime(entry)
            if entry.is_dir() and modified is not None:
                plugins.append(
                    PluginInfo(name=entry.name, source=str(entry), last_updated=modified)
                )
        return plugins

    def _suffixed_files(self, logical_path: str, suffix: str) -> list[PluginInfo]:
        """One plugin per ``*<suffix>`` file in a directory."""
        root = expand_path(logical_path, self.home)
        plugins = []
        for entry in _list_dir(root):
            modified = _mtime(entry)
            if entry.name.endswith(suffix) and modified is not None:
                plugins.append(
                    PluginInfo(
                        name=entry.name[: -len(suffix)],
                        source=str(entry),
                        last_updated=modified,
                    )
                )
        return plugins

    def _managers(self, logical_paths: list[str]) -> list[PluginInfo]:
        """One entry per plugin-manager directory present."""
        plugins = []
        for logical_path in logical_paths:
            path = expand_path(logical_path, self.home)
            modified = _mtime(path)
            if path.is_dir() and modified is not None:
                plugins.append(
                    PluginInfo(name=Path(logical_path).name, source=str(path), last_updated=modified)
                )
        return plugins
