"""Home directory resolution and tilde expansion."""

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class HomeDirectoryError(RuntimeError):
    """Raised when the user's home directory cannot be determined."""


def resolve_home(override: Optional[Path] = None) -> Path:
    """Return the home directory used for all shell paths.

    Args:
        override: Explicit home directory (from configuration or tests)

    Returns:
        Absolute home directory path

    Raises:
        HomeDirectoryError: If no home directory can be resolved
    """
    if override is not None:
        return Path(override).expanduser()

    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryError(
            "Cannot resolve the home directory; set HOME or SHELL_PROFILER_HOME"
        ) from e


def expand_path(path: str, home: Path) -> Path:
    """Expand a leading ``~/`` against ``home``.

    Examples:
        ~/.bashrc -> /home/user/.bashrc
        /etc/profile -> /etc/profile
    """
    if path == "~":
        return home
    if path.startswith("~/"):
        return home / path[2:]
    return Path(path)
