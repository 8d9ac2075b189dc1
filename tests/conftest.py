"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path
from shellprofiler.config import Config
from shellprofiler.analyzer.tools import ToolDetector


INSTALLED_TOOLS = {"git", "docker", "npm", "node", "python", "vim", "make"}


@pytest.fixture
def fake_home(tmp_path: Path) -> Path:
    """Create an empty home directory for testing."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def config(fake_home: Path) -> Config:
    """Provide a test configuration rooted at the fake home."""
    return Config(home_dir=fake_home, api_key=None)


@pytest.fixture
def detector() -> ToolDetector:
    """Deterministic detector that never spawns processes."""
    return ToolDetector(probe=lambda tool: tool in INSTALLED_TOOLS)


@pytest.fixture
def write_home_file(fake_home: Path):
    """Write a file relative to the fake home, creating parent directories."""

    def _write(relative: str, content: str) -> Path:
        path = fake_home / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
