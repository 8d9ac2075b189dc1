"""Tests for data models."""

import pytest
from datetime import datetime
from pydantic import ValidationError
from shellprofiler.models import (
    CommandEntry,
    ShellData,
    TimelineEntry,
    WorkPatterns,
    shell_sort_key,
)


class TestCommandEntry:
    """Test CommandEntry model."""

    def test_entry_is_immutable(self):
        entry = CommandEntry(command="git status", categories=frozenset({"development"}))

        with pytest.raises(ValidationError):
            entry.command = "ls"

    def test_entry_timestamp_optional(self):
        entry = CommandEntry(command="ls")

        assert entry.timestamp is None
        assert entry.categories == frozenset()


class TestShellData:
    """Test ShellData aggregate root."""

    def test_empty_shell_data_has_all_insights(self):
        data = ShellData()

        assert data.insights.technical_profile.primary_role is None
        assert data.insights.work_patterns.peak_hours == []
        assert data.insights.tool_usage.editors == {}
        assert data.total_commands == 0

    def test_ordered_histories_uses_canonical_shell_order(self):
        data = ShellData(
            histories={
                "fish": [CommandEntry(command="ls")],
                "xonsh": [],
                "bash": [CommandEntry(command="cd")],
                "zsh": [],
            }
        )

        assert [shell for shell, _ in data.ordered_histories()] == ["bash", "zsh", "fish", "xonsh"]
        assert data.total_commands == 2


def test_shell_sort_key_places_unknown_shells_last():
    assert sorted(["nu", "fish", "elvish", "bash"], key=shell_sort_key) == [
        "bash",
        "fish",
        "elvish",
        "nu",
    ]


def test_peak_hours_capped_at_three():
    with pytest.raises(ValidationError):
        WorkPatterns(peak_hours=[1, 2, 3, 4])


def test_timeline_entry_is_immutable():
    entry = TimelineEntry(timestamp=datetime(2024, 1, 1), command="git push", shell="bash")

    with pytest.raises(ValidationError):
        entry.shell = "zsh"
