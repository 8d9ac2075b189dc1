"""Tests for timeline curation."""

from datetime import datetime
from shellprofiler.analyzer.timeline import TimelineCurator, is_interesting_command
from shellprofiler.models import CommandEntry


def _entries(*commands):
    return [CommandEntry(command=command, timestamp=datetime(2024, 1, 1, 12)) for command in commands]


def test_interesting_commands():
    assert is_interesting_command("git push origin main")
    assert is_interesting_command("cat log.txt | grep error")
    assert is_interesting_command("echo hi > out.txt")
    assert is_interesting_command("sleep 5 &")
    assert is_interesting_command("gti")
    assert not is_interesting_command("ls -la")
    assert not is_interesting_command("gti status")


def test_timeline_is_capped_at_fifteen():
    history = _entries(*[f"git commit -m {i}" for i in range(40)])

    timeline = TimelineCurator().curate({"bash": history})

    assert len(timeline) == 15
    assert timeline[0].command == "git commit -m 0"
    assert all(entry.shell == "bash" for entry in timeline)


def test_timeline_drops_duplicates_across_shells():
    histories = {
        "zsh": _entries("git status", "docker ps"),
        "bash": _entries("git status", "ls", "git status"),
    }

    timeline = TimelineCurator().curate(histories)

    assert [(entry.shell, entry.command) for entry in timeline] == [
        ("bash", "git status"),
        ("zsh", "docker ps"),
    ]


def test_timeline_stops_before_scanning_remaining_shells():
    histories = {
        "bash": _entries(*[f"make target{i}" for i in range(15)]),
        "zsh": _entries("kubectl get pods"),
    }

    timeline = TimelineCurator().curate(histories)

    assert len(timeline) == 15
    assert "kubectl get pods" not in [entry.command for entry in timeline]


def test_timeline_is_reproducible():
    histories = {
        "fish": _entries("ssh host", "curl x | jq"),
        "zsh": _entries("vim a", "cd.."),
    }
    reordered = dict(reversed(list(histories.items())))

    assert TimelineCurator().curate(histories) == TimelineCurator().curate(reordered)


def test_timeline_keeps_missing_timestamps():
    history = [CommandEntry(command="git log")]

    timeline = TimelineCurator(limit=5).curate({"zsh": history})

    assert timeline[0].timestamp is None


def test_timeline_limit_cannot_exceed_fifteen():
    history = _entries(*[f"git commit -m {i}" for i in range(40)])

    assert len(TimelineCurator(limit=30).curate({"bash": history})) == 15
    assert len(TimelineCurator(limit=3).curate({"bash": history})) == 3
