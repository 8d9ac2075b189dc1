"""Plain-text digest of a ShellData for the narrative generator."""

from ..models import ShellData
from ..analyzer.profile import rank_counts

MAX_TECH_STACK = 15
MAX_EDITORS = 10


def shell_data_to_text(data: ShellData) -> str:
    """Render per-shell counts, tech stack, peak hours, productivity and editors.

    Args:
        data: Fully analyzed shell data

    Returns:
        Newline-terminated corpus text
    """
    lines = [
        f"Shell: {shell}, Commands: {len(entries)}"
        for shell, entries in data.ordered_histories()
    ]

    profile = data.insights.technical_profile
    if profile.tech_stack:
        lines.append("Tech Stack: " + ", ".join(profile.tech_stack[:MAX_TECH_STACK]))

    patterns = data.insights.work_patterns
    if patterns.peak_hours:
        assert all(0 <= hour <= 23 for hour in patterns.peak_hours), patterns.peak_hours
        lines.append("Peak Hours: " + " ".join(f"{hour:02d}:00" for hour in patterns.peak_hours))

    if patterns.productivity:
        lines.append("Productivity Metrics:")
        for metric in sorted(patterns.productivity):
            lines.append(f"- {metric}: {patterns.productivity[metric] * 100:.1f}%")

    editors = data.insights.tool_usage.editors
    if editors:
        lines.append("Editors:")
        for editor, count in rank_counts(editors)[:MAX_EDITORS]:
            lines.append(f"- {editor}: {count} uses")

    return "\n".join(lines) + "\n" if lines else ""
