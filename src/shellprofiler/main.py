"""Main CLI entry point for the Shell Profiler."""

import logging
import sys

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import Config
from .models import AnalysisReport
from .paths import HomeDirectoryError
from .pipeline import run_analysis
from .generator.corpus import shell_data_to_text
from .llm.provider import create_llm_provider

NOT_ENOUGH_DATA = "Not enough data"


def _configure_logging(config: Config, verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    if config.log_file:
        logging.basicConfig(
            filename=str(config.log_file),
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    else:
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _run(config: Config, wrapped: bool = False) -> AnalysisReport:
    llm = create_llm_provider(config) if wrapped else None
    if wrapped and llm is None:
        click.echo("Warning: no LLM API key configured, skipping wrapped view", err=True)

    try:
        return run_analysis(config, llm=llm)
    except HomeDirectoryError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Shell Profiler - Derive a behavioral profile from your shell history."""
    config = Config.from_env()
    _configure_logging(config, verbose)
    ctx.obj = config


@cli.command()
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "yaml", "json"]),
    default="text",
    help="Output format",
)
@click.option("--wrapped", "-w", is_flag=True, help="Also generate the narrative summary")
@click.pass_obj
def analyze(config: Config, output_format: str, wrapped: bool):
    """Analyze shell history and configuration.

    Examples:
        shell-profiler analyze
        shell-profiler analyze --format yaml
        shell-profiler analyze --wrapped
    """
    report = _run(config, wrapped)

    if output_format == "yaml":
        click.echo(yaml.safe_dump(report_summary(report), sort_keys=False, default_flow_style=False))
    elif output_format == "json":
        click.echo(report.model_dump_json(indent=2, exclude={"shell_data": {"histories"}}))
    else:
        render_report(report, Console())


@cli.command()
@click.pass_obj
def timeline(config: Config):
    """Show the curated timeline of notable commands."""
    report = _run(config)
    render_timeline(report, Console())


@cli.command()
@click.pass_obj
def corpus(config: Config):
    """Print the text digest sent to the narrative generator."""
    report = _run(config)
    click.echo(shell_data_to_text(report.shell_data), nl=False)


def report_summary(report: AnalysisReport) -> dict:
    """Serializable view of a report without raw history or file contents."""
    data = report.shell_data
    return {
        "shells": {shell: len(entries) for shell, entries in data.ordered_histories()},
        "insights": data.insights.model_dump(mode="json"),
        "configs": {
            shell: {
                "files": sorted(config.config_files),
                "aliases": config.aliases,
                "environment": sorted(config.environment),
                "plugins": [plugin.name for plugin in config.plugins],
            }
            for shell, config in data.shell_configs.items()
        },
        "timeline": [entry.model_dump(mode="json") for entry in report.timeline],
        "narrative": [section.model_dump() for section in report.narrative],
        "narrative_error": report.narrative_error,
    }


def render_report(report: AnalysisReport, console: Console) -> None:
    """Render the profile as rich panels and tables."""
    data = report.shell_data
    insights = data.insights
    profile = insights.technical_profile
    patterns = insights.work_patterns

    overview = "\n".join(
        f"{shell}: {len(entries)} commands" for shell, entries in data.ordered_histories()
    )
    console.print(Panel(overview or "No shell history found", title="Overview"))

    tech = Table(title=f"Tech Profile - {profile.primary_role or NOT_ENOUGH_DATA}")
    tech.add_column("Tool")
    tech.add_column("Proficiency", justify="right")
    for tool, score in profile.proficiency.items():
        tech.add_row(tool, f"{score * 100:.1f}%")
    console.print(tech)

    hours = ", ".join(f"{hour:02d}:00" for hour in patterns.peak_hours) or NOT_ENOUGH_DATA
    metrics = "\n".join(f"{name}: {value * 100:.1f}%" for name, value in patterns.productivity.items())
    workflows = ", ".join(patterns.common_workflows) or "none"
    console.print(
        Panel(
            f"Peak hours: {hours}\n{metrics}\nWorkflows: {workflows}",
            title="Work Patterns",
        )
    )

    usage = Table(title="Tool Usage")
    usage.add_column("Category")
    usage.add_column("Tool")
    usage.add_column("Uses", justify="right")
    for category, counts in (
        ("Editors", insights.tool_usage.editors),
        ("Languages", insights.tool_usage.languages),
        ("Build Tools", insights.tool_usage.build_tools),
    ):
        for tool, count in counts.items():
            usage.add_row(category, tool, str(count))
    console.print(usage)

    for tip in insights.recommendations + insights.workflow_tips:
        console.print(Text.assemble(("Tip: ", "cyan"), tip))

    for section in report.narrative:
        quotes = "\n".join(f'"{quote}"' for quote in section.quotes)
        console.print(Panel(Text(f"{section.description}\n\n{quotes}".strip()), title=section.title))
    if report.narrative_error:
        console.print(Text(f"Wrapped view unavailable: {report.narrative_error}", style="yellow"))


def render_timeline(report: AnalysisReport, console: Console) -> None:
    table = Table(title="Interesting Commands Timeline")
    table.add_column("When")
    table.add_column("Shell")
    table.add_column("Command")
    for entry in report.timeline:
        when = entry.timestamp.strftime("%Y-%m-%d %H:%M") if entry.timestamp else "unknown"
        table.add_row(when, entry.shell, Text(entry.command))
    console.print(table)


if __name__ == "__main__":
    cli()
