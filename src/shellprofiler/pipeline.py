"""End-to-end analysis run."""

import logging
from functools import partial
from typing import Optional
from .config import Config
from .models import AnalysisReport, ShellData, SHELL_ORDER
from .paths import resolve_home
from .scanner.history import HistoryReader
from .scanner.configs import ConfigReader
from .analyzer.classifier import CommandClassifier, categorize_command
from .analyzer.tools import ToolDetector
from .analyzer.profile import ProfileAggregator
from .analyzer.timeline import TimelineCurator
from .generator.corpus import shell_data_to_text
from .generator.narrative import NarrativeGenerator
from .llm.provider import LLMProvider

logger = logging.getLogger(__name__)


def analyze_shells(config: Config, detector: Optional[ToolDetector] = None) -> ShellData:
    """Read, classify and aggregate every supported shell.

    Shells without a readable history file are absent from the result.

    Args:
        config: Application configuration
        detector: Tool detector; a real probing detector is built if omitted

    Returns:
        ShellData with histories, configs and insights filled in

    Raises:
        HomeDirectoryError: If the home directory cannot be resolved
    """
    home = resolve_home(config.home_dir)
    detector = detector or ToolDetector(
        timeout=config.probe_timeout, max_workers=config.probe_workers
    )

    history_reader = HistoryReader(home)
    config_reader = ConfigReader(home)
    categorize = partial(categorize_command, rules=config.category_rules)

    data = ShellData()
    for shell in SHELL_ORDER:
        entries = history_reader.read(shell, categorize)
        if entries is None:
            continue
        data.histories[shell] = entries
        data.shell_configs[shell] = config_reader.read(shell)
        logger.info("Read %d %s commands", len(entries), shell)

    commands = [entry.command for _, entries in data.ordered_histories() for entry in entries]
    candidates = detector.select_candidates(commands, limit=config.max_candidates)
    logger.debug("Tool candidates: %s", ", ".join(candidates) or "none")

    classifier = CommandClassifier(detector.is_installed, candidates)
    data.insights = ProfileAggregator(classifier).aggregate(data.histories, data.shell_configs)
    return data


def run_analysis(
    config: Config,
    detector: Optional[ToolDetector] = None,
    llm: Optional[LLMProvider] = None,
) -> AnalysisReport:
    """Analyze shells, curate the timeline and, given an LLM, the narrative.

    A narrative failure is recorded on the report; the rest stays valid.
    """
    data = analyze_shells(config, detector)
    timeline = TimelineCurator(limit=config.timeline_limit).curate(data.histories)

    report = AnalysisReport(shell_data=data, timeline=timeline)
    if llm is None:
        return report

    result = NarrativeGenerator(llm).generate(shell_data_to_text(data))
    report.narrative = result.sections
    report.narrative_error = result.error
    return report
