"""Readers for shell history and configuration files."""

from .configs import ConfigReader, CONFIG_PATHS
from .history import HistoryReader, HISTORY_PATHS, parse_history

__all__ = ["ConfigReader", "CONFIG_PATHS", "HistoryReader", "HISTORY_PATHS", "parse_history"]
