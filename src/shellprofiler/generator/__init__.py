"""Corpus and narrative generation."""

from .corpus import shell_data_to_text
from .narrative import NarrativeGenerator, NarrativeResult, parse_narrative

__all__ = ["shell_data_to_text", "NarrativeGenerator", "NarrativeResult", "parse_narrative"]
