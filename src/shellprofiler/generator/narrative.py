"""Narrative ("wrapped") generation from the corpus text."""

import json
import logging
from typing import Optional
from pydantic import BaseModel, Field, ValidationError
from ..models import NarrativeResponse, NarrativeSection
from ..llm.provider import LLMProvider
from ..llm.prompts import WRAPPED_PROMPT, WRAPPED_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

NOTE_MARKER = "**Note:**"


class NarrativeResult(BaseModel):
    """Outcome of a narrative request; ``error`` is set when it failed."""

    sections: list[NarrativeSection] = Field(default_factory=list)
    error: Optional[str] = None


def extract_json_text(text: str) -> str:
    """Strip markdown fences and trailing notes around a JSON payload."""
    cleaned = text.strip()
    note_index = cleaned.find(NOTE_MARKER)
    if note_index != -1:
        cleaned = cleaned[:note_index].strip()

    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]

    return cleaned.replace("`", "").strip()


def parse_narrative(text: str) -> NarrativeResponse:
    """Parse model output into sections.

    Raises:
        json.JSONDecodeError: If the text is not JSON
        ValidationError: If the JSON does not match the expected shape
    """
    data = json.loads(extract_json_text(text))
    return NarrativeResponse.model_validate(data)


class NarrativeGenerator:
    """Requests narrative sections and never lets a failure escape."""

    def __init__(self, llm_provider: LLMProvider):
        self.llm = llm_provider

    def generate(self, corpus: str) -> NarrativeResult:
        """Generate narrative sections for ``corpus``.

        Args:
            corpus: Text produced by ``shell_data_to_text``

        Returns:
            NarrativeResult with sections, or with ``error`` set on failure
        """
        prompt = WRAPPED_PROMPT.format(corpus=corpus)

        try:
            response = self.llm.generate(prompt=prompt, system=WRAPPED_SYSTEM_PROMPT)
        except RuntimeError as e:
            logger.warning("Narrative generation failed: %s", e)
            return NarrativeResult(error=str(e))

        try:
            parsed = parse_narrative(response.content)
        except json.JSONDecodeError as e:
            logger.warning("Narrative response is not valid JSON: %s", e)
            logger.debug("Raw narrative response: %s", response.content)
            return NarrativeResult(error=f"Failed to parse narrative response as JSON: {e}")
        except ValidationError as e:
            logger.warning("Narrative response has unexpected structure: %s", e)
            return NarrativeResult(error=f"Malformed narrative response: {e}")

        logger.info("Generated %d narrative sections", len(parsed.sections))
        return NarrativeResult(sections=parsed.sections)
