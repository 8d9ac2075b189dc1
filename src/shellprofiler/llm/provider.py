"""Abstract LLM provider interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional
from pydantic import BaseModel
from langchain_anthropic import ChatAnthropic
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from ..config import Config


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    content: str
    model: str
    tokens_used: Optional[int] = None


class LLMProvider(ABC):
    """A single-call text generator behind the wrapped narrative."""

    model_name: str = "unknown-model"

    @staticmethod
    def message_pairs(prompt: str, system: Optional[str] = None) -> list[tuple[str, str]]:
        """(role, content) pairs, system first when present."""
        pairs = [("system", system)] if system else []
        pairs.append(("user", prompt))
        return pairs

    @abstractmethod
    def generate(self, prompt: str, system: Optional[str] = None) -> LLMResponse:
        """Generate a response from the LLM.

        Args:
            prompt: The user prompt
            system: Optional system prompt

        Returns:
            LLMResponse containing the generated text

        Raises:
            RuntimeError: If the call fails for any reason
        """


class AnthropicProvider(LLMProvider):
    """Claude through LangChain's ChatAnthropic."""

    def __init__(self, model_name: str, api_key: str, max_retries: int = 0, timeout: int = 60):
        self.model_name = model_name
        self.max_retries = max_retries
        self.timeout = timeout
        self.client = ChatAnthropic(
            model=model_name, anthropic_api_key=api_key, max_retries=max_retries, timeout=timeout
        )

    def generate(self, prompt: str, system: Optional[str] = None) -> LLMResponse:
        messages: list[BaseMessage] = [
            SystemMessage(content=content) if role == "system" else HumanMessage(content=content)
            for role, content in self.message_pairs(prompt, system)
        ]

        try:
            response = self.client.invoke(messages)
        except Exception as e:
            raise RuntimeError(f"LLM generation failed: {e}") from e

        usage = getattr(response, "usage_metadata", None) or {}
        return LLMResponse(
            content=coerce_content(response.content),
            model=self.model_name,
            tokens_used=usage.get("total_tokens"),
        )


def coerce_content(content: Any) -> str:
    """Flatten LangChain content blocks into plain text."""
    if isinstance(content, str):
        return content
    if not isinstance(content, list):
        return str(content)

    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict):
            parts.append(block.get("text") or "")
        else:
            parts.append(getattr(block, "text", None) or "")
    return "".join(parts).strip()


def create_llm_provider(config: Config, json_mode: bool = True) -> Optional[LLMProvider]:
    """Build the provider selected by configuration.

    Args:
        config: Application configuration
        json_mode: Request JSON object output where the backend supports it

    Returns:
        A provider, or None when no API key is configured
    """
    if not config.api_key:
        return None

    if config.llm_provider == "anthropic":
        return AnthropicProvider(
            model_name=config.model_name,
            api_key=config.api_key,
            max_retries=config.max_retries,
            timeout=config.timeout,
        )

    from .litellm_provider import LiteLLMProvider

    return LiteLLMProvider(
        model_name=config.model_name,
        api_key=config.api_key,
        max_retries=config.max_retries,
        timeout=config.timeout,
        json_mode=json_mode,
    )
