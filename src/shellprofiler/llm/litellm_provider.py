"""LiteLLM provider, the default backend for the wrapped narrative."""

import logging
from typing import Any, Optional
import litellm
from .provider import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)

# Model name prefix -> vendor shown in authentication errors
VENDOR_PREFIXES = (
    ("gemini", "Google"),
    ("gpt-", "OpenAI"),
    ("o1", "OpenAI"),
    ("claude", "Anthropic"),
    ("anthropic/", "Anthropic"),
    ("ollama", "Ollama"),
)


def detect_vendor(model_name: str) -> str:
    for prefix, vendor in VENDOR_PREFIXES:
        if model_name.startswith(prefix):
            return vendor
    return "LLM Provider"


class LiteLLMProvider(LLMProvider):
    """Single-shot completions through LiteLLM (Gemini by default)."""

    def __init__(
        self,
        model_name: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        max_retries: int = 0,
        timeout: int = 60,
        json_mode: bool = False,
    ):
        """Initialize the provider.

        Args:
            model_name: LiteLLM model identifier, e.g. ``gemini/gemini-1.5-flash``
            api_key: Key forwarded to the vendor
            base_url: Optional API base override
            max_retries: Retries LiteLLM performs before giving up
            timeout: Request timeout in seconds
            json_mode: Ask the vendor for a JSON object response
        """
        self.model_name = model_name
        self.api_key = api_key
        self.base_url = base_url
        self.max_retries = max_retries
        self.timeout = timeout
        self.json_mode = json_mode

    def completion_kwargs(self, prompt: str, system: Optional[str] = None) -> dict[str, Any]:
        messages = [
            {"role": role, "content": content}
            for role, content in self.message_pairs(prompt, system)
        ]
        kwargs: dict[str, Any] = {
            "model": self.model_name,
            "messages": messages,
            "max_retries": self.max_retries,
            "timeout": self.timeout,
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.base_url:
            kwargs["api_base"] = self.base_url
        if self.json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        return kwargs

    def generate(self, prompt: str, system: Optional[str] = None) -> LLMResponse:
        """Run one completion.

        Raises:
            RuntimeError: On authentication, rate limit or any other failure
        """
        try:
            response = litellm.completion(**self.completion_kwargs(prompt, system))
            content = response.choices[0].message.content or ""
        except litellm.AuthenticationError as e:
            raise RuntimeError(
                f"{detect_vendor(self.model_name)} authentication failed. "
                f"Set LLM_API_KEY in your .env file"
            ) from e
        except litellm.RateLimitError as e:
            raise RuntimeError(f"Rate limit exceeded for {self.model_name}") from e
        except Exception as e:
            raise RuntimeError(f"LLM generation failed: {e}") from e

        usage = getattr(response, "usage", None)
        tokens = getattr(usage, "total_tokens", None)
        logger.debug("%s completion used %s tokens", self.model_name, tokens)

        return LLMResponse(
            content=content,
            model=self.model_name,
            tokens_used=tokens,
        )
