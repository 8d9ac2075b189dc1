"""Tests for LLM providers."""

import litellm
import pytest
from unittest.mock import MagicMock, patch
from langchain_core.messages import AIMessage
from shellprofiler.config import Config
from shellprofiler.llm.provider import (
    AnthropicProvider,
    LLMResponse,
    coerce_content,
    create_llm_provider,
)
from shellprofiler.llm.litellm_provider import LiteLLMProvider, detect_vendor


@patch("shellprofiler.llm.provider.ChatAnthropic")
def test_anthropic_provider_generate(mock_chat_cls):
    """AnthropicProvider sends system and user messages and reports tokens."""
    mock_client = MagicMock()
    mock_client.invoke.return_value = AIMessage(
        content="Hello",
        usage_metadata={"total_tokens": 12, "input_tokens": 5, "output_tokens": 7},
    )
    mock_chat_cls.return_value = mock_client

    provider = AnthropicProvider(model_name="claude-test", api_key="test-key")
    response = provider.generate("Say hello", system="Be brief")

    assert isinstance(response, LLMResponse)
    assert response.content == "Hello"
    assert response.tokens_used == 12
    messages = mock_client.invoke.call_args[0][0]
    assert [message.content for message in messages] == ["Be brief", "Say hello"]


@patch("shellprofiler.llm.provider.ChatAnthropic")
def test_anthropic_provider_wraps_errors(mock_chat_cls):
    mock_client = MagicMock()
    mock_client.invoke.side_effect = Exception("overloaded")
    mock_chat_cls.return_value = mock_client

    provider = AnthropicProvider(model_name="claude-test", api_key="test-key")

    with pytest.raises(RuntimeError, match="overloaded"):
        provider.generate("prompt")


def test_coerce_content_flattens_blocks():
    blocks = ["a", {"type": "text", "text": "b"}, {"type": "image"}]

    assert coerce_content(blocks) == "ab"
    assert coerce_content("plain") == "plain"


@patch("shellprofiler.llm.litellm_provider.litellm.completion")
def test_litellm_provider_generate(mock_completion):
    mock_response = MagicMock()
    mock_response.choices[0].message.content = '{"sections": []}'
    mock_response.usage.total_tokens = 42
    mock_completion.return_value = mock_response

    provider = LiteLLMProvider(model_name="gemini/gemini-1.5-flash", api_key="key", timeout=30)
    response = provider.generate("prompt", system="system")

    assert response.content == '{"sections": []}'
    assert response.tokens_used == 42
    kwargs = mock_completion.call_args[1]
    assert kwargs["model"] == "gemini/gemini-1.5-flash"
    assert kwargs["api_key"] == "key"
    assert kwargs["timeout"] == 30
    assert kwargs["max_retries"] == 0
    assert kwargs["messages"][0] == {"role": "system", "content": "system"}


@patch("shellprofiler.llm.litellm_provider.litellm.completion")
def test_litellm_provider_wraps_errors(mock_completion):
    mock_completion.side_effect = Exception("boom")

    provider = LiteLLMProvider(model_name="gemini/gemini-1.5-flash")

    with pytest.raises(RuntimeError, match="LLM generation failed: boom"):
        provider.generate("prompt")


def test_create_llm_provider_without_key():
    assert create_llm_provider(Config(api_key=None)) is None


def test_create_llm_provider_defaults_to_litellm():
    provider = create_llm_provider(Config(api_key="key"))

    assert isinstance(provider, LiteLLMProvider)
    assert provider.model_name == Config().model_name


@patch("shellprofiler.llm.provider.ChatAnthropic")
def test_create_llm_provider_anthropic(mock_chat_cls):
    provider = create_llm_provider(
        Config(llm_provider="anthropic", model_name="claude-test", api_key="key")
    )

    assert isinstance(provider, AnthropicProvider)
    assert mock_chat_cls.call_args[1]["model"] == "claude-test"


def test_litellm_json_mode_requests_json_object():
    provider = LiteLLMProvider(model_name="gemini/gemini-1.5-flash", json_mode=True)

    kwargs = provider.completion_kwargs("prompt")

    assert kwargs["response_format"] == {"type": "json_object"}
    assert "api_key" not in kwargs
    assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]


@pytest.mark.parametrize(
    "model,vendor",
    [
        ("gemini/gemini-1.5-flash", "Google"),
        ("gpt-4o", "OpenAI"),
        ("anthropic/claude-3", "Anthropic"),
        ("mistral/small", "LLM Provider"),
    ],
)
def test_detect_vendor(model, vendor):
    assert detect_vendor(model) == vendor


@patch("shellprofiler.llm.litellm_provider.litellm.completion")
def test_litellm_authentication_error_names_vendor(mock_completion):
    mock_completion.side_effect = litellm.AuthenticationError(
        message="bad key", llm_provider="gemini", model="gemini/gemini-1.5-flash"
    )
    provider = LiteLLMProvider(model_name="gemini/gemini-1.5-flash", api_key="bad")

    with pytest.raises(RuntimeError, match="Google authentication failed"):
        provider.generate("prompt")
