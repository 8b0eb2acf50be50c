"""
Tests for LLM provider request construction.

Ensures player-only config fields aren't forwarded to the OpenAI client and
that the OpenRouter environment is read the way the CLI expects.
"""

import os
import sys
from json.decoder import JSONDecodeError
from types import SimpleNamespace

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import llm_providers  # noqa: E402
from llm_providers import (  # noqa: E402
    LLMProviderInterface,
    OpenRouterProvider,
    _sanitize_env_value,
    create_llm_provider,
)


class DummyCompletions:
    """Records kwargs passed to create() and returns a minimal OpenAI-like payload."""

    def __init__(self, content="UP", error=None):
        self.last_kwargs = None
        self.content = content
        self.error = error

    def create(self, **kwargs):
        self.last_kwargs = kwargs
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))],
            usage=SimpleNamespace(prompt_tokens=12, completion_tokens=4),
        )


def install_dummy_client(monkeypatch, completions):
    created = {}

    class DummyClient:
        def __init__(self, *args, **kwargs):
            created.update(kwargs)
            self.chat = SimpleNamespace(completions=completions)

    monkeypatch.setattr(llm_providers, "OpenAI", DummyClient)
    return created


def test_openrouter_provider_filters_player_fields(monkeypatch):
    """
    Player bookkeeping fields (name, provider, model_name) must not reach the API;
    everything else, including the nested kwargs dict, is forwarded.
    """
    completions = DummyCompletions()
    install_dummy_client(monkeypatch, completions)

    provider = OpenRouterProvider(
        api_key="test-key",
        config={
            "name": "test-model",
            "provider": "openrouter",
            "model_name": "openai/test",
            "temperature": 0.2,
            "kwargs": {"max_tokens": 64},
        },
    )

    result = provider.get_response("Say UP")

    assert completions.last_kwargs["model"] == "openai/test"
    assert completions.last_kwargs["messages"] == [{"role": "user", "content": "Say UP"}]
    assert completions.last_kwargs["temperature"] == 0.2
    assert completions.last_kwargs["max_tokens"] == 64
    for forbidden_key in ("name", "provider", "model_name", "kwargs"):
        assert forbidden_key not in completions.last_kwargs
    assert result == {"text": "UP", "input_tokens": 12, "output_tokens": 4}


def test_openrouter_headers_and_base_url_from_env(monkeypatch):
    completions = DummyCompletions()
    created = install_dummy_client(monkeypatch, completions)
    monkeypatch.setenv("OPENROUTER_BASE_URL", '"https://proxy.example/api/v1"')
    monkeypatch.setenv("OPENROUTER_SITE_URL", "https://snake.example")
    monkeypatch.delenv("OPENROUTER_SITE_NAME", raising=False)

    provider = OpenRouterProvider(api_key="'test-key'", config={"name": "m", "model_name": "m/x"})
    provider.get_response("hi")

    assert created["base_url"] == "https://proxy.example/api/v1"
    assert created["api_key"] == "test-key"
    assert completions.last_kwargs["extra_headers"] == {
        "HTTP-Referer": "https://snake.example",
        "X-Title": "Toroid Snake",
    }


def test_empty_content_becomes_empty_text(monkeypatch):
    install_dummy_client(monkeypatch, DummyCompletions(content=None))
    provider = OpenRouterProvider(api_key="k", config={"name": "m", "model_name": "m/x"})

    assert provider.get_response("hi")["text"] == ""


def test_non_json_payload_is_reported_as_value_error(monkeypatch):
    error = JSONDecodeError("Expecting value", "<html>", 0)
    install_dummy_client(monkeypatch, DummyCompletions(error=error))
    provider = OpenRouterProvider(api_key="k", config={"name": "m", "model_name": "bad/slug"})

    with pytest.raises(ValueError, match="non-JSON"):
        provider.get_response("hi")


def test_create_llm_provider_requires_api_key(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    with pytest.raises(ValueError, match="OPENROUTER_API_KEY"):
        create_llm_provider({"name": "m", "model_name": "m/x"})


def test_create_llm_provider_returns_openrouter(monkeypatch):
    install_dummy_client(monkeypatch, DummyCompletions())
    monkeypatch.setenv("OPENROUTER_API_KEY", "test-key")

    provider = create_llm_provider({"name": "m", "model_name": "m/x"})

    assert isinstance(provider, OpenRouterProvider)
    assert provider.model_name == "m/x"


def test_interface_is_abstract():
    with pytest.raises(NotImplementedError):
        LLMProviderInterface().get_response("hi")


@pytest.mark.parametrize("raw,expected", [
    (None, None),
    ("  plain  ", "plain"),
    ('"quoted"', "quoted"),
    ("' spaced '", "spaced"),
    ('"', '"'),
])
def test_sanitize_env_value(raw, expected):
    assert _sanitize_env_value(raw) == expected
