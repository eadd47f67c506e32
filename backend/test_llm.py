from types import SimpleNamespace

import anthropic
import httpx
import openai
import pytest

from config import Settings
from services.errors import MissingCredential, ProviderAuthError
from services.llm import AnthropicProvider, OpenAIProvider, build_provider
from services.mock import MockProvider


class StubCreate:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.kwargs = None

    def __call__(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return self.result


def anthropic_message(*texts):
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=t) for t in texts])


def openai_completion(text):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


def unauthorized(url):
    return httpx.Response(401, request=httpx.Request("POST", url))


def stub_anthropic(provider, create):
    provider._client = SimpleNamespace(messages=SimpleNamespace(create=create))


def stub_openai(provider, create):
    provider._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


# ============== ANTHROPIC ==============

def test_anthropic_request_shape():
    provider = AnthropicProvider(Settings(provider="anthropic", api_key="sk-ant-api03-x", model="claude-sonnet-4-6"))
    create = StubCreate(anthropic_message("Hello", " world"))
    stub_anthropic(provider, create)

    assert provider.generate("system", "user", 4096, 0.3) == "Hello world"
    assert create.kwargs == {
        "model": "claude-sonnet-4-6",
        "max_tokens": 4096,
        "system": "system",
        "messages": [{"role": "user", "content": "user"}],
        "temperature": 0.3,
    }


def test_anthropic_omits_temperature_when_unset():
    provider = AnthropicProvider(Settings(provider="anthropic", api_key="sk-ant-api03-x"))
    create = StubCreate(anthropic_message("ok"))
    stub_anthropic(provider, create)

    provider.generate("system", "user", 8192)
    assert "temperature" not in create.kwargs


def test_anthropic_auth_error():
    provider = AnthropicProvider(Settings(provider="anthropic", api_key="sk-ant-api03-bad"))
    error = anthropic.AuthenticationError(
        "invalid x-api-key", response=unauthorized("https://api.anthropic.com/v1/messages"), body=None
    )
    stub_anthropic(provider, StubCreate(error=error))

    with pytest.raises(ProviderAuthError) as exc:
        provider.generate("system", "user", 4096)
    assert exc.value.message == "Invalid API key. Check ANTHROPIC_API_KEY."


def test_anthropic_other_errors_propagate():
    provider = AnthropicProvider(Settings(provider="anthropic", api_key="sk-ant-api03-x"))
    stub_anthropic(provider, StubCreate(error=RuntimeError("boom")))
    with pytest.raises(RuntimeError, match="boom"):
        provider.generate("system", "user", 4096)


def test_anthropic_missing_credential():
    provider = AnthropicProvider(Settings(provider="anthropic", api_key=None))
    with pytest.raises(MissingCredential, match="ANTHROPIC_API_KEY"):
        provider.generate("system", "user", 4096)


def test_anthropic_client_for_api_key(monkeypatch):
    created = {}
    monkeypatch.setattr(anthropic, "Anthropic", lambda **kwargs: created.update(kwargs) or "client")
    provider = AnthropicProvider(Settings(provider="anthropic", api_key="sk-ant-api03-x"))

    assert provider.get_client() == "client"
    assert created == {"api_key": "sk-ant-api03-x", "max_retries": 0}


def test_anthropic_client_for_delegated_token(monkeypatch):
    created = {}
    monkeypatch.setattr(anthropic, "Anthropic", lambda **kwargs: created.update(kwargs) or "client")
    provider = AnthropicProvider(Settings(provider="anthropic", api_key="sk-ant-oat01-x"))

    provider.get_client()
    assert created["auth_token"] == "sk-ant-oat01-x"
    assert created["api_key"] is None
    assert "oauth-2025-04-20" in created["default_headers"]["anthropic-beta"]
    assert created["default_headers"]["x-app"] == "contract-assistant"


def test_client_is_built_once(monkeypatch):
    calls = []
    monkeypatch.setattr(anthropic, "Anthropic", lambda **kwargs: calls.append(kwargs) or object())
    provider = AnthropicProvider(Settings(provider="anthropic", api_key="sk-ant-api03-x"))

    assert provider.get_client() is provider.get_client()
    assert len(calls) == 1


def test_delegated_system_prefix():
    settings = Settings(provider="anthropic", api_key="sk-ant-oat01-x", delegated_system_prefix="You are ACME.")
    provider = AnthropicProvider(settings)
    create = StubCreate(anthropic_message("ok"))
    stub_anthropic(provider, create)

    provider.generate("Base prompt", "user", 4096)
    assert create.kwargs["system"] == "You are ACME.\n\nBase prompt"


def test_system_prefix_ignored_for_api_keys():
    settings = Settings(provider="anthropic", api_key="sk-ant-api03-x", delegated_system_prefix="You are ACME.")
    assert AnthropicProvider(settings).system_prompt("Base prompt") == "Base prompt"


# ============== OPENAI ==============

def test_openai_request_shape():
    provider = OpenAIProvider(Settings(provider="openai", api_key="sk-proj-x", model="gpt-4o"))
    create = StubCreate(openai_completion("answer"))
    stub_openai(provider, create)

    assert provider.generate("system", "user", 4096, 0.3) == "answer"
    assert create.kwargs == {
        "model": "gpt-4o",
        "max_completion_tokens": 4096,
        "messages": [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "user"},
        ],
        "temperature": 0.3,
    }


@pytest.mark.parametrize("model", ["gpt-5.2", "o3-mini", "o1"])
def test_openai_reasoning_models_skip_temperature(model):
    provider = OpenAIProvider(Settings(provider="openai", api_key="sk-x", model=model))
    create = StubCreate(openai_completion("answer"))
    stub_openai(provider, create)

    provider.generate("system", "user", 4096, 0.3)
    assert "temperature" not in create.kwargs


def test_openai_empty_content():
    provider = OpenAIProvider(Settings(provider="openai", api_key="sk-x", model="gpt-5.2"))
    stub_openai(provider, StubCreate(openai_completion(None)))
    assert provider.generate("system", "user", 8192) == ""


def test_openai_auth_error():
    provider = OpenAIProvider(Settings(provider="openai", api_key="sk-bad", model="gpt-5.2"))
    error = openai.AuthenticationError(
        "Incorrect API key provided", response=unauthorized("https://api.openai.com/v1/chat/completions"), body=None
    )
    stub_openai(provider, StubCreate(error=error))

    with pytest.raises(ProviderAuthError, match="OPENAI_API_KEY"):
        provider.generate("system", "user", 4096)


def test_openai_client_for_delegated_token(monkeypatch):
    created = {}
    monkeypatch.setattr(openai, "OpenAI", lambda **kwargs: created.update(kwargs) or "client")
    provider = OpenAIProvider(Settings(provider="openai", api_key="eyJhbGciOi.token", model="gpt-5.2"))

    provider.get_client()
    assert created["api_key"] == "eyJhbGciOi.token"
    assert created["default_headers"]["x-app"] == "contract-assistant"


# ============== SELECTION ==============

@pytest.mark.parametrize("name,cls", [
    ("anthropic", AnthropicProvider),
    ("openai", OpenAIProvider),
    ("mock", MockProvider),
])
def test_build_provider(name, cls):
    provider = build_provider(Settings(provider=name))
    assert isinstance(provider, cls)
    assert provider.name == name


# ============== MOCK ==============

def test_mock_provider_analysis_is_fenced_json():
    from prompts.analysis import analysis_prompt, analysis_message

    provider = MockProvider(Settings(provider="mock"))
    reply = provider.generate(
        analysis_prompt("provider", "French"),
        analysis_message("The provider has unlimited liability and is paid in 90 days."),
        4096,
    )
    assert reply.startswith("```json")
    assert "Unlimited liability exposes the provider" in reply


def test_mock_provider_rewrite_and_generate():
    from prompts.rewrite import rewrite_prompt, rewrite_message
    from prompts.generate import generate_prompt, generate_message

    provider = MockProvider(Settings(provider="mock"))
    rewritten = provider.generate(rewrite_prompt("French"), rewrite_message("Original contract text.", "provider"), 8192)
    assert rewritten.startswith("Original contract text.")
    assert "protection for the provider" in rewritten

    generated = provider.generate(
        generate_prompt("French"), generate_message("A bakery website.", "client", "Web design"), 8192
    )
    assert generated.startswith("WEB DESIGN AGREEMENT")
    assert "Article 1 - Purpose\nA bakery website." in generated
