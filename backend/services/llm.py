import logging
import re
from typing import Optional

import anthropic
import openai

from config import Settings, VERSION
from services.errors import MissingCredential, ProviderAuthError

logger = logging.getLogger(__name__)

FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")

# Delegated tokens are only accepted together with headers naming the calling client
ANTHROPIC_DELEGATED_HEADERS = {
    "accept": "application/json",
    "anthropic-beta": "oauth-2025-04-20",
    "user-agent": f"contract-assistant/{VERSION}",
    "x-app": "contract-assistant",
}

OPENAI_DELEGATED_HEADERS = {
    "user-agent": f"contract-assistant/{VERSION}",
    "x-app": "contract-assistant",
}

# Reasoning models reject the temperature parameter
OPENAI_NO_TEMPERATURE_PREFIXES = ("gpt-5", "o1", "o3", "o4")


def clean_llm_response(response_text: str) -> str:
    """Pull JSON out of an LLM reply that may wrap it in a ```json``` code block.

    Best effort: the first fenced block wins, otherwise the trimmed reply is returned as is.
    """
    response_text = response_text.strip()
    match = FENCED_BLOCK.search(response_text)
    if match:
        return match.group(1).strip()
    return response_text


class TextProvider:
    """A text generation backend: one system prompt, one user message, one reply."""

    name = "base"
    api_key_var: Optional[str] = None

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client = None

    @property
    def model(self) -> str:
        return self.settings.model

    def system_prompt(self, base: str) -> str:
        prefix = self.settings.delegated_system_prefix
        if self.settings.delegated and prefix:
            return f"{prefix}\n\n{base}"
        return base

    def require_api_key(self) -> str:
        if not self.settings.api_key:
            raise MissingCredential(self.api_key_var)
        return self.settings.api_key

    def generate(self, system_prompt: str, user_message: str, max_output_tokens: int,
                 temperature: Optional[float] = None) -> str:
        raise NotImplementedError


class AnthropicProvider(TextProvider):
    name = "anthropic"
    api_key_var = "ANTHROPIC_API_KEY"

    def get_client(self) -> anthropic.Anthropic:
        if self._client is None:
            credential = self.require_api_key()
            if self.settings.delegated:
                self._client = anthropic.Anthropic(
                    api_key=None,
                    auth_token=credential,
                    default_headers=ANTHROPIC_DELEGATED_HEADERS,
                    max_retries=0,
                )
            else:
                self._client = anthropic.Anthropic(api_key=credential, max_retries=0)
        return self._client

    def generate(self, system_prompt, user_message, max_output_tokens, temperature=None):
        params = {
            "model": self.model,
            "max_tokens": max_output_tokens,
            "system": self.system_prompt(system_prompt),
            "messages": [{"role": "user", "content": user_message}],
        }
        if temperature is not None:
            params["temperature"] = temperature

        try:
            message = self.get_client().messages.create(**params)
        except anthropic.AuthenticationError as e:
            raise ProviderAuthError(self.api_key_var) from e

        return "".join(block.text for block in message.content if block.type == "text")


class OpenAIProvider(TextProvider):
    name = "openai"
    api_key_var = "OPENAI_API_KEY"

    def get_client(self) -> openai.OpenAI:
        if self._client is None:
            credential = self.require_api_key()
            if self.settings.delegated:
                self._client = openai.OpenAI(
                    api_key=credential,
                    default_headers=OPENAI_DELEGATED_HEADERS,
                    max_retries=0,
                )
            else:
                self._client = openai.OpenAI(api_key=credential, max_retries=0)
        return self._client

    def supports_temperature(self) -> bool:
        return not self.model.startswith(OPENAI_NO_TEMPERATURE_PREFIXES)

    def generate(self, system_prompt, user_message, max_output_tokens, temperature=None):
        params = {
            "model": self.model,
            "max_completion_tokens": max_output_tokens,
            "messages": [
                {"role": "system", "content": self.system_prompt(system_prompt)},
                {"role": "user", "content": user_message},
            ],
        }
        if temperature is not None and self.supports_temperature():
            params["temperature"] = temperature

        try:
            response = self.get_client().chat.completions.create(**params)
        except openai.AuthenticationError as e:
            raise ProviderAuthError(self.api_key_var) from e

        return response.choices[0].message.content or ""


def build_provider(settings: Settings) -> TextProvider:
    """Resolve the configured provider once, at startup."""
    if settings.provider == "anthropic":
        return AnthropicProvider(settings)
    if settings.provider == "openai":
        return OpenAIProvider(settings)

    from services.mock import MockProvider
    return MockProvider(settings)
