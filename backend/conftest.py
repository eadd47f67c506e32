import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from services.llm import TextProvider

VALID_ANALYSIS = """{
    "risks": ["Unlimited liability for the provider"],
    "missingProtections": ["No late payment penalties"],
    "summary": "A one-sided service agreement.",
    "suggestions": ["Cap liability at the contract value"]
}"""

SAMPLE_CONTRACT = """SERVICE AGREEMENT

Article 1 - Purpose
The Provider will build a website for the Client.

Article 2 - Payment
The Client pays the invoice within 90 days.

Article 3 - Liability
The Provider is fully liable for any damage, without limit."""


class FakeProvider(TextProvider):
    """Records every call and answers with a canned reply (or raises)."""

    name = "fake"

    def __init__(self, settings, reply="", error=None):
        super().__init__(settings)
        self.reply = reply
        self.error = error
        self.calls = []

    def generate(self, system_prompt, user_message, max_output_tokens, temperature=None):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_message": user_message,
            "max_output_tokens": max_output_tokens,
            "temperature": temperature,
        })
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def public_dir(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<html><body>Contract Assistant</body></html>")
    (public / "app.js").write_text("console.log('ok');")
    return public


@pytest.fixture
def settings(public_dir):
    return Settings(
        provider="anthropic",
        api_key="sk-ant-api03-test",
        model="claude-sonnet-4-6",
        public_dir=public_dir,
    )


@pytest.fixture
def provider(settings):
    return FakeProvider(settings, reply=VALID_ANALYSIS)


@pytest.fixture
def client(settings, provider):
    return TestClient(create_app(settings, provider))
