import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

load_dotenv()

VERSION = "3.0.0"

BACKEND_DIR = Path(__file__).parent


# Mock mode (for testing without API key)
def mock_mode_enabled() -> bool:
    return os.environ.get("MOCK_MODE", "false").lower() == "true"


# Models
ANTHROPIC_MODEL = "claude-sonnet-4-6"
OPENAI_MODEL = "gpt-5.2"

# Input bounds
MIN_TEXT_LENGTH = 10
MAX_CONTRACT_LENGTH = 100_000
MAX_BODY_BYTES = 10 * 1024 * 1024

DEFAULT_CONTRACT_TYPE = "Service provision"

PROVIDERS = ("anthropic", "openai", "mock")

API_KEY_VARS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def get_api_key(provider: str) -> Optional[str]:
    """Find the credential for a provider.

    Looks at the environment first, then backend/.env, then ~/.<provider>/api_key.
    """
    var = API_KEY_VARS[provider]
    key = os.environ.get(var)
    if key:
        return key
    env_path = BACKEND_DIR / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                if line.startswith(f"{var}="):
                    key = line.split("=", 1)[1].strip()
                    if key:
                        return key
    home_config = Path.home() / f".{provider}" / "api_key"
    if home_config.exists():
        key = home_config.read_text().strip()
        if key:
            return key
    return None


def is_delegated_token(provider: str, credential: Optional[str]) -> bool:
    """Delegated (OAuth-style) tokens are told apart from direct keys by prefix."""
    if not credential:
        return False
    if provider == "anthropic":
        return credential.startswith("sk-ant-oat")
    if provider == "openai":
        return not credential.startswith("sk-")
    return False


class Settings(BaseModel):
    """Runtime configuration, built once at startup and passed to create_app()."""

    provider: str = "mock"
    api_key: Optional[str] = None
    model: str = "mock"
    jurisdiction: str = "French"
    delegated_system_prefix: str = ""
    public_dir: Path = BACKEND_DIR / "public"
    host: str = "0.0.0.0"
    port: int = 3456
    log_level: str = "INFO"

    model_config = {
        "frozen": True,
    }

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in PROVIDERS:
            raise ValueError(f"Unsupported LLM_PROVIDER '{v}'. Allowed values: {list(PROVIDERS)}")
        return v

    @property
    def api_key_var(self) -> Optional[str]:
        return API_KEY_VARS.get(self.provider)

    @property
    def configured(self) -> bool:
        return self.provider == "mock" or bool(self.api_key)

    @property
    def delegated(self) -> bool:
        return is_delegated_token(self.provider, self.api_key)

    @property
    def auth_kind(self) -> str:
        if self.provider == "mock":
            return "mock"
        if not self.api_key:
            return "MISSING"
        return "OAuth token" if self.delegated else "API key"

    @classmethod
    def from_env(cls) -> "Settings":
        provider = os.environ.get("LLM_PROVIDER", "").strip().lower()
        if not provider:
            if mock_mode_enabled():
                provider = "mock"
            elif get_api_key("anthropic"):
                provider = "anthropic"
            elif get_api_key("openai"):
                provider = "openai"
            else:
                provider = "anthropic"

        if provider == "anthropic":
            model = os.environ.get("ANTHROPIC_MODEL", ANTHROPIC_MODEL)
        elif provider == "openai":
            model = os.environ.get("OPENAI_MODEL", OPENAI_MODEL)
        else:
            model = "mock"

        return cls(
            provider=provider,
            api_key=get_api_key(provider) if provider in API_KEY_VARS else None,
            model=model,
            jurisdiction=os.environ.get("CONTRACT_JURISDICTION", "French"),
            delegated_system_prefix=os.environ.get("DELEGATED_SYSTEM_PREFIX", ""),
            public_dir=Path(os.environ.get("PUBLIC_DIR", str(BACKEND_DIR / "public"))),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", "3456")),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
