"""Provider presets for OpenAI-compatible completion endpoints.

Each preset bundles everything that used to differ between copies of the
tool: where the key lives, which endpoint to call, the default model and the
directory that auto-generated outputs land in.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.errors import UsageError


class ProviderProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    api_key_env: str = Field(..., min_length=1, description="Env var / .env.local key holding the token.")
    base_url_env: str = Field(..., min_length=1, description="Env var overriding the base URL.")
    default_base_url: str = Field(..., min_length=8)
    default_model: str = Field(..., min_length=1)
    config_dir_name: str = Field(..., min_length=1, description="Directory under ~/.config with `api_key`.")
    runtime_namespace: str = Field(..., min_length=1, description="Subdirectory of the runtime dir.")
    label: str = Field(default="", description="Name used in diagnostics.")

    def base_url(self) -> str:
        """Base URL from the override env var or the preset, without trailing slash."""

        value = (os.environ.get(self.base_url_env) or "").strip() or self.default_base_url
        return value.rstrip("/")

    def display_name(self) -> str:
        return self.label or self.name


PROVIDERS: dict[str, ProviderProfile] = {
    "openrouter": ProviderProfile(
        name="openrouter",
        api_key_env="OPENROUTER_API_KEY",
        base_url_env="OPENROUTER_BASE_URL",
        default_base_url="https://openrouter.ai/api/v1",
        default_model="google/gemini-3.1-pro-preview",
        config_dir_name="openrouter",
        runtime_namespace="gemini-designer",
        label="OpenRouter",
    ),
    "openai": ProviderProfile(
        name="openai",
        api_key_env="OPENAI_API_KEY",
        base_url_env="OPENAI_BASE_URL",
        default_base_url="https://api.openai.com/v1",
        default_model="gpt-4.1",
        config_dir_name="openai",
        runtime_namespace="gpt-designer",
        label="OpenAI",
    ),
    "deepseek": ProviderProfile(
        name="deepseek",
        api_key_env="DEEPSEEK_API_KEY",
        base_url_env="DEEPSEEK_BASE_URL",
        default_base_url="https://api.deepseek.com",
        default_model="deepseek-chat",
        config_dir_name="deepseek",
        runtime_namespace="deepseek-designer",
        label="DeepSeek",
    ),
}

DEFAULT_PROVIDER = "openrouter"


def get_provider(name: str | None) -> ProviderProfile:
    key = (name or DEFAULT_PROVIDER).strip().lower()
    try:
        return PROVIDERS[key]
    except KeyError:
        known = ", ".join(sorted(PROVIDERS))
        raise UsageError(f"Unknown provider: {name!r} (known: {known})") from None
