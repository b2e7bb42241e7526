"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into
  the CLI.
- Lets adapters (credentials, output writer) read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.providers import DEFAULT_PROVIDER

APP_DIR_NAME = "ask-designer"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra deps)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def find_env_value(text: str, key: str) -> str | None:
    """Return the value of the first ``KEY=value`` line for ``key``.

    The key must start the line and match exactly. Quote characters are
    removed from the value wherever they appear.
    """

    prefix = f"{key}="
    for raw_line in text.splitlines():
        if not raw_line.startswith(prefix):
            continue
        value = raw_line[len(prefix):]
        return value.replace('"', "").replace("'", "")
    return None


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) without polluting the core.
    - One configuration contract for the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="ASK_DESIGNER_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    provider: str = Field(
        default=DEFAULT_PROVIDER,
        min_length=1,
        description="Provider preset name (openrouter, openai, deepseek).",
    )
    model: str | None = Field(
        default=None,
        description="Overrides the preset's default model.",
    )
    runtime_dir: str = Field(
        default=".runtime",
        min_length=1,
        description="Directory (relative to cwd) for auto-generated outputs.",
    )
    secrets_file_name: str = Field(
        default=".env.local",
        min_length=1,
        description="Project-local secrets file scanned for the API key.",
    )
    secrets_search_depth: int = Field(
        default=2,
        ge=0,
        le=10,
        description="How many parent directories are searched for the secrets file.",
    )
