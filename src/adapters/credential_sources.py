"""Credential sources for the completion endpoint.

Responsibility:
- Implement `core.interfaces.credentials.CredentialProvider` for each place
  an API key can live (env var, project `.env.local`, `~/.config` file).
- Walk the chain in order and return the first non-empty token.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

from pydantic import SecretStr

from core.config import AppSettings, find_env_value
from core.domain.errors import MissingCredential
from core.domain.models import Credential
from core.interfaces.credentials import CredentialProvider
from core.providers import ProviderProfile


class EnvCredentialProvider(CredentialProvider):
    def __init__(self, variable: str) -> None:
        self.variable = variable
        self.name = "env"

    def describe(self) -> str:
        return f"${self.variable} environment variable"

    def fetch(self) -> str | None:
        return os.environ.get(self.variable) or None


class SecretsFileCredentialProvider(CredentialProvider):
    """Scan ``KEY=value`` secrets files in the cwd and its parents."""

    def __init__(
        self,
        key: str,
        *,
        file_name: str = ".env.local",
        depth: int = 2,
        start: Path | None = None,
    ) -> None:
        self.key = key
        self.file_name = file_name
        self.depth = depth
        self.start = start
        self.name = "secrets_file"

    def candidates(self) -> list[Path]:
        base = self.start or Path.cwd()
        out = [base / self.file_name]
        parent = base
        for _ in range(self.depth):
            parent = parent / ".."
            out.append(parent / self.file_name)
        return out

    def describe(self) -> str:
        dirs = ", ".join(["."] + ["/".join([".."] * n) for n in range(1, self.depth + 1)])
        return f"{self.key} in {self.file_name} ({dirs})"

    def fetch(self) -> str | None:
        for candidate in self.candidates():
            if not candidate.is_file():
                continue
            try:
                text = candidate.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                continue
            value = find_env_value(text, self.key)
            if value:
                return value
        return None


class HomeFileCredentialProvider(CredentialProvider):
    """Single-line secret file under the user's ``~/.config``."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.name = "home_file"

    @classmethod
    def for_profile(cls, profile: ProviderProfile) -> "HomeFileCredentialProvider":
        return cls(Path.home() / ".config" / profile.config_dir_name / "api_key")

    def describe(self) -> str:
        return str(self.path)

    def fetch(self) -> str | None:
        if not self.path.is_file():
            return None
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None
        return "".join(text.split()) or None


def default_providers(
    profile: ProviderProfile,
    settings: AppSettings | None = None,
) -> list[CredentialProvider]:
    """Ordered chain: env var, project secrets file, home config file."""

    settings = settings or AppSettings()
    return [
        EnvCredentialProvider(profile.api_key_env),
        SecretsFileCredentialProvider(
            profile.api_key_env,
            file_name=settings.secrets_file_name,
            depth=settings.secrets_search_depth,
        ),
        HomeFileCredentialProvider.for_profile(profile),
    ]


def resolve_credential(providers: Sequence[CredentialProvider]) -> Credential:
    """Return the first non-empty credential; sources are never merged."""

    for provider in providers:
        token = provider.fetch()
        if token:
            return Credential(source=provider.describe(), token=SecretStr(token))
    raise MissingCredential([p.describe() for p in providers])
