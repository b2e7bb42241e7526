"""Credential source contract.

Why Protocol:
- Defines a structural contract (duck typing) without rigid inheritance.
- Sources (env var, secrets file, home config file) stay interchangeable and
  testable; new ones are appended to the chain without touching call sites.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialProvider(Protocol):
    """Minimal contract for one place an API key may live.

    Design rules:
    - `fetch` returns ``None`` (or an empty string) when the source has
      nothing; it never raises for a missing file or variable.
    - `describe` names the source for error messages, never the value.
    """

    name: str

    def describe(self) -> str:
        ...

    def fetch(self) -> str | None:
        ...
