"""Error taxonomy of the request pipeline.

Every failure is terminal for the invocation: nothing is retried internally
and the CLI maps any `DispatchError` to exit code 1.
"""

from __future__ import annotations

from typing import Any


class DispatchError(Exception):
    """Base class for every failure the pipeline reports to the caller."""


class UsageError(DispatchError):
    """Bad or contradictory command-line arguments."""


class MissingCredential(DispatchError):
    """No credential source produced a token."""

    def __init__(self, sources: list[str]) -> None:
        self.sources = list(sources)
        checked = "; ".join(self.sources) if self.sources else "no sources configured"
        super().__init__(f"No API key found. Checked: {checked}")


class MissingTask(DispatchError):
    """Neither --task, --task-file nor stdin produced any text."""

    def __init__(self) -> None:
        super().__init__("No task provided. Use --task, --task-file, or pipe from stdin.")


class TaskFileNotFound(DispatchError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Task file does not exist: {path}")


class TransportError(DispatchError):
    """The completion endpoint could not be reached or answered non-2xx."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class EmptyResponse(DispatchError):
    """A 2xx answer without usable `choices[0].message.content`."""

    def __init__(self, message: str, *, payload: Any = None) -> None:
        self.payload = payload
        super().__init__(message)


class OutputWriteError(DispatchError):
    """The destination cannot be created or written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot write output to {path}: {reason}")
