"""Resolution of the prompt text from arguments, a file or stdin."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from core.domain.errors import MissingTask, TaskFileNotFound, UsageError


def _is_blank(text: str | None) -> bool:
    return not text or not text.strip()


def _read_stream(stream: TextIO) -> str:
    """Read a text stream; undecodable bytes become U+FFFD instead of failing."""

    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        return buffer.read().decode("utf-8", errors="replace")
    return stream.read()


def stdin_if_piped(stream: TextIO | None) -> TextIO | None:
    """Return ``stream`` unless it is missing or attached to a terminal."""

    if stream is None:
        return None
    try:
        if stream.isatty():
            return None
    except (AttributeError, ValueError):
        return None
    return stream


def resolve_task(
    *,
    task_text: str | None = None,
    task_file: Path | str | None = None,
    stdin: TextIO | None = None,
) -> str:
    """Pick the prompt text.

    Precedence: explicit text, then the task file, then piped stdin. A later
    source is only consulted when every earlier one is absent or blank, so a
    missing task file is not an error when ``task_text`` is given.
    """

    if not _is_blank(task_text):
        return task_text  # type: ignore[return-value]

    if task_file:
        path = Path(task_file)
        if not path.is_file():
            raise TaskFileNotFound(str(task_file))
        try:
            text = path.read_text(encoding="utf-8", errors="replace").rstrip("\n")
        except OSError as exc:
            raise UsageError(f"Cannot read task file {task_file}: {exc.strerror or exc}") from exc
        if not _is_blank(text):
            return text

    if stdin is not None:
        text = _read_stream(stdin).rstrip("\n")
        if not _is_blank(text):
            return text

    raise MissingTask()
