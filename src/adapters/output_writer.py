"""Destination resolution and persistence of the model output.

Why atomic:
- The final file only appears once the whole content is on disk; a failed
  write leaves neither a partial artifact nor a stray temporary file.
"""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from core.domain.errors import OutputWriteError

TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


def resolve_output_path(
    explicit_path: Path | str | None,
    *,
    file_extension: str,
    namespace: str,
    runtime_dir: str = ".runtime",
    now: datetime | None = None,
) -> Path:
    """Return the destination path, creating its parent directory.

    An explicit path is used verbatim. Otherwise the path is
    ``<cwd>/<runtime_dir>/<namespace>/<UTC timestamp>.<ext>``.
    """

    if explicit_path:
        path = Path(explicit_path)
    else:
        stamp = (now or datetime.now(timezone.utc)).strftime(TIMESTAMP_FORMAT)
        path = Path.cwd() / runtime_dir / namespace / f"{stamp}.{file_extension}"

    if path.is_dir():
        raise OutputWriteError(str(path), "is a directory")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(str(path), exc.strerror or str(exc)) from exc
    return path


def _write_atomic(content: str, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.name}.",
        suffix=".tmp",
        dir=str(output_path.parent),
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content.rstrip("\n") + "\n")
        # mkstemp creates 0600; match what a plain open() would have produced.
        umask = os.umask(0)
        os.umask(umask)
        os.chmod(tmp_path, 0o666 & ~umask)
        os.replace(tmp_path, output_path)
    finally:
        tmp_path.unlink(missing_ok=True)


def persist(content: str, output_path: Path) -> Path:
    """Write ``content`` with exactly one trailing newline, overwriting."""

    if output_path.is_dir():
        raise OutputWriteError(str(output_path), "is a directory")
    try:
        _write_atomic(content, output_path)
    except OSError as exc:
        raise OutputWriteError(str(output_path), exc.strerror or str(exc)) from exc
    return output_path
