"""Output types supported by ask-designer.

This module centralizes the kinds of artifact the tool can ask the model
for. Keeping it in the domain layer lets the CLI, the prompt table and the
post-processing step share one definition.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class OutputType(str, Enum):
    """Kind of artifact expected from the completion endpoint."""

    TEXT = "text"
    HTML = "html"
    SVG = "svg"

    @classmethod
    def default(cls) -> "OutputType":
        """Return the output type used when nothing else is requested."""

        return cls.TEXT

    @classmethod
    def parse(cls, value: str | None) -> "OutputType":
        """Map a raw value to an output type, falling back to ``text``."""

        normalized = (value or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return cls.default()

    @classmethod
    def from_path(cls, path: Path | str | None) -> "OutputType | None":
        """Infer the output type from a destination file suffix."""

        if not path:
            return None
        suffix = Path(path).suffix.lower()
        if suffix in (".html", ".htm"):
            return cls.HTML
        if suffix == ".svg":
            return cls.SVG
        return None

    @property
    def is_markup(self) -> bool:
        return self in (OutputType.HTML, OutputType.SVG)
