"""Post-processing of model output before it is written to disk."""

from __future__ import annotations

import re

from core.domain.output_type import OutputType

# A whole line that only opens/closes a fence, optionally tagged for markup.
_FENCE_LINE_RE = re.compile(r"^```(?:html|svg|xml)?$")


def is_fence_line(line: str) -> bool:
    return bool(_FENCE_LINE_RE.match(line.strip()))


def strip_code_fences(content: str) -> str:
    """Drop markdown fence lines wrapping html/svg/xml code.

    Line-oriented filter: any other line, including fences that appear in
    the middle of a line or are tagged with another language, is kept as is.
    """

    return "\n".join(line for line in content.split("\n") if not is_fence_line(line))


def post_process(content: str, output_type: OutputType) -> str:
    if output_type.is_markup:
        return strip_code_fences(content)
    return content
