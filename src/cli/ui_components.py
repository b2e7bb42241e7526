"""UI components for the CLI (Rich).

Why separate components:
- Keeps rendering details out of the command function.
- Every renderer here targets the stderr console; stdout is reserved for
  the single machine-readable ``output_path=`` line.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.domain.errors import DispatchError, EmptyResponse, TransportError
from core.services.request_pipeline import RunPlan


def build_plan_table(plan: RunPlan) -> Table:
    """Table with the resolved run parameters (never the credential value)."""

    table = Table(title="ask-designer", title_justify="left")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Provider", plan.provider)
    table.add_row("Model", plan.model)
    table.add_row("Endpoint", f"{plan.base_url}/chat/completions")
    table.add_row("API key from", plan.credential_source)
    table.add_row("Output type", plan.output_type.value)
    table.add_row("Output path", str(plan.output_path))
    table.add_row("Timeout", f"{plan.timeout_seconds:.0f}s")
    return table


def format_payload(payload: Any) -> str:
    if payload is None:
        return ""
    if isinstance(payload, str):
        return payload
    try:
        return json.dumps(payload, ensure_ascii=False, indent=2, default=str)
    except (TypeError, ValueError):
        return str(payload)


def print_error(console: Console, message: str, *, detail: str | None = None) -> None:
    """One ``[ERROR] ...`` line, optionally followed by raw upstream text."""

    console.print(f"[bold red]\\[ERROR][/bold red] {escape(message)}")
    if detail:
        console.print(detail, markup=False, highlight=False)


def print_dispatch_error(console: Console, exc: DispatchError) -> None:
    detail: str | None = None
    if isinstance(exc, TransportError):
        detail = exc.body
    elif isinstance(exc, EmptyResponse):
        detail = format_payload(exc.payload)
    print_error(console, str(exc), detail=detail)
