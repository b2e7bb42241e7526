"""ask-designer command line.

Parses arguments, hands them to the request pipeline and renders the
outcome: ``output_path=<path>`` on stdout when the run succeeds, an
``[ERROR] ...`` line on stderr (exit code 1) when anything fails.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
import typer
from rich.console import Console

from cli.ui_components import build_plan_table, print_dispatch_error, print_error
from core.domain.errors import DispatchError, MissingTask, UsageError
from core.domain.output_type import OutputType
from core.services.request_pipeline import PipelineHooks, RunOptions, resolve_output_type, run_request
from core.task_input import stdin_if_piped

PROG_NAME = "ask-designer"

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    help=(
        "Send a design request to an OpenAI-compatible chat-completion endpoint "
        "and write the answer to a file.\n\n"
        "On success prints a single line: output_path=<file>."
    ),
)

_err_console = Console(stderr=True, soft_wrap=True)


@app.command()
def ask(
    ctx: typer.Context,
    task_arg: Optional[str] = typer.Argument(
        None,
        metavar="[TASK]",
        show_default=False,
        help="Request text (same as --task).",
    ),
    task: Optional[str] = typer.Option(None, "-t", "--task", help="Request text (or pipe from stdin)."),
    task_file: Optional[Path] = typer.Option(None, "--task-file", help="Read the request from a file."),
    html: bool = typer.Option(False, "--html", help="Shortcut for --output-type html."),
    svg: bool = typer.Option(False, "--svg", help="Shortcut for --output-type svg."),
    output_type: Optional[OutputType] = typer.Option(
        None,
        "--output-type",
        case_sensitive=False,
        help="Expected output: text (default), html, svg.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "-o",
        "--output",
        help="Output file path (default: auto-generated). A .html/.svg suffix implies the output type.",
    ),
    provider: Optional[str] = typer.Option(None, "--provider", help="Provider preset: openrouter, openai, deepseek."),
    model: Optional[str] = typer.Option(None, "--model", help="Override the provider's default model."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Print the resolved run parameters to stderr."),
) -> None:
    """Ask the model and write its answer to a file.

    Examples:

      ask-designer -t "Design a landing page for a coffee shop" --output-type html

      ask-designer -t "Create an SVG icon for a settings gear" --svg

      ask-designer "Give me 3 color palette suggestions for a tech blog"
    """

    hooks = PipelineHooks()
    if verbose:
        hooks.planned = lambda plan: _err_console.print(build_plan_table(plan))

    type_flags = [
        t
        for t in (OutputType.HTML if html else None, OutputType.SVG if svg else None, output_type)
        if t is not None
    ]

    try:
        options = RunOptions(
            task_text=task or task_arg,
            task_file=task_file,
            output_type=resolve_output_type(type_flags, output) if type_flags else None,
            output_path=output,
            provider=provider,
            model=model,
            stdin=stdin_if_piped(sys.stdin),
        )
        result = run_request(options, hooks=hooks)
    except (UsageError, MissingTask) as exc:
        print_error(_err_console, str(exc))
        _err_console.print(ctx.get_usage(), markup=False, highlight=False)
        raise typer.Exit(code=1) from None
    except DispatchError as exc:
        print_dispatch_error(_err_console, exc)
        raise typer.Exit(code=1) from None

    typer.echo(f"output_path={result.output_path}")


def run(argv: list[str] | None = None) -> None:
    """Console-script entry point.

    Click reports parse errors with exit code 2; this tool reports every
    failure with exit code 1, so the command runs in non-standalone mode and
    usage errors are rendered here.
    """

    command = typer.main.get_command(app)
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        code = command.main(args=args, prog_name=PROG_NAME, standalone_mode=False)
    except click.UsageError as exc:
        print_error(_err_console, exc.format_message())
        if exc.ctx is not None:
            _err_console.print(exc.ctx.get_usage(), markup=False, highlight=False)
        sys.exit(1)
    except click.exceptions.Abort:
        print_error(_err_console, "Aborted")
        sys.exit(1)
    sys.exit(code if isinstance(code, int) else 0)
