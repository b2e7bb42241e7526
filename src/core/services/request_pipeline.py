"""Request pipeline orchestration.

This module owns the whole run: credential, task, template, destination,
the single completion call, post-processing and the final write. The CLI
only parses arguments and renders the outcome, which keeps the pipeline
reusable from tests and other entry-points.

Every stage either returns a value or raises a `DispatchError`; nothing is
written to the destination until the response has been validated and
post-processed.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence, TextIO

import httpx

from adapters.completion_client import REQUEST_TIMEOUT_SECONDS, build_client, dispatch
from adapters.credential_sources import default_providers, resolve_credential
from adapters.output_writer import persist, resolve_output_path
from core.config import AppSettings
from core.domain.errors import EmptyResponse, UsageError
from core.domain.models import ApiRequest, ApiResponse, InvocationRequest
from core.domain.output_type import OutputType
from core.interfaces.credentials import CredentialProvider
from core.postprocess import post_process
from core.prompts import select_template
from core.providers import ProviderProfile, get_provider
from core.task_input import resolve_task


@dataclass
class RunOptions:
    """Parameters that control one invocation."""

    task_text: str | None = None
    task_file: Path | None = None
    output_type: OutputType | None = None
    output_path: Path | None = None
    provider: str | None = None
    model: str | None = None
    stdin: TextIO | None = None


@dataclass
class RunPlan:
    """Everything resolved before the network call (safe to display)."""

    provider: str
    model: str
    base_url: str
    credential_source: str
    output_type: OutputType
    output_path: Path
    timeout_seconds: float = REQUEST_TIMEOUT_SECONDS


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    planned: Callable[[RunPlan], None] | None = None


@dataclass
class RunResult:
    output_path: Path
    plan: RunPlan
    response: ApiResponse


def resolve_output_type(
    explicit: Sequence[OutputType | None],
    output_path: Path | None,
) -> OutputType:
    """Pick the output type from explicit flags, else the destination suffix.

    Raises `UsageError` when explicit flags disagree.
    """

    chosen = {t for t in explicit if t is not None}
    if len(chosen) > 1:
        names = ", ".join(sorted(t.value for t in chosen))
        raise UsageError(f"Conflicting output types: {names}")
    if chosen:
        return chosen.pop()
    return OutputType.from_path(output_path) or OutputType.default()


def run_request(
    options: RunOptions,
    *,
    settings: AppSettings | None = None,
    credential_providers: Sequence[CredentialProvider] | None = None,
    http_client: httpx.Client | None = None,
    hooks: PipelineHooks | None = None,
) -> RunResult:
    """Run the full pipeline and return where the output was written."""

    settings = settings or AppSettings()
    hooks = hooks or PipelineHooks()
    profile: ProviderProfile = get_provider(options.provider or settings.provider)

    providers = credential_providers if credential_providers is not None else default_providers(profile, settings)
    credential = resolve_credential(providers)

    task_text = resolve_task(
        task_text=options.task_text,
        task_file=options.task_file,
        stdin=options.stdin,
    )
    invocation = InvocationRequest(
        task_text=task_text,
        output_type=resolve_output_type([options.output_type], options.output_path),
        output_path=options.output_path,
    )

    template = select_template(invocation.output_type)
    output_path = resolve_output_path(
        invocation.output_path,
        file_extension=template.file_extension,
        namespace=profile.runtime_namespace,
        runtime_dir=settings.runtime_dir,
    )

    model = options.model or settings.model or profile.default_model
    api_request = ApiRequest.for_task(
        model=model,
        system_prompt=template.system_prompt,
        task_text=invocation.task_text,
    )

    plan = RunPlan(
        provider=profile.display_name(),
        model=model,
        base_url=profile.base_url(),
        credential_source=credential.source,
        output_type=invocation.output_type,
        output_path=output_path,
    )
    if hooks.planned:
        hooks.planned(plan)

    with build_client(
        api_key=credential.bearer(),
        base_url=plan.base_url,
        timeout=plan.timeout_seconds,
        http_client=http_client,
    ) as client:
        response = dispatch(client, api_request)

    content = post_process(response.content, invocation.output_type)
    if not content.strip():
        raise EmptyResponse("Response contained nothing but code fences", payload=response.raw)
    persist(content, output_path)

    return RunResult(output_path=output_path, plan=plan, response=response)
