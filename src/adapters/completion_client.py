"""Adapter for OpenAI-compatible chat completions (OpenAI SDK over httpx).

Responsibility:
- Build a client bound to one provider endpoint, with the run's fixed
  timeout and no SDK-level retries.
- Send exactly one chat-completion request and normalize the outcome into
  an `ApiResponse` or a `TransportError` / `EmptyResponse`.
"""

from __future__ import annotations

from typing import Any

import httpx
from openai import (
    APIConnectionError,
    APIResponseValidationError,
    APIStatusError,
    APITimeoutError,
    OpenAI,
)

from core.domain.errors import EmptyResponse, TransportError
from core.domain.models import ApiRequest, ApiResponse

REQUEST_TIMEOUT_SECONDS = 180.0
USER_AGENT = "ask-designer/0.1"


def build_http_client(*, timeout: float = REQUEST_TIMEOUT_SECONDS) -> httpx.Client:
    """Create the `httpx.Client` the SDK sends through.

    One builder keeps timeouts and headers in a single place and gives tests
    a seam to plug in `httpx.MockTransport`.
    """

    return httpx.Client(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


def build_client(
    *,
    api_key: str,
    base_url: str,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    http_client: httpx.Client | None = None,
) -> OpenAI:
    return OpenAI(
        api_key=api_key,
        base_url=base_url,
        timeout=timeout,
        max_retries=0,
        http_client=http_client or build_http_client(timeout=timeout),
    )


def _extract_content(completion: Any) -> str | None:
    choices = getattr(completion, "choices", None)
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str):
        return None
    return content


def _raw_payload(completion: Any) -> dict[str, Any]:
    try:
        return completion.model_dump()  # type: ignore[union-attr]
    except Exception:
        return {"raw_text": str(completion)}


def dispatch(client: OpenAI, request: ApiRequest) -> ApiResponse:
    """Send ``request`` once and return the parsed response.

    Raises:
        TransportError: non-2xx status, timeout or connection failure.
        EmptyResponse: 2xx without `choices[0].message.content`.
    """

    try:
        completion = client.chat.completions.create(
            model=request.model,
            messages=request.wire_messages(),  # type: ignore[arg-type]
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )
    except APIStatusError as exc:
        raise TransportError(
            f"Completion endpoint returned HTTP {exc.status_code}",
            status_code=exc.status_code,
            body=exc.response.text,
        ) from exc
    except APITimeoutError as exc:
        raise TransportError(f"Completion request timed out: {exc}") from exc
    except APIConnectionError as exc:
        raise TransportError(f"Could not reach completion endpoint: {exc}") from exc
    except APIResponseValidationError as exc:
        raise EmptyResponse(
            "Completion endpoint returned an unreadable payload",
            payload=exc.response.text,
        ) from exc

    raw = _raw_payload(completion)
    content = _extract_content(completion)
    if not content or not content.strip():
        raise EmptyResponse("Empty response from completion endpoint", payload=raw)

    return ApiResponse(
        content=content,
        model=getattr(completion, "model", None) or None,
        raw=raw,
    )
