"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation at the point where CLI arguments become a request.
- The wire payload for the completion endpoint is a plain `model_dump`.

Note:
- These models describe *what* travels through the pipeline, not *how* it
  is fetched or written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict

from core.domain.output_type import OutputType

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 16384


class InvocationRequest(BaseModel):
    """What the caller asked for, once arguments are resolved."""

    model_config = ConfigDict(frozen=True)

    task_text: str = Field(
        ...,
        min_length=1,
        description="Prompt text sent as the user message.",
    )
    output_type: OutputType = Field(
        default=OutputType.TEXT,
        description="Selects the system prompt and the post-processing.",
    )
    output_path: Path | None = Field(
        default=None,
        description="Explicit destination; auto-generated when omitted.",
    )


class Credential(BaseModel):
    """Bearer token plus the name of the source that produced it.

    The token is a `SecretStr`, so it never shows up in reprs or dumps.
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field(..., min_length=1)
    token: SecretStr

    def bearer(self) -> str:
        return self.token.get_secret_value()


class PromptTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    system_prompt: str = Field(..., min_length=1)
    file_extension: str = Field(..., min_length=1, pattern=r"^[a-z0-9]+$")


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ApiRequest(BaseModel):
    """Body of one chat-completion call."""

    model: str = Field(..., min_length=1)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    messages: list[ChatMessage] = Field(..., min_length=1)

    @classmethod
    def for_task(cls, *, model: str, system_prompt: str, task_text: str) -> "ApiRequest":
        return cls(
            model=model,
            messages=[
                ChatMessage(role="system", content=system_prompt),
                ChatMessage(role="user", content=task_text),
            ],
        )

    def wire_messages(self) -> list[dict[str, str]]:
        return [m.model_dump() for m in self.messages]


class ApiResponse(BaseModel):
    """Raw payload of a successful call and the extracted message content."""

    content: str = Field(..., min_length=1)
    model: str | None = Field(
        default=None,
        description="Model reported by the provider (may differ from the requested one).",
    )
    raw: dict[str, Any] = Field(default_factory=dict)
