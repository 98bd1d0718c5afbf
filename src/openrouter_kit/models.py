"""Domain models for the chat-completions transport layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TypedDict

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """A single conversation turn.

    Unknown keys (``name`` and friends) are kept and sent as-is.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    role: Role
    content: str = Field(min_length=1)


class HeaderParams(TypedDict, total=False):
    """Optional OpenRouter attribution headers."""

    referer: str | None
    title: str | None


class PayloadParams(TypedDict, total=False):
    """Keyword arguments accepted by ``OpenRouterClient.build_payload``."""

    model: str | None
    messages: list[dict[str, Any] | ChatMessage] | None
    temperature: float | None
    max_tokens: int | None
    top_p: float | None
    frequency_penalty: float | None
    presence_penalty: float | None
    stop: list[str] | None


@dataclass
class ChatResponse:
    """Normalized result of one chat-completions call.

    ``json`` and ``json_repaired`` are only filled in when the caller asked
    for a JSON reply.
    """

    content: str | None
    #: Full decoded response body from OpenRouter.
    raw: dict[str, Any]
    header_params: HeaderParams | None = None
    payload_params: PayloadParams | None = None
    json: Any = None
    json_repaired: bool | None = None
