"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: it exists to prevent test suites from
growing lots of one-off client subclasses as coverage expands.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any

import httpx

from openrouter_kit.client import OpenRouterClient
from openrouter_kit.models import ChatResponse


def chat_body(content: Any = "ok") -> dict[str, Any]:
    """A minimal successful chat-completions body."""
    return {
        "id": "gen-123",
        "model": "openai/gpt-4o-mini",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
    }


@dataclass
class RecordingHandler:
    """httpx mock handler that records requests and returns a scripted reply.

    Set ``text`` to answer with a non-JSON body, or ``error`` to raise instead
    of answering.
    """

    status_code: int = 200
    body: Any = field(default_factory=chat_body)
    text: str | None = None
    error: BaseException | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


class ScriptedClient(OpenRouterClient):
    """OpenRouterClient that records ``send`` calls and never touches the network.

    Each call pops the next item of ``script``; exceptions are raised, strings
    become the reply content.
    """

    def __init__(self, script: list[str | None | BaseException] | None = None) -> None:
        super().__init__("test-key")
        self.script = list(script or [])
        self.calls: list[tuple[dict[str, Any], dict[str, Any] | None]] = []

    async def send(self, payload_params, header_params=None) -> ChatResponse:
        self.calls.append((dict(payload_params), header_params))
        content: Any = "ok"
        if self.script:
            content = self.script.pop(0)
        if isinstance(content, BaseException):
            raise content
        return ChatResponse(content=content, raw=chat_body(content))
