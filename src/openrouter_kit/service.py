"""Service layer: prompt-style requests and optional JSON replies."""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any

from json_repair import repair_json

from openrouter_kit.client import OpenRouterClient
from openrouter_kit.errors import ConfigurationError, ParseError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from openrouter_kit.models import (
        ChatMessage,
        ChatResponse,
        HeaderParams,
        PayloadParams,
    )

log = logging.getLogger(__name__)

# Only a fence opening or closing the reply counts; fences inside strings stay.
_CODE_FENCE_RE = re.compile(r"\A```(?:json)?\s*|\s*```\Z", re.IGNORECASE)

# What repair_json hands back when it found nothing worth keeping.
_EMPTY_REPAIRS = frozenset({"", '""'})


class OpenRouterService:
    """High-level wrapper around ``OpenRouterClient``.

    Accepts either a prompt (plus optional system text) or a ready-made
    message list, and can parse the reply as JSON, repairing near-valid
    output when the model gets the syntax slightly wrong.
    """

    def __init__(
        self,
        client: OpenRouterClient,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        """Bind the service to a transport client."""
        if not isinstance(client, OpenRouterClient):
            raise ConfigurationError(
                "client must be an instance of OpenRouterClient",
                hint="Build one with OpenRouterClient(api_key=...).",
            )
        self.client = client
        self._logger = logger or log

    async def complete_chat(
        self,
        prompt: str | None = None,
        *,
        model: str | None,
        system: str | None = None,
        messages: Sequence[dict[str, Any] | ChatMessage] | None = None,
        response_as_json: bool = False,
        referer: str | None = None,
        title: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
        frequency_penalty: float | None = None,
        presence_penalty: float | None = None,
        stop: list[str] | None = None,
    ) -> ChatResponse:
        """Send a prompt or message list to ``model``.

        When both ``prompt`` and ``messages`` are given, the prompt wins and
        the messages are ignored (a warning is logged).

        Args:
            prompt: User input; turned into messages with ``build_messages``.
            model: OpenRouter model id, e.g. ``"openai/gpt-4o"``.
            system: Optional system message, only used together with ``prompt``.
            messages: Explicit conversation, used when no prompt is given.
            response_as_json: Parse the reply content into ``response.json``.
            referer: Optional ``HTTP-Referer`` attribution header.
            title: Optional ``X-Title`` attribution header.
            temperature: Sampling temperature (0-2).
            max_tokens: Output token limit (>= 1).
            top_p: Nucleus sampling probability (0-1).
            frequency_penalty: Repetition penalty (-2 to 2).
            presence_penalty: New-topic penalty (-2 to 2).
            stop: Stop sequences.

        Returns:
            ChatResponse carrying the header and payload params that were used.
        """
        if prompt is not None and messages is not None:
            self._logger.warning(
                "prompt has priority over messages; messages will be ignored"
            )

        header_params: HeaderParams = {"referer": referer, "title": title}
        payload_params: PayloadParams = {
            "model": model,
            "messages": (
                self.build_messages(prompt, system) if prompt is not None else messages
            ),
            "temperature": temperature,
            "max_tokens": max_tokens,
            "top_p": top_p,
            "frequency_penalty": frequency_penalty,
            "presence_penalty": presence_penalty,
            "stop": stop,
        }

        self._logger.debug("complete_chat model %s", model)

        response = await self.client.send(payload_params, header_params)
        response.header_params = header_params
        response.payload_params = payload_params

        return self.process_json_response(response) if response_as_json else response

    def build_messages(
        self, prompt: str, system: str | None = None
    ) -> list[dict[str, str]]:
        """Convert a prompt and optional system text into chat messages."""
        if not prompt or not isinstance(prompt, str):
            raise ValidationError("prompt has to be a string")
        if system is not None and not isinstance(system, str):
            raise ValidationError("system has to be a string")

        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages

    def process_json_response(self, response: ChatResponse) -> ChatResponse:
        """Parse ``response.content`` as JSON, repairing it if needed.

        Sets ``response.json`` and ``response.json_repaired`` in place and
        returns the same object. Strict parsing is tried first; only when it
        fails is the text run through ``json_repair``.

        Raises:
            ParseError: When the repaired text still does not parse. The message
                carries the error from the first, strict attempt.
        """
        if response.content is None:
            raise ParseError(
                "JSON parse error: response has no content",
                hint="Inspect response.raw for the provider's full reply.",
            )

        json_string = _sanitize_json_string(response.content)

        try:
            response.json = json.loads(json_string)
            response.json_repaired = False
        except json.JSONDecodeError as err:
            repaired = repair_json(json_string)
            try:
                response.json = _loads_repaired(repaired)
                response.json_repaired = True
            except ValueError:
                model = (response.payload_params or {}).get("model")
                self._logger.error(
                    "Error parsing this JSON with model %s: %s", model, repaired
                )
                raise ParseError(f"JSON parse error: {err}") from err

        return response


def _sanitize_json_string(text: str) -> str:
    """Drop surrounding whitespace and markdown code fences."""
    return _CODE_FENCE_RE.sub("", text.strip()).strip()


def _loads_repaired(text: str) -> Any:
    if text.strip() in _EMPTY_REPAIRS:
        raise ValueError("repair produced no JSON value")
    return json.loads(text)
