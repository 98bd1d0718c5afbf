"""Transport layer: one validated POST against OpenRouter chat completions."""

from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from openrouter_kit._http import CHAT_COMPLETIONS_URL, REFERER_HEADER, TITLE_HEADER
from openrouter_kit.errors import ConfigurationError, TransportError, ValidationError
from openrouter_kit.models import (
    ChatMessage,
    ChatResponse,
    HeaderParams,
    PayloadParams,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

log = logging.getLogger(__name__)

_MESSAGES_ADAPTER: TypeAdapter[list[ChatMessage]] = TypeAdapter(list[ChatMessage])

# (field, low, high, allow_zero); bounds are inclusive.
_NUMERIC_BOUNDS: tuple[tuple[str, float, float, bool], ...] = (
    ("temperature", 0, 2, True),
    ("top_p", 0, 1, True),
    ("frequency_penalty", -2, 2, True),
    ("presence_penalty", -2, 2, True),
    ("max_tokens", 1, math.inf, False),
)


class OpenRouterClient:
    """Low-level client for the OpenRouter ``/chat/completions`` endpoint.

    Every ``send`` is a single attempt: no pooling, retries or timeouts.
    Wrap calls yourself if you need a deadline.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize with an OpenRouter API key.

        Args:
            api_key: OpenRouter credential.
            transport: Optional httpx transport, mainly for stubbing the network.
            logger: Optional logger that receives request failures.
        """
        if not api_key or not isinstance(api_key, str):
            raise ConfigurationError(
                "apiKey is required and must be a string.",
                hint="Set OPEN_ROUTER_API_KEY or pass api_key=...",
            )
        self.api_key = api_key
        self._transport = transport
        self._logger = logger or log

    @property
    def endpoint(self) -> str:
        """URL of the chat completions endpoint."""
        return CHAT_COMPLETIONS_URL

    def build_headers(
        self, referer: str | None = None, title: str | None = None
    ) -> dict[str, str]:
        """Return request headers, adding attribution headers when given."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if referer:
            headers[REFERER_HEADER] = referer
        if title:
            headers[TITLE_HEADER] = title
        return headers

    def build_payload(
        self,
        *,
        model: str | None = None,
        messages: Sequence[dict[str, Any] | ChatMessage] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
        frequency_penalty: float | None = None,
        presence_penalty: float | None = None,
        stop: list[str] | None = None,
    ) -> dict[str, Any]:
        """Validate parameters and build the JSON body for the endpoint.

        Parameters left as ``None`` are omitted from the result entirely.

        Raises:
            ValidationError: On a missing model, a malformed message list or an
                out-of-range sampling control.
        """
        if not model or not isinstance(model, str):
            raise ValidationError(
                "model must be a non-empty string",
                hint="Pass an OpenRouter model id such as 'openai/gpt-4o'.",
            )

        payload: dict[str, Any] = {
            "model": model,
            "messages": _validate_messages(messages),
        }

        values = {
            "temperature": temperature,
            "top_p": top_p,
            "frequency_penalty": frequency_penalty,
            "presence_penalty": presence_penalty,
            "max_tokens": max_tokens,
        }
        for name, low, high, allow_zero in _NUMERIC_BOUNDS:
            value = values[name]
            if value is None:
                continue
            _check_number(name, value, low, high, allow_zero=allow_zero)
            payload[name] = value

        if stop is not None:
            if not isinstance(stop, list) or not all(isinstance(s, str) for s in stop):
                raise ValidationError("stop must be a list of strings or None")
            payload["stop"] = stop

        return payload

    async def send(
        self,
        payload_params: PayloadParams,
        header_params: HeaderParams | None = None,
    ) -> ChatResponse:
        """POST one completion request and normalize the reply.

        Returns:
            ChatResponse with the first choice's content (``None`` when the reply
            has no such field) and the full decoded body.

        Raises:
            ValidationError: Before any network activity, on bad parameters.
            TransportError: When OpenRouter answers with a non-2xx status.
        """
        _reject_unknown_keys("payload_params", payload_params, PayloadParams)
        _reject_unknown_keys("header_params", header_params or {}, HeaderParams)
        payload = self.build_payload(**payload_params)
        headers = self.build_headers(**(header_params or {}))

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=None
            ) as http:
                response = await http.post(
                    self.endpoint, headers=headers, content=json.dumps(payload)
                )
            if not response.is_success:
                raise _status_error(response)
            body = response.json()
        except Exception as exc:
            self._logger.error("Request to %s failed: %s", self.endpoint, exc)
            raise

        return ChatResponse(content=_extract_content(body), raw=body)


def _reject_unknown_keys(
    label: str, params: Mapping[str, Any], shape: type[Mapping[str, Any]]
) -> None:
    unknown = sorted(set(params) - set(shape.__annotations__))
    if unknown:
        raise ValidationError(
            f"Unknown {label} key(s): {', '.join(unknown)}",
            hint=f"Valid keys: {', '.join(sorted(shape.__annotations__))}",
        )


def _validate_messages(
    messages: Sequence[dict[str, Any] | ChatMessage] | None,
) -> list[dict[str, Any]]:
    if not isinstance(messages, (list, tuple)) or not messages:
        raise ValidationError(
            "messages must be a non-empty list",
            hint="Pass messages=[{'role': 'user', 'content': '...'}].",
        )
    try:
        validated = _MESSAGES_ADAPTER.validate_python(list(messages))
    except PydanticValidationError as e:
        raise ValidationError(
            "Each message must be an object with 'role' and 'content'",
            hint="Roles are 'system', 'user' or 'assistant'; content is a non-empty string.",
        ) from e
    return [message.model_dump() for message in validated]


def _check_number(
    name: str, value: Any, low: float, high: float, *, allow_zero: bool
) -> None:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or math.isnan(value)
    ):
        raise ValidationError(f"{name} must be a number")
    if math.isinf(value):
        raise ValidationError(f"{name} must be a finite number")
    if value < low or value > high or (not allow_zero and value == 0):
        suffix = "" if allow_zero else " (zero not allowed)"
        raise ValidationError(f"{name} must be between {low} and {high}{suffix}")


def _status_error(response: httpx.Response) -> TransportError:
    """Build a TransportError, preferring the JSON error body over raw text."""
    body: Any
    try:
        body = response.json()
        detail = json.dumps(body)
    except ValueError:
        body = response.text
        detail = body

    status = response.status_code
    hint = None
    if status in {401, 403}:
        hint = "Check credentials (try setting OPEN_ROUTER_API_KEY or api_key=...)."
    elif status == 402:
        hint = "The OpenRouter account has insufficient credits for this request."
    return TransportError(
        f"OpenRouter error: {status} - {detail}",
        hint=hint,
        status_code=status,
        body=body,
    )


def _extract_content(body: Any) -> str | None:
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content
