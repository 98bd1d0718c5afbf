"""Agents: a service bound to a fixed model, system prompt and sampling profile."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

from openrouter_kit.errors import ConfigurationError, ValidationError
from openrouter_kit.service import OpenRouterService

if TYPE_CHECKING:
    from openrouter_kit.models import ChatResponse


@dataclass(frozen=True)
class AgentConfig:
    """Immutable profile for an ``OpenRouterAgent``.

    Only ``model`` and ``system`` are checked here. Sampling values are kept
    as given and range-checked by the transport when a request is built.

    Example:
        config = AgentConfig(
            name="summarizer",
            model="openai/gpt-4o-mini",
            system="Summarize the user's text in one sentence.",
            temperature=0.2,
        )
    """

    model: str
    system: str
    #: Free-form label, handy in logs.
    name: str | None = None
    referer: str | None = None
    title: str | None = None
    temperature: float | None = None
    top_p: float | None = None
    max_tokens: int | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    stop: list[str] | None = None
    response_as_json: bool = False

    def __post_init__(self) -> None:
        """Validate the two required fields."""
        if not self.model or not isinstance(self.model, str):
            raise ValidationError(
                "model is required and must be a string",
                hint="Pass an OpenRouter model id such as 'openai/gpt-4o'.",
            )
        if not self.system or not isinstance(self.system, str):
            raise ValidationError(
                "system prompt is required and must be a string",
                hint="Every agent sends the same system prompt with each request.",
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> AgentConfig:
        """Build a config from a plain dict, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(
                f"Unknown agent config field(s): {', '.join(unknown)}",
                hint=f"Valid fields: {', '.join(sorted(known))}",
            )
        # Missing required fields surface as ValidationError, not TypeError.
        return cls(**{"model": None, "system": None, **data})


class OpenRouterAgent:
    """Pre-configured completion surface: callers only supply the prompt."""

    def __init__(
        self,
        service: OpenRouterService,
        config: AgentConfig | Mapping[str, Any],
    ) -> None:
        if not isinstance(service, OpenRouterService):
            raise ConfigurationError(
                "OpenRouterService instance is required",
                hint="Create agents via OpenRouter(...).create_agent(...).",
            )
        if not isinstance(config, AgentConfig):
            if not isinstance(config, Mapping):
                raise ValidationError("config must be an AgentConfig or a mapping")
            config = AgentConfig.from_mapping(config)

        self.service = service
        self.config = config

    @property
    def name(self) -> str | None:
        return self.config.name

    @property
    def model(self) -> str:
        return self.config.model

    @property
    def system(self) -> str:
        return self.config.system

    async def complete_chat(self, prompt: str) -> ChatResponse:
        """Send ``prompt`` using the agent's model, system prompt and sampling."""
        cfg = self.config
        return await self.service.complete_chat(
            prompt,
            model=cfg.model,
            system=cfg.system,
            referer=cfg.referer,
            title=cfg.title,
            temperature=cfg.temperature,
            top_p=cfg.top_p,
            max_tokens=cfg.max_tokens,
            frequency_penalty=cfg.frequency_penalty,
            presence_penalty=cfg.presence_penalty,
            stop=cfg.stop,
            response_as_json=cfg.response_as_json,
        )

    def __repr__(self) -> str:
        return f"OpenRouterAgent(name={self.name!r}, model={self.model!r})"
