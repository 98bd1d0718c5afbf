"""Facade: one object that owns the client, the service and an agent factory."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from openrouter_kit.agent import AgentConfig, OpenRouterAgent
from openrouter_kit.client import OpenRouterClient
from openrouter_kit.config import Config
from openrouter_kit.service import OpenRouterService

if TYPE_CHECKING:
    import httpx


class OpenRouter:
    """Single entry point for openrouter-kit.

    Example:
        router = OpenRouter()  # key from OPEN_ROUTER_API_KEY
        agent = router.create_agent(
            model="openai/gpt-4o-mini",
            system="You are a helpful assistant.",
        )
        response = await agent.complete_chat("What is the capital of Japan?")
        print(response.content)
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Resolve the key and build the shared client and service.

        Raises:
            ConfigurationError: When neither ``api_key`` nor
                ``OPEN_ROUTER_API_KEY`` yields a usable key.
        """
        self.config = Config(api_key=api_key)
        self.client = OpenRouterClient(self.config.api_key, transport=transport)
        self.service = OpenRouterService(self.client)

    @property
    def api_key(self) -> str:
        """The API key in use."""
        return self.client.api_key

    def create_agent(
        self,
        config: AgentConfig | Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> OpenRouterAgent:
        """Return a new agent bound to this router's shared service.

        Accepts an ``AgentConfig``, a mapping of its fields, or the fields as
        keyword arguments.
        """
        if config is None:
            config = fields
        elif fields:
            config = (
                replace(config, **fields)
                if isinstance(config, AgentConfig)
                else {**config, **fields}
            )
        return OpenRouterAgent(self.service, config)
