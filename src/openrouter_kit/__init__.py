"""openrouter-kit: async client for the OpenRouter chat-completions API.

Public API:
    - OpenRouter: Facade owning the client, the service and an agent factory
    - OpenRouterClient: Validated single-shot transport
    - OpenRouterService: Prompt/message normalization and JSON replies
    - OpenRouterAgent / AgentConfig: Pre-bound model, system and sampling profile
"""

from __future__ import annotations

import logging

from openrouter_kit.agent import AgentConfig, OpenRouterAgent
from openrouter_kit.client import OpenRouterClient
from openrouter_kit.config import Config
from openrouter_kit.errors import (
    ConfigError,
    ConfigurationError,
    OpenRouterError,
    ParseError,
    TransportError,
    ValidationError,
)
from openrouter_kit.models import ChatMessage, ChatResponse
from openrouter_kit.router import OpenRouter
from openrouter_kit.service import OpenRouterService

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("openrouter-kit")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("openrouter_kit").addHandler(logging.NullHandler())

__all__ = [
    "AgentConfig",
    "ChatMessage",
    "ChatResponse",
    "Config",
    "ConfigError",
    "ConfigurationError",
    "OpenRouter",
    "OpenRouterAgent",
    "OpenRouterClient",
    "OpenRouterError",
    "OpenRouterService",
    "ParseError",
    "TransportError",
    "ValidationError",
]
