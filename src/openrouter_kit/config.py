"""Configuration: frozen Config with explicit-then-environment key resolution."""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

load_dotenv()

#: Environment variable consulted when no api_key is passed explicitly.
API_KEY_ENV_VAR = "OPEN_ROUTER_API_KEY"


@dataclass(frozen=True)
class Config:
    """Immutable credential configuration for the ``OpenRouter`` facade.

    The key is resolved once, at construction: an explicit ``api_key`` wins,
    otherwise ``OPEN_ROUTER_API_KEY`` is read from the environment (a ``.env``
    file is loaded on import). Validation of the resolved key is left to
    ``OpenRouterClient`` so every entry point fails with the same error.

    Example:
        config = Config()
        # api_key is picked up from OPEN_ROUTER_API_KEY
    """

    api_key: str | None = None

    def __post_init__(self) -> None:
        """Auto-resolve the API key from the environment."""
        if self.api_key is None:
            object.__setattr__(self, "api_key", os.environ.get(API_KEY_ENV_VAR))

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return f"Config(api_key={'[REDACTED]' if self.api_key else None})"

    __repr__ = __str__
