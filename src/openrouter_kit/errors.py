"""Exception hierarchy for openrouter-kit."""

from __future__ import annotations


class OpenRouterError(Exception):
    """Base exception for all openrouter-kit errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(OpenRouterError):
    """Construction arguments were missing or of the wrong kind."""


#: Short alias used throughout the docs.
ConfigError = ConfigurationError


class ValidationError(OpenRouterError):
    """Request parameters failed validation before anything was sent."""


class TransportError(OpenRouterError):
    """The chat-completions endpoint answered with a non-success status.

    ``body`` holds the decoded JSON error body when the server sent one,
    otherwise the raw response text.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
        body: object | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.body = body


class ParseError(OpenRouterError):
    """Reply content could not be parsed as JSON, even after repair."""
