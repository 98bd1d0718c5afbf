"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, and automatic API test
skipping. All fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import logging
import os

import pytest

from tests.helpers import RecordingHandler

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_openrouter_env(request, monkeypatch):
    """Clear OPEN_ROUTER_* env vars so the shell cannot leak a real key.

    Opt-out: @pytest.mark.allow_env_pollution or @pytest.mark.api
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith("OPEN_ROUTER_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Pytest Hooks
# =============================================================================

API_TESTS_REASON = "API tests require ENABLE_API_TESTS=1"


def _api_tests_enabled() -> bool:
    return bool(os.getenv("ENABLE_API_TESTS"))


def pytest_collection_modifyitems(items):
    """Automatically skip API tests when not explicitly enabled."""
    if _api_tests_enabled():
        return
    skip_api = pytest.mark.skip(reason=API_TESTS_REASON)
    for item in items:
        if "api" in item.keywords:
            item.add_marker(skip_api)


# =============================================================================
# Shared Fixtures
# =============================================================================

TEST_MODEL = "openai/gpt-4o-mini"


@pytest.fixture
def model() -> str:
    """Model id used by offline tests; never sent anywhere real."""
    return TEST_MODEL


@pytest.fixture
def handler() -> RecordingHandler:
    """Recording HTTP handler answering with a one-choice completion."""
    return RecordingHandler()


@pytest.fixture
def openrouter_api_key():
    """Return OPEN_ROUTER_API_KEY or skip the test if unavailable."""
    key = os.getenv("OPEN_ROUTER_API_KEY")
    if not key:
        pytest.skip("OPEN_ROUTER_API_KEY not set")
    return key
