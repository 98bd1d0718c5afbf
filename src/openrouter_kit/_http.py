"""Small HTTP-related constants shared across openrouter-kit.

This module is intentionally tiny to avoid circular imports and drift.
"""

from __future__ import annotations

CHAT_COMPLETIONS_URL = "https://openrouter.ai/api/v1/chat/completions"

# OpenRouter app attribution headers.
REFERER_HEADER = "HTTP-Referer"
TITLE_HEADER = "X-Title"
