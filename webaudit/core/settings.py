"""
Environment-driven settings for the optional narrative enrichment.

Each value can be supplied in three ways (in priority order):
  1. Explicit argument to :func:`get_ai_settings`.
  2. Environment variable.
  3. Built-in default.

The API key has no default: without one the engine uses its static
narrative templates.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

from webaudit.core.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_S = 30.0

_API_KEY_VARS: tuple[str, ...] = ("AI_INTEGRATIONS_OPENAI_API_KEY", "OPENAI_API_KEY")
_BASE_URL_VAR = "AI_INTEGRATIONS_OPENAI_BASE_URL"
_MODEL_VAR = "WEBAUDIT_AI_MODEL"
_TIMEOUT_VAR = "WEBAUDIT_AI_TIMEOUT"


class AISettings(BaseModel):
    """Resolved settings for the chat-completion client."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    base_url: str | None = None
    model: str = DEFAULT_MODEL
    timeout: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


def get_api_key(api_key: str | None = None) -> str | None:
    """Resolve the LLM API key.

    Args:
        api_key: Explicit key; ``None`` falls back to the environment.

    Returns:
        The key, or ``None`` when none is configured.
    """
    if api_key:
        return api_key
    for var in _API_KEY_VARS:
        value = os.getenv(var, "").strip()
        if value:
            return value
    return None


def get_ai_settings(
    api_key: str | None = None,
    base_url: str | None = None,
    model: str | None = None,
    timeout: float | None = None,
) -> AISettings:
    """Build :class:`AISettings` from arguments, environment, then defaults."""
    env_timeout = os.getenv(_TIMEOUT_VAR, "").strip()
    if timeout is None:
        timeout = _parse_timeout(env_timeout) if env_timeout else DEFAULT_TIMEOUT_S
    return AISettings(
        api_key=get_api_key(api_key),
        base_url=base_url or os.getenv(_BASE_URL_VAR) or None,
        model=model or os.getenv(_MODEL_VAR) or DEFAULT_MODEL,
        timeout=timeout,
    )


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if not value > 0:
        logger.warning(
            "Ignoring invalid %s=%r, using %.0fs", _TIMEOUT_VAR, raw, DEFAULT_TIMEOUT_S,
        )
        return DEFAULT_TIMEOUT_S
    return value
