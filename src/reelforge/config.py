# SPDX-License-Identifier: MIT
"""Configuration management for reelforge MCP server.

This module handles:
- Provider client initialization (RunwayML, Luma AI, OpenRouter)
- Environment variable validation
- Polling bounds configuration
- Logging setup
"""

import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache

from lumaai import AsyncLumaAI
from openai import AsyncOpenAI
from runwayml import AsyncRunwayML

# ---------- Logging configuration ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,  # Log to stderr to avoid interfering with stdio MCP transport
)
logger = logging.getLogger("reelforge")

OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_MODEL = "anthropic/claude-3-haiku"


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value or not value.strip():
        raise RuntimeError(f"{name} is not set")
    return value.strip()


# ---------- Provider clients (stateless) ----------
def get_runway_client() -> AsyncRunwayML:
    """Get a RunwayML async client instance.

    Returns:
        Configured AsyncRunwayML client

    Raises:
        RuntimeError: If RUNWAYML_API_SECRET environment variable is not set
    """
    return AsyncRunwayML(api_key=_require_env("RUNWAYML_API_SECRET"))


def get_luma_client() -> AsyncLumaAI:
    """Get a Luma AI async client instance.

    Raises:
        RuntimeError: If LUMAAI_API_KEY environment variable is not set
    """
    return AsyncLumaAI(auth_token=_require_env("LUMAAI_API_KEY"))


def get_openrouter_client() -> AsyncOpenAI:
    """Get an OpenAI-compatible client pointed at OpenRouter.

    OpenRouter speaks the OpenAI chat completions protocol, so the OpenAI SDK
    is reused with a different base URL.

    Raises:
        RuntimeError: If OPENROUTER_API_KEY environment variable is not set
    """
    api_key = _require_env("OPENROUTER_API_KEY")
    base_url = os.getenv("OPENROUTER_BASE_URL", OPENROUTER_DEFAULT_BASE_URL)
    return AsyncOpenAI(api_key=api_key, base_url=base_url)


def get_openrouter_model() -> str:
    return os.getenv("OPENROUTER_MODEL", OPENROUTER_DEFAULT_MODEL)


# ---------- Polling configuration (runtime) ----------


@dataclass(frozen=True)
class PollingSettings:
    """Bounds applied to every background poll session."""

    interval: float = 5.0
    max_attempts: int = 60
    max_sessions: int = 32
    luma_upscale_asset_field: str = "video"


def _env_number(name: str, default: float, cast: type, minimum: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as e:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from e
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum}, got {value}")
    return value


@lru_cache(maxsize=1)
def get_polling_settings() -> PollingSettings:
    """Read and validate polling bounds from the environment.

    Environment variables:
        POLL_INTERVAL_SECONDS: Seconds between poll ticks (default 5)
        POLL_MAX_ATTEMPTS: Ticks before a session times out (default 60)
        POLL_MAX_SESSIONS: Concurrent background sessions, 0 for unbounded (default 32)
        LUMA_UPSCALE_ASSET_FIELD: Luma ``assets`` field holding upscale results (default "video")

    Raises:
        RuntimeError: If a numeric variable is malformed or out of range
    """
    settings = PollingSettings(
        interval=_env_number("POLL_INTERVAL_SECONDS", 5.0, float, 0),
        max_attempts=int(_env_number("POLL_MAX_ATTEMPTS", 60, int, 1)),
        max_sessions=int(_env_number("POLL_MAX_SESSIONS", 32, int, 0)),
        luma_upscale_asset_field=os.getenv("LUMA_UPSCALE_ASSET_FIELD", "video").strip() or "video",
    )
    logger.debug("Polling settings: %s", settings)
    return settings
