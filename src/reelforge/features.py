# SPDX-License-Identifier: MIT
"""Provider detection for reelforge.

Detects which providers are usable based on configured credentials. Tools for
an unconfigured provider stay registered and fail with a clear error on use.
"""

import os

from .config import logger

_PROVIDER_KEYS: dict[str, str] = {
    "runwayml": "RUNWAYML_API_SECRET",
    "lumaai": "LUMAAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
}


def check_provider_available(provider: str) -> bool:
    """Check if the API key for ``provider`` is set.

    Returns:
        True if the provider's environment variable is set and non-empty
    """
    env_var = _PROVIDER_KEYS[provider]
    value = os.getenv(env_var)
    if value and value.strip():
        return True
    logger.warning("%s is not set - %s tools will fail until it is configured", env_var, provider)
    return False


def get_available_providers() -> dict[str, bool]:
    """Get a dictionary of provider availability.

    Returns:
        Dict mapping provider name to availability status
    """
    return {provider: check_provider_available(provider) for provider in _PROVIDER_KEYS}
