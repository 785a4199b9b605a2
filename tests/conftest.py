# SPDX-License-Identifier: MIT
"""Shared pytest fixtures for reelforge tests."""

import os

import pytest
from helpers import RecordingChannel

from reelforge.config import PollingSettings, get_polling_settings
from reelforge.polling import get_registry


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear cached settings and the session registry between tests."""
    get_polling_settings.cache_clear()
    get_registry.cache_clear()
    yield
    get_polling_settings.cache_clear()
    get_registry.cache_clear()


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def fast_polling(mocker) -> PollingSettings:
    """Poll without waiting, with a small attempt bound."""
    settings = PollingSettings(interval=0.0, max_attempts=3, max_sessions=8)
    mocker.patch("reelforge.providers.get_polling_settings", return_value=settings)
    mocker.patch("reelforge.polling.registry.get_polling_settings", return_value=settings)
    return settings


@pytest.fixture
def provider_env(mocker):
    """Set fake credentials for every provider."""
    mocker.patch.dict(
        os.environ,
        {
            "RUNWAYML_API_SECRET": "rw-test",
            "LUMAAI_API_KEY": "luma-test",
            "OPENROUTER_API_KEY": "or-test",
        },
    )
