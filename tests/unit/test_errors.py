# SPDX-License-Identifier: MIT
"""Unit tests for provider error translation."""

import pytest

from reelforge.errors import ProviderRequestError, category_for_status, provider_api_error


@pytest.mark.unit
@pytest.mark.parametrize(
    ("status_code", "category"),
    [
        (401, "invalid_request"),
        (403, "invalid_request"),
        (400, "invalid_params"),
        (422, "invalid_params"),
        (404, "internal"),
        (429, "internal"),
        (500, "internal"),
        (None, "internal"),
    ],
)
def test_category_for_status(status_code, category):
    assert category_for_status(status_code) == category


@pytest.mark.unit
def test_provider_api_error_message():
    class FakeStatusError(Exception):
        message = "prompt too long"

    error = provider_api_error("RunwayML", FakeStatusError(), 400)

    assert isinstance(error, ProviderRequestError)
    assert str(error) == "RunwayML API Error: prompt too long (Status: 400)"
    assert error.provider == "RunwayML"
    assert error.status_code == 400
    assert error.category == "invalid_params"


@pytest.mark.unit
def test_provider_api_error_without_status():
    error = provider_api_error("Luma AI", ValueError("boom"), None)

    assert str(error) == "Luma AI API Error: boom (Status: N/A)"
    assert error.category == "internal"
