# SPDX-License-Identifier: MIT
"""Error types raised by reelforge tools.

Provider SDK errors raised while creating jobs or calling management
endpoints are translated into :class:`ProviderRequestError` so tool callers
see one consistent shape regardless of which provider failed.
"""

from typing import Literal

ErrorCategory = Literal["invalid_params", "invalid_request", "internal"]


class ProviderRequestError(RuntimeError):
    """A provider API call failed, or returned something unusable."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
        category: ErrorCategory = "internal",
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        self.category = category
        super().__init__(message)


def category_for_status(status_code: int | None) -> ErrorCategory:
    """Map an HTTP status from a provider to an error category.

    401/403 mean the server's credentials were rejected, 400/422 mean the
    arguments were rejected. Everything else (including 429 and 5xx) is internal.
    """
    if status_code in (401, 403):
        return "invalid_request"
    if status_code in (400, 422):
        return "invalid_params"
    return "internal"


def provider_api_error(provider: str, exc: Exception, status_code: int | None) -> ProviderRequestError:
    """Build a :class:`ProviderRequestError` from a provider SDK status error."""
    message = getattr(exc, "message", None) or str(exc)
    return ProviderRequestError(
        provider,
        f"{provider} API Error: {message} (Status: {status_code if status_code is not None else 'N/A'})",
        status_code=status_code,
        category=category_for_status(status_code),
    )
