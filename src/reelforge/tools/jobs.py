# SPDX-License-Identifier: MIT
"""Inspect and cancel background polling sessions."""

from typing import TypedDict

from ..config import logger
from ..polling import get_registry
from ..types import PollingSessionInfo, Provider, ProviderName


class CancelResult(TypedDict):
    provider: ProviderName
    job_id: str
    cancelled: bool


def list_polling_sessions() -> list[PollingSessionInfo]:
    """List the jobs this server is currently polling."""
    return get_registry().active()


def cancel_polling(provider: ProviderName, job_id: str) -> CancelResult:
    """Stop polling a job. The remote job itself keeps running on the provider."""
    cancelled = get_registry().cancel(Provider(provider), job_id)
    if cancelled:
        logger.info("Cancellation requested for %s job %s", provider, job_id)
    else:
        logger.info("No active polling session for %s job %s", provider, job_id)
    return {"provider": provider, "job_id": job_id, "cancelled": cancelled}
