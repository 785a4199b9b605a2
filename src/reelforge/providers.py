# SPDX-License-Identifier: MIT
"""Status fetchers and the handoff from job initiators to the poller."""

from typing import Any

import lumaai
import runwayml

from .config import get_polling_settings, logger
from .polling import (
    JobHandle,
    JobNotFoundError,
    LumaStatusAdapter,
    Poller,
    PollOptions,
    ProgressEmitter,
    RunwayStatusAdapter,
    StatusAdapter,
    get_registry,
)
from .types import Provider, ResultKind, TaskInitiated


async def fetch_runway_task(client: runwayml.AsyncRunwayML, task_id: str) -> Any:
    """Retrieve one RunwayML task snapshot.

    Raises:
        JobNotFoundError: If RunwayML reports the task ID as unknown
    """
    try:
        return await client.tasks.retrieve(task_id)
    except runwayml.NotFoundError as e:
        raise JobNotFoundError(task_id) from e


async def fetch_luma_generation(client: lumaai.AsyncLumaAI, generation_id: str) -> Any:
    """Retrieve one Luma AI generation snapshot.

    Raises:
        JobNotFoundError: If Luma reports the generation ID as unknown
    """
    try:
        return await client.generations.get(generation_id)
    except lumaai.NotFoundError as e:
        raise JobNotFoundError(generation_id) from e


def adapter_for(provider: Provider) -> StatusAdapter:
    if provider is Provider.RUNWAYML:
        return RunwayStatusAdapter()
    upscale_field = get_polling_settings().luma_upscale_asset_field
    return LumaStatusAdapter({ResultKind.UPSCALED_VIDEO: upscale_field})


def build_poller(handle: JobHandle, client: Any, emitter: ProgressEmitter) -> Poller:
    """Build a poller for a freshly created job using the configured bounds."""
    if handle.provider is Provider.RUNWAYML:

        async def fetch(job_id: str) -> Any:
            return await fetch_runway_task(client, job_id)

    else:

        async def fetch(job_id: str) -> Any:
            return await fetch_luma_generation(client, job_id)

    settings = get_polling_settings()
    options = PollOptions(interval=settings.interval, max_attempts=settings.max_attempts)
    return Poller(handle, fetch, adapter_for(handle.provider), emitter, options)


_DISPLAY_NAMES = {Provider.RUNWAYML: "RunwayML", Provider.LUMAAI: "Luma AI"}


def display_name(provider: Provider) -> str:
    return _DISPLAY_NAMES[provider]


def check_polling_capacity() -> None:
    """Refuse a new job before it is created when no poll session can be started.

    Raises:
        RuntimeError: If the configured number of sessions is already running
    """
    get_registry().check_capacity()


async def initiate(handle: JobHandle, client: Any, emitter: ProgressEmitter, operation: str) -> TaskInitiated:
    """Announce a created job, hand it to the poller, and build the tool result.

    The job already exists on the provider, so this never raises for registry
    reasons. A job that is already being polled keeps its existing session.
    """
    registry = get_registry()
    initiated = f"{display_name(handle.provider)} {operation} task initiated with ID: {handle.job_id}. "
    if handle in registry:
        logger.warning(
            "%s job %s is already being polled; keeping the existing session", handle.provider.value, handle.job_id
        )
        status_note = "It is already being polled; status updates go to the request that started that session."
    else:
        extra: dict[str, Any] = {"operation": operation} if operation == "upscale" else {}
        await emitter.emit("INITIATED", {"taskId": handle.job_id, "provider": handle.provider.value, **extra})
        registry.start(build_poller(handle, client, emitter))
        status_note = "Generation is in progress. Status updates will follow."
    return {
        "task_id": handle.job_id,
        "provider": handle.provider.value,
        "operation": operation,
        "message": initiated + status_note,
    }
