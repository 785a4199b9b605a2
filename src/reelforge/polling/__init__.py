# SPDX-License-Identifier: MIT
"""Background polling of remote generation jobs.

Usage::

    from reelforge.polling import JobHandle, Poller, RunwayStatusAdapter

    poller = Poller(handle, fetch, RunwayStatusAdapter(), emitter)
    video_url = await poller.run()
"""

from .adapters import (
    Classification,
    Failure,
    LumaStatusAdapter,
    Pending,
    RunwayStatusAdapter,
    StatusAdapter,
    Success,
    Unrecognized,
)
from .poller import (
    JobCancelledError,
    JobFailedError,
    JobHandle,
    JobNotFoundError,
    JobTimeoutError,
    Poller,
    PollingError,
    PollOptions,
    PollSession,
    PollState,
    poll_job,
)
from .progress import McpProgressChannel, ProgressChannel, ProgressEmitter, ProgressEvent, emitter_from_context
from .registry import PollRegistry, get_registry

__all__ = [
    "Classification",
    "Failure",
    "JobCancelledError",
    "JobFailedError",
    "JobHandle",
    "JobNotFoundError",
    "JobTimeoutError",
    "LumaStatusAdapter",
    "McpProgressChannel",
    "Pending",
    "PollOptions",
    "PollRegistry",
    "PollSession",
    "PollState",
    "Poller",
    "PollingError",
    "ProgressChannel",
    "ProgressEmitter",
    "ProgressEvent",
    "RunwayStatusAdapter",
    "StatusAdapter",
    "Success",
    "Unrecognized",
    "emitter_from_context",
    "get_registry",
    "poll_job",
]
