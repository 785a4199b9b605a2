# SPDX-License-Identifier: MIT
"""Asynchronous job polling engine.

A :class:`Poller` drives one remote job from submission to a terminal state:

    RUNNING -> SUCCEEDED | FAILED | TIMED_OUT | CANCELLED

Ticks run on a fixed-rate schedule: each tick is due one ``interval`` after
the previous one was due. A tick whose fetch overruns makes the next tick
start at once, and the schedule is re-anchored there so only that one tick
is late. Ticks never overlap. Every tick counts as one attempt, whether its
fetch succeeded or raised a transient error.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import anyio
import anyio.lowlevel

from ..config import logger
from ..types import Provider, ResultKind
from .adapters import Failure, Pending, StatusAdapter, Success, Unrecognized
from .progress import ProgressEmitter

StatusFetcher = Callable[[str], Awaitable[Any]]


class PollState(str, Enum):
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    TIMED_OUT = "TIMED_OUT"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class JobHandle:
    """Identifies one remote asynchronous job."""

    job_id: str
    provider: Provider
    kind: ResultKind = ResultKind.VIDEO

    @property
    def key(self) -> tuple[Provider, str]:
        return (self.provider, self.job_id)


@dataclass(frozen=True)
class PollOptions:
    interval: float = 5.0
    max_attempts: int = 60

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValueError(f"interval must be >= 0, got {self.interval}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")


@dataclass
class PollSession:
    """Mutable state of one in-flight poll, owned by its Poller."""

    attempts: int = 0
    last_status: str | None = None
    state: PollState = PollState.RUNNING
    started_at: float | None = None
    result: str | None = None
    reason: str | None = None

    @property
    def terminal(self) -> bool:
        return self.state is not PollState.RUNNING


class PollingError(RuntimeError):
    """Base class for terminal poll outcomes other than success."""

    def __init__(self, handle: JobHandle, message: str) -> None:
        self.handle = handle
        super().__init__(message)


class JobFailedError(PollingError):
    def __init__(self, handle: JobHandle, reason: str) -> None:
        self.reason = reason
        super().__init__(handle, f"{handle.provider.value} job {handle.job_id} failed: {reason}")


class JobTimeoutError(PollingError):
    def __init__(self, handle: JobHandle, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(handle, f"Polling timed out for {handle.provider.value} job {handle.job_id}")


class JobCancelledError(PollingError):
    def __init__(self, handle: JobHandle) -> None:
        super().__init__(handle, f"Polling cancelled for {handle.provider.value} job {handle.job_id}")


class JobNotFoundError(Exception):
    """Raised by a status fetcher when the provider does not know the job ID."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Job {job_id} not found")


class Poller:
    """Polls one job until it succeeds, fails, times out, or is cancelled.

    Args:
        handle: The job to poll
        fetch: Coroutine function performing one status round trip for a job ID
        adapter: Status adapter for the job's provider
        emitter: Progress emitter (silent when omitted)
        options: Interval and attempt bound
    """

    def __init__(
        self,
        handle: JobHandle,
        fetch: StatusFetcher,
        adapter: StatusAdapter,
        emitter: ProgressEmitter | None = None,
        options: PollOptions | None = None,
    ) -> None:
        self.handle = handle
        self.adapter = adapter
        self.emitter = emitter or ProgressEmitter()
        self.options = options or PollOptions()
        self.session = PollSession()
        self._fetch = fetch
        self._cancel_requested = False
        self._cancel_event: anyio.Event | None = None
        self._running = False

    def cancel(self) -> bool:
        """Request cancellation. Returns False if the session already ended."""
        if self.session.terminal:
            return False
        self._cancel_requested = True
        if self._cancel_event is not None:
            self._cancel_event.set()
        return True

    async def run(self) -> str:
        """Poll until a terminal state and return the asset URL.

        Raises:
            JobFailedError: Provider reported failure, job not found, or success without an asset
            JobTimeoutError: ``max_attempts`` ticks passed with no terminal status
            JobCancelledError: :meth:`cancel` was called first
        """
        if self._running or self.session.terminal:
            raise RuntimeError(f"Poller for job {self.handle.job_id} has already been started")
        self._running = True
        self._cancel_event = anyio.Event()
        if self._cancel_requested:
            self._cancel_event.set()

        start = anyio.current_time()
        self.session.started_at = start
        max_attempts = self.options.max_attempts
        next_due = start

        for attempt in range(1, max_attempts + 1):
            next_due = max(next_due + self.options.interval, anyio.current_time())
            await self._wait_until(next_due)
            if self._cancel_requested:
                await self._finish_cancelled()
            self.session.attempts = attempt
            result = await self._tick()
            if result is not None:
                return result

        if self._cancel_requested:
            await self._finish_cancelled()
        self._terminate(PollState.TIMED_OUT)
        logger.error(
            "Polling timed out for %s job %s after %d attempts",
            self.handle.provider.value,
            self.handle.job_id,
            max_attempts,
        )
        await self._emit("TIMEOUT")
        raise JobTimeoutError(self.handle, max_attempts)

    async def _wait_until(self, deadline: float) -> None:
        assert self._cancel_event is not None
        delay = deadline - anyio.current_time()
        if delay <= 0:
            await anyio.lowlevel.checkpoint()
            return
        with anyio.move_on_after(delay):
            await self._cancel_event.wait()

    async def _tick(self) -> str | None:
        handle = self.handle
        logger.debug(
            "Polling %s job %s (Attempt %d/%d)...",
            handle.provider.value,
            handle.job_id,
            self.session.attempts,
            self.options.max_attempts,
        )
        try:
            snapshot = await self._fetch(handle.job_id)
        except JobNotFoundError:
            await self._finish_failed(self.adapter.not_found_reason(handle.job_id))
        except Exception as e:
            logger.warning("Error polling %s job %s: %s", handle.provider.value, handle.job_id, e)
            await self._emit("POLLING_ERROR", {"message": str(e)})
            return None

        status = self.adapter.status_of(snapshot)
        self.session.last_status = status
        logger.debug("%s job %s status: %s", handle.provider.value, handle.job_id, status)

        classification = self.adapter.classify(snapshot, handle.kind)
        if isinstance(classification, Success):
            self.session.result = classification.asset_url
            self._terminate(PollState.SUCCEEDED)
            logger.info(
                "%s job %s (%s) succeeded: %s",
                handle.provider.value,
                handle.job_id,
                handle.kind.value,
                classification.asset_url,
            )
            await self._emit("SUCCEEDED", {handle.kind.progress_key: classification.asset_url})
            return classification.asset_url
        if isinstance(classification, Failure):
            await self._finish_failed(classification.reason)
        if isinstance(classification, Pending):
            await self._emit(classification.label)
        elif isinstance(classification, Unrecognized):
            logger.warning(
                "%s job %s has unexpected status: %s", handle.provider.value, handle.job_id, classification.raw_status
            )
            await self._emit("UNKNOWN_STATUS", {"status": classification.raw_status})
        return None

    def _terminate(self, state: PollState) -> None:
        # State flips before any emission so a concurrent cancel() becomes a no-op
        self.session.state = state

    async def _finish_failed(self, reason: str) -> None:
        self.session.reason = reason
        self._terminate(PollState.FAILED)
        logger.error("%s job %s failed: %s", self.handle.provider.value, self.handle.job_id, reason)
        await self._emit("FAILED", {"reason": reason})
        raise JobFailedError(self.handle, reason)

    async def _finish_cancelled(self) -> None:
        self._terminate(PollState.CANCELLED)
        logger.info("Polling cancelled for %s job %s", self.handle.provider.value, self.handle.job_id)
        await self._emit("CANCELLED")
        raise JobCancelledError(self.handle)

    async def _emit(self, status: str, data: dict[str, Any] | None = None) -> None:
        await self.emitter.emit(
            status,
            data,
            progress=float(self.session.attempts),
            total=float(self.options.max_attempts),
        )


async def poll_job(
    handle: JobHandle,
    fetch: StatusFetcher,
    adapter: StatusAdapter,
    emitter: ProgressEmitter | None = None,
    options: PollOptions | None = None,
) -> str:
    """Poll a job to completion and return its asset URL."""
    return await Poller(handle, fetch, adapter, emitter, options).run()
