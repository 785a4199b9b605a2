# SPDX-License-Identifier: MIT
"""Registry of background poll sessions.

Job initiators return to their caller as soon as the remote job exists, so
polling runs as a detached task. The registry keeps a strong reference to
each task and enforces one session per job. Initiators ask it for capacity
before creating a remote job; once a job exists it is always accepted. Each
session's outcome is logged when it ends.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache

from ..config import get_polling_settings, logger
from ..types import PollingSessionInfo, Provider
from .poller import JobCancelledError, JobHandle, Poller, PollingError


class PollRegistry:
    """Tracks running pollers keyed by ``(provider, job_id)``.

    Args:
        max_sessions: Maximum concurrent sessions, 0 for unbounded
    """

    def __init__(self, max_sessions: int = 0) -> None:
        self.max_sessions = max_sessions
        self._sessions: dict[tuple[Provider, str], tuple[Poller, asyncio.Task[str]]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, handle: JobHandle) -> bool:
        return handle.key in self._sessions

    def start(self, poller: Poller) -> asyncio.Task[str]:
        """Run ``poller`` in the background and return its task.

        The remote job already exists at this point, so ``max_sessions`` is not
        enforced here; initiators call :meth:`check_capacity` before creating it.

        Raises:
            ValueError: If a session for the same job is already running
        """
        handle = poller.handle
        if handle in self:
            raise ValueError(f"A polling session for {handle.provider.value} job {handle.job_id} is already running")

        task = asyncio.create_task(poller.run(), name=f"poll-{handle.provider.value}-{handle.job_id}")
        self._sessions[handle.key] = (poller, task)
        task.add_done_callback(lambda t: self._on_done(handle, t))
        logger.info("Started polling %s job %s (%s)", handle.provider.value, handle.job_id, handle.kind.value)
        return task

    def check_capacity(self) -> None:
        """Raise if no new job may be started right now.

        Raises:
            RuntimeError: If ``max_sessions`` sessions are already running
        """
        if self.max_sessions and len(self._sessions) >= self.max_sessions:
            raise RuntimeError(
                f"Too many active polling sessions ({self.max_sessions}); "
                "wait for running jobs to finish or raise POLL_MAX_SESSIONS"
            )

    def _on_done(self, handle: JobHandle, task: asyncio.Task[str]) -> None:
        entry = self._sessions.get(handle.key)
        if entry is not None and entry[1] is task:
            del self._sessions[handle.key]

        if task.cancelled():
            logger.info("Polling task for %s job %s was cancelled", handle.provider.value, handle.job_id)
            return
        exc = task.exception()
        if exc is None:
            logger.info("Polling finished for %s job %s: %s", handle.provider.value, handle.job_id, task.result())
        elif isinstance(exc, JobCancelledError):
            logger.info("%s", exc)
        elif isinstance(exc, PollingError):
            logger.warning("Polling failed for %s job %s: %s", handle.provider.value, handle.job_id, exc)
        else:
            logger.error(
                "Polling crashed for %s job %s",
                handle.provider.value,
                handle.job_id,
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    def get(self, provider: Provider, job_id: str) -> Poller | None:
        entry = self._sessions.get((provider, job_id))
        return entry[0] if entry else None

    def cancel(self, provider: Provider, job_id: str) -> bool:
        """Ask the session for a job to stop. Returns False if none is running."""
        poller = self.get(provider, job_id)
        if poller is None:
            return False
        return poller.cancel()

    def active(self) -> list[PollingSessionInfo]:
        sessions: list[PollingSessionInfo] = []
        for poller, _task in self._sessions.values():
            sessions.append(
                {
                    "provider": poller.handle.provider.value,
                    "job_id": poller.handle.job_id,
                    "kind": poller.handle.kind.value,
                    "attempts": poller.session.attempts,
                    "last_status": poller.session.last_status,
                    "state": poller.session.state.value,
                }
            )
        return sessions

    async def join(self) -> None:
        """Wait until every currently running session has ended."""
        tasks = [task for _poller, task in self._sessions.values()]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel every running session and wait for the tasks to settle."""
        tasks = [task for _poller, task in self._sessions.values()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Stopped %d polling session(s)", len(tasks))


@lru_cache(maxsize=1)
def get_registry() -> PollRegistry:
    """Return the process-wide registry (cached singleton)."""
    return PollRegistry(max_sessions=get_polling_settings().max_sessions)
