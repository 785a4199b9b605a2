# SPDX-License-Identifier: MIT
"""Progress notifications for background poll sessions.

Events are delivered fire-and-forget over the MCP progress channel. A call
without a progress token has no addressable recipient, so emitting becomes a
no-op.
"""

from __future__ import annotations

from typing import Any, Protocol

from mcp.server.fastmcp import Context
from pydantic import BaseModel

from ..config import logger

ProgressToken = str | int


class ProgressEvent(BaseModel):
    """One status update for a job, serialized into the notification message."""

    status: str
    data: dict[str, Any] | None = None


class ProgressChannel(Protocol):
    async def send(
        self,
        token: ProgressToken,
        event: ProgressEvent,
        progress: float,
        total: float | None,
    ) -> None: ...


class McpProgressChannel:
    """Sends progress events as ``notifications/progress`` on an MCP session."""

    def __init__(self, session: Any) -> None:
        self._session = session

    async def send(
        self,
        token: ProgressToken,
        event: ProgressEvent,
        progress: float,
        total: float | None,
    ) -> None:
        await self._session.send_progress_notification(
            progress_token=token,
            progress=progress,
            total=total,
            message=event.model_dump_json(exclude_none=True),
        )


class ProgressEmitter:
    """Binds a progress channel to the correlation token of one tool call.

    Delivery failures are logged and swallowed: a broken channel must never
    abort the poll tick that emitted the event.
    """

    def __init__(self, channel: ProgressChannel | None = None, token: ProgressToken | None = None) -> None:
        self.channel = channel
        self.token = token

    @property
    def enabled(self) -> bool:
        return self.channel is not None and self.token is not None

    async def emit(
        self,
        status: str,
        data: dict[str, Any] | None = None,
        *,
        progress: float = 0.0,
        total: float | None = None,
    ) -> None:
        if self.channel is None or self.token is None:
            return
        event = ProgressEvent(status=status, data=data)
        try:
            await self.channel.send(self.token, event, progress, total)
        except Exception as e:
            logger.warning("Failed to deliver progress %s for token %s: %s", status, self.token, e)
            return
        logger.debug("Progress sent for token %s: %s", self.token, status)


def emitter_from_context(ctx: Context | None) -> ProgressEmitter:
    """Build an emitter from a FastMCP request context.

    Returns a silent emitter when there is no active request or the client
    did not ask for progress.
    """
    if ctx is None:
        return ProgressEmitter()
    try:
        request_context = ctx.request_context
    except ValueError:
        return ProgressEmitter()
    meta = request_context.meta
    token = meta.progressToken if meta is not None else None
    if token is None:
        return ProgressEmitter()
    return ProgressEmitter(McpProgressChannel(request_context.session), token)
