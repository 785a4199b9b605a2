# SPDX-License-Identifier: MIT
"""Test doubles shared by unit and integration tests."""

from collections.abc import Iterable
from types import SimpleNamespace
from typing import Any

import httpx

from reelforge.polling import ProgressEvent


class RecordingChannel:
    """Progress channel spy that records every delivered event."""

    def __init__(self) -> None:
        self.sent: list[tuple[Any, ProgressEvent, float, float | None]] = []

    async def send(self, token, event, progress, total) -> None:
        self.sent.append((token, event, progress, total))

    @property
    def statuses(self) -> list[str]:
        return [event.status for _token, event, _progress, _total in self.sent]

    @property
    def events(self) -> list[ProgressEvent]:
        return [event for _token, event, _progress, _total in self.sent]


class ScriptedFetch:
    """Status fetcher returning scripted snapshots (or raising scripted errors) in order."""

    def __init__(self, script: Iterable[Any]) -> None:
        self.script = list(script)
        self.calls: list[str] = []

    async def __call__(self, job_id: str) -> Any:
        self.calls.append(job_id)
        if len(self.calls) > len(self.script):
            raise AssertionError(f"Unexpected fetch #{len(self.calls)} for {job_id}")
        item = self.script[len(self.calls) - 1]
        if isinstance(item, BaseException):
            raise item
        return item


def runway_task(status: str, output: list[str] | None = None) -> SimpleNamespace:
    return SimpleNamespace(id="task_123", status=status, output=output)


def luma_generation(state: str, assets: dict | None = None, failure_reason: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(
        id="gen_123",
        state=state,
        assets=SimpleNamespace(**assets) if assets is not None else None,
        failure_reason=failure_reason,
    )


def status_error(error_cls: type, status_code: int, message: str = "error") -> Exception:
    """Build a provider SDK status error (RunwayML, Luma AI and OpenAI share the same shape)."""
    request = httpx.Request("GET", "https://api.example.test/v1/resource")
    response = httpx.Response(status_code, request=request)
    return error_cls(message, response=response, body=None)
