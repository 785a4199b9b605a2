# SPDX-License-Identifier: MIT
"""Provider status adapters.

Each adapter translates one provider's status vocabulary and result shape
into the poller's four-way classification:

- Pending: the job is still working, keep polling
- Success: terminal, carries the produced asset URL
- Failure: terminal, carries a human-readable reason
- Unrecognized: unknown status, keep polling but surface it

Adapters are pure and hold no per-session state, so one instance can serve
any number of concurrent sessions.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from ..types import Provider, ResultKind


@dataclass(frozen=True)
class Pending:
    label: str


@dataclass(frozen=True)
class Success:
    asset_url: str


@dataclass(frozen=True)
class Failure:
    reason: str


@dataclass(frozen=True)
class Unrecognized:
    raw_status: str


Classification = Pending | Success | Failure | Unrecognized


def _field(obj: Any, name: str) -> Any:
    """Read a field from an SDK model or a plain mapping."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


class StatusAdapter(Protocol):
    provider: Provider

    def status_of(self, snapshot: Any) -> str: ...

    def extract_success_asset(self, snapshot: Any, kind: ResultKind) -> str | None: ...

    def extract_failure_reason(self, snapshot: Any) -> str: ...

    def missing_asset_reason(self, kind: ResultKind) -> str: ...

    def not_found_reason(self, job_id: str) -> str: ...

    def classify(self, snapshot: Any, kind: ResultKind) -> Classification: ...


class _VocabularyAdapter(ABC):
    """Classification shared by adapters that differ only in vocabulary and extraction."""

    provider: Provider
    pending_statuses: frozenset[str]
    success_status: str
    failure_status: str

    @abstractmethod
    def status_of(self, snapshot: Any) -> str: ...

    @abstractmethod
    def extract_success_asset(self, snapshot: Any, kind: ResultKind) -> str | None: ...

    @abstractmethod
    def extract_failure_reason(self, snapshot: Any) -> str: ...

    @abstractmethod
    def missing_asset_reason(self, kind: ResultKind) -> str: ...

    @abstractmethod
    def not_found_reason(self, job_id: str) -> str: ...

    def pending_label(self, status: str) -> str:
        return status

    def classify(self, snapshot: Any, kind: ResultKind) -> Classification:
        status = self.status_of(snapshot)
        if status == self.success_status:
            asset_url = self.extract_success_asset(snapshot, kind)
            # A success without an asset is a provider contract violation
            if not asset_url:
                return Failure(self.missing_asset_reason(kind))
            return Success(asset_url)
        if status == self.failure_status:
            return Failure(self.extract_failure_reason(snapshot))
        if status in self.pending_statuses:
            return Pending(self.pending_label(status))
        return Unrecognized(status)


class RunwayStatusAdapter(_VocabularyAdapter):
    """RunwayML tasks: ``PENDING``/``THROTTLED``/``RUNNING`` -> ``SUCCEEDED`` | ``FAILED``.

    The produced asset is the first entry of the flat ``output`` list whatever
    the expected result kind.
    """

    provider = Provider.RUNWAYML
    pending_statuses = frozenset({"PENDING", "THROTTLED", "RUNNING"})
    success_status = "SUCCEEDED"
    failure_status = "FAILED"

    def status_of(self, snapshot: Any) -> str:
        return str(_field(snapshot, "status"))

    def extract_success_asset(self, snapshot: Any, kind: ResultKind) -> str | None:
        output = _field(snapshot, "output")
        if not output:
            return None
        return output[0]

    def extract_failure_reason(self, snapshot: Any) -> str:
        return f"RunwayML task failed (Status: {self.status_of(snapshot)})"

    def missing_asset_reason(self, kind: ResultKind) -> str:
        return "Task succeeded but no output URL found."

    def not_found_reason(self, job_id: str) -> str:
        return f"Task ID {job_id} not found."


DEFAULT_LUMA_ASSET_FIELDS: dict[ResultKind, str] = {
    ResultKind.VIDEO: "video",
    ResultKind.IMAGE: "image",
    # Unverified against the live API: upscale results are assumed to replace assets.video
    ResultKind.UPSCALED_VIDEO: "video",
}


class LumaStatusAdapter(_VocabularyAdapter):
    """Luma AI generations: ``queued``/``dreaming`` -> ``completed`` | ``failed``.

    The produced asset lives in the keyed ``assets`` map. Which key holds which
    result kind is configurable through ``asset_fields``.
    """

    provider = Provider.LUMAAI
    pending_statuses = frozenset({"queued", "dreaming"})
    success_status = "completed"
    failure_status = "failed"

    def __init__(self, asset_fields: Mapping[ResultKind, str] | None = None) -> None:
        self.asset_fields = {**DEFAULT_LUMA_ASSET_FIELDS, **(asset_fields or {})}

    def status_of(self, snapshot: Any) -> str:
        return str(_field(snapshot, "state"))

    def pending_label(self, status: str) -> str:
        return status.upper()

    def extract_success_asset(self, snapshot: Any, kind: ResultKind) -> str | None:
        assets = _field(snapshot, "assets")
        return _field(assets, self.asset_fields[kind])

    def extract_failure_reason(self, snapshot: Any) -> str:
        return _field(snapshot, "failure_reason") or "Unknown failure reason"

    def missing_asset_reason(self, kind: ResultKind) -> str:
        return f"Task completed but no {kind.value} URL found."

    def not_found_reason(self, job_id: str) -> str:
        return f"Generation ID {job_id} not found."
