# SPDX-License-Identifier: MIT
"""Shared types for reelforge tools and the polling engine."""

from enum import Enum
from typing import Literal, TypedDict

from pydantic import BaseModel


class Provider(str, Enum):
    """Remote generation providers."""

    RUNWAYML = "runwayml"
    LUMAAI = "lumaai"


class ResultKind(str, Enum):
    """What a finished job is expected to produce."""

    VIDEO = "video"
    IMAGE = "image"
    UPSCALED_VIDEO = "upscaled_video"

    @property
    def progress_key(self) -> str:
        """Key under which the asset URL is reported in the SUCCEEDED event."""
        return _PROGRESS_KEYS[self]


_PROGRESS_KEYS = {
    ResultKind.VIDEO: "videoUrl",
    ResultKind.IMAGE: "imageUrl",
    ResultKind.UPSCALED_VIDEO: "upscaledVideoUrl",
}

ProviderName = Literal["runwayml", "lumaai"]


class RunwayPromptImage(BaseModel):
    """Keyframe image for RunwayML image-to-video."""

    uri: str
    position: Literal["first", "last"]


class ImageRef(BaseModel):
    url: str
    weight: float | None = None


class CharacterRef(BaseModel):
    images: list[str]


class TaskInitiated(TypedDict):
    """Structured result returned by job initiator tools."""

    task_id: str
    provider: ProviderName
    operation: str
    message: str


class PollingSessionInfo(TypedDict):
    """Snapshot of one background poll session."""

    provider: ProviderName
    job_id: str
    kind: str
    attempts: int
    last_status: str | None
    state: str
