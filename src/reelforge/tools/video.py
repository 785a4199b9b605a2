# SPDX-License-Identifier: MIT
"""Video generation tools for RunwayML and Luma AI.

This module contains the video job initiators:
- Text-to-video (Luma AI)
- Image-to-video (RunwayML or Luma AI)

Both create the remote job, hand its ID to a background poller and return
immediately. Completion is reported through MCP progress notifications.
"""

from typing import Any, Literal

import lumaai
import runwayml

from ..config import get_luma_client, get_runway_client, logger
from ..errors import ProviderRequestError, provider_api_error
from ..polling import JobHandle, ProgressEmitter
from ..providers import check_polling_capacity, initiate
from ..types import Provider, ProviderName, ResultKind, RunwayPromptImage, TaskInitiated

LumaVideoModel = Literal["ray-flash-2", "ray-2", "ray-1-6"]
LumaAspectRatio = Literal["16:9", "1:1", "3:4", "4:3", "9:16", "9:21", "21:9"]
RunwayVideoModel = Literal["gen3a_turbo", "gen4_turbo"]
RunwayRatio = Literal["1280:768", "768:1280", "1280:720", "720:1280", "1104:832", "832:1104", "960:960", "1584:672"]


def _luma_payload(**params: Any) -> dict[str, Any]:
    """Drop unset optional parameters so the SDK applies provider defaults."""
    return {key: value for key, value in params.items() if value is not None}


def _require_job_id(provider: str, job_id: str | None) -> str:
    if not job_id:
        raise ProviderRequestError(provider, f"{provider} API did not return a generation ID.")
    return job_id


async def generate_text_to_video(
    prompt_text: str,
    provider: ProviderName = "lumaai",
    luma_model: LumaVideoModel = "ray-2",
    luma_aspect_ratio: LumaAspectRatio = "16:9",
    luma_loop: bool | None = None,
    duration: int | None = None,
    emitter: ProgressEmitter | None = None,
) -> TaskInitiated:
    """Start a text-to-video generation job.

    Args:
        prompt_text: Text description of the video
        provider: Only "lumaai" supports text-to-video
        luma_model: Luma video model
        luma_aspect_ratio: Output aspect ratio
        luma_loop: Whether the video should loop seamlessly
        duration: Duration in whole seconds, sent to Luma as "<n>s"
        emitter: Progress emitter bound to the calling request

    Returns:
        TaskInitiated with the generation ID

    Raises:
        ValueError: If the prompt is empty, duration is not positive, or the provider is unsupported
        RuntimeError: If LUMAAI_API_KEY is not set or too many poll sessions are running
        ProviderRequestError: If Luma rejects the request or returns no ID
    """
    if not prompt_text.strip():
        raise ValueError("Prompt text cannot be empty.")
    if duration is not None and duration <= 0:
        raise ValueError("duration must be a positive number of seconds")
    if provider != "lumaai":
        raise ValueError(f"Text-to-video is not supported for provider: {provider}. Use 'lumaai'.")

    emitter = emitter or ProgressEmitter()
    check_polling_capacity()
    client = get_luma_client()
    payload = _luma_payload(
        prompt=prompt_text,
        model=luma_model,
        aspect_ratio=luma_aspect_ratio,
        loop=luma_loop,
        duration=f"{duration}s" if duration is not None else None,
    )

    logger.info("Starting Luma AI text-to-video generation: %.50s", prompt_text)
    try:
        generation = await client.generations.create(**payload)
    except lumaai.APIStatusError as e:
        raise provider_api_error("Luma AI", e, e.status_code) from e

    job_id = _require_job_id("Luma AI", generation.id)
    logger.info("Luma AI task initiated with ID: %s", job_id)
    return await initiate(JobHandle(job_id, Provider.LUMAAI, ResultKind.VIDEO), client, emitter, "text-to-video")


async def generate_image_to_video(
    prompt_image: str | list[RunwayPromptImage],
    prompt_text: str | None = None,
    provider: ProviderName = "runwayml",
    runway_model: RunwayVideoModel = "gen3a_turbo",
    runway_duration: Literal[5, 10] = 5,
    runway_ratio: RunwayRatio | None = None,
    runway_watermark: bool = False,
    luma_model: LumaVideoModel = "ray-2",
    luma_aspect_ratio: LumaAspectRatio = "16:9",
    luma_loop: bool | None = None,
    seed: int | None = None,
    emitter: ProgressEmitter | None = None,
) -> TaskInitiated:
    """Start an image-to-video generation job.

    RunwayML accepts either a single image URL or one to two keyframe images
    with a "first"/"last" position. Luma AI uses the first image as the
    starting keyframe.

    Raises:
        ValueError: If the image list is empty or too long
        RuntimeError: If the provider's API key is not set or too many poll sessions are running
        ProviderRequestError: If the provider rejects the request or returns no ID
    """
    if isinstance(prompt_image, list) and not 1 <= len(prompt_image) <= 2:
        raise ValueError("prompt_image must contain one or two images")

    emitter = emitter or ProgressEmitter()
    check_polling_capacity()

    if provider == "runwayml":
        client = get_runway_client()
        image_param: str | list[dict[str, str]] = (
            prompt_image if isinstance(prompt_image, str) else [img.model_dump() for img in prompt_image]
        )
        logger.info("Starting RunwayML image-to-video generation with image: %s", image_param)
        try:
            task = await client.image_to_video.create(
                model=runway_model,
                prompt_image=image_param,
                prompt_text=prompt_text if prompt_text is not None else runwayml.NOT_GIVEN,
                duration=runway_duration,
                ratio=runway_ratio if runway_ratio is not None else runwayml.NOT_GIVEN,
                seed=seed if seed is not None else runwayml.NOT_GIVEN,
                watermark=runway_watermark,
            )
        except runwayml.APIStatusError as e:
            raise provider_api_error("RunwayML", e, e.status_code) from e

        job_id = _require_job_id("RunwayML", task.id)
        logger.info("RunwayML task initiated with ID: %s", job_id)
        return await initiate(JobHandle(job_id, Provider.RUNWAYML, ResultKind.VIDEO), client, emitter, "image-to-video")

    if isinstance(prompt_image, str):
        image_url = prompt_image
    else:
        image_url = prompt_image[0].uri
        logger.warning("Luma AI image-to-video using first image URI from array input: %s", image_url)

    client = get_luma_client()
    payload = _luma_payload(
        # Luma requires a prompt, even an empty one
        prompt=prompt_text or "",
        model=luma_model,
        aspect_ratio=luma_aspect_ratio,
        loop=luma_loop,
        keyframes={"frame0": {"type": "image", "url": image_url}},
    )
    logger.info("Starting Luma AI image-to-video generation with image: %s", image_url)
    try:
        generation = await client.generations.create(**payload)
    except lumaai.APIStatusError as e:
        raise provider_api_error("Luma AI", e, e.status_code) from e

    job_id = _require_job_id("Luma AI", generation.id)
    logger.info("Luma AI task initiated with ID: %s", job_id)
    return await initiate(JobHandle(job_id, Provider.LUMAAI, ResultKind.VIDEO), client, emitter, "image-to-video")
