# SPDX-License-Identifier: MIT
"""Luma AI image generation and generation management tools.

This module handles:
- Image generation (polled in the background like video jobs)
- Upscaling an existing generation (polled in the background)
- Adding audio to a generation
- Listing, fetching, and deleting generations
- Listing supported camera motions
"""

from typing import Any, Literal

import lumaai

from ..config import get_luma_client, logger
from ..errors import ProviderRequestError, provider_api_error
from ..polling import JobHandle, ProgressEmitter
from ..providers import check_polling_capacity, initiate
from ..types import CharacterRef, ImageRef, Provider, ResultKind, TaskInitiated

LumaImageModel = Literal["photon-1", "photon-flash-1"]
LumaAspectRatio = Literal["16:9", "1:1", "3:4", "4:3", "9:16", "9:21", "21:9"]
LumaUpscaleResolution = Literal["1080p", "4k"]

_PROVIDER = "Luma AI"


def _api_error(exc: lumaai.APIStatusError, generation_id: str | None = None) -> ProviderRequestError:
    if exc.status_code == 404 and generation_id is not None:
        return ProviderRequestError(
            _PROVIDER,
            f"Luma generation ID {generation_id} not found.",
            status_code=404,
            category="invalid_request",
        )
    return provider_api_error(_PROVIDER, exc, exc.status_code)


def _with_weight(refs: list[ImageRef], default: float) -> list[dict[str, Any]]:
    return [{"url": ref.url, "weight": default if ref.weight is None else ref.weight} for ref in refs]


def _check_weights(refs: list[ImageRef], name: str) -> None:
    for ref in refs:
        if ref.weight is not None and not 0 <= ref.weight <= 1:
            raise ValueError(f"{name} weight must be between 0 and 1, got {ref.weight}")


async def generate_image(
    prompt: str,
    aspect_ratio: LumaAspectRatio = "16:9",
    model: LumaImageModel = "photon-1",
    image_ref: list[ImageRef] | None = None,
    style_ref: list[ImageRef] | None = None,
    character_ref: dict[str, CharacterRef] | None = None,
    modify_image_ref: ImageRef | None = None,
    emitter: ProgressEmitter | None = None,
) -> TaskInitiated:
    """Start a Luma AI image generation job.

    Args:
        prompt: Text description of the image
        aspect_ratio: Output aspect ratio
        model: Luma image model
        image_ref: Up to 4 reference images (weight defaults to 0.85)
        style_ref: One style reference image (weight defaults to 0.8)
        character_ref: Mapping of "identity<N>" keys to 1-4 face image URLs
        modify_image_ref: Image to modify (weight defaults to 1.0)
        emitter: Progress emitter bound to the calling request

    Returns:
        TaskInitiated with the generation ID. The image URL arrives in the
        SUCCEEDED progress event under "imageUrl".

    Raises:
        ValueError: If any argument is out of range
        RuntimeError: If LUMAAI_API_KEY is not set or too many poll sessions are running
        ProviderRequestError: If Luma rejects the request or returns no ID
    """
    if not prompt.strip():
        raise ValueError("Prompt cannot be empty.")
    if image_ref is not None and len(image_ref) > 4:
        raise ValueError("image_ref accepts at most 4 images")
    if style_ref is not None and len(style_ref) > 1:
        raise ValueError("style_ref accepts at most 1 image")
    _check_weights((image_ref or []) + (style_ref or []) + ([modify_image_ref] if modify_image_ref else []), "Ref")
    for key, ref in (character_ref or {}).items():
        if not key.startswith("identity"):
            raise ValueError(f"character_ref keys must look like 'identity0', got {key!r}")
        if not 1 <= len(ref.images) <= 4:
            raise ValueError(f"character_ref {key} needs 1 to 4 images")

    payload: dict[str, Any] = {"prompt": prompt, "aspect_ratio": aspect_ratio, "model": model}
    if image_ref:
        payload["image_ref"] = _with_weight(image_ref, 0.85)
    if style_ref:
        payload["style_ref"] = _with_weight(style_ref, 0.8)
    if character_ref:
        payload["character_ref"] = {key: {"images": ref.images} for key, ref in character_ref.items()}
    if modify_image_ref:
        payload["modify_image_ref"] = _with_weight([modify_image_ref], 1.0)[0]

    emitter = emitter or ProgressEmitter()
    check_polling_capacity()
    client = get_luma_client()
    logger.info("Starting Luma AI image generation: %.50s", prompt)
    try:
        generation = await client.generations.image.create(**payload)
    except lumaai.APIStatusError as e:
        raise _api_error(e) from e

    if not generation.id:
        raise ProviderRequestError(_PROVIDER, "Luma AI API did not return a generation ID.")
    logger.info("Luma AI image generation task initiated with ID: %s", generation.id)
    return await initiate(JobHandle(generation.id, Provider.LUMAAI, ResultKind.IMAGE), client, emitter, "image")


async def upscale_generation(
    generation_id: str,
    resolution: LumaUpscaleResolution = "1080p",
    emitter: ProgressEmitter | None = None,
) -> TaskInitiated:
    """Upscale a completed generation and poll for the upscaled video.

    Polls the ID returned by the upscale call, or the original ID when the
    provider updates the generation in place.

    Raises:
        RuntimeError: If LUMAAI_API_KEY is not set or too many poll sessions are running
        ProviderRequestError: If the generation is unknown or Luma rejects the request
    """
    emitter = emitter or ProgressEmitter()
    check_polling_capacity()
    client = get_luma_client()
    logger.info("Upscaling Luma generation %s to %s", generation_id, resolution)
    try:
        response = await client.generations.upscale(
            generation_id,
            generation_type="upscale_video",
            resolution=resolution,
        )
    except lumaai.APIStatusError as e:
        raise _api_error(e, generation_id) from e

    job_id = getattr(response, "id", None) or generation_id
    logger.info("Luma AI upscale task initiated/updated with ID: %s", job_id)
    return await initiate(JobHandle(job_id, Provider.LUMAAI, ResultKind.UPSCALED_VIDEO), client, emitter, "upscale")


async def add_audio(generation_id: str, prompt: str, negative_prompt: str | None = None) -> Any:
    """Request audio to be added to a generation.

    Returns:
        The updated Generation object as returned by Luma

    Raises:
        ValueError: If the prompt is empty
        ProviderRequestError: If the generation is unknown or Luma rejects the request
    """
    if not prompt.strip():
        raise ValueError("Audio prompt cannot be empty.")
    client = get_luma_client()
    logger.info("Adding audio to Luma generation %s", generation_id)
    try:
        return await client.generations.audio(
            generation_id,
            generation_type="add_audio",
            prompt=prompt,
            negative_prompt=negative_prompt if negative_prompt is not None else lumaai.NOT_GIVEN,
        )
    except lumaai.APIStatusError as e:
        raise _api_error(e, generation_id) from e


async def list_generations(limit: int = 10, offset: int = 0) -> Any:
    """List previous Luma AI generations.

    Raises:
        ValueError: If limit is not positive or offset is negative
    """
    if limit <= 0:
        raise ValueError("limit must be positive")
    if offset < 0:
        raise ValueError("offset must not be negative")
    client = get_luma_client()
    logger.info("Listing Luma generations (limit: %d, offset: %d)", limit, offset)
    try:
        return await client.generations.list(limit=limit, offset=offset)
    except lumaai.APIStatusError as e:
        raise _api_error(e) from e


async def get_generation(generation_id: str) -> Any:
    client = get_luma_client()
    logger.info("Getting Luma generation: %s", generation_id)
    try:
        return await client.generations.get(generation_id)
    except lumaai.APIStatusError as e:
        raise _api_error(e, generation_id) from e


async def delete_generation(generation_id: str) -> dict[str, Any]:
    client = get_luma_client()
    logger.info("Deleting Luma generation: %s", generation_id)
    try:
        await client.generations.delete(generation_id)
    except lumaai.APIStatusError as e:
        raise _api_error(e, generation_id) from e
    return {"id": generation_id, "deleted": True}


async def get_camera_motions() -> list[str]:
    """List camera motions Luma understands inside video prompts."""
    client = get_luma_client()
    logger.info("Getting Luma camera motions")
    try:
        return await client.generations.camera_motion.list()
    except lumaai.APIStatusError as e:
        raise _api_error(e) from e
