# SPDX-License-Identifier: MIT
"""reelforge MCP Server - FastMCP server for RunwayML and Luma AI generation jobs.

This module initializes the FastMCP server and registers all tools.
Business logic is organized into submodules under tools/; background job
polling lives in polling/.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Literal

from dotenv import load_dotenv
from mcp.server.fastmcp import Context, FastMCP

from .config import logger
from .descriptions import (
    CANCEL_POLLING,
    ENHANCE_PROMPT,
    GENERATE_IMAGE_TO_VIDEO,
    GENERATE_TEXT_TO_VIDEO,
    LIST_POLLING_SESSIONS,
    LUMA_ADD_AUDIO,
    LUMA_DELETE_GENERATION,
    LUMA_GENERATE_IMAGE,
    LUMA_GET_CAMERA_MOTIONS,
    LUMA_GET_GENERATION,
    LUMA_LIST_GENERATIONS,
    LUMA_UPSCALE,
)
from .features import get_available_providers
from .polling import emitter_from_context, get_registry
from .tools import jobs, luma, prompt, video
from .tools.luma import LumaImageModel, LumaUpscaleResolution
from .tools.video import LumaAspectRatio, LumaVideoModel, RunwayRatio, RunwayVideoModel
from .types import CharacterRef, ImageRef, ProviderName, RunwayPromptImage


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    try:
        yield
    finally:
        # In-flight polling is abandoned; the remote jobs keep running on the provider side
        await get_registry().shutdown()


# Initialize FastMCP server
mcp = FastMCP("reelforge", lifespan=lifespan)


# ==================== VIDEO TOOLS ====================
@mcp.tool(description=GENERATE_TEXT_TO_VIDEO)
async def generate_text_to_video(
    prompt_text: str,
    ctx: Context,
    provider: ProviderName = "lumaai",
    luma_model: LumaVideoModel = "ray-2",
    luma_aspect_ratio: LumaAspectRatio = "16:9",
    luma_loop: bool | None = None,
    duration: int | None = None,
):
    return await video.generate_text_to_video(
        prompt_text,
        provider,
        luma_model,
        luma_aspect_ratio,
        luma_loop,
        duration,
        emitter=emitter_from_context(ctx),
    )


@mcp.tool(description=GENERATE_IMAGE_TO_VIDEO)
async def generate_image_to_video(
    prompt_image: str | list[RunwayPromptImage],
    ctx: Context,
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
):
    return await video.generate_image_to_video(
        prompt_image,
        prompt_text,
        provider,
        runway_model,
        runway_duration,
        runway_ratio,
        runway_watermark,
        luma_model,
        luma_aspect_ratio,
        luma_loop,
        seed,
        emitter=emitter_from_context(ctx),
    )


# ==================== LUMA TOOLS ====================
@mcp.tool(description=LUMA_GENERATE_IMAGE)
async def luma_generate_image(
    prompt: str,
    ctx: Context,
    aspect_ratio: LumaAspectRatio = "16:9",
    model: LumaImageModel = "photon-1",
    image_ref: list[ImageRef] | None = None,
    style_ref: list[ImageRef] | None = None,
    character_ref: dict[str, CharacterRef] | None = None,
    modify_image_ref: ImageRef | None = None,
):
    return await luma.generate_image(
        prompt,
        aspect_ratio,
        model,
        image_ref,
        style_ref,
        character_ref,
        modify_image_ref,
        emitter=emitter_from_context(ctx),
    )


@mcp.tool(description=LUMA_UPSCALE)
async def luma_upscale(generation_id: str, ctx: Context, resolution: LumaUpscaleResolution = "1080p"):
    return await luma.upscale_generation(generation_id, resolution, emitter=emitter_from_context(ctx))


@mcp.tool(description=LUMA_ADD_AUDIO)
async def luma_add_audio(generation_id: str, prompt: str, negative_prompt: str | None = None):
    return await luma.add_audio(generation_id, prompt, negative_prompt)


@mcp.tool(description=LUMA_LIST_GENERATIONS)
async def luma_list_generations(limit: int = 10, offset: int = 0):
    return await luma.list_generations(limit, offset)


@mcp.tool(description=LUMA_GET_GENERATION)
async def luma_get_generation(generation_id: str):
    return await luma.get_generation(generation_id)


@mcp.tool(description=LUMA_DELETE_GENERATION)
async def luma_delete_generation(generation_id: str):
    return await luma.delete_generation(generation_id)


@mcp.tool(description=LUMA_GET_CAMERA_MOTIONS)
async def luma_get_camera_motions():
    return await luma.get_camera_motions()


# ==================== PROMPT TOOLS ====================
@mcp.tool(description=ENHANCE_PROMPT)
async def enhance_prompt(prompt_text: str, use_case: str | None = None):
    return await prompt.enhance_prompt(prompt_text, use_case)


# ==================== POLLING TOOLS ====================
@mcp.tool(description=LIST_POLLING_SESSIONS)
async def list_polling_sessions():
    return jobs.list_polling_sessions()


@mcp.tool(description=CANCEL_POLLING)
async def cancel_polling(provider: ProviderName, job_id: str):
    return jobs.cancel_polling(provider, job_id)


# ==================== SERVER ENTRYPOINT ====================
def main():
    """Run the MCP server.

    Credentials are validated lazily when tools are called; missing ones are
    only reported at startup.
    """
    load_dotenv()  # Load environment variables at runtime
    providers = get_available_providers()
    logger.info(
        "Starting reelforge MCP server over stdio (providers: %s)",
        ", ".join(name for name, ok in providers.items() if ok) or "none configured",
    )
    mcp.run()


if __name__ == "__main__":
    main()
