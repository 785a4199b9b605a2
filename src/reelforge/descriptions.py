# SPDX-License-Identifier: MIT
"""Tool descriptions for MCP server. Optimized for token efficiency."""

# ==================== VIDEO TOOL DESCRIPTIONS ====================

GENERATE_TEXT_TO_VIDEO = """Generate video from text with Luma AI. Returns task_id immediately (async).

Completion arrives as progress notifications: QUEUED/DREAMING -> SUCCEEDED {videoUrl} | FAILED {reason} | TIMEOUT. Requires a progress token to receive them.

Params: prompt_text, provider (lumaai), luma_model (ray-flash-2|ray-2|ray-1-6), luma_aspect_ratio (16:9|1:1|3:4|4:3|9:16|9:21|21:9), luma_loop, duration (seconds)

Example: generate_text_to_video("a fox running through snow", duration=5)"""

GENERATE_IMAGE_TO_VIDEO = """Generate video from an image with RunwayML (default) or Luma AI. Returns task_id immediately (async).

prompt_image: image URL, or 1-2 items {uri, position: first|last} (RunwayML keyframes; Luma uses the first).

Params: prompt_image, prompt_text, provider (runwayml|lumaai), runway_model, runway_duration (5|10), runway_ratio, runway_watermark, luma_model, luma_aspect_ratio, luma_loop, seed

Progress: PENDING/RUNNING -> SUCCEEDED {videoUrl} | FAILED {reason} | TIMEOUT"""

# ==================== LUMA TOOL DESCRIPTIONS ====================

LUMA_GENERATE_IMAGE = """Generate image with Luma AI. Returns task_id immediately; SUCCEEDED progress carries {imageUrl}.

Params: prompt, aspect_ratio, model (photon-1|photon-flash-1), image_ref (max 4 {url, weight}), style_ref (max 1), character_ref ({identity0: {images: [...]}}), modify_image_ref"""

LUMA_UPSCALE = """Upscale a Luma generation. Returns task_id immediately; SUCCEEDED progress carries {upscaledVideoUrl}.

Params: generation_id, resolution (1080p|4k)"""

LUMA_ADD_AUDIO = """Add audio to a Luma generation from a text prompt.

Params: generation_id, prompt, negative_prompt (optional)"""

LUMA_LIST_GENERATIONS = """List previous Luma AI generations.

Params: limit (default 10), offset (default 0)"""

LUMA_GET_GENERATION = """Get details (state, assets, failure_reason) for one Luma AI generation.

Params: generation_id"""

LUMA_DELETE_GENERATION = """Permanently delete a Luma AI generation. Cannot be undone.

Params: generation_id"""

LUMA_GET_CAMERA_MOTIONS = """List camera motions supported in Luma AI video prompts (e.g. "camera orbit left")."""

# ==================== PROMPT TOOL DESCRIPTIONS ====================

ENHANCE_PROMPT = """Refine a prompt for video generation using an LLM via OpenRouter. Returns the enhanced prompt text.

Params: prompt_text, use_case (optional context)"""

# ==================== POLLING TOOL DESCRIPTIONS ====================

LIST_POLLING_SESSIONS = """List jobs this server is polling in the background.

Returns: provider, job_id, kind, attempts, last_status, state"""

CANCEL_POLLING = """Stop background polling for a job. Emits CANCELLED. The remote job keeps running on the provider.

Params: provider (runwayml|lumaai), job_id"""
