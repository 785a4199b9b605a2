# SPDX-License-Identifier: MIT
"""MCP tool implementations for reelforge.

This package contains the business logic behind each FastMCP tool, organized by category:
- video: Text-to-video and image-to-video job initiators (RunwayML, Luma AI)
- luma: Luma AI image generation, upscaling, audio, and generation management
- prompt: Prompt enhancement via OpenRouter
- jobs: Inspection and cancellation of background polling sessions

Tools are registered with FastMCP in ``reelforge.server``.
"""
