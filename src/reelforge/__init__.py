# SPDX-License-Identifier: MIT
"""reelforge - MCP server for asynchronous RunwayML and Luma AI generation jobs."""

__version__ = "0.1.0"
