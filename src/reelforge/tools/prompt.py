# SPDX-License-Identifier: MIT
"""Prompt enhancement via an LLM hosted on OpenRouter."""

import openai

from ..config import get_openrouter_client, get_openrouter_model, logger
from ..errors import ProviderRequestError, provider_api_error

_SYSTEM_PROMPT = (
    "You are an expert prompt engineer specializing in text-to-video generation. "
    "Enhance the following user prompt to make it more descriptive, evocative, and likely to produce "
    "a high-quality, coherent video. Focus on visual details, camera movement suggestions "
    "(subtle pan, slow zoom in, static shot), mood, and style. {use_case}"
    "Output ONLY the enhanced prompt text, without any preamble or explanation."
)


def build_system_prompt(use_case: str | None = None) -> str:
    use_case_line = f"Keep the following use case in mind: {use_case}. " if use_case else ""
    return _SYSTEM_PROMPT.format(use_case=use_case_line)


async def enhance_prompt(prompt_text: str, use_case: str | None = None) -> str:
    """Refine a video prompt with a single chat completion.

    Args:
        prompt_text: The prompt to improve
        use_case: Optional context the enhanced prompt should serve

    Returns:
        The enhanced prompt text

    Raises:
        ValueError: If the prompt is empty
        RuntimeError: If OPENROUTER_API_KEY is not set
        ProviderRequestError: If OpenRouter fails or returns no text
    """
    if not prompt_text.strip():
        raise ValueError("Prompt text cannot be empty.")

    client = get_openrouter_client()
    model = get_openrouter_model()
    logger.info("Sending prompt to OpenRouter (%s) for enhancement: %.50s", model, prompt_text)

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": build_system_prompt(use_case)},
                {"role": "user", "content": prompt_text},
            ],
            max_tokens=500,
            temperature=0.7,
        )
    except openai.APIStatusError as e:
        raise provider_api_error("OpenRouter", e, e.status_code) from e
    except openai.APIConnectionError as e:
        raise ProviderRequestError("OpenRouter", f"Failed to enhance prompt via OpenRouter: {e}") from e

    content = response.choices[0].message.content if response.choices else None
    enhanced = content.strip() if content else ""
    if not enhanced:
        logger.error("OpenRouter returned no enhanced prompt: %s", response)
        raise ProviderRequestError("OpenRouter", "OpenRouter API did not return an enhanced prompt.")

    logger.info("Prompt enhanced successfully")
    return enhanced
