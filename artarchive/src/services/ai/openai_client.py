"""OpenAI API client for artwork description generation."""

import logging
from functools import lru_cache

from openai import AsyncOpenAI

from artarchive.src.cache_registry import register_cache
from artarchive.src.config import get_config

logger = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 1500
TEMPERATURE = 0.7  # Creative but not erratic


class OpenAIConfigError(RuntimeError):
    """Raised when generation is attempted without an OpenAI API key."""


@register_cache
@lru_cache(maxsize=1)
def get_openai_client() -> AsyncOpenAI:
    """Create the OpenAI client on first use and reuse it afterwards.

    Raises:
        OpenAIConfigError: If OPENAI_API_KEY is not set
    """
    api_key = get_config().openai_api_key
    if not api_key:
        raise OpenAIConfigError("OPENAI_API_KEY environment variable is not set")

    logger.info("Initializing OpenAI client")
    return AsyncOpenAI(api_key=api_key)


async def request_vision_completion(
    client: AsyncOpenAI,
    system_prompt: str,
    user_prompt: str,
    image_url: str,
    model: str,
):
    """Send one JSON-mode chat completion with the artwork image attached.

    Args:
        client: OpenAI client
        system_prompt: Curator voice and style rules
        user_prompt: Metadata, field instructions and schema
        image_url: Public URL of the artwork image
        model: OpenAI model to use

    Returns:
        The raw chat completion response

    Raises:
        openai.OpenAIError: If the API call fails (not retried)
    """
    return await client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system_prompt},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": user_prompt},
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": image_url,
                            "detail": "high",  # Fine detail matters for alt text and era cues
                        },
                    },
                ],
            },
        ],
        max_tokens=MAX_OUTPUT_TOKENS,
        temperature=TEMPERATURE,
        response_format={"type": "json_object"},
    )
