"""
AI description generation for the archive.

Describes artwork images with GPT-4o vision and translates the result to French
and Japanese with DeepL, caching translations in the translation_cache table.
"""

from artarchive.src.services.ai.description_generator import (
    DescriptionGenerator,
    estimate_batch_cost,
    generate_artwork_description,
)
from artarchive.src.services.ai.openai_client import OpenAIConfigError
from artarchive.src.services.ai.prompts import PROMPT_VERSION, SYSTEM_PROMPT, build_user_prompt
from artarchive.src.services.ai.translation_cache import (
    cache_artwork_translations,
    translate_artwork_content,
)
from artarchive.src.services.ai.types import (
    ArtworkMetadata,
    GeneratedContent,
    GenerationOptions,
    GenerationResult,
    TranslatedContent,
    Translations,
)

__all__ = [
    "ArtworkMetadata",
    "DescriptionGenerator",
    "GeneratedContent",
    "GenerationOptions",
    "GenerationResult",
    "OpenAIConfigError",
    "PROMPT_VERSION",
    "SYSTEM_PROMPT",
    "TranslatedContent",
    "Translations",
    "build_user_prompt",
    "cache_artwork_translations",
    "estimate_batch_cost",
    "generate_artwork_description",
    "translate_artwork_content",
]
