"""
Artwork description generation with GPT-4o vision.

Pipeline for one artwork:
    prompts -> one vision call -> JSON parsing -> cost accounting
    -> (optional) French and Japanese translations in parallel

Failure policy:
    - a missing API key or a failed vision call raises to the caller
    - an unusable model response degrades to empty content (ParseResult)
    - any translation failure degrades both languages to empty (TranslationsResult)
"""

import asyncio
import json
import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache
from typing import Any, Awaitable, Callable, Optional

from artarchive.src.cache_registry import register_cache
from artarchive.src.config import get_config
from artarchive.src.services.ai.openai_client import get_openai_client, request_vision_completion
from artarchive.src.services.ai.prompts import build_system_prompt, build_user_prompt
from artarchive.src.services.ai.translation_cache import translate_artwork_content
from artarchive.src.services.ai.types import (
    TARGET_LANGUAGES,
    GeneratedContent,
    GenerationOptions,
    GenerationResult,
    ParseResult,
    TargetLanguage,
    TranslatedContent,
    Translations,
    TranslationsResult,
)

logger = logging.getLogger(__name__)

# GPT-4o pricing: $2.50 / 1M input tokens, $10.00 / 1M output tokens
COST_PER_1K_INPUT_TOKENS = Decimal("0.0025")
COST_PER_1K_OUTPUT_TOKENS = Decimal("0.01")

# Typical GPT-4o + DeepL cost per artwork, for pre-flight estimates only
AVG_COST_PER_ARTWORK = Decimal("0.045")

# Used when the model returns valid JSON without a usable score
DEFAULT_CONFIDENCE_SCORE = 0.5

EXPECTED_FIELDS = (
    "description",
    "short_description",
    "seo_title",
    "alt_text",
    "suggested_tags",
    "confidence_score",
)

Translator = Callable[[TranslatedContent, TargetLanguage], Awaitable[TranslatedContent]]


def _string_field(parsed: dict[str, Any], key: str) -> str:
    value = parsed.get(key)
    return value if isinstance(value, str) else ""


def _tags_field(parsed: dict[str, Any]) -> list[str]:
    value = parsed.get("suggested_tags")
    if not isinstance(value, list):
        return []
    return [tag.strip() for tag in value if isinstance(tag, str) and tag.strip()]


def _confidence_field(parsed: dict[str, Any]) -> float:
    value = parsed.get("confidence_score")
    # bool is an int subclass, but true/false is not a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CONFIDENCE_SCORE
    try:
        score = float(value)
    except OverflowError:
        return DEFAULT_CONFIDENCE_SCORE
    if math.isnan(score):
        return DEFAULT_CONFIDENCE_SCORE
    return min(max(score, 0.0), 1.0)


def parse_generated_content(raw: Optional[str]) -> ParseResult:
    """Parse the model's JSON answer into GeneratedContent. Never raises.

    Unparseable or non-object responses degrade to fully empty content with a
    confidence score of 0. A JSON object degrades field by field instead.
    """
    try:
        parsed = json.loads(raw or "")
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to parse AI response: {raw!r}")
        return ParseResult(GeneratedContent(), degraded_reason=f"invalid JSON: {e}")

    if not isinstance(parsed, dict):
        logger.error(f"AI response is not a JSON object: {raw!r}")
        return ParseResult(GeneratedContent(), degraded_reason="response is not a JSON object")

    content = GeneratedContent(
        description=_string_field(parsed, "description"),
        short_description=_string_field(parsed, "short_description"),
        seo_title=_string_field(parsed, "seo_title"),
        alt_text=_string_field(parsed, "alt_text"),
        suggested_tags=_tags_field(parsed),
        confidence_score=_confidence_field(parsed),
    )

    missing = [field for field in EXPECTED_FIELDS if field not in parsed]
    if missing:
        logger.warning(f"AI response is missing fields {missing}: {raw!r}")
        return ParseResult(content, degraded_reason=f"missing fields: {', '.join(missing)}")

    return ParseResult(content)


def calculate_cost(input_tokens: int, output_tokens: int) -> float:
    """USD cost of one call, rounded half-up to 4 decimals."""
    cost = (
        Decimal(input_tokens) * COST_PER_1K_INPUT_TOKENS
        + Decimal(output_tokens) * COST_PER_1K_OUTPUT_TOKENS
    ) / 1000
    return float(cost.quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP))


def _response_text(response) -> Optional[str]:
    choices = getattr(response, "choices", None)
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None)


def _token_usage(response) -> tuple[int, int]:
    # Missing usage figures count as zero
    usage = getattr(response, "usage", None)
    if usage is None:
        return 0, 0
    return (
        getattr(usage, "prompt_tokens", None) or 0,
        getattr(usage, "completion_tokens", None) or 0,
    )


async def translate_all_languages(
    content: TranslatedContent,
    translate: Translator = translate_artwork_content,
) -> TranslationsResult:
    """Translate content into French and Japanese concurrently.

    A failure in either language returns empty translations for both.
    """
    try:
        fr, ja = await asyncio.gather(
            *(translate(content, language) for language in TARGET_LANGUAGES)
        )
    except Exception as e:
        logger.error(f"Translation failed, returning empty translations: {str(e)}", exc_info=True)
        return TranslationsResult(
            Translations.empty(), degraded_reason=str(e) or e.__class__.__name__
        )

    return TranslationsResult(Translations(fr=fr, ja=ja))


class DescriptionGenerator:
    """
    Generates descriptions, SEO fields, tags and translations for one artwork image.

    The vision client is created by client_factory on the first generate() call
    and kept for the lifetime of the generator.
    """

    def __init__(
        self,
        client_factory: Optional[Callable[[], Any]] = None,
        translate: Optional[Translator] = None,
        model: Optional[str] = None,
    ):
        self._client_factory = client_factory or get_openai_client
        self._translate = translate or translate_artwork_content
        self._model = model
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    @property
    def model(self) -> str:
        return self._model or get_config().openai_model

    async def translate(self, content: GeneratedContent, include_translations: bool) -> TranslationsResult:
        if not include_translations or not content.description:
            return TranslationsResult(Translations.empty())
        return await translate_all_languages(content.translatable(), self._translate)

    async def generate(self, options: GenerationOptions) -> GenerationResult:
        """Run the full pipeline for one image.

        Raises:
            OpenAIConfigError: If the OpenAI API key is not configured
            openai.OpenAIError: If the vision call fails
        """
        response = await request_vision_completion(
            self.client,
            build_system_prompt(),
            build_user_prompt(options.metadata),
            options.image_url,
            self.model,
        )

        parsed = parse_generated_content(_response_text(response))
        input_tokens, output_tokens = _token_usage(response)
        translated = await self.translate(parsed.content, options.include_translations)

        if not translated.ok:
            logger.warning(f"Returning untranslated content for {options.image_url}")

        return GenerationResult(
            **parsed.content.model_dump(),
            translations=translated.translations,
            tokens_used=input_tokens + output_tokens,
            cost_usd=calculate_cost(input_tokens, output_tokens),
        )


@register_cache
@lru_cache(maxsize=1)
def get_description_generator() -> DescriptionGenerator:
    return DescriptionGenerator()


async def generate_artwork_description(
    options: GenerationOptions,
    generator: Optional[DescriptionGenerator] = None,
) -> GenerationResult:
    """Generate exhibition-quality content for an artwork image.

    Args:
        options: Image URL, metadata and whether to translate
        generator: Generator to use (default: the shared process-wide one)

    Returns:
        GenerationResult with translations, token usage and cost
    """
    generator = generator or get_description_generator()
    return await generator.generate(options)


def estimate_batch_cost(count: int) -> float:
    """Estimated USD cost of generating descriptions for count artworks."""
    estimate = Decimal(count) * AVG_COST_PER_ARTWORK
    return float(estimate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
