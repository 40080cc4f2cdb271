"""
JSON API for AI description generation and content translation.

Admin endpoints require a staff session; the translate endpoint is public.
All responses use the envelopes from artarchive.api.responses.
"""

import asyncio
import logging
import time

import openai
import requests
from django.db import DatabaseError
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST
from pydantic import ValidationError

from artarchive.api import responses
from artarchive.api.schemas import (
    ApplyDescriptionRequest,
    GenerateDescriptionRequest,
    TranslateRequest,
)
from artarchive.models import AIGenerationLog, Artwork, ArtworkTag
from artarchive.src.services.ai import (
    PROMPT_VERSION,
    GenerationOptions,
    OpenAIConfigError,
    cache_artwork_translations,
    estimate_batch_cost,
    generate_artwork_description,
)
from artarchive.src.services.ai.deepl_client import (
    TranslationProviderError,
    is_translation_configured,
    translate_text,
)
from artarchive.src.services.ai.description_generator import AVG_COST_PER_ARTWORK
from artarchive.src.services.ai.hashing import content_hash
from artarchive.src.services.ai.translation_cache import (
    lookup_cached_translation,
    store_translation,
)
from artarchive.src.services.ai.types import TRANSLATABLE_FIELDS, CacheSource, TranslatedContent

logger = logging.getLogger(__name__)

MAX_ESTIMATE_COUNT = 10000

APPLIED_FIELDS = [
    "description",
    "short_description",
    "seo_title",
    "alt_text",
    "ai_generated",
    "ai_confidence_score",
    "ai_generated_at",
    "ai_prompt_version",
]


async def _is_staff(request) -> bool:
    user = await request.auser()
    return user.is_authenticated and user.is_staff


def _normalize_tags(tags: list[str]) -> list[str]:
    """Lowercase, strip and de-duplicate tags, keeping their order."""
    normalized = (tag.strip().lower() for tag in tags)
    return list(dict.fromkeys(tag for tag in normalized if tag))


async def _log_generation(artwork: Artwork, generation_type: str, **fields) -> None:
    # Log rows are bookkeeping; a failed insert must not fail the request
    try:
        await AIGenerationLog.objects.acreate(
            artwork=artwork,
            generation_type=generation_type,
            prompt_version=PROMPT_VERSION,
            **fields,
        )
    except DatabaseError as e:
        logger.error(f"Failed to write generation log for artwork {artwork.pk}: {str(e)}")


def _generation_error_response(error: Exception):
    if isinstance(error, OpenAIConfigError):
        return responses.error_response(
            responses.OPENAI_CONFIG_ERROR, "OpenAI API key is not configured", 500
        )
    if isinstance(error, openai.RateLimitError):
        return responses.error_response(
            responses.RATE_LIMIT_EXCEEDED, "OpenAI rate limit exceeded. Please try again later.", 429
        )
    return responses.error_response(
        responses.INTERNAL_ERROR, "Failed to generate description", 500
    )


@require_POST
async def generate_description_view(request, artwork_id):
    if not await _is_staff(request):
        return responses.unauthorized_response()

    try:
        body = GenerateDescriptionRequest.model_validate_json(request.body)
    except ValidationError as e:
        return responses.validation_error_response(e)

    artwork = await Artwork.objects.filter(pk=artwork_id).afirst()
    if artwork is None:
        return responses.error_response(responses.NOT_FOUND, "Artwork not found", 404)

    regenerate = body.options.regenerate
    if artwork.description and artwork.ai_generated and not regenerate:
        return responses.error_response(
            responses.DESCRIPTION_EXISTS,
            "Artwork already has an AI-generated description. Set options.regenerate to replace it.",
            409,
        )

    generation_type = "regenerate" if regenerate else "single"
    metadata = body.metadata.model_copy(
        update={"title": body.metadata.title or artwork.title}
    )
    options = GenerationOptions(
        image_url=str(body.image_url),
        metadata=metadata,
        include_translations=body.options.include_translations,
    )

    start_time = time.monotonic()
    try:
        result = await generate_artwork_description(options)
    except Exception as e:
        logger.error(f"Description generation failed for artwork {artwork_id}: {str(e)}", exc_info=True)
        await _log_generation(
            artwork,
            generation_type,
            success=False,
            processing_time_ms=int((time.monotonic() - start_time) * 1000),
            error_message=str(e),
        )
        return _generation_error_response(e)

    processing_time_ms = int((time.monotonic() - start_time) * 1000)
    await _log_generation(
        artwork,
        generation_type,
        success=True,
        tokens_used=result.tokens_used,
        cost_usd=result.cost_usd,
        processing_time_ms=processing_time_ms,
        generated_description=result.description,
        confidence_score=result.confidence_score,
    )

    logger.info(
        f"Generated description for artwork {artwork_id} "
        f"({result.tokens_used} tokens, ${result.cost_usd}, {processing_time_ms}ms)"
    )

    return responses.success_response({
        "description": result.description,
        "short_description": result.short_description,
        "seo_title": result.seo_title,
        "alt_text": result.alt_text,
        "suggested_tags": result.suggested_tags,
        "confidence_score": result.confidence_score,
        "translations": result.translations.model_dump(),
        "metadata": {
            "tokens_used": result.tokens_used,
            "estimated_cost_usd": result.cost_usd,
            "processing_time_ms": processing_time_ms,
            "prompt_version": PROMPT_VERSION,
        },
    })


@require_http_methods(["PUT"])
async def apply_description_view(request, artwork_id):
    if not await _is_staff(request):
        return responses.unauthorized_response()

    try:
        body = ApplyDescriptionRequest.model_validate_json(request.body)
    except ValidationError as e:
        return responses.validation_error_response(e)

    if not await Artwork.objects.filter(pk=artwork_id).aexists():
        return responses.error_response(responses.NOT_FOUND, "Artwork not found", 404)

    now = timezone.now()
    try:
        await Artwork.objects.filter(pk=artwork_id).aupdate(
            description=body.description,
            short_description=body.short_description,
            seo_title=body.seo_title,
            alt_text=body.alt_text,
            ai_generated=True,
            ai_confidence_score=body.confidence_score,
            ai_generated_at=now,
            ai_prompt_version=PROMPT_VERSION,
            updated_at=now,
        )
    except DatabaseError as e:
        logger.error(f"Failed to apply description to artwork {artwork_id}: {str(e)}", exc_info=True)
        return responses.error_response(responses.DB_ERROR, "Failed to update artwork", 500)

    tags = _normalize_tags(body.tags)
    try:
        await ArtworkTag.objects.filter(artwork_id=artwork_id, ai_suggested=True).adelete()
        if tags:
            await ArtworkTag.objects.abulk_create(
                [ArtworkTag(artwork_id=artwork_id, tag=tag, ai_suggested=True) for tag in tags]
            )
    except DatabaseError as e:
        # The description is already saved, tags can be re-applied
        logger.error(f"Failed to replace AI tags for artwork {artwork_id}: {str(e)}")
        tags = []

    try:
        await cache_artwork_translations(
            str(artwork_id),
            content=TranslatedContent(**body.model_dump(include=set(TRANSLATABLE_FIELDS))),
            translations=body.translations,
        )
    except Exception as e:
        logger.error(f"Failed to cache translations for artwork {artwork_id}: {str(e)}", exc_info=True)

    return responses.success_response({
        "artwork_id": str(artwork_id),
        "updated_fields": APPLIED_FIELDS,
        "tags_applied": tags,
    })


@require_GET
async def estimate_cost_view(request):
    if not await _is_staff(request):
        return responses.unauthorized_response()

    try:
        count = int(request.GET.get("count", ""))
    except (ValueError, TypeError):
        count = -1

    if not 0 <= count <= MAX_ESTIMATE_COUNT:
        return responses.error_response(
            responses.VALIDATION_ERROR,
            f"count must be an integer between 0 and {MAX_ESTIMATE_COUNT}",
            400,
        )

    return responses.success_response({
        "count": count,
        "estimated_cost_usd": estimate_batch_cost(count),
        "cost_per_artwork_usd": float(AVG_COST_PER_ARTWORK),
    })


@csrf_exempt
@require_POST
async def translate_view(request):
    try:
        body = TranslateRequest.model_validate_json(request.body)
    except ValidationError as e:
        return responses.validation_error_response(e)

    source = CacheSource.committed(str(body.source_id), source_table=body.source_table)
    source_hash = content_hash(body.source_content)

    try:
        cached = await lookup_cached_translation(
            source, body.source_field, source_hash, body.target_language
        )
    except DatabaseError as e:
        logger.error(f"Translation cache lookup failed: {str(e)}")
        cached = None

    if cached:
        return responses.success_response({"translatedContent": cached, "fromCache": True})

    if not is_translation_configured():
        return responses.error_response(
            responses.TRANSLATION_UNAVAILABLE, "Translation service is not configured", 503
        )

    try:
        translated = await asyncio.to_thread(
            translate_text, body.source_content, body.target_language, strict=True
        )
    except (TranslationProviderError, requests.RequestException) as e:
        logger.error(f"Translation failed for {body.source_table}.{body.source_field}: {str(e)}")
        return responses.error_response(responses.TRANSLATION_FAILED, "Translation failed", 503)

    if not translated:
        return responses.error_response(
            responses.TRANSLATION_FAILED, "Translation service returned no content", 503
        )

    try:
        await store_translation(
            source, body.source_field, body.source_content, body.target_language, translated
        )
    except DatabaseError as e:
        logger.error(f"Failed to cache translation for {body.source_table}.{body.source_field}: {str(e)}")

    return responses.success_response({"translatedContent": translated, "fromCache": False})
