"""
Translation of AI-generated artwork content, backed by the translation_cache table.

Cache rows written during generation use the provisional source (placeholder id,
"ai_" field prefix). When a curator applies the content to an artwork,
cache_artwork_translations writes the same translations again under the real
artwork id. Caching is an optimization only: any failure in the cache path falls
back to calling DeepL directly.
"""

import asyncio
import logging
from typing import Optional

from artarchive.models import TranslationCache
from artarchive.src.services.ai.deepl_client import translate_text
from artarchive.src.services.ai.hashing import content_hash
from artarchive.src.services.ai.types import (
    TARGET_LANGUAGES,
    TRANSLATABLE_FIELDS,
    CacheSource,
    TargetLanguage,
    TranslatedContent,
    Translations,
)

logger = logging.getLogger(__name__)

TRANSLATION_SERVICE = "deepl"

# Columns of the composite key used as the conflict target for upserts
CACHE_KEY_FIELDS = ["source_table", "source_id", "source_field", "target_language"]
CACHE_UPDATE_FIELDS = ["source_hash", "translated_content", "translation_service", "updated_at"]


async def lookup_cached_translation(
    source: CacheSource,
    field_name: str,
    source_hash: str,
    target_language: str,
) -> Optional[str]:
    """Return the cached translation for this exact source text, if any."""
    return await (
        TranslationCache.objects.filter(
            source_table=source.source_table,
            source_id=source.source_id,
            source_field=source.source_field(field_name),
            source_hash=source_hash,
            target_language=target_language,
        )
        .values_list("translated_content", flat=True)
        .afirst()
    )


def _build_cache_row(
    source: CacheSource,
    field_name: str,
    source_text: str,
    target_language: str,
    translated: str,
) -> TranslationCache:
    return TranslationCache(
        source_table=source.source_table,
        source_id=source.source_id,
        source_field=source.source_field(field_name),
        source_hash=content_hash(source_text),
        target_language=target_language,
        translated_content=translated,
        translation_service=TRANSLATION_SERVICE,
    )


async def _upsert_rows(rows: list[TranslationCache]) -> None:
    await TranslationCache.objects.abulk_create(
        rows,
        update_conflicts=True,
        unique_fields=CACHE_KEY_FIELDS,
        update_fields=CACHE_UPDATE_FIELDS,
    )


async def store_translation(
    source: CacheSource,
    field_name: str,
    source_text: str,
    target_language: str,
    translated: str,
) -> None:
    """Upsert one translation; last write wins on the composite key."""
    row = _build_cache_row(source, field_name, source_text, target_language, translated)
    await _upsert_rows([row])


async def translate_with_cache(
    text: str,
    target_language: TargetLanguage,
    field_name: str,
    source: Optional[CacheSource] = None,
) -> str:
    """Translate text, consulting the cache first.

    Args:
        text: English source text
        target_language: "fr" or "ja"
        field_name: Artwork field the text belongs to (e.g. "seo_title")
        source: Cache owner; defaults to the provisional AI placeholder

    Returns:
        Translated text ("" for empty input)
    """
    if not text:
        return ""

    source = source or CacheSource.provisional()
    source_hash = content_hash(text)

    try:
        cached = await lookup_cached_translation(source, field_name, source_hash, target_language)
        if cached:
            return cached

        translated = await asyncio.to_thread(translate_text, text, target_language)

        await store_translation(source, field_name, text, target_language, translated)
        return translated

    except Exception as e:
        logger.error(f"Translation cache error for {field_name} ({target_language}): {str(e)}")
        # Translate directly, without caching
        return await asyncio.to_thread(translate_text, text, target_language)


async def translate_artwork_content(
    content: TranslatedContent,
    target_language: TargetLanguage,
) -> TranslatedContent:
    """Translate the four textual fields concurrently into one language."""
    description, short_description, seo_title, alt_text = await asyncio.gather(
        *(
            translate_with_cache(getattr(content, field), target_language, field)
            for field in TRANSLATABLE_FIELDS
        )
    )

    return TranslatedContent(
        description=description,
        short_description=short_description,
        seo_title=seo_title,
        alt_text=alt_text,
    )


def build_artwork_cache_rows(
    artwork_id: str,
    content: TranslatedContent,
    translations: Translations,
) -> list[TranslationCache]:
    """Cache rows for every (language, field) pair where both texts are present."""
    source = CacheSource.committed(artwork_id)
    rows = []

    for language in TARGET_LANGUAGES:
        translated_content = translations.for_language(language)
        for field in TRANSLATABLE_FIELDS:
            source_text = getattr(content, field)
            translated = getattr(translated_content, field)
            if source_text and translated:
                rows.append(_build_cache_row(source, field, source_text, language, translated))

    return rows


async def cache_artwork_translations(
    artwork_id: str,
    content: TranslatedContent,
    translations: Translations,
) -> None:
    """Store applied translations under the real artwork id in one batch upsert.

    Errors are left to the caller.
    """
    rows = build_artwork_cache_rows(artwork_id, content, translations)
    if not rows:
        return

    await _upsert_rows(rows)
    logger.info(f"Cached {len(rows)} translations for artwork {artwork_id}")
