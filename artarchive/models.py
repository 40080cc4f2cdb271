import uuid

from django.db import models


class Artwork(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    year = models.IntegerField(blank=True, null=True)
    medium = models.CharField(max_length=255, blank=True, null=True)
    series = models.CharField(max_length=255, blank=True, null=True)
    dimensions = models.CharField(max_length=100, blank=True, null=True)
    image_url = models.URLField(max_length=500)

    description = models.TextField(blank=True, null=True)
    short_description = models.TextField(blank=True, null=True)
    seo_title = models.CharField(max_length=255, blank=True, null=True)
    alt_text = models.CharField(max_length=255, blank=True, null=True)

    # AI generation bookkeeping, set when a curator applies generated content
    ai_generated = models.BooleanField(default=False)
    ai_confidence_score = models.FloatField(blank=True, null=True)
    ai_generated_at = models.DateTimeField(blank=True, null=True)
    ai_prompt_version = models.CharField(max_length=20, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.title} ({self.year})" if self.year else self.title


class ArtworkTag(models.Model):
    artwork = models.ForeignKey(Artwork, on_delete=models.CASCADE, related_name="tags")
    tag = models.CharField(max_length=100)
    ai_suggested = models.BooleanField(default=False)

    class Meta:
        indexes = [
            models.Index(fields=["artwork", "ai_suggested"], name="artwork_tag_ai_idx"),
        ]

    def __str__(self):
        return self.tag


class TranslationCache(models.Model):
    """
    Cached translation of one field of one record into one language.

    The composite key (source_table, source_id, source_field, target_language) is
    unique and every write is an upsert on it, so concurrent writers resolve to
    last-write-wins inside the database. source_hash is the MD5 of the source text;
    a row only counts as a hit when the hash of the current text matches.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    source_table = models.CharField(max_length=50)
    source_id = models.CharField(
        max_length=36,
        help_text="Record id, or the fixed AI placeholder id for unattached content",
    )
    source_field = models.CharField(max_length=100)
    source_hash = models.CharField(max_length=32)
    target_language = models.CharField(max_length=5)
    translated_content = models.TextField()
    translation_service = models.CharField(max_length=20, default="deepl")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["source_table", "source_id", "source_field", "target_language"],
                name="uniq_translation_cache_source",
            ),
        ]
        indexes = [
            models.Index(fields=["source_hash", "target_language"], name="trans_cache_hash_lang_idx"),
        ]

    def __str__(self):
        return f"{self.source_table}:{self.source_id}:{self.source_field} -> {self.target_language}"


class AIGenerationLog(models.Model):
    GENERATION_TYPES = [
        ("single", "Single"),
        ("regenerate", "Regenerate"),
    ]

    artwork = models.ForeignKey(
        Artwork,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="generation_logs",
    )
    generation_type = models.CharField(max_length=20, choices=GENERATION_TYPES, default="single")
    prompt_version = models.CharField(max_length=20)
    tokens_used = models.IntegerField(blank=True, null=True)
    cost_usd = models.FloatField(blank=True, null=True)
    processing_time_ms = models.IntegerField(blank=True, null=True)
    success = models.BooleanField(default=False)
    generated_description = models.TextField(blank=True, default="")
    confidence_score = models.FloatField(blank=True, null=True)
    error_message = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True, editable=False)

    def __str__(self):
        status = "ok" if self.success else "failed"
        return f"{self.generation_type} {status} @ {self.created_at.strftime('%Y-%m-%d %H:%M:%S')}"
