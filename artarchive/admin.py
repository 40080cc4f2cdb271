from django.contrib import admin
from .models import AIGenerationLog, Artwork, ArtworkTag, TranslationCache


class ArtworkTagInline(admin.TabularInline):
    model = ArtworkTag
    extra = 0


@admin.register(Artwork)
class ArtworkAdmin(admin.ModelAdmin):
    list_display = ("title", "year", "series", "ai_generated", "ai_confidence_score")
    list_filter = ("ai_generated", "series")
    search_fields = ("title", "description")
    ordering = ("title",)
    readonly_fields = ("ai_generated_at", "ai_prompt_version", "created_at", "updated_at")
    inlines = [ArtworkTagInline]


@admin.register(TranslationCache)
class TranslationCacheAdmin(admin.ModelAdmin):
    list_display = ("source_table", "source_id", "source_field", "target_language", "updated_at")
    list_filter = ("source_table", "target_language", "translation_service")
    search_fields = ("source_id", "source_field", "translated_content")
    ordering = ("-updated_at",)
    readonly_fields = ("source_hash", "created_at", "updated_at")


@admin.register(AIGenerationLog)
class AIGenerationLogAdmin(admin.ModelAdmin):
    list_display = ("artwork", "generation_type", "success", "tokens_used", "cost_usd", "created_at")
    list_filter = ("success", "generation_type", "prompt_version")
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        """Log rows are written by the generation endpoint only."""
        return False
