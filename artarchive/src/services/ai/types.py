"""Data types shared by the AI description and translation pipeline."""

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, Field

TargetLanguage = Literal["fr", "ja"]

TARGET_LANGUAGES: tuple[TargetLanguage, ...] = ("fr", "ja")

# Textual fields that are translated; tags and confidence score are not.
TRANSLATABLE_FIELDS = ("description", "short_description", "seo_title", "alt_text")

# Fixed source_id for cache rows written before content is attached to an artwork.
AI_GENERATED_SOURCE_ID = "00000000-0000-0000-0000-000000000001"


class ArtworkMetadata(BaseModel):
    """Context about the artwork sent along with the image."""

    title: Optional[str] = Field(default=None, description="Artwork title")
    year: Optional[int] = Field(default=None, description="Year of production")
    medium: Optional[str] = Field(default=None, description="Medium, e.g. gelatin silver print")
    series: Optional[str] = Field(default=None, description="Series the work belongs to")
    dimensions: Optional[str] = Field(
        default=None, description="Physical dimensions (not used in the prompt)"
    )


class TranslatedContent(BaseModel):
    """The four textual fields in one language."""

    description: str = ""
    short_description: str = ""
    seo_title: str = ""
    alt_text: str = ""

    def is_empty(self) -> bool:
        return not any(getattr(self, field) for field in TRANSLATABLE_FIELDS)


class Translations(BaseModel):
    fr: TranslatedContent = Field(default_factory=TranslatedContent)
    ja: TranslatedContent = Field(default_factory=TranslatedContent)

    @classmethod
    def empty(cls) -> "Translations":
        return cls()

    def for_language(self, language: TargetLanguage) -> TranslatedContent:
        return getattr(self, language)


class GeneratedContent(BaseModel):
    """Structured output of the vision model for one artwork image."""

    description: str = Field(default="", description="150-200 words of prose")
    short_description: str = Field(default="", description="About 50 words")
    seo_title: str = Field(default="", description="At most 60 characters")
    alt_text: str = Field(default="", description="At most 125 characters")
    suggested_tags: list[str] = Field(default_factory=list, description="5-8 keywords")
    confidence_score: float = Field(default=0.0, ge=0.0, le=1.0)

    def translatable(self) -> TranslatedContent:
        """English source text for the translatable fields."""
        return TranslatedContent(
            description=self.description,
            short_description=self.short_description,
            seo_title=self.seo_title,
            alt_text=self.alt_text,
        )


class GenerationResult(GeneratedContent):
    translations: Translations = Field(default_factory=Translations)
    tokens_used: int = 0
    cost_usd: float = 0.0


class GenerationOptions(BaseModel):
    image_url: str
    metadata: ArtworkMetadata = Field(default_factory=ArtworkMetadata)
    include_translations: bool = True


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing the model response.

    Attributes:
        content: Always fully populated, defaults where the response was unusable
        degraded_reason: None when the response parsed cleanly
    """

    content: GeneratedContent
    degraded_reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.degraded_reason is None


@dataclass(frozen=True)
class TranslationsResult:
    """Outcome of translating generated content into every target language.

    Attributes:
        translations: Always present, empty strings when degraded or skipped
        degraded_reason: None when translation succeeded or was not requested
    """

    translations: Translations
    degraded_reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.degraded_reason is None


@dataclass(frozen=True)
class CacheSource:
    """Which record a translation cache row belongs to.

    Provisional rows are written while content is still a suggestion; committed
    rows are written once a curator applies the content to a real record.
    Both exist side by side, the provisional rows are never migrated.
    """

    record_id: Optional[str] = None
    source_table: str = "artworks"

    @classmethod
    def provisional(cls) -> "CacheSource":
        return cls()

    @classmethod
    def committed(cls, record_id: str, source_table: str = "artworks") -> "CacheSource":
        if not record_id:
            raise ValueError("A committed cache source needs a record id")
        return cls(record_id=str(record_id), source_table=source_table)

    @property
    def is_provisional(self) -> bool:
        return self.record_id is None

    @property
    def source_id(self) -> str:
        return AI_GENERATED_SOURCE_ID if self.record_id is None else self.record_id

    def source_field(self, field_name: str) -> str:
        return f"ai_{field_name}" if self.is_provisional else field_name
