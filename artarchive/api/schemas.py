"""Request bodies accepted by the API views."""

from typing import Literal
from uuid import UUID

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field

from artarchive.src.services.ai.types import ArtworkMetadata, TargetLanguage, Translations


class GenerateDescriptionOptions(BaseModel):
    regenerate: bool = False
    include_translations: bool = True


class GenerateDescriptionRequest(BaseModel):
    image_url: AnyHttpUrl
    metadata: ArtworkMetadata = Field(default_factory=ArtworkMetadata)
    options: GenerateDescriptionOptions = Field(default_factory=GenerateDescriptionOptions)


class ApplyDescriptionRequest(BaseModel):
    description: str = Field(min_length=1)
    short_description: str = ""
    seo_title: str = Field(default="", max_length=255)
    alt_text: str = Field(default="", max_length=255)
    confidence_score: float = Field(ge=0.0, le=1.0)
    tags: list[str] = Field(default_factory=list)
    translations: Translations = Field(default_factory=Translations)


class TranslateRequest(BaseModel):
    """Body of the public translate endpoint, which uses camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    source_table: Literal["artworks", "exhibitions", "press", "site_content"] = Field(
        alias="sourceTable"
    )
    source_id: UUID = Field(alias="sourceId")
    source_field: str = Field(alias="sourceField", min_length=1, max_length=100)
    source_content: str = Field(alias="sourceContent", min_length=1)
    target_language: TargetLanguage = Field(alias="targetLanguage")
