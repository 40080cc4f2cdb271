"""
Unit tests for artwork description generation.

The vision client and the translator are replaced with fakes, so these tests
need neither network access nor a database.
"""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import AsyncOpenAI

from artarchive.src.services.ai.description_generator import (
    DescriptionGenerator,
    calculate_cost,
    estimate_batch_cost,
    generate_artwork_description,
    parse_generated_content,
    translate_all_languages,
)
from artarchive.src.services.ai.openai_client import OpenAIConfigError, get_openai_client
from artarchive.src.services.ai.types import (
    ArtworkMetadata,
    GenerationOptions,
    TranslatedContent,
    Translations,
)

IMAGE_URL = "https://images.example.org/brathwaite/jazz-musicians.jpg"

MODEL_OUTPUT = {
    "description": "Brathwaite captured three musicians in the AJASS studio.",
    "short_description": "Three jazz musicians in a studio.",
    "seo_title": "Jazz Musicians AJASS Studio 1966 - Kwame Brathwaite Photography",
    "alt_text": "Black and white photograph showing three musicians with instruments",
    "suggested_tags": ["jazz", "AJASS", "1960s", "studio", "portrait"],
    "confidence_score": 0.9,
}


def _completion(content, prompt_tokens=1200, completion_tokens=350):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


def _fake_client(response):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=response)
    return client


async def _prefix_translate(content: TranslatedContent, language: str) -> TranslatedContent:
    return TranslatedContent(
        description=f"[{language}] {content.description}",
        short_description=f"[{language}] {content.short_description}",
        seo_title=f"[{language}] {content.seo_title}",
        alt_text=f"[{language}] {content.alt_text}",
    )


def _options(include_translations=True):
    return GenerationOptions(
        image_url=IMAGE_URL,
        metadata=ArtworkMetadata(title="Jazz Musicians", year=1966, medium="Gelatin silver print"),
        include_translations=include_translations,
    )


# ---- Response parsing ----


@pytest.mark.unit
class TestParseGeneratedContent:
    def test_valid_response(self):
        result = parse_generated_content(json.dumps(MODEL_OUTPUT))

        assert result.ok
        assert result.content.description == MODEL_OUTPUT["description"]
        assert result.content.suggested_tags == MODEL_OUTPUT["suggested_tags"]
        assert result.content.confidence_score == 0.9

    @pytest.mark.parametrize("raw", ["not json at all", "{\"description\": ", "", None])
    def test_malformed_response_degrades_to_empty_content(self, raw):
        result = parse_generated_content(raw)

        assert not result.ok
        assert result.content.description == ""
        assert result.content.short_description == ""
        assert result.content.seo_title == ""
        assert result.content.alt_text == ""
        assert result.content.suggested_tags == []
        assert result.content.confidence_score == 0.0

    def test_json_array_is_not_content(self):
        result = parse_generated_content("[1, 2, 3]")

        assert not result.ok
        assert result.content.confidence_score == 0.0

    def test_missing_fields_degrade_per_field(self):
        result = parse_generated_content(json.dumps({"description": "Only a description."}))

        assert result.degraded_reason.startswith("missing fields:")
        assert "seo_title" in result.degraded_reason
        assert result.content.description == "Only a description."
        assert result.content.alt_text == ""
        assert result.content.confidence_score == 0.5

    def test_confidence_score_is_clamped(self):
        high = parse_generated_content(json.dumps({**MODEL_OUTPUT, "confidence_score": 1.7}))
        low = parse_generated_content(json.dumps({**MODEL_OUTPUT, "confidence_score": -0.2}))

        assert high.content.confidence_score == 1.0
        assert low.content.confidence_score == 0.0

    def test_non_numeric_confidence_uses_default(self):
        for value in (True, "high", None):
            result = parse_generated_content(json.dumps({**MODEL_OUTPUT, "confidence_score": value}))
            assert result.content.confidence_score == 0.5

    def test_oversized_integer_confidence_uses_default(self):
        raw = json.dumps(MODEL_OUTPUT).replace("0.9", "9" * 400)

        result = parse_generated_content(raw)

        assert result.ok
        assert result.content.confidence_score == 0.5

    def test_nan_confidence_uses_default(self):
        raw = json.dumps(MODEL_OUTPUT).replace("0.9", "NaN")

        assert parse_generated_content(raw).content.confidence_score == 0.5

    def test_tags_keep_only_non_empty_strings(self):
        raw = json.dumps({**MODEL_OUTPUT, "suggested_tags": ["jazz", "", "  ", 42, " harlem "]})

        assert parse_generated_content(raw).content.suggested_tags == ["jazz", "harlem"]


# ---- Cost accounting ----


@pytest.mark.unit
class TestCost:
    def test_calculate_cost_uses_fixed_rates(self):
        # 1200 * 0.0025 / 1000 + 350 * 0.01 / 1000
        assert calculate_cost(1200, 350) == 0.0065
        assert calculate_cost(0, 0) == 0.0
        assert calculate_cost(1000, 1000) == 0.0125

    def test_calculate_cost_rounds_to_four_decimals(self):
        # 0.00125 + 0.00001 = 0.00126 -> 0.0013
        assert calculate_cost(500, 1) == 0.0013

    @pytest.mark.parametrize(
        "count, expected",
        [(0, 0.0), (1, 0.05), (3, 0.14), (10, 0.45), (100, 4.5)],
    )
    def test_estimate_batch_cost(self, count, expected):
        assert estimate_batch_cost(count) == expected


# ---- Translation fan-out ----


@pytest.mark.unit
class TestTranslateAllLanguages:
    @pytest.mark.asyncio
    async def test_translates_both_languages(self):
        content = TranslatedContent(description="A portrait.", seo_title="Portrait")

        result = await translate_all_languages(content, _prefix_translate)

        assert result.ok
        assert result.translations.fr.description == "[fr] A portrait."
        assert result.translations.ja.seo_title == "[ja] Portrait"

    @pytest.mark.asyncio
    async def test_failure_in_one_language_empties_both(self):
        async def fail_japanese(content, language):
            if language == "ja":
                raise RuntimeError("DeepL API error: 503 - unavailable")
            return await _prefix_translate(content, language)

        result = await translate_all_languages(TranslatedContent(description="A portrait."), fail_japanese)

        assert not result.ok
        assert "503" in result.degraded_reason
        assert result.translations == Translations.empty()


# ---- Full generation ----


@pytest.mark.unit
class TestDescriptionGenerator:
    @pytest.mark.asyncio
    async def test_end_to_end_generation(self):
        client = _fake_client(_completion(json.dumps(MODEL_OUTPUT)))
        generator = DescriptionGenerator(
            client_factory=lambda: client, translate=_prefix_translate, model="gpt-4o-2024-08-06"
        )

        result = await generator.generate(_options())

        assert result.confidence_score == 0.9
        assert result.description == MODEL_OUTPUT["description"]
        assert result.tokens_used == 1550
        assert result.cost_usd == 0.0065
        assert result.translations.fr.description == f"[fr] {MODEL_OUTPUT['description']}"
        assert result.translations.ja.alt_text == f"[ja] {MODEL_OUTPUT['alt_text']}"

    @pytest.mark.asyncio
    async def test_sends_single_vision_request(self):
        client = _fake_client(_completion(json.dumps(MODEL_OUTPUT)))
        generator = DescriptionGenerator(
            client_factory=lambda: client, translate=_prefix_translate, model="gpt-4o-2024-08-06"
        )

        await generator.generate(_options())

        client.chat.completions.create.assert_awaited_once()
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-2024-08-06"
        assert kwargs["max_tokens"] == 1500
        assert kwargs["temperature"] == 0.7
        assert kwargs["response_format"] == {"type": "json_object"}

        system_message, user_message = kwargs["messages"]
        assert system_message["role"] == "system"
        text_part, image_part = user_message["content"]
        assert "- Title: Jazz Musicians" in text_part["text"]
        assert image_part["image_url"] == {"url": IMAGE_URL, "detail": "high"}

    @pytest.mark.asyncio
    async def test_model_defaults_to_config(self, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
        client = _fake_client(_completion(json.dumps(MODEL_OUTPUT)))
        generator = DescriptionGenerator(client_factory=lambda: client, translate=_prefix_translate)

        await generator.generate(_options(include_translations=False))

        assert client.chat.completions.create.call_args.kwargs["model"] == "gpt-4o-mini"

    @pytest.mark.asyncio
    async def test_skipping_translations_never_calls_translator(self):
        client = _fake_client(_completion(json.dumps(MODEL_OUTPUT)))
        translate = AsyncMock()
        generator = DescriptionGenerator(client_factory=lambda: client, translate=translate)

        result = await generator.generate(_options(include_translations=False))

        translate.assert_not_called()
        assert result.translations == Translations.empty()
        assert result.description == MODEL_OUTPUT["description"]

    @pytest.mark.asyncio
    async def test_malformed_response_returns_empty_content(self):
        client = _fake_client(_completion("Sorry, I cannot help with that."))
        translate = AsyncMock()
        generator = DescriptionGenerator(client_factory=lambda: client, translate=translate)

        result = await generator.generate(_options())

        assert result.description == ""
        assert result.confidence_score == 0.0
        assert result.tokens_used == 1550
        # Nothing to translate
        translate.assert_not_called()

    @pytest.mark.asyncio
    async def test_japanese_failure_returns_untranslated_content(self):
        async def fail_japanese(content, language):
            if language == "ja":
                raise RuntimeError("DeepL API error: 429 - Too many requests")
            return await _prefix_translate(content, language)

        client = _fake_client(_completion(json.dumps(MODEL_OUTPUT)))
        generator = DescriptionGenerator(client_factory=lambda: client, translate=fail_japanese)

        result = await generator.generate(_options())

        assert result.description == MODEL_OUTPUT["description"]
        assert result.translations.fr.description == ""
        assert result.translations.ja.description == ""

    @pytest.mark.asyncio
    async def test_missing_usage_counts_as_zero(self):
        response = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=json.dumps(MODEL_OUTPUT)))],
            usage=None,
        )
        generator = DescriptionGenerator(
            client_factory=lambda: _fake_client(response), translate=_prefix_translate
        )

        result = await generator.generate(_options(include_translations=False))

        assert result.tokens_used == 0
        assert result.cost_usd == 0.0

    @pytest.mark.asyncio
    async def test_vision_errors_propagate(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("connection reset"))
        translate = AsyncMock()
        generator = DescriptionGenerator(client_factory=lambda: client, translate=translate)

        with pytest.raises(RuntimeError, match="connection reset"):
            await generator.generate(_options())

        translate.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_api_key_fails_on_first_use(self):
        # Constructing the generator must not touch the API key
        generator = DescriptionGenerator(translate=_prefix_translate)

        with pytest.raises(OpenAIConfigError, match="OPENAI_API_KEY"):
            await generator.generate(_options())

    @pytest.mark.asyncio
    async def test_client_is_created_once(self):
        client = _fake_client(_completion(json.dumps(MODEL_OUTPUT)))
        factory = MagicMock(return_value=client)
        generator = DescriptionGenerator(client_factory=factory, translate=_prefix_translate)

        await generator.generate(_options(include_translations=False))
        await generator.generate(_options(include_translations=False))

        factory.assert_called_once()
        assert client.chat.completions.create.await_count == 2

    @pytest.mark.asyncio
    async def test_generate_artwork_description_uses_given_generator(self):
        client = _fake_client(_completion(json.dumps(MODEL_OUTPUT)))
        generator = DescriptionGenerator(client_factory=lambda: client, translate=_prefix_translate)

        result = await generate_artwork_description(_options(), generator=generator)

        assert result.seo_title == MODEL_OUTPUT["seo_title"]


# ---- OpenAI client factory ----


@pytest.mark.unit
class TestGetOpenAIClient:
    def test_missing_key_raises(self):
        with pytest.raises(OpenAIConfigError, match="OPENAI_API_KEY environment variable is not set"):
            get_openai_client()

    def test_client_is_memoized(self, openai_key):
        client = get_openai_client()

        assert isinstance(client, AsyncOpenAI)
        assert get_openai_client() is client
