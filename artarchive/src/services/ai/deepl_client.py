"""
DeepL client used to translate AI-generated artwork content.

Source language is always English. When DeepL is not configured the text is
returned untouched so that generation keeps working without translations.
"""

import logging
from typing import Optional

import requests

from artarchive.src.config import get_config
from artarchive.src.services.ai.types import TargetLanguage

logger = logging.getLogger(__name__)

DEEPL_LANGUAGE_MAP: dict[str, str] = {
    "fr": "FR",
    "ja": "JA",
}

SOURCE_LANGUAGE = "EN"


class TranslationProviderError(RuntimeError):
    """Raised when DeepL answers with a non-success status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"DeepL API error: {status_code} - {body}")


def is_translation_configured() -> bool:
    return bool(get_config().deepl_api_key)


def _extract_translation(payload) -> Optional[str]:
    """First translated text in a DeepL response body, or None."""
    if not isinstance(payload, dict):
        return None
    translations = payload.get("translations")
    if not isinstance(translations, list) or not translations:
        return None
    first = translations[0]
    if not isinstance(first, dict):
        return None
    text = first.get("text")
    return text if isinstance(text, str) and text else None


def translate_text(text: str, target_language: TargetLanguage, strict: bool = False) -> str:
    """Translate a single English string with DeepL.

    Args:
        text: English text to translate
        target_language: "fr" or "ja"
        strict: Return "" instead of the input when DeepL sends no text

    Returns:
        Translated text, or the input when it is empty or DeepL is not configured

    Raises:
        TranslationProviderError: If DeepL returns a non-2xx response
        requests.RequestException: On transport failures
    """
    config = get_config()
    if not text or not config.deepl_api_key:
        return text

    response = requests.post(
        config.deepl_api_url,
        headers={
            "Authorization": f"DeepL-Auth-Key {config.deepl_api_key}",
            "Content-Type": "application/json",
        },
        json={
            "text": [text],
            "target_lang": DEEPL_LANGUAGE_MAP[target_language],
            "source_lang": SOURCE_LANGUAGE,
        },
        timeout=config.deepl_timeout,
    )

    if not response.ok:
        raise TranslationProviderError(response.status_code, response.text)

    translated = _extract_translation(response.json())
    if translated is None:
        logger.warning(f"DeepL returned no text for target '{target_language}'")
        return "" if strict else text

    return translated
