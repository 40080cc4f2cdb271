import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import dotenv
from pydantic import BaseModel

from artarchive.src.cache_registry import register_cache


DEFAULT_OPENAI_MODEL = "gpt-4o-2024-08-06"
DEFAULT_DEEPL_API_URL = "https://api-free.deepl.com/v2/translate"


class Config(BaseModel):
    # Provider credentials are optional here; the clients check them at call time.
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL

    deepl_api_key: Optional[str] = None
    deepl_api_url: str = DEFAULT_DEEPL_API_URL
    deepl_timeout: Optional[float] = None

    debug: bool = False


def load_env_file() -> Optional[str]:
    env_files = [".env.dev", ".env.prod"]
    for env_file in env_files:
        if Path(env_file).exists():
            dotenv.load_dotenv(env_file)
            return env_file
    return None


def create_config() -> Config:
    load_env_file()

    openai_api_key = os.getenv("OPENAI_API_KEY") or None
    openai_model = os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
    deepl_api_key = os.getenv("DEEPL_API_KEY") or None
    deepl_api_url = os.getenv("DEEPL_API_URL") or DEFAULT_DEEPL_API_URL
    deepl_timeout = os.getenv("DEEPL_TIMEOUT")
    debug = os.getenv("DEBUG", "False").lower() == "true"

    if not openai_model:
        raise ValueError("OPENAI_MODEL is set but empty")

    return Config(
        openai_api_key=openai_api_key,
        openai_model=openai_model,
        deepl_api_key=deepl_api_key,
        deepl_api_url=deepl_api_url,
        deepl_timeout=float(deepl_timeout) if deepl_timeout else None,
        debug=debug,
    )


@register_cache
@lru_cache(maxsize=1)
def get_config() -> Config:
    """Return the process-wide config, built on first access."""
    return create_config()


if __name__ == "__main__":
    print(get_config())
